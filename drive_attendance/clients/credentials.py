"""Load the Google service account used for both Drive and Sheets."""
import json
import logging
import os
from functools import lru_cache

from google.oauth2 import service_account

from drive_attendance.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DRIVE_SCOPE = "https://www.googleapis.com/auth/drive"
SHEETS_SCOPE = "https://www.googleapis.com/auth/spreadsheets"
GOOGLE_SCOPES = (DRIVE_SCOPE, SHEETS_SCOPE)

DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"
REQUIRED_KEYS = ("client_email", "private_key")


def _read_key_file(path: str) -> dict:
    if not os.path.exists(path):
        raise ConfigurationError(
            f"{path} not found. Please add your Google service account credentials."
        )
    try:
        with open(path, encoding="utf-8") as f:
            info = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read service account file {path}: {e}") from e

    if not isinstance(info, dict):
        raise ConfigurationError(f"Service account file {path} must contain a JSON object")

    missing = [key for key in REQUIRED_KEYS if not info.get(key)]
    if missing:
        raise ConfigurationError(
            f"Service account file {path} is missing: {', '.join(missing)}"
        )
    return info


@lru_cache(maxsize=4)
def load_credentials(
    path: str, scopes: tuple[str, ...] = GOOGLE_SCOPES
) -> service_account.Credentials:
    """Parse the key file at ``path`` into scoped service account credentials.

    The result is cached per (path, scopes) for the life of the process;
    failures are not cached, so fixing the file takes effect on the next call.
    """
    info = _read_key_file(path)
    info.setdefault("token_uri", DEFAULT_TOKEN_URI)

    try:
        credentials = service_account.Credentials.from_service_account_info(
            info, scopes=list(scopes)
        )
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"Invalid service account credentials in {path}: {e}") from e

    logger.info("Loaded service account %s", info["client_email"])
    return credentials
