import logging
from typing import Any, Callable

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from drive_attendance.utils.exceptions import RemoteStoreError

logger = logging.getLogger(__name__)

REMOTE_ERRORS = (HttpError, GoogleAuthError, httplib2.HttpLib2Error, OSError)


def describe_remote_error(exc: Exception) -> str:
    if isinstance(exc, HttpError):
        reason = getattr(exc, "reason", None) or exc.resp.reason
        return f"HTTP {exc.resp.status}: {reason}"
    return str(exc) or exc.__class__.__name__


class GoogleServiceClient:
    """Base for the Drive and Sheets wrappers.

    A fresh discovery service is built for every call: googleapiclient
    services share one httplib2 connection and must not be used from
    several threads at once. Credentials are shared.
    """

    api_name: str = ""
    api_version: str = ""

    def __init__(self, credentials: Any = None, service_factory: Callable[[], Any] | None = None):
        if credentials is None and service_factory is None:
            raise ValueError("credentials or service_factory is required")
        self._credentials = credentials
        self._service_factory = service_factory or self._build_service

    def _build_service(self) -> Any:
        return build(
            self.api_name,
            self.api_version,
            credentials=self._credentials,
            cache_discovery=False,
        )

    def _call(self, action: str, make_request: Callable[[Any], Any]) -> Any:
        """Build a service, run one API request against it, map failures."""
        try:
            service = self._service_factory()
            return make_request(service).execute()
        except REMOTE_ERRORS as e:
            reason = describe_remote_error(e)
            logger.error("%s failed: %s", action, reason)
            raise RemoteStoreError(f"{action} failed: {reason}") from e
