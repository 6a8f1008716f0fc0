from typing import Callable

from fastapi import Header, HTTPException, Request

from drive_attendance.clients.credentials import load_credentials
from drive_attendance.clients.drive import DriveClient
from drive_attendance.clients.sheets import SheetsClient
from drive_attendance.config import Settings, settings
from drive_attendance.services.pipeline import RecordPipeline


async def verify_api_key(x_api_key: str = Header(default="")) -> None:
    if not settings.api_key:
        return
    if x_api_key != settings.api_key:
        raise HTTPException(status_code=403, detail="Invalid or missing API key")


def build_pipeline(config: Settings) -> RecordPipeline:
    credentials = load_credentials(config.service_account_file)
    return RecordPipeline(
        drive=DriveClient(credentials),
        sheets=SheetsClient(credentials),
        config=config,
    )


def get_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", settings)


def get_pipeline(request: Request) -> RecordPipeline:
    """Return the process-wide pipeline, building it on first use.

    Construction is deferred so a missing service account surfaces as a
    500 on the request that needs it rather than preventing startup.
    """
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        pipeline = build_pipeline(get_settings(request))
        request.app.state.pipeline = pipeline
    return pipeline


def get_pipeline_provider(request: Request) -> Callable[[], RecordPipeline]:
    """Hand routes a callable so they can validate input before credentials load."""
    return lambda: get_pipeline(request)
