import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from drive_attendance.config import settings
from drive_attendance.dependencies import verify_api_key
from drive_attendance.routers.attendance import router as attendance_router
from drive_attendance.routers.drive_upload import router as drive_upload_router
from drive_attendance.routers.images import router as images_router
from drive_attendance.utils.exceptions import register_exception_handlers

SERVICE_NAME = "drive-attendance-api"
VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.state.settings = settings
    logging.getLogger(__name__).info(
        "Starting %s (%s), service account at %s",
        SERVICE_NAME,
        settings.environment,
        settings.service_account_file,
    )
    yield


app = FastAPI(
    title="Drive Attendance API",
    description="Upload captured photos to Google Drive and record them in Google Sheets",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

_api_key_dep = [Depends(verify_api_key)]

app.include_router(attendance_router, prefix="/api", dependencies=_api_key_dep)
app.include_router(drive_upload_router, prefix="/api", dependencies=_api_key_dep)
app.include_router(images_router, prefix="/api", dependencies=_api_key_dep)


@app.get("/health")
async def health_check():
    return {"success": True, "message": None, "data": {"service": SERVICE_NAME, "version": VERSION}}
