import pytest

from fakes import FakeDrive, FakeSheets


@pytest.fixture(autouse=True, scope="session")
def configure_settings():
    # Disable API key auth and production masking for tests
    from drive_attendance.config import settings
    settings.api_key = ""
    settings.environment = "development"
    settings.write_sheet_headers = True


@pytest.fixture
def fake_drive():
    return FakeDrive()


@pytest.fixture
def fake_sheets():
    return FakeSheets()


@pytest.fixture
def pipeline(fake_drive, fake_sheets):
    from drive_attendance.config import settings
    from drive_attendance.services.pipeline import RecordPipeline

    return RecordPipeline(drive=fake_drive, sheets=fake_sheets, config=settings)


@pytest.fixture
def use_pipeline(pipeline):
    """Route the API through the in-memory pipeline."""
    from drive_attendance.dependencies import get_pipeline_provider
    from drive_attendance.main import app

    app.dependency_overrides[get_pipeline_provider] = lambda: (lambda: pipeline)
    yield pipeline
    app.dependency_overrides.pop(get_pipeline_provider, None)
