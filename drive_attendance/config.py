from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    service_account_file: str = "service-account.json"
    api_key: str = ""  # empty = no auth check (local dev)
    environment: str = "development"
    timezone: str = "Asia/Jakarta"
    default_sheet_title: str = "Uploads"
    attendance_sheet_prefix: str = "Attendance"
    write_sheet_headers: bool = True
    max_upload_size_bytes: int = 10 * 1024 * 1024  # 10MB
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


settings = Settings()
