from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Gallery Relay"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 5000
    cloud_name: str | None = None
    api_key: str | None = None
    api_secret: str | None = None
    folder_name: str = "portfolio-gallery"
    list_max_results: int = Field(default=200, ge=1, le=500)
    upload_dir: str = "tmp/uploads"

    @property
    def upload_path(self) -> Path:
        path = Path(self.upload_dir)
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def folder_prefix(self) -> str:
        return f"{self.folder_name.rstrip('/')}/"


settings = Settings()
