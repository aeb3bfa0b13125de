from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TRIALSINK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # Project
    PROJECT_NAME: str = "trialsink"
    VERSION: str = "0.1.0"

    # Remote collection
    SERVER_URL: str = "https://pathplanning-server.onrender.com"
    DEFAULT_ENDPOINT: str = "/api/trial"
    COMPLETE_ENDPOINT: str = "/api/data"
    REQUEST_TIMEOUT: float = 10.0

    @field_validator("SERVER_URL", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    # Experiment
    EXPERIMENT_NAME: str = "experiment"
    FALLBACK_TO_LOCAL: bool = True

    # Where the page is served from; empty means a file-loaded page
    PAGE_URL: str = ""

    # Local delivery
    DOWNLOAD_DIR: str = "./downloads"

    # Collector API
    API_PREFIX: str = "/api"

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()
