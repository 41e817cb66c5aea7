import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]

# ENV_FILE overrides the .env location (tests, containers)
ENV_FILE = os.getenv("ENV_FILE", str(PROJECT_ROOT / ".env"))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_FILE, extra="ignore")

    APP_ENV: str = "local"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    # how many contact forms one view may hold
    FORM_FIELD_MIN: int = 1
    FORM_FIELD_MAX: int = 3
    FORM_ID_SUFFIX_LENGTH: int = 4

    @property
    def cors_origins_list(self) -> list[str]:
        """'*' or a comma-separated origin list"""
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
