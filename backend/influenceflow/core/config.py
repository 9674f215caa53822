from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


DEFAULT_JWT_SECRET = "dev-secret-change-me"


class Settings(BaseSettings):
    # Application settings
    APP_NAME: str = "InfluenceFlow"
    VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 4000

    # API settings
    API_PREFIX: str = "/api"

    # CORS settings (single development origin)
    BACKEND_CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # Credential store
    DATABASE_PATH: str = "crm.db"

    # Token settings. Override JWT_SECRET outside development.
    JWT_SECRET: str = DEFAULT_JWT_SECRET
    TOKEN_TTL_DAYS: int = 7
    TOKEN_SALT: str = "influenceflow.session.v1"

    # Password hashing
    BCRYPT_ROUNDS: int = 10

    # Local demo mode
    LOCAL_STORAGE_PATH: Optional[str] = "influenceflow_local.json"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def uses_default_secret(self) -> bool:
        return self.JWT_SECRET == DEFAULT_JWT_SECRET

    @property
    def token_max_age_seconds(self) -> int:
        return self.TOKEN_TTL_DAYS * 24 * 60 * 60
