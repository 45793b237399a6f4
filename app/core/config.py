import logging
from typing import List, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # Application Information
    app_name: str = Field(default="Formations Learning Progress API")
    app_description: str = Field(
        default="Quiz attempts, leaderboards and lesson progress tracking"
    )
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=True)
    production: bool = Field(default=False)
    timezone: str = Field(default="UTC")

    # Database Configuration
    db_connection: str = Field(default="postgresql+psycopg2")
    db_host: str = Field(default="127.0.0.1")
    db_port: int = Field(default=5432)
    db_database: str = Field(default="formations")
    db_username: str = Field(default="postgres")
    db_password: str = Field(default="postgres")
    # Full URL override (e.g. the hosted Postgres connection string)
    database_url: Optional[str] = Field(default=None)

    # Security Settings
    cors_allowed_origins: List[str] = Field(default=["http://localhost:3000"])

    # JWT issued by the identity provider
    jwt_secret: str = Field(default="your-secret-key-change-in-production")
    jwt_algorithm: str = Field(default="HS256")
    jwt_audience: Optional[str] = Field(default="authenticated")
    jwt_issuer: Optional[str] = Field(default=None)
    jwt_dev_token_expiration_minutes: int = Field(default=60)

    # Logging
    log_level: str = Field(default="info")
    log_file: str = Field(default="logs/app.log")

    # Pagination
    max_page_size: int = Field(default=100)
    attempt_list_default_limit: int = Field(default=10)

    # Rate limiting
    redis_url: str = Field(default="redis://localhost:6379")
    rate_limit_storage_uri: Optional[str] = Field(default=None)
    redis_rate_limit: str = Field(default="120/minute")
    attempt_rate_limit: str = Field(default="30/minute")

    # ============================
    # Generic comma-separated parser
    # ============================
    @staticmethod
    def _parse_csv(value, default):
        if isinstance(value, str):
            items = [x.strip() for x in value.split(",") if x.strip()]
            return items if items else default
        if isinstance(value, list):
            return value
        return default

    @field_validator("cors_allowed_origins", mode="before")
    def validate_cors(cls, v):
        return cls._parse_csv(v, ["http://localhost:3000"])

    @field_validator("max_page_size")
    def validate_max_page_size(cls, v):
        if v < 1:
            raise ValueError("max_page_size must be at least 1")
        return v

    @property
    def sqlalchemy_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return "{driver}://{user}:{password}@{host}:{port}/{database}".format(
            driver=self.db_connection,
            user=self.db_username,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_database,
        )

    @property
    def limiter_storage_uri(self) -> str:
        return self.rate_limit_storage_uri or self.redis_url

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def load_settings():
    try:
        settings = Settings()
        logger.debug("Settings loaded successfully")
        return settings
    except ValidationError as e:
        logger.error(f"Settings validation error: {e}")
        raise


settings = load_settings()
