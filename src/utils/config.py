from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Service settings, read from the environment and an optional .env file.

    The MYSQL_* values are not validated; a missing one is handed to the
    driver and surfaces as a connection error.
    """

    MYSQL_HOST: Optional[str] = None
    MYSQL_USER: Optional[str] = None
    MYSQL_PASSWORD: Optional[str] = None
    MYSQL_DATABASE: Optional[str] = None

    DATABASE_URL: Optional[str] = Field(
        default=None,
        description="Overrides the URL assembled from the MYSQL_* values"
    )

    DB_CONNECT_RETRIES: int = Field(default=5, ge=1, description="Total connection attempts")
    DB_RETRY_DELAY: float = Field(default=5.0, ge=0, description="Seconds between attempts")
    DB_CREATE_SCHEMA: bool = False

    API_HOST: str = "0.0.0.0"
    API_PORT: int = Field(default=8000, ge=1, le=65535)
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def db_url(self):
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            "mysql+aiomysql",
            username=self.MYSQL_USER,
            password=self.MYSQL_PASSWORD,
            host=self.MYSQL_HOST,
            database=self.MYSQL_DATABASE,
        )
