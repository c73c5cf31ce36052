import enum
import logging
import tomllib
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from swiftlink.utils.encoding import generate_code

logger = logging.getLogger(__name__)

BEARER_TOKEN_LENGTH = 10


class DatabaseType(str, enum.Enum):
    POSTGRES = "postgres"
    SQLITE = "sqlite"


class BaseOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Length of generated short codes
    code_size: int = Field(6, ge=1, le=64)
    port: int = 8080
    # Token required by DELETE /{code}; generated at startup when missing
    bearer_token: Optional[str] = None
    max_code_attempts: int = Field(5, ge=1)


class DatabaseConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    database_type: DatabaseType = DatabaseType.POSTGRES
    username: Optional[str] = "postgres"
    password: Optional[str] = "password"
    host: str = "localhost"
    port: int = 5432
    # Database name for postgres, file path (or ":memory:") for sqlite
    database: str = "swiftlink_db"
    max_connections: int = Field(5, ge=1)


class RateLimitConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    limit: int = Field(100, ge=1)
    window: int = Field(60, ge=1)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SWIFTLINK_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    PROJECT_NAME: str = "Swiftlink"

    base: BaseOptions = BaseOptions()
    database: DatabaseConfig = DatabaseConfig()
    rate_limit: RateLimitConfig = RateLimitConfig()

    @classmethod
    def settings_customise_sources(
        cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings
    ):
        # Environment wins over values read from the TOML file
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def read_config_file(path: Union[str, Path]) -> dict:
    path = Path(path)
    if not path.is_file():
        logger.warning(f"Config file {path} not found, using default configuration")
        return {}
    with path.open("rb") as f:
        return tomllib.load(f)


def load_settings(config_path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Build the immutable application settings.

    Values come from the TOML file at ``config_path`` (if any), overridden by
    ``SWIFTLINK_*`` environment variables. A bearer token is generated and
    logged when none is configured.
    """
    data = read_config_file(config_path) if config_path else {}
    settings = Settings(**data)

    if not settings.base.bearer_token:
        token = generate_code(BEARER_TOKEN_LENGTH)
        logger.info(f"No bearer_token set in configuration; generated one: {token}")
        settings = settings.model_copy(
            update={"base": settings.base.model_copy(update={"bearer_token": token})}
        )
    return settings
