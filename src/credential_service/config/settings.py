"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

NonEmptyStr = Annotated[str, Field(min_length=1)]
BcryptRounds = Annotated[int, Field(ge=4, le=31)]
PortNumber = Annotated[int, Field(ge=1, le=65_535)]


class Settings(BaseSettings):
    """Environment-driven application settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    database_url: NonEmptyStr = Field(
        default="sqlite+aiosqlite:///./users.db",
        validation_alias=AliasChoices("DATABASE_URL", "DATABASE_DSN"),
    )
    database_auto_create: bool = Field(default=True, validation_alias="DATABASE_AUTO_CREATE")
    bcrypt_rounds: BcryptRounds = Field(default=10, validation_alias="BCRYPT_ROUNDS")
    api_host: NonEmptyStr = Field(default="0.0.0.0", validation_alias="API_HOST")
    port: PortNumber = Field(default=3000, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()
