"""Application configuration models."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Iterable, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="Marquee", alias="APP_NAME")
    server_host: str = Field(default="0.0.0.0", alias="HOST")
    server_port: int = Field(default=3000, alias="PORT")

    database_url: str = Field(
        default="sqlite+aiosqlite:///./movies.db", alias="DATABASE_URL"
    )
    database_create_tables: bool = Field(
        default=False, alias="DATABASE_CREATE_TABLES"
    )

    default_page_size: int = Field(
        default=10, alias="DEFAULT_PAGE_SIZE", ge=1, le=100
    )
    max_page_size: int = Field(default=100, alias="MAX_PAGE_SIZE", ge=1, le=1_000)

    recommendation_list_size: int = Field(
        default=5, alias="RECOMMENDATION_LIST_SIZE", ge=1, le=50
    )
    user_key_space: int = Field(default=200, alias="USER_KEY_SPACE", ge=1)
    user_key_prefix_length: int = Field(
        default=8, alias="USER_KEY_PREFIX_LENGTH", ge=1, le=32
    )
    neighbor_genre_scan_limit: int = Field(
        default=10, alias="NEIGHBOR_GENRE_SCAN_LIMIT", ge=0, le=1_000
    )
    recommendation_seed: int | None = Field(default=None, alias="RECOMMENDATION_SEED")

    cors_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=("*",), alias="CORS_ORIGINS"
    )

    environment: Literal["development", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, value: object) -> tuple[str, ...]:
        """Normalise comma separated origin lists from environment values."""

        if value is None:
            return ("*",)
        if isinstance(value, str):
            raw_values = value.split(",")
        elif isinstance(value, Iterable):
            raw_values = [str(part) for part in value]
        else:
            raise TypeError("CORS_ORIGINS must be a string or iterable of strings")

        cleaned: list[str] = []
        for entry in raw_values:
            origin = entry.strip().rstrip("/")
            if origin and origin not in cleaned:
                cleaned.append(origin)
        return tuple(cleaned) or ("*",)

    @model_validator(mode="after")
    def _check_page_sizes(self) -> "Settings":
        """Ensure the default page size fits inside the allowed maximum."""

        if self.default_page_size > self.max_page_size:
            raise ValueError("DEFAULT_PAGE_SIZE must not exceed MAX_PAGE_SIZE")
        return self

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


settings = get_settings()
