from functools import lru_cache

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Foodservice Data API"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Database
    database_url: str = "sqlite+aiosqlite:///./foodservice.db"
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_echo: bool = False

    # CRUD engine
    crud_default_page_size: int = 100
    crud_max_page_size: int = 500
    crud_max_bulk_items: int = 500
    id_random_length: int = 10

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    @field_validator("crud_max_page_size")
    @classmethod
    def validate_max_page_size(cls, v: int, info: ValidationInfo) -> int:
        default = info.data.get("crud_default_page_size", 100)
        if v < default:
            raise ValueError(
                f"CRUD_MAX_PAGE_SIZE ({v}) must not be smaller than "
                f"CRUD_DEFAULT_PAGE_SIZE ({default})"
            )
        return v

    @field_validator("crud_max_bulk_items")
    @classmethod
    def validate_bulk_cap(cls, v: int) -> int:
        if not 1 <= v <= 500:
            raise ValueError("CRUD_MAX_BULK_ITEMS must be between 1 and 500")
        return v

    @field_validator("id_random_length")
    @classmethod
    def validate_id_length(cls, v: int) -> int:
        if v < 8:
            raise ValueError("ID_RANDOM_LENGTH must be at least 8")
        return v

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    return Settings()
