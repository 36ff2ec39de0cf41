from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from curation.config import DEFAULT_PAGINATION


class ServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Listing snapshot; empty means the bundled sample dataset
    listings_path: str = Field(default="", alias="LISTINGS_PATH")

    # Pagination
    default_page_size: int = Field(default=DEFAULT_PAGINATION.page_size, gt=0, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=max(DEFAULT_PAGINATION.page_size_options), gt=0, alias="MAX_PAGE_SIZE")
    max_visible_pages: int = Field(default=DEFAULT_PAGINATION.max_visible_pages, gt=0, alias="MAX_VISIBLE_PAGES")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")
