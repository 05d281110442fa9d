# src/fontbranding/config.py
from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional, Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """
    Centralized configuration with environment-based validation (Pydantic v2).
    Load order:
      1) Environment variables
      2) secrets.env / .env (if present)
    """

    # --- App ---
    ENV: Literal["dev", "test", "prod"] = Field(default="dev", description="Environment profile")
    LOG_LEVEL: str = Field(default="INFO", description="Python logging level (DEBUG, INFO, WARNING, ERROR)")
    LOG_FORMAT: Literal["text", "json"] = Field(default="text", description="Log format for output")

    # --- Shopify ---
    SHOPIFY_DOMAIN: Optional[str] = Field(default=None, description="e.g. https://yourshop.myshopify.com")
    SHOPIFY_TOKEN: Optional[str] = Field(default=None, description="Shopify Admin API access token")
    SHOPIFY_API_VERSION: str = Field(default="2025-01", description="Shopify API version to use")
    SHOPIFY_TIMEOUT_SEC: float = Field(default=20.0, gt=0, description="Timeout for Admin GraphQL calls")

    # --- Font upload ---
    UPLOAD_TIMEOUT_SEC: float = Field(default=60.0, gt=0, description="Read timeout for the staged upload POST")
    FILE_POLL_MAX_ATTEMPTS: int = Field(default=30, ge=1, description="Status queries before giving up on a file")
    FILE_POLL_INTERVAL_SEC: float = Field(default=1.0, ge=0, description="Wait between file status queries")

    # --- HTTP endpoint ---
    FONTBRANDING_TOKEN: Optional[str] = Field(default=None, description="Optional bearer token for POST /branding/font")

    class Config:
        case_sensitive = False

    # --- Derived / normalized fields ---
    @field_validator("SHOPIFY_DOMAIN", mode="before")
    @classmethod
    def normalize_domain(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return v
        v = v.strip()
        if not v.startswith("http"):
            v = "https://" + v
        if v.endswith("/"):
            v = v[:-1]
        return v

    def require_shopify(self) -> None:
        if not self.SHOPIFY_DOMAIN or not self.SHOPIFY_TOKEN:
            raise ValueError("Missing Shopify config: set SHOPIFY_DOMAIN and SHOPIFY_TOKEN")

    def summary_lines(self) -> list[str]:
        return [
            f"ENV={self.ENV}",
            f"LOG_LEVEL={self.LOG_LEVEL} LOG_FORMAT={self.LOG_FORMAT}",
            f"Shopify: domain={'set' if self.SHOPIFY_DOMAIN else 'missing'}, token={'set' if self.SHOPIFY_TOKEN else 'missing'}, api_version={self.SHOPIFY_API_VERSION}",
            f"Polling: max_attempts={self.FILE_POLL_MAX_ATTEMPTS}, interval={self.FILE_POLL_INTERVAL_SEC}s",
            f"Endpoint auth: {'bearer' if self.FONTBRANDING_TOKEN else 'open'}",
        ]


@lru_cache()
def get_settings() -> Settings:
    # secrets.env overrides the environment; .env only fills gaps
    for path, override in (("secrets.env", True), (".env", False)):
        if os.path.exists(path):
            load_dotenv(path, override=override)
    return Settings()
