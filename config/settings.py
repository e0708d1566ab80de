#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings

from .constants import (
    CONCEPT_COUNT,
    GENERATION_TEMPERATURE,
    GENERATION_MAX_TOKENS,
    OUTLINE_MAX_TOKENS,
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
    DEFAULT_FONT_FAMILY,
)


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings"""

    # ========== API Keys ==========
    openai_api_key: str = ""
    anthropic_api_key: str = ""

    # ========== Provider & Model ==========
    provider: str = "openai"  # openai | anthropic
    model: Optional[str] = None  # None = provider default
    generation_temperature: float = GENERATION_TEMPERATURE
    generation_max_tokens: int = GENERATION_MAX_TOKENS
    outline_max_tokens: int = OUTLINE_MAX_TOKENS
    json_repair_enabled: bool = True  # one-shot model repair of malformed JSON

    # ========== Pipeline ==========
    concept_count: int = CONCEPT_COUNT
    # Offline deterministic generator (no API key needed). Auto-enabled
    # by the API when the selected provider has no key configured.
    use_template_generator: bool = False

    # ========== Branding defaults ==========
    default_primary_color: str = DEFAULT_PRIMARY_COLOR
    default_secondary_color: str = DEFAULT_SECONDARY_COLOR
    default_font_family: str = DEFAULT_FONT_FAMILY

    # ========== Directories ==========
    logs_dir: Path = BASE_DIR / "logs"

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Allow extra fields from .env that aren't defined in model

    def get_api_key(self) -> str:
        """Get API key based on provider"""
        if self.provider == "openai":
            if not self.openai_api_key:
                raise ValueError("OPENAI_API_KEY not set in .env")
            return self.openai_api_key
        elif self.provider == "anthropic":
            if not self.anthropic_api_key:
                raise ValueError("ANTHROPIC_API_KEY not set in .env")
            return self.anthropic_api_key
        else:
            raise ValueError(f"Unsupported provider: {self.provider}")

    def has_api_key(self) -> bool:
        """True when the configured provider has a key."""
        try:
            self.get_api_key()
        except ValueError:
            return False
        return True


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
