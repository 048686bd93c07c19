"""
Centralized settings for contentshape.

Manifesto:
    One validated, cached settings object instead of each module reading
    environment variables on its own. Display defaults, template lookup and
    logging are resolved in a single place.

All fields can be set via ``CONTENTSHAPE_*`` environment variables (e.g.
``CONTENTSHAPE_DEFAULT_DISPLAY_TYPE=Summary``) or through a ``.env`` file.

Tags:
    contentshape, configuration, settings, pydantic, caching, validation

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DisplaySettings(BaseSettings):
    """contentshape configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CONTENTSHAPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Display ──────────────────────────────────────────────────
    default_display_type: str = Field(default="Detail", description="Display type when the context names none")
    editor_display_type: str = Field(default="Edit", description="Display type stamped on editor shapes")

    # ── Templates ────────────────────────────────────────────────
    template_dir: Path | None = Field(default=None, description="Directory searched for shape templates")
    template_extension: str = Field(default=".html")
    autoescape: bool = Field(default=True)

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")

    @field_validator("default_display_type", "editor_display_type")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("display type must not be empty")
        return value.strip()

    @field_validator("template_extension")
    @classmethod
    def _dotted_extension(cls, value: str) -> str:
        if value and not value.startswith("."):
            return f".{value}"
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level

    @field_validator("log_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        fmt = value.lower()
        if fmt not in {"json", "console"}:
            raise ValueError(f"unknown log format: {value}")
        return fmt


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, DisplaySettings] = {}


def get_settings(*, env_file: Path | None = None, _force_reload: bool = False) -> DisplaySettings:
    """Load, validate, and cache a :class:`DisplaySettings` instance.

    Parameters
    ----------
    env_file:
        Explicit ``.env`` file to read instead of ``./.env``.
    _force_reload:
        Bypass cache and reload.
    """
    cache_key = str(env_file or "")

    if not _force_reload and cache_key in _settings_cache:
        return _settings_cache[cache_key]

    if env_file is not None:
        settings = DisplaySettings(_env_file=env_file)  # type: ignore[call-arg]
    else:
        settings = DisplaySettings()

    _settings_cache[cache_key] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (for testing)."""
    _settings_cache.clear()
