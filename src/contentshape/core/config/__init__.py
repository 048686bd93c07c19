"""Centralized configuration.

Quick start::

    from contentshape.core.config import get_settings

    settings = get_settings()
    print(settings.default_display_type)   # "Detail"

Guardrails:
    ❌ Parsing env vars ad-hoc in each module
    ✅ ``get_settings().template_extension`` from the cached instance
"""

from .settings import (
    DisplaySettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "DisplaySettings",
    "get_settings",
    "clear_settings_cache",
]
