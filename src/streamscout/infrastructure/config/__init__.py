from __future__ import annotations

from .load import load_config
from .schema import AppConfig, EnvOverrides, SiteSettings, normalize_base_domain

__all__ = [
    "AppConfig",
    "EnvOverrides",
    "SiteSettings",
    "load_config",
    "normalize_base_domain",
]
