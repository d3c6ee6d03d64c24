"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_USER_AGENTS: list[str] = [
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:135.0) "
    "Gecko/20100101 Firefox/135.0",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
]

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "streamscout",
    "environment": "dev",
    "http": {
        "timeout_seconds": 30.0,
        "follow_redirects": True,
        "user_agent_mode": "per_process",
        "user_agents": list(DEFAULT_USER_AGENTS),
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "cache": {
        "dir": "./.cache/streamscout",
        "max_concurrent": 10,
    },
    "site": {
        "base_domain": "streamingcommunity.computer",
        "patch_stream": False,
        "hold_speed": 0.5,
        "show_original_title": False,
        "show_cast": True,
        "show_director": True,
        "force_landscape": False,
    },
    "progress": {
        "ttl_days": 0,
    },
    "search_history": {
        "max_entries": 0,
    },
}
