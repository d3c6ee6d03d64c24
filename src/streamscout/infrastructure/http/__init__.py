"""Outgoing HTTP: page fetcher and User-Agent strategies."""

from .fetcher import HttpxPageFetcher
from .user_agents import (
    HeaderStrategy,
    build_header_strategy,
    fixed_user_agent,
    per_call_user_agent,
    per_process_user_agent,
)

__all__ = [
    "HeaderStrategy",
    "HttpxPageFetcher",
    "build_header_strategy",
    "fixed_user_agent",
    "per_call_user_agent",
    "per_process_user_agent",
]
