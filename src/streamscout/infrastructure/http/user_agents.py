"""User-Agent header strategies for outgoing page fetches.

A strategy is any zero-argument callable returning a header mapping; the
fetcher calls it once per request.
"""

from __future__ import annotations

import random
from typing import Callable, Sequence

HeaderStrategy = Callable[[], dict[str, str]]


def fixed_user_agent(user_agent: str) -> HeaderStrategy:
    """Always send the same agent."""

    def headers() -> dict[str, str]:
        return {"User-Agent": user_agent}

    return headers


def per_process_user_agent(
    pool: Sequence[str],
    rng: random.Random | None = None,
) -> HeaderStrategy:
    """Pick one agent from *pool* now and keep it for the strategy's lifetime."""
    if not pool:
        raise ValueError("user agent pool must not be empty")
    chosen = (rng or random).choice(list(pool))
    return fixed_user_agent(chosen)


def per_call_user_agent(
    pool: Sequence[str],
    rng: random.Random | None = None,
) -> HeaderStrategy:
    """Pick a fresh agent from *pool* on every request."""
    if not pool:
        raise ValueError("user agent pool must not be empty")
    agents = list(pool)
    chooser = rng or random.Random()

    def headers() -> dict[str, str]:
        return {"User-Agent": chooser.choice(agents)}

    return headers


def build_header_strategy(
    mode: str,
    pool: Sequence[str],
    *,
    fixed: str | None = None,
    rng: random.Random | None = None,
) -> HeaderStrategy:
    """Create the strategy named by the ``http.user_agent_mode`` setting."""
    if mode == "fixed":
        return fixed_user_agent(fixed or pool[0])
    if mode == "per_call":
        return per_call_user_agent(pool, rng)
    if mode == "per_process":
        return per_process_user_agent(pool, rng)
    raise ValueError(
        f"Unknown user agent mode: {mode!r}. Must be 'per_process', 'per_call' or 'fixed'."
    )
