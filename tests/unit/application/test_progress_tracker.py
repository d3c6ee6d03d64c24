"""Tests for ProgressTracker."""

from __future__ import annotations

import math

import pytest

from streamscout.application.progress_tracker import ProgressTracker
from streamscout.domain.entities import PlaybackProgress
from streamscout.infrastructure.persistence import CacheProgressRepository

_EP1 = "https://sc.example/iframe/42?episode_id=1"
_EP2 = "https://sc.example/iframe/42?episode_id=2"


@pytest.fixture()
def store(fake_cache) -> CacheProgressRepository:
    return CacheProgressRepository(cache=fake_cache)


@pytest.fixture()
def tracker(store: CacheProgressRepository) -> ProgressTracker:
    return ProgressTracker(store=store)


class TestRecord:
    async def test_records_and_resumes(self, tracker: ProgressTracker) -> None:
        assert await tracker.record(_EP1, 42.0, 1200.0) is True
        assert await tracker.last_position(_EP1) == 42.0

    async def test_latest_write_wins(self, tracker: ProgressTracker) -> None:
        await tracker.record(_EP1, 10.0, 100.0)
        await tracker.record(_EP1, 11.0, 100.0)
        assert await tracker.last_position(_EP1) == 11.0

    @pytest.mark.parametrize("duration", [0.0, -1.0, math.nan, math.inf])
    async def test_unknown_duration_is_noop(
        self, tracker: ProgressTracker, fake_cache, duration: float
    ) -> None:
        assert await tracker.record(_EP1, 10.0, duration, group="42") is False
        assert fake_cache.data == {}
        assert await tracker.last_position(_EP1) is None
        assert tracker.overall_progress("42") == 0.0

    @pytest.mark.parametrize("duration", [0.0, -1.0, math.nan, math.inf])
    async def test_unknown_duration_keeps_stored_progress(
        self, tracker: ProgressTracker, fake_cache, duration: float
    ) -> None:
        await tracker.record(_EP1, 30.0, 100.0, group="42")
        stored = dict(fake_cache.data)

        assert await tracker.record(_EP1, 10.0, duration, group="42") is False
        assert fake_cache.data == stored
        assert await tracker.last_position(_EP1) == 30.0
        assert tracker.overall_progress("42") == pytest.approx(0.3)

    async def test_non_finite_position_is_noop(self, tracker: ProgressTracker) -> None:
        assert await tracker.record(_EP1, math.nan, 100.0) is False
        assert await tracker.last_position(_EP1) is None

    async def test_negative_position_clamped(self, tracker: ProgressTracker) -> None:
        await tracker.record(_EP1, -3.0, 100.0)
        assert await tracker.last_position(_EP1) == 0.0

    async def test_unknown_key(self, tracker: ProgressTracker) -> None:
        assert await tracker.last_position("https://sc.example/iframe/1") is None


class TestOverallProgress:
    async def test_mean_over_recorded_episodes(self, tracker: ProgressTracker) -> None:
        await tracker.record(_EP1, 50.0, 100.0, group="42")
        await tracker.record(_EP2, 100.0, 100.0, group="42")
        assert tracker.overall_progress("42") == pytest.approx(0.75)
        assert tracker.episode_progress("42") == {_EP1: 0.5, _EP2: 1.0}

    async def test_recomputed_on_each_record(self, tracker: ProgressTracker) -> None:
        await tracker.record(_EP1, 25.0, 100.0, group="42")
        assert tracker.overall_progress("42") == pytest.approx(0.25)
        await tracker.record(_EP1, 75.0, 100.0, group="42")
        assert tracker.overall_progress("42") == pytest.approx(0.75)

    async def test_without_group_no_title_progress(self, tracker: ProgressTracker) -> None:
        await tracker.record(_EP1, 50.0, 100.0)
        assert tracker.overall_progress("42") == 0.0

    def test_unknown_group(self, tracker: ProgressTracker) -> None:
        assert tracker.overall_progress("nope") == 0.0
        assert tracker.episode_progress("nope") == {}


class TestLoadGroup:
    async def test_seeds_from_store(self, store: CacheProgressRepository) -> None:
        await store.save(_EP1, PlaybackProgress(30.0, 60.0))

        tracker = ProgressTracker(store=store)
        overall = await tracker.load_group("42", [_EP1, _EP2])

        assert overall == pytest.approx(0.5)
        assert tracker.episode_progress("42") == {_EP1: 0.5}

    async def test_in_memory_values_win(self, store: CacheProgressRepository) -> None:
        tracker = ProgressTracker(store=store)
        await tracker.record(_EP1, 90.0, 100.0, group="42")
        await store.save(_EP1, PlaybackProgress(10.0, 100.0))

        overall = await tracker.load_group("42", [_EP1])
        assert overall == pytest.approx(0.9)
