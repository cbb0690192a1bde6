"""Tests for the activity feed poller, driven by a manual clock."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from dypse_api.domain.entities import PROFILE_ACTIVITY_TYPES, ActivityRecord, ActivityType
from dypse_api.interfaces.client.polling import (
    FETCH_ERROR_MESSAGE,
    ActivityFeedPoller,
    dashboard_activity_poller,
    profile_activity_poller,
)

INTERVAL = 30.0


class ManualClock:
    """Replacement for ``asyncio.sleep`` whose time only moves when told to."""

    def __init__(self) -> None:
        self.now = 0.0
        self._waiters: list[tuple[float, asyncio.Future]] = []

    async def sleep(self, delay: float) -> None:
        future = asyncio.get_running_loop().create_future()
        self._waiters.append((self.now + delay, future))
        await future

    async def advance(self, seconds: float) -> None:
        await _settle()
        self.now += seconds
        due = [item for item in self._waiters if item[0] <= self.now]
        self._waiters = [item for item in self._waiters if item[0] > self.now]
        for _, future in due:
            if not future.done():
                future.set_result(None)
        await _settle()


async def _settle() -> None:
    for _ in range(10):
        await asyncio.sleep(0)


class RecordingFetch:
    def __init__(self, count: int = 3) -> None:
        self.count = count
        self.calls: list[tuple[int, list[str] | None]] = []

    async def __call__(self, limit: int, types: list[str] | None) -> list[ActivityRecord]:
        self.calls.append((limit, types))
        return [
            ActivityRecord(
                id=index,
                user_id=1,
                activity_type=ActivityType.LOGIN,
                title=f"Login {index}",
                created_at=datetime.now(timezone.utc),
            )
            for index in range(min(self.count, limit))
        ]


def test_initial_load_requests_one_extra_record() -> None:
    fetch = RecordingFetch(count=3)

    async def scenario() -> ActivityFeedPoller:
        poller = ActivityFeedPoller(fetch, limit=5)
        await poller.start()
        return poller

    poller = asyncio.run(scenario())

    assert fetch.calls == [(6, None)]
    assert [item.text for item in poller.state.activities] == ["Login 0", "Login 1", "Login 2"]
    assert len(poller.state.raw_activities) == 3
    assert poller.state.loading is False
    assert poller.state.has_more is False


def test_synchronous_fetch_is_supported() -> None:
    def fetch(limit, types):
        return [
            ActivityRecord(id=1, user_id=1, activity_type=ActivityType.LOGIN, title="Hi")
        ]

    async def scenario() -> ActivityFeedPoller:
        poller = ActivityFeedPoller(fetch)
        await poller.start()
        return poller

    assert asyncio.run(scenario()).state.activities[0].text == "Hi"


def test_fetch_failure_sets_error_state() -> None:
    async def failing(limit, types):
        raise RuntimeError("network down")

    async def scenario() -> ActivityFeedPoller:
        poller = ActivityFeedPoller(failing)
        await poller.start()
        return poller

    state = asyncio.run(scenario()).state

    assert state.activities == []
    assert state.raw_activities == []
    assert state.loading is False
    assert state.has_more is False
    assert state.error == FETCH_ERROR_MESSAGE


def test_successful_refresh_clears_previous_error() -> None:
    outcomes = [RuntimeError("down"), []]

    async def flaky(limit, types):
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def scenario() -> ActivityFeedPoller:
        poller = ActivityFeedPoller(flaky)
        await poller.start()
        assert poller.state.error == FETCH_ERROR_MESSAGE
        await poller.refresh()
        return poller

    state = asyncio.run(scenario()).state

    assert state.error is None
    assert state.activities == []


def test_auto_refresh_runs_once_at_start_and_once_per_interval() -> None:
    fetch = RecordingFetch()
    clock = ManualClock()

    async def scenario() -> list[int]:
        counts = []
        poller = ActivityFeedPoller(
            fetch, auto_refresh=True, refresh_interval=INTERVAL, sleep=clock.sleep
        )
        await poller.start()
        await clock.advance(0)
        counts.append(len(fetch.calls))
        await clock.advance(INTERVAL - 1)
        counts.append(len(fetch.calls))
        await clock.advance(1)
        counts.append(len(fetch.calls))
        poller.close()
        await _settle()
        return counts

    assert asyncio.run(scenario()) == [1, 1, 2]


def test_close_stops_scheduled_refreshes() -> None:
    fetch = RecordingFetch()
    clock = ManualClock()

    async def scenario() -> ActivityFeedPoller:
        async with ActivityFeedPoller(
            fetch, auto_refresh=True, refresh_interval=INTERVAL, sleep=clock.sleep
        ) as poller:
            await clock.advance(INTERVAL)
        await clock.advance(INTERVAL)
        await clock.advance(INTERVAL)
        return poller

    poller = asyncio.run(scenario())

    assert len(fetch.calls) == 2
    assert poller.closed
    assert not poller.timer_running


def test_disabling_auto_refresh_stops_the_timer() -> None:
    fetch = RecordingFetch()
    clock = ManualClock()

    async def scenario() -> ActivityFeedPoller:
        poller = ActivityFeedPoller(
            fetch, auto_refresh=True, refresh_interval=INTERVAL, sleep=clock.sleep
        )
        await poller.start()
        await clock.advance(INTERVAL)
        poller.set_auto_refresh(False)
        await clock.advance(INTERVAL)
        await clock.advance(INTERVAL)
        return poller

    poller = asyncio.run(scenario())

    assert len(fetch.calls) == 2
    assert not poller.timer_running


def test_enabling_auto_refresh_later_uses_new_interval() -> None:
    fetch = RecordingFetch()
    clock = ManualClock()

    async def scenario() -> ActivityFeedPoller:
        poller = ActivityFeedPoller(fetch, sleep=clock.sleep)
        await poller.start()
        await clock.advance(INTERVAL)
        poller.set_auto_refresh(True, interval=10)
        await clock.advance(10)
        poller.close()
        return poller

    asyncio.run(scenario())

    assert len(fetch.calls) == 2


def test_overlapping_refresh_is_ignored() -> None:
    release = None
    calls = []

    async def slow(limit, types):
        calls.append(limit)
        await release.wait()
        return []

    async def scenario() -> None:
        nonlocal release
        release = asyncio.Event()
        poller = ActivityFeedPoller(slow)
        first = asyncio.create_task(poller.start())
        await _settle()
        assert poller.state.loading is True
        await poller.refresh()
        release.set()
        await first
        assert poller.state.loading is False

    asyncio.run(scenario())

    assert len(calls) == 1


def test_late_response_after_close_is_discarded() -> None:
    release = None

    async def slow(limit, types):
        await release.wait()
        return [ActivityRecord(id=1, user_id=1, activity_type=ActivityType.LOGIN, title="Late")]

    async def scenario() -> ActivityFeedPoller:
        nonlocal release
        release = asyncio.Event()
        poller = ActivityFeedPoller(slow)
        task = asyncio.create_task(poller.start())
        await _settle()
        poller.close()
        release.set()
        await task
        return poller

    poller = asyncio.run(scenario())

    assert poller.state.activities == []


def _stalling_fetch(release: asyncio.Event, calls: list[int]):
    """Answer the first call at once; later calls wait for ``release``."""

    async def fetch(limit, types):
        calls.append(limit)
        number = len(calls)
        if number > 1:
            await release.wait()
        return [
            ActivityRecord(
                id=number, user_id=1, activity_type=ActivityType.LOGIN, title=f"Load {number}"
            )
        ]

    return fetch


def test_disabling_auto_refresh_mid_fetch_clears_loading() -> None:
    calls: list[int] = []
    clock = ManualClock()

    async def scenario() -> ActivityFeedPoller:
        release = asyncio.Event()
        poller = ActivityFeedPoller(
            _stalling_fetch(release, calls),
            auto_refresh=True,
            refresh_interval=INTERVAL,
            sleep=clock.sleep,
        )
        await poller.start()
        await clock.advance(INTERVAL)
        assert poller.state.loading is True

        poller.set_auto_refresh(False)
        await _settle()
        assert poller.state.loading is False
        assert poller.state.error is None
        assert [item.text for item in poller.state.activities] == ["Load 1"]

        release.set()
        await poller.refresh()
        return poller

    poller = asyncio.run(scenario())

    assert len(calls) == 3
    assert poller.state.loading is False
    assert [item.text for item in poller.state.activities] == ["Load 3"]


def test_changing_interval_mid_fetch_clears_loading_and_keeps_polling() -> None:
    calls: list[int] = []
    clock = ManualClock()

    async def scenario() -> ActivityFeedPoller:
        release = asyncio.Event()
        poller = ActivityFeedPoller(
            _stalling_fetch(release, calls),
            auto_refresh=True,
            refresh_interval=INTERVAL,
            sleep=clock.sleep,
        )
        await poller.start()
        await clock.advance(INTERVAL)
        assert poller.state.loading is True

        poller.set_auto_refresh(True, interval=10)
        await _settle()
        assert poller.state.loading is False
        assert poller.timer_running

        release.set()
        await clock.advance(10)
        poller.close()
        return poller

    poller = asyncio.run(scenario())

    assert len(calls) == 3
    assert poller.state.loading is False
    assert [item.text for item in poller.state.activities] == ["Load 3"]


def test_cancelled_initial_load_clears_loading() -> None:
    calls: list[int] = []

    async def scenario() -> ActivityFeedPoller:
        release = asyncio.Event()

        async def blocked(limit, types):
            calls.append(limit)
            await release.wait()
            return []

        poller = ActivityFeedPoller(blocked)
        task = asyncio.create_task(poller.start())
        await _settle()
        assert poller.state.loading is True

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert poller.state.loading is False

        release.set()
        await poller.refresh()
        return poller

    poller = asyncio.run(scenario())

    assert len(calls) == 2
    assert poller.state.loading is False
    assert poller.state.error is None


def test_presets() -> None:
    dashboard = dashboard_activity_poller(RecordingFetch())
    profile = profile_activity_poller(RecordingFetch())

    assert dashboard.limit == 8
    assert dashboard.auto_refresh is False
    assert dashboard.types is None
    assert profile.limit == 10
    assert profile.types == [value.value for value in PROFILE_ACTIVITY_TYPES]


def test_invalid_configuration_is_rejected() -> None:
    with pytest.raises(ValueError):
        ActivityFeedPoller(RecordingFetch(), limit=0)
    with pytest.raises(ValueError):
        ActivityFeedPoller(RecordingFetch(), refresh_interval=0)
