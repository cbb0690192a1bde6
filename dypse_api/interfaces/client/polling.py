"""Keep a formatted "latest window" of activities, refreshed on demand or on a timer."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass, field, replace
from typing import Union

from dypse_api.domain.entities import PROFILE_ACTIVITY_TYPES, ActivityRecord, ActivityType

from .formatting import FormattedActivity, format_activities_for_display

logger = logging.getLogger(__name__)

FETCH_ERROR_MESSAGE = "Failed to load activities"

FetchResult = Union[Sequence[ActivityRecord], Awaitable[Sequence[ActivityRecord]]]
FetchActivities = Callable[[int, Union[list[str], None]], FetchResult]
Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class ActivityFeedState:
    activities: list[FormattedActivity] = field(default_factory=list)
    raw_activities: list[ActivityRecord] = field(default_factory=list)
    loading: bool = False
    error: str | None = None
    has_more: bool = False


class ActivityFeedPoller:
    """Own the feed state for one consumer.

    ``fetch_activities(limit, types)`` may be a coroutine function or a plain
    function. Each refresh asks for ``limit + 1`` records, keeps ``limit`` and
    sets ``has_more`` when the extra record came back. A refresh requested while
    another one is running is ignored, and results arriving after :meth:`close`
    are dropped.
    """

    def __init__(
        self,
        fetch_activities: FetchActivities,
        *,
        limit: int = 10,
        types: Iterable[ActivityType | str] | None = None,
        auto_refresh: bool = False,
        refresh_interval: float = 30.0,
        sleep: Sleep = asyncio.sleep,
        on_update: Callable[[ActivityFeedState], None] | None = None,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        if refresh_interval <= 0:
            raise ValueError("refresh_interval must be positive")
        self._fetch = fetch_activities
        self.limit = limit
        self.types = [ActivityType.parse(value).value for value in types] if types else None
        self.auto_refresh = auto_refresh
        self.refresh_interval = refresh_interval
        self._sleep = sleep
        self._on_update = on_update
        self.state = ActivityFeedState()
        self._in_flight = False
        self._closed = False
        self._started = False
        self._timer: asyncio.Task[None] | None = None

    async def __aenter__(self) -> "ActivityFeedPoller":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def timer_running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def _set_state(self, **changes: object) -> None:
        self.state = replace(self.state, **changes)
        if self._on_update is not None:
            self._on_update(self.state)

    async def start(self) -> None:
        """Run the initial load and start the timer when auto-refresh is on."""

        if self._closed:
            raise RuntimeError("Poller has been closed")
        if self._started:
            return
        self._started = True
        if self.auto_refresh:
            self._start_timer()
        await self.refresh()

    async def refresh(self) -> None:
        if self._closed or self._in_flight:
            return

        self._in_flight = True
        self._set_state(loading=True, error=None)
        try:
            fetched = await self._call_fetch()
        except asyncio.CancelledError:
            # A cancelled timer must not leave the feed stuck in loading.
            if not self._closed:
                self._set_state(loading=False)
            raise
        except Exception:
            if self._closed:
                return
            logger.exception("Failed to fetch activities")
            self._set_state(
                activities=[],
                raw_activities=[],
                loading=False,
                error=FETCH_ERROR_MESSAGE,
                has_more=False,
            )
            return
        finally:
            self._in_flight = False

        if self._closed:
            logger.debug("Discarding activities fetched after the poller was closed")
            return

        has_more = len(fetched) > self.limit
        visible = fetched[: self.limit]
        self._set_state(
            activities=format_activities_for_display(visible),
            raw_activities=visible,
            loading=False,
            error=None,
            has_more=has_more,
        )

    async def _call_fetch(self) -> list[ActivityRecord]:
        result = self._fetch(self.limit + 1, self.types)
        if inspect.isawaitable(result):
            result = await result
        return list(result)

    def set_auto_refresh(self, enabled: bool, interval: float | None = None) -> None:
        """Turn the periodic refresh on or off; must be called from the event loop.

        A timer refresh still in flight is cancelled and its result dropped.
        """

        if interval is not None:
            if interval <= 0:
                raise ValueError("interval must be positive")
            self.refresh_interval = interval
        self.auto_refresh = enabled
        self._cancel_timer()
        if enabled and self._started and not self._closed:
            self._start_timer()

    def close(self) -> None:
        """Stop the timer; later refreshes and late responses are ignored."""

        self._closed = True
        self._cancel_timer()

    def _start_timer(self) -> None:
        self._timer = asyncio.get_running_loop().create_task(self._run_timer())

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def _run_timer(self) -> None:
        while not self._closed:
            await self._sleep(self.refresh_interval)
            if self._closed:
                return
            await self.refresh()


def dashboard_activity_poller(fetch_activities: FetchActivities, **kwargs) -> ActivityFeedPoller:
    """Dashboard feed: eight items, refreshed manually."""

    kwargs.setdefault("limit", 8)
    kwargs.setdefault("auto_refresh", False)
    return ActivityFeedPoller(fetch_activities, **kwargs)


def profile_activity_poller(fetch_activities: FetchActivities, **kwargs) -> ActivityFeedPoller:
    """Profile page feed: ten items restricted to profile related types."""

    kwargs.setdefault("limit", 10)
    kwargs.setdefault("types", PROFILE_ACTIVITY_TYPES)
    kwargs.setdefault("auto_refresh", False)
    return ActivityFeedPoller(fetch_activities, **kwargs)


__all__ = [
    "ActivityFeedPoller",
    "ActivityFeedState",
    "FETCH_ERROR_MESSAGE",
    "dashboard_activity_poller",
    "profile_activity_poller",
]
