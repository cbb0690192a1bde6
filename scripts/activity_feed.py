"""Print the authenticated user's activity feed, optionally re-polling it."""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Callable, Sequence
from getpass import getpass

from dypse_api.interfaces.client import (
    ActivitiesAPIError,
    ActivitiesClient,
    ActivityFeedPoller,
    ActivityFeedState,
    ActivityFeedView,
    compact_activity_feed_view,
)
from dypse_api.interfaces.client.polling import FetchActivities

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for the feed viewer."""

    parser = argparse.ArgumentParser(description="Show your recent DYPSE activities.")
    parser.add_argument("--base-url", default="http://localhost:8000", help="API root URL")
    parser.add_argument("--email", required=True, help="Account email")
    parser.add_argument(
        "--password",
        default=None,
        help="Account password. Prompted interactively when omitted.",
    )
    parser.add_argument("--limit", type=int, default=10, help="Number of activities to show")
    parser.add_argument(
        "--types",
        default=None,
        help="Comma separated activity types to include (default: all)",
    )
    parser.add_argument("--compact", action="store_true", help="Use the compact layout")
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and refresh the feed every --interval seconds",
    )
    parser.add_argument(
        "--interval", type=float, default=30.0, help="Refresh interval in seconds"
    )
    return parser.parse_args(argv)


def render_state(state: ActivityFeedState, view: ActivityFeedView) -> str:
    lines = view.render(state.activities, loading=state.loading, error=state.error)
    if state.has_more and not state.error:
        lines.append("More activities are available.")
    return "\n".join(lines)


async def run_feed(
    fetch_activities: FetchActivities,
    *,
    view: ActivityFeedView,
    limit: int = 10,
    types: list[str] | None = None,
    watch: bool = False,
    interval: float = 30.0,
    output: Callable[[str], None] = print,
) -> ActivityFeedState:
    """Load the feed once, or keep refreshing it until cancelled when ``watch`` is set."""

    def show(state: ActivityFeedState) -> None:
        if not state.loading:
            output(render_state(state, view))

    poller = ActivityFeedPoller(
        fetch_activities,
        limit=limit,
        types=types,
        auto_refresh=watch,
        refresh_interval=interval,
        on_update=show,
    )
    async with poller:
        if watch:
            await asyncio.Event().wait()
    return poller.state


def main(argv: Sequence[str] | None = None) -> None:
    """Authenticate and print the feed using the provided command line arguments."""

    logging.basicConfig(level=logging.WARNING)
    args = parse_args(argv)

    password = args.password or getpass("Password: ")
    if not password:
        raise SystemExit("A password is required.")

    types = None
    if args.types:
        types = [value.strip() for value in args.types.split(",") if value.strip()]
    if args.compact:
        view = compact_activity_feed_view()
    else:
        view = ActivityFeedView()

    with ActivitiesClient(args.base_url) as client:
        try:
            client.login(args.email, password)
        except ActivitiesAPIError as exc:
            raise SystemExit(f"Login failed: {exc}") from exc

        def fetch(limit: int, requested_types: list[str] | None):
            return asyncio.to_thread(client.fetch_recent_activities, limit, requested_types)

        try:
            asyncio.run(
                run_feed(
                    fetch,
                    view=view,
                    limit=args.limit,
                    types=types,
                    watch=args.watch,
                    interval=args.interval,
                )
            )
        except KeyboardInterrupt:
            logger.info("Stopped watching the activity feed")


if __name__ == "__main__":
    main()
