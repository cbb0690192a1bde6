"""HTTP wrapper around the activity endpoints."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from dypse_api.domain.entities import ActivityRecord, ActivityType
from dypse_api.interfaces.api.schemas import ActivityRecordRead

logger = logging.getLogger(__name__)


class ActivitiesAPIError(RuntimeError):
    """Raised when the activity API cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def parse_activity_payload(payload: Mapping[str, Any]) -> ActivityRecord:
    """Build an :class:`ActivityRecord` from one item of ``/activity/recent``."""

    item = ActivityRecordRead.model_validate(payload)
    return ActivityRecord(
        id=item.id,
        user_id=item.user_id,
        activity_type=ActivityType.parse(item.activity_type),
        title=item.title,
        description=item.description,
        metadata=dict(item.metadata),
        created_at=item.created_at,
    )


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return str(body)


class ActivitiesClient:
    """Talk to ``/auth/token``, ``/activity/recent`` and ``/activity/stats``.

    ``http_client`` may be any :class:`httpx.Client`, including FastAPI's
    ``TestClient``; when omitted the wrapper creates and owns one.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        http_client: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._owns_client = http_client is None
        self._http = http_client if http_client is not None else httpx.Client(timeout=timeout)

    def __enter__(self) -> "ActivitiesClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def _get(self, path: str, params: Mapping[str, Any]) -> Any:
        try:
            response = self._http.get(
                self._url(path),
                params=dict(params),
                headers=self._headers(),
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise ActivitiesAPIError(f"Request to {path} failed: {exc}") from exc
        if response.is_error:
            raise ActivitiesAPIError(_error_detail(response), status_code=response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise ActivitiesAPIError(f"Invalid JSON returned by {path}") from exc

    def login(self, email: str, password: str) -> str:
        """Exchange credentials for a bearer token and keep it for later calls."""

        try:
            response = self._http.post(
                self._url("/auth/token"),
                data={"username": email, "password": password},
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise ActivitiesAPIError(f"Login request failed: {exc}") from exc
        if response.is_error:
            raise ActivitiesAPIError(_error_detail(response), status_code=response.status_code)
        self.token = response.json()["access_token"]
        return self.token

    def fetch_recent_activities(
        self, limit: int | None = None, types: Iterable[str] | None = None
    ) -> list[ActivityRecord]:
        """Return the caller's recent activities or raise :class:`ActivitiesAPIError`."""

        params: dict[str, Any] = {}
        if limit:
            params["limit"] = limit
        type_list = [str(getattr(value, "value", value)) for value in types or ()]
        if type_list:
            params["types"] = ",".join(type_list)

        body = self._get("/activity/recent", params)
        items = body.get("activities") if isinstance(body, dict) else None
        if not isinstance(items, list):
            return []
        try:
            return [parse_activity_payload(item) for item in items]
        except ValidationError as exc:
            raise ActivitiesAPIError(f"Malformed activity payload: {exc}") from exc

    def get_recent_activities(
        self, limit: int | None = None, types: Iterable[str] | None = None
    ) -> list[ActivityRecord]:
        """Like :meth:`fetch_recent_activities` but return ``[]`` on failure."""

        try:
            return self.fetch_recent_activities(limit=limit, types=types)
        except ActivitiesAPIError as exc:
            logger.warning("Failed to fetch recent activities: %s", exc)
            return []

    def get_activity_stats(self, days: int | None = None) -> dict[str, int]:
        """Return activity counts per type, or ``{}`` when the request fails."""

        params: dict[str, Any] = {}
        if days:
            params["days"] = days
        try:
            body = self._get("/activity/stats", params)
        except ActivitiesAPIError as exc:
            logger.warning("Failed to fetch activity stats: %s", exc)
            return {}
        stats = body.get("stats") if isinstance(body, dict) else None
        return dict(stats) if isinstance(stats, dict) else {}


__all__ = ["ActivitiesAPIError", "ActivitiesClient", "parse_activity_payload"]
