"""HTTP client for the group schedules API."""

from __future__ import annotations

from dataclasses import dataclass

import requests

from group_calendar.config import DEFAULT_API_URL
from group_calendar.models.schedule import MonthlySchedule, ensure_unique_months


class ApiError(RuntimeError):
    """The schedules API could not be reached or returned an error."""


@dataclass
class SaveResult:
    """Outcome of pushing the schedule collection."""
    success: bool
    status: str = ""          # "ok", "busy", "http 401", "network", ...
    error: str = ""
    saved_months: int = 0


class ApiClient:
    """Loads and saves a member's schedules for a group.

    Every call sends the access token as a bearer token. The whole collection
    is the unit of persistence; there is no per-month endpoint.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def _url(self, group_id: str) -> str:
        return f"{self.base_url}/groups/{group_id}/schedules"

    @staticmethod
    def _headers(access_token: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }

    def save_schedules(
        self,
        access_token: str,
        group_id: str,
        schedules: list[MonthlySchedule],
    ) -> SaveResult:
        """PUT the full collection. Failures come back as SaveResult, not exceptions."""
        payload = {"schedules": [s.to_dict() for s in schedules]}
        try:
            resp = self._session.put(
                self._url(group_id),
                json=payload,
                headers=self._headers(access_token),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            return SaveResult(success=False, status="network", error=str(e))

        if not resp.ok:
            return SaveResult(
                success=False,
                status=f"http {resp.status_code}",
                error=resp.text[:200],
            )
        return SaveResult(success=True, status="ok", saved_months=len(schedules))

    def load_schedules(self, access_token: str, group_id: str) -> list[MonthlySchedule]:
        """GET the member's schedules. Raises ApiError on any failure."""
        try:
            resp = self._session.get(
                self._url(group_id),
                headers=self._headers(access_token),
                timeout=self.timeout,
            )
            resp.raise_for_status()
            body = resp.json()
        except requests.exceptions.RequestException as e:
            raise ApiError(f"Failed to load schedules for group {group_id}: {e}") from e
        except ValueError as e:
            raise ApiError(f"Schedules response for group {group_id} is not JSON") from e

        records = body.get("schedules", []) if isinstance(body, dict) else body
        return ensure_unique_months([MonthlySchedule.from_dict(r) for r in records])
