"""Supabase (PostgREST) scenario store over httpx."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from invoice_roi.config.settings import Settings
from invoice_roi.models.scenario import EmailCapture, Scenario

from .base import ScenarioNotFoundError, ScenarioStore, ScenarioStoreError

logger = logging.getLogger(__name__)


class SupabaseScenarioStore(ScenarioStore):
    """Stores scenarios in the `scenarios` table and emails in `email_captures`.

    The id and the created_at/updated_at timestamps are generated client-side
    and sent with the row, so the returned record always matches what was
    sent.
    """

    SCENARIOS_TABLE = "scenarios"
    EMAIL_CAPTURES_TABLE = "email_captures"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._settings = settings or Settings()
        if not self._settings.supabase_url:
            raise ScenarioStoreError("supabase_url is not configured")
        self._client = client or httpx.AsyncClient(timeout=self._settings.supabase_timeout)
        self._base_url = self._settings.supabase_url.rstrip("/") + "/rest/v1"

    @property
    def _headers(self) -> dict[str, str]:
        key = self._settings.supabase_key
        return {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        method: str,
        table: str,
        *,
        params: Optional[dict[str, str]] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> httpx.Response:
        headers = self._headers
        if prefer:
            headers["Prefer"] = prefer
        try:
            resp = await self._client.request(
                method,
                f"{self._base_url}/{table}",
                params=params,
                json=json,
                headers=headers,
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Supabase %s %s returned %s: %s",
                method, table, e.response.status_code, e.response.text[:200],
            )
            raise ScenarioStoreError(_error_message(e.response)) from e
        except httpx.HTTPError as e:
            logger.error("Supabase %s %s failed: %s", method, table, e)
            raise ScenarioStoreError(str(e) or type(e).__name__) from e
        return resp

    async def insert(self, scenario: Scenario) -> Scenario:
        payload = scenario.to_dict()
        resp = await self._request(
            "POST", self.SCENARIOS_TABLE, json=payload, prefer="return=representation"
        )
        rows = resp.json()
        if not rows:
            raise ScenarioStoreError("Insert returned no rows")
        return Scenario.from_row(rows[0])

    async def list(self) -> list[Scenario]:
        resp = await self._request(
            "GET",
            self.SCENARIOS_TABLE,
            params={"select": "*", "order": "created_at.desc"},
        )
        return [Scenario.from_row(row) for row in resp.json()]

    async def delete(self, scenario_id: str) -> None:
        resp = await self._request(
            "DELETE",
            self.SCENARIOS_TABLE,
            params={"id": f"eq.{scenario_id}"},
            prefer="return=representation",
        )
        if not resp.json():
            raise ScenarioNotFoundError(f"Scenario '{scenario_id}' not found")

    async def record_email_capture(self, capture: EmailCapture) -> None:
        await self._request(
            "POST", self.EMAIL_CAPTURES_TABLE, json=capture.to_dict(), prefer="return=minimal"
        )

    async def close(self) -> None:
        await self._client.aclose()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}"
