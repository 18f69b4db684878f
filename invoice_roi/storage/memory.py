"""In-process scenario store, used by default and in tests."""

from __future__ import annotations

from invoice_roi.models.scenario import EmailCapture, Scenario

from .base import ScenarioNotFoundError, ScenarioStore


class InMemoryScenarioStore(ScenarioStore):
    def __init__(self) -> None:
        self._scenarios: dict[str, Scenario] = {}
        self.email_captures: list[EmailCapture] = []

    async def insert(self, scenario: Scenario) -> Scenario:
        self._scenarios[scenario.id] = scenario
        return scenario

    async def list(self) -> list[Scenario]:
        return sorted(self._scenarios.values(), key=lambda s: s.created_at, reverse=True)

    async def delete(self, scenario_id: str) -> None:
        if self._scenarios.pop(scenario_id, None) is None:
            raise ScenarioNotFoundError(f"Scenario '{scenario_id}' not found")

    async def record_email_capture(self, capture: EmailCapture) -> None:
        self.email_captures.append(capture)
