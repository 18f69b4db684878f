from __future__ import annotations

from abc import ABC, abstractmethod

from invoice_roi.models.scenario import EmailCapture, Scenario


class ScenarioStoreError(RuntimeError):
    """A scenario could not be read from or written to the backing store."""


class ScenarioNotFoundError(ScenarioStoreError):
    """No scenario exists with the requested id."""


class ScenarioStore(ABC):
    """Abstract base for scenario persistence backends.

    Scenarios are insert-only: there is no update. Re-saving creates a new
    record.
    """

    @abstractmethod
    async def insert(self, scenario: Scenario) -> Scenario:
        """Persist a scenario and return the stored record."""
        ...

    @abstractmethod
    async def list(self) -> list[Scenario]:
        """Return all scenarios, newest first."""
        ...

    @abstractmethod
    async def delete(self, scenario_id: str) -> None:
        """Delete a scenario. Raises ScenarioNotFoundError for unknown ids."""
        ...

    @abstractmethod
    async def record_email_capture(self, capture: EmailCapture) -> None:
        """Remember the address a report was requested for."""
        ...

    async def close(self) -> None:
        """Release any connections held by the store."""
        return None
