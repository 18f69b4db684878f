from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from invoice_roi.engine.result import CalculationResult

from .inputs import CalculationInput


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


@dataclass(frozen=True)
class Scenario:
    """A named snapshot of one input set and the result computed at save time."""

    name: str
    inputs: CalculationInput
    results: CalculationResult
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "inputs": self.inputs.to_dict(),
            "results": self.results.to_dict(),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Scenario:
        """Build from a stored row (timestamps as ISO strings)."""
        return cls(
            id=str(row["id"]),
            name=row["name"],
            inputs=CalculationInput.from_dict(row["inputs"]),
            results=CalculationResult.from_dict(row["results"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row.get("updated_at") or row["created_at"]),
        )


@dataclass(frozen=True)
class EmailCapture:
    """Contact address left when a report was downloaded."""

    email: str
    scenario_name: Optional[str] = None
    created_at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "email": self.email,
            "scenario_name": self.scenario_name or "Unnamed Scenario",
        }
