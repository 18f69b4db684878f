from __future__ import annotations

from invoice_roi.config.settings import Settings

from .base import ScenarioNotFoundError, ScenarioStore, ScenarioStoreError
from .memory import InMemoryScenarioStore
from .supabase_store import SupabaseScenarioStore


def build_scenario_store(settings: Settings) -> ScenarioStore:
    """Create the store selected by ``settings.scenario_store``."""
    if settings.scenario_store == "supabase":
        return SupabaseScenarioStore(settings)
    return InMemoryScenarioStore()


__all__ = [
    "ScenarioStore",
    "ScenarioStoreError",
    "ScenarioNotFoundError",
    "InMemoryScenarioStore",
    "SupabaseScenarioStore",
    "build_scenario_store",
]
