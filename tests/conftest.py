"""Shared test fixtures for the invoice ROI test suite."""

import pytest

from invoice_roi.main import app
from invoice_roi.models import PRESET_SCENARIOS, CalculationInput, PresetName
from invoice_roi.storage import InMemoryScenarioStore


@pytest.fixture
def medium_business() -> CalculationInput:
    """Medium preset: the hand-worked reference case.

    labor 3*30*0.17*2000 = 30600, automation 2000*0.20 = 400,
    errors ((0.5-0.1)/100)*2000*100 = 800, base 31000, boosted 34100.
    """
    return PRESET_SCENARIOS[PresetName.MEDIUM]


@pytest.fixture
def enterprise() -> CalculationInput:
    return PRESET_SCENARIOS[PresetName.ENTERPRISE]


@pytest.fixture
def medium_payload(medium_business) -> dict:
    """JSON request body for the medium preset."""
    return medium_business.to_dict()


@pytest.fixture
def store():
    """Install a fresh in-memory scenario store on the app for one test."""
    previous = app.state.scenario_store
    fresh = InMemoryScenarioStore()
    app.state.scenario_store = fresh
    yield fresh
    app.state.scenario_store = previous
