"""Tests for FastAPI endpoints -- calculation, scenarios, reports, CORS, health."""

import logging
from unittest.mock import patch

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from invoice_roi.config.settings import Settings
from invoice_roi.main import app
from invoice_roi.storage import ScenarioStoreError, SupabaseScenarioStore
from invoice_roi.validation import HORIZON_MESSAGE

EXPECTED_MEDIUM_RESULT = {
    "monthly_savings": 34100,
    "payback_months": 1.47,
    "roi_percentage": 2355.2,
    "cumulative_savings": 1227600,
    "net_savings": 1177600,
    "labor_cost_saved": 30600,
    "error_savings": 800,
    "breakdown": {
        "manual_labor_cost": 30600,
        "automation_cost": 400,
        "monthly_net_savings": 34100,
    },
}


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


class TestCalculateROI:
    @pytest.mark.asyncio
    async def test_returns_success_envelope(self, medium_payload):
        async with _client() as client:
            resp = await client.post("/api/calculate-roi", json=medium_payload)
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "data": EXPECTED_MEDIUM_RESULT}

    @pytest.mark.asyncio
    async def test_constants_never_exposed(self, medium_payload):
        async with _client() as client:
            resp = await client.post("/api/calculate-roi", json=medium_payload)
        for name in ("automated_cost_per_invoice", "error_rate_auto", "min_roi_boost_factor"):
            assert name not in resp.text

    @pytest.mark.asyncio
    async def test_missing_field_never_reaches_engine(self, medium_payload):
        del medium_payload["hourly_wage"]
        with patch("invoice_roi.main.compute") as mock_compute:
            async with _client() as client:
                resp = await client.post("/api/calculate-roi", json=medium_payload)
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "Missing required fields"}
        mock_compute.assert_not_called()

    @pytest.mark.asyncio
    async def test_zero_allowed_for_error_rate_and_implementation_cost(self, medium_payload):
        medium_payload["error_rate_manual"] = 0
        medium_payload["one_time_implementation_cost"] = 0
        async with _client() as client:
            resp = await client.post("/api/calculate-roi", json=medium_payload)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["error_savings"] == -200
        # infinite ROI has no JSON representation
        assert data["roi_percentage"] is None
        assert data["payback_months"] == 0

    @pytest.mark.asyncio
    async def test_zero_wage_rejected(self, medium_payload):
        medium_payload["hourly_wage"] = 0
        async with _client() as client:
            resp = await client.post("/api/calculate-roi", json=medium_payload)
        assert resp.status_code == 400
        assert resp.json()["success"] is False

    @pytest.mark.asyncio
    async def test_malformed_json(self):
        async with _client() as client:
            resp = await client.post(
                "/api/calculate-roi",
                content=b"{not json",
                headers={"Content-Type": "application/json"},
            )
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "Invalid JSON body"}

    @pytest.mark.asyncio
    async def test_unexpected_failure_returns_generic_error(self, medium_payload):
        with patch("invoice_roi.main.compute", side_effect=RuntimeError("boom")):
            async with _client() as client:
                resp = await client.post("/api/calculate-roi", json=medium_payload)
        assert resp.status_code == 500
        assert resp.json() == {"success": False, "error": "Internal server error"}

    @pytest.mark.asyncio
    async def test_large_integers_computed_as_doubles(self, medium_payload):
        medium_payload["num_ap_staff"] = 10**200
        medium_payload["hourly_wage"] = 10**200
        async with _client() as client:
            resp = await client.post("/api/calculate-roi", json=medium_payload)
        assert resp.status_code == 200
        data = resp.json()["data"]
        # the labor product overflows to infinity
        assert data["monthly_savings"] is None
        assert data["payback_months"] == 0

    @pytest.mark.asyncio
    async def test_rejection_logged_with_field_names(self, medium_payload, caplog):
        del medium_payload["hourly_wage"]
        with caplog.at_level(logging.INFO, logger="invoice_roi.main"):
            async with _client() as client:
                await client.post("/api/calculate-roi", json=medium_payload)
        assert "Rejected /api/calculate-roi body (Missing required fields): ['hourly_wage']" in caplog.text

    @pytest.mark.asyncio
    async def test_integer_beyond_double_range_rejected(self, medium_payload):
        medium_payload["hourly_wage"] = 10**400
        async with _client() as client:
            resp = await client.post("/api/calculate-roi", json=medium_payload)
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "Missing required fields"}


class TestCORS:
    @pytest.mark.asyncio
    async def test_preflight_has_no_body(self):
        async with _client() as client:
            resp = await client.options(
                "/api/calculate-roi",
                headers={
                    "Origin": "https://calculator.example.com",
                    "Access-Control-Request-Method": "POST",
                    "Access-Control-Request-Headers": "content-type",
                },
            )
        assert resp.status_code == 200
        assert resp.content == b""
        assert resp.headers.get("access-control-allow-origin") == "*"

    @pytest.mark.asyncio
    async def test_any_origin_allowed(self, medium_payload):
        async with _client() as client:
            resp = await client.post(
                "/api/calculate-roi",
                json=medium_payload,
                headers={"Origin": "https://anywhere.example.org"},
            )
        assert resp.headers.get("access-control-allow-origin") == "*"


class TestProjectionAndPresets:
    @pytest.mark.asyncio
    async def test_projection_series(self, medium_payload):
        async with _client() as client:
            resp = await client.post("/api/projection", json=medium_payload)
        data = resp.json()["data"]
        assert len(data) == 37
        assert data[0] == {"month": 0, "savings": -50000}
        assert data[-1] == {"month": 36, "savings": 1177600}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("horizon", [12.5, 121, 1e9])
    async def test_projection_rejects_unusable_horizon(self, medium_payload, horizon):
        medium_payload["time_horizon_months"] = horizon
        async with _client() as client:
            resp = await client.post("/api/projection", json=medium_payload)
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": HORIZON_MESSAGE}

    @pytest.mark.asyncio
    async def test_projection_overflow_points_are_null(self, medium_payload):
        medium_payload["num_ap_staff"] = 10**200
        medium_payload["hourly_wage"] = 10**200
        async with _client() as client:
            resp = await client.post("/api/projection", json=medium_payload)
        assert resp.status_code == 200
        assert {p["savings"] for p in resp.json()["data"]} == {None}

    @pytest.mark.asyncio
    async def test_presets(self):
        async with _client() as client:
            resp = await client.get("/api/presets")
        data = resp.json()["data"]
        assert set(data) == {"small", "medium", "enterprise"}
        assert data["medium"]["monthly_invoice_volume"] == 2000


class TestScenarios:
    @pytest.mark.asyncio
    async def test_save_computes_result(self, store, medium_payload):
        async with _client() as client:
            resp = await client.post("/api/scenarios", json=medium_payload)
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["name"] == "Medium Business"
        assert data["results"] == EXPECTED_MEDIUM_RESULT
        assert len(await store.list()) == 1

    @pytest.mark.asyncio
    async def test_save_default_name(self, store, medium_payload):
        del medium_payload["scenario_name"]
        async with _client() as client:
            resp = await client.post("/api/scenarios", json=medium_payload)
        assert resp.json()["data"]["name"].startswith("Scenario ")

    @pytest.mark.asyncio
    async def test_save_rejects_missing_fields(self, store, medium_payload):
        del medium_payload["error_rate_manual"]
        async with _client() as client:
            resp = await client.post("/api/scenarios", json=medium_payload)
        assert resp.status_code == 400
        assert await store.list() == []

    @pytest.mark.asyncio
    async def test_list_and_delete(self, store, medium_payload):
        async with _client() as client:
            created = (await client.post("/api/scenarios", json=medium_payload)).json()["data"]
            listed = (await client.get("/api/scenarios")).json()["data"]
            assert [s["id"] for s in listed] == [created["id"]]

            resp = await client.delete(f"/api/scenarios/{created['id']}")
            assert resp.status_code == 200
            assert (await client.get("/api/scenarios")).json()["data"] == []

    @pytest.mark.asyncio
    async def test_delete_unknown_returns_404(self, store):
        async with _client() as client:
            resp = await client.delete("/api/scenarios/does-not-exist")
        assert resp.status_code == 404
        assert resp.json()["success"] is False

    @pytest.mark.asyncio
    async def test_store_failure_reported(self, store, medium_payload):
        with patch.object(store, "insert", side_effect=ScenarioStoreError("connection reset")):
            async with _client() as client:
                resp = await client.post("/api/scenarios", json=medium_payload)
        assert resp.status_code == 502
        assert resp.json() == {
            "success": False,
            "error": "Failed to save scenario: connection reset",
        }

    @pytest.mark.asyncio
    async def test_malformed_stored_row_returns_generic_error(self):
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda r: httpx.Response(200, json=[{"id": "1", "name": "x"}]))
        )
        settings = Settings(supabase_url="https://project.supabase.co", supabase_key="anon-key")
        supabase = SupabaseScenarioStore(settings, client=client)
        with patch.object(app.state, "scenario_store", supabase):
            async with _client() as api:
                resp = await api.get("/api/scenarios")
        assert resp.status_code == 500
        assert resp.json() == {"success": False, "error": "Internal server error"}

    @pytest.mark.asyncio
    async def test_unexpected_delete_failure_returns_generic_error(self, store):
        with patch.object(store, "delete", side_effect=RuntimeError("boom")):
            async with _client() as client:
                resp = await client.delete("/api/scenarios/abc")
        assert resp.status_code == 500
        assert resp.json() == {"success": False, "error": "Internal server error"}


class TestReports:
    @pytest.mark.asyncio
    async def test_download_report(self, store, medium_payload):
        async with _client() as client:
            resp = await client.post(
                "/api/reports",
                json={"email": "ap@acme-corp.com", "inputs": medium_payload},
            )
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert "ROI_Report_Medium_Business_" in resp.headers["content-disposition"]
        assert resp.content.startswith(b"%PDF")
        assert store.email_captures[0].email == "ap@acme-corp.com"
        assert store.email_captures[0].scenario_name == "Medium Business"

    @pytest.mark.asyncio
    async def test_invalid_email(self, store, medium_payload):
        async with _client() as client:
            resp = await client.post(
                "/api/reports",
                json={"email": "not-an-email", "inputs": medium_payload},
            )
        assert resp.status_code == 422
        assert resp.json() == {"success": False, "error": "Please enter a valid email address"}
        assert store.email_captures == []

    @pytest.mark.asyncio
    async def test_missing_inputs(self, store):
        async with _client() as client:
            resp = await client.post("/api/reports", json={"email": "ap@acme-corp.com"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "Missing required fields"


class TestHealth:
    @pytest.mark.asyncio
    async def test_health_check_endpoint(self):
        async with _client() as client:
            resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}
