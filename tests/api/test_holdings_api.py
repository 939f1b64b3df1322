"""
API tests for holdings and summary endpoints.

Tests cover:
- Merge a buy (success, weighted average, validation errors)
- List holdings with valuation rows and totals
- Remove a holding
- Summary before and after prices arrive
- Health and root endpoints
- Startup price refresh completes before shutdown
"""

import json
import time

import pytest
from fastapi.testclient import TestClient

from portfolio_tracker.api.deps import get_context
from portfolio_tracker.app_context import AppContext, set_app_context
from portfolio_tracker.main import app

from tests.conftest import DeterministicMarketProvider


# =============================================================================
# MERGE TESTS
# =============================================================================


class TestMergeHoldingAPI:
    """Tests for POST /holdings endpoint."""

    def test_merge_new_holding(self, client: TestClient):
        """
        GIVEN no holdings
        WHEN I POST /holdings with 10 aapl @ 150
        THEN response is 201 with the normalized position
        """
        response = client.post("/holdings", json={"symbol": " aapl ", "quantity": 10, "cost": 150})

        assert response.status_code == 201
        assert response.json() == {
            "symbol": "AAPL",
            "quantity": 10.0,
            "average_cost": 150.0,
            "cost_basis": 1500.0,
        }

    def test_merge_existing_holding_averages_cost(self, client: TestClient):
        """
        GIVEN 10 AAPL @ 100
        WHEN I POST 10 AAPL @ 200
        THEN the position is 20 @ 150
        """
        client.post("/holdings", json={"symbol": "AAPL", "quantity": 10, "cost": 100, "refresh": False})

        response = client.post("/holdings", json={"symbol": "AAPL", "quantity": 10, "cost": 200, "refresh": False})

        assert response.status_code == 201
        assert response.json()["quantity"] == 20
        assert response.json()["average_cost"] == pytest.approx(150.0)

    def test_merge_fetches_price_in_background(self, client: TestClient, deterministic_provider):
        client.post("/holdings", json={"symbol": "AAPL", "quantity": 10, "cost": 150})

        assert deterministic_provider.calls == ["AAPL"]
        assert client.get("/prices/AAPL").json()["price"] == 180.0

    def test_merge_without_refresh_skips_fetch(self, client: TestClient, deterministic_provider):
        client.post("/holdings", json={"symbol": "AAPL", "quantity": 10, "cost": 150, "refresh": False})

        assert deterministic_provider.calls == []

    @pytest.mark.parametrize(
        "payload",
        [
            {"symbol": "AAPL", "quantity": 0, "cost": 150},
            {"symbol": "AAPL", "quantity": -1, "cost": 150},
            {"symbol": "AAPL", "quantity": 1, "cost": -0.01},
            {"symbol": "   ", "quantity": 1, "cost": 1},
        ],
    )
    def test_merge_invalid_input_returns_400(self, client: TestClient, payload):
        """
        GIVEN no holdings
        WHEN I POST invalid quantity, cost or symbol
        THEN response is 400 INVALID_INPUT and nothing is stored
        """
        response = client.post("/holdings", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_INPUT"
        assert client.get("/holdings").json()["rows"] == []

    def test_merge_missing_field_returns_422(self, client: TestClient):
        response = client.post("/holdings", json={"symbol": "AAPL", "quantity": 1})

        assert response.status_code == 422


# =============================================================================
# LIST / REMOVE TESTS
# =============================================================================


class TestListHoldingsAPI:
    """Tests for GET /holdings and DELETE /holdings/{symbol}."""

    def test_list_empty(self, client: TestClient):
        data = client.get("/holdings").json()

        assert data["rows"] == []
        assert data["summary"]["total_invested"] == 0
        assert data["summary"]["has_any_price_data"] is False
        assert data["summary"]["total_pl"] is None
        assert data["summary"]["total_pl_percent"] is None

    def test_list_rows_before_prices_are_neutral(self, client: TestClient):
        """
        GIVEN a holding merged without a price fetch
        WHEN I GET /holdings
        THEN the row has no price and a neutral P/L class
        """
        client.post("/holdings", json={"symbol": "MSFT", "quantity": 2, "cost": 300, "refresh": False})

        data = client.get("/holdings").json()
        row = data["rows"][0]

        assert row["symbol"] == "MSFT"
        assert row["price"] is None
        assert row["pl"] is None
        assert row["pl_class"] == "neutral"
        assert data["summary"]["total_pl"] is None

    def test_list_rows_with_prices(self, client: TestClient):
        """
        GIVEN AAPL (gain) and TSLA (loss) with fetched prices
        WHEN I GET /holdings
        THEN rows are in insertion order with P/L classes set
        """
        client.post("/holdings", json={"symbol": "AAPL", "quantity": 10, "cost": 150})
        client.post("/holdings", json={"symbol": "TSLA", "quantity": 4, "cost": 300})

        data = client.get("/holdings").json()

        assert [r["symbol"] for r in data["rows"]] == ["AAPL", "TSLA"]
        aapl, tsla = data["rows"]
        assert aapl["market_value"] == pytest.approx(1800.0)
        assert aapl["pl_class"] == "positive"
        assert tsla["pl_class"] == "negative"
        assert data["summary"]["priced_count"] == 2

    def test_remove_holding(self, client: TestClient):
        client.post("/holdings", json={"symbol": "AAPL", "quantity": 10, "cost": 150})

        response = client.delete("/holdings/aapl")

        assert response.status_code == 204
        assert client.get("/holdings").json()["rows"] == []
        assert client.get("/prices/AAPL").status_code == 404

    def test_remove_absent_holding_is_noop(self, client: TestClient):
        response = client.delete("/holdings/NOPE")

        assert response.status_code == 204


# =============================================================================
# SUMMARY TESTS
# =============================================================================


class TestSummaryAPI:
    """Tests for GET /summary endpoint."""

    def test_summary_with_price(self, client: TestClient):
        """
        GIVEN 10 AAPL @ 150 and a fetched price of 180
        WHEN I GET /summary
        THEN invested 1500, current 1800, P/L 300, 20%
        """
        client.post("/holdings", json={"symbol": "AAPL", "quantity": 10, "cost": 150})

        data = client.get("/summary").json()

        assert data["total_invested"] == pytest.approx(1500.0)
        assert data["total_current_value"] == pytest.approx(1800.0)
        assert data["total_pl"] == pytest.approx(300.0)
        assert data["total_pl_percent"] == pytest.approx(20.0)
        assert data["has_any_price_data"] is True

    def test_summary_lists_pending_symbols(self, client: TestClient):
        client.post("/holdings", json={"symbol": "AAPL", "quantity": 10, "cost": 150})
        client.post("/holdings", json={"symbol": "NOPE", "quantity": 1, "cost": 10})

        data = client.get("/summary").json()

        assert data["pending_symbols"] == ["NOPE"]
        assert data["total_invested"] == pytest.approx(1510.0)
        assert data["total_current_value"] == pytest.approx(1800.0)


class TestMiscAPI:
    def test_health(self, client: TestClient):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_root(self, client: TestClient):
        data = client.get("/").json()

        assert data["docs"] == "/docs"
        assert "app" in data


class _SlowProvider(DeterministicMarketProvider):
    def get_price_data(self, symbol: str):
        time.sleep(0.2)
        return super().get_price_data(symbol)


class TestStartupRefresh:
    """Tests for the price refresh started with the app."""

    def test_startup_refresh_finishes_before_shutdown(self, test_settings, blob_repo, instant_queue):
        """
        GIVEN a persisted AAPL holding, startup refresh enabled and a slow provider
        WHEN the app starts and immediately shuts down
        THEN shutdown waits for the refresh and AAPL's price is cached
        """
        blob_repo.put("portfolio", json.dumps([{"symbol": "AAPL", "qty": 10, "cost": 150}]))
        provider = _SlowProvider()
        ctx = AppContext(
            settings=test_settings.model_copy(update={"refresh_on_startup": True}),
            provider=provider,
            blob_repo=blob_repo,
            queue=instant_queue,
        )
        ctx.initialize()
        set_app_context(ctx)
        app.dependency_overrides[get_context] = lambda: ctx
        try:
            with TestClient(app):
                pass
        finally:
            app.dependency_overrides.clear()
            set_app_context(None)

        assert provider.calls == ["AAPL"]
        assert ctx.orchestrator.cache.get("AAPL").price == 180.0
