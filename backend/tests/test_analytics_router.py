"""
Analytics Router Tests
Input validation (422), provider failure (502), not-found as 200, entrypoint catalog

Run: python -m pytest tests/test_analytics_router.py -v --tb=short
"""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.analytics_router import get_chain_analytics, router
from config.settings import DEFAULT_CHAIN_CATEGORIES
from data_sources.defillama import ProviderUnavailable
from services.chain_analytics import ChainAnalytics
from services.classifier import ChainClassifier


@pytest.fixture
def build_client(fixed_clock):
    def _build(provider):
        app = FastAPI()
        app.include_router(router)
        app.dependency_overrides[get_chain_analytics] = lambda: ChainAnalytics(
            provider,
            classifier=ChainClassifier(DEFAULT_CHAIN_CATEGORIES),
            clock=fixed_clock,
        )
        return TestClient(app)
    return _build


@pytest.fixture
def client(build_client, provider):
    return build_client(provider)


class TestEndpoints:

    def test_overview(self, client):
        response = client.get("/api/analytics/overview")

        assert response.status_code == 200
        body = response.json()
        assert body["top5"][0]["name"] == "Ethereum"
        assert body["fetchedAt"] == "2025-01-01T12:00:00+00:00"

    def test_chain_details_not_found_is_200(self, client):
        response = client.get("/api/analytics/chain-details", params={"chain": "Atlantis"})

        assert response.status_code == 200
        body = response.json()
        assert body["error"] == "Chain not found"
        assert "Ethereum" in body["availableChains"]

    def test_top_chains_with_filters(self, client):
        response = client.get("/api/analytics/top-chains", params={"limit": 1, "category": "l2"})

        assert response.status_code == 200
        body = response.json()
        assert body["filters"] == {"limit": 1, "minTvl": 0, "category": "l2"}
        assert [c["name"] for c in body["chains"]] == ["Base"]

    def test_stablecoin_flows(self, client):
        response = client.get("/api/analytics/stablecoin-flows")

        assert response.status_code == 200
        assert response.json()["chainCount"] == 3

    def test_bridge_volume_period(self, client):
        response = client.get("/api/analytics/bridge-volume", params={"period": "7d"})

        assert response.status_code == 200
        body = response.json()
        assert body["period"] == "7d"
        assert [b["name"] for b in body["bridges"]] == ["Wormhole"]

    def test_chain_compare(self, client):
        response = client.post("/api/analytics/chain-compare", json={"chains": ["Ethereum", "Nonexistent"]})

        assert response.status_code == 200
        body = response.json()
        assert body["comparison"][1]["found"] is False
        assert body["winners"]["highestTVL"] == "Ethereum"


class TestValidation:
    """Bad input is rejected before any fetch happens"""

    @pytest.mark.parametrize("path,params", [
        ("/api/analytics/chain-details", {"chain": ""}),
        ("/api/analytics/chain-details", {}),
        ("/api/analytics/top-chains", {"limit": 0}),
        ("/api/analytics/top-chains", {"limit": 51}),
        ("/api/analytics/top-chains", {"category": "l3"}),
        ("/api/analytics/top-chains", {"min_tvl": "lots"}),
        ("/api/analytics/stablecoin-flows", {"limit": 51}),
        ("/api/analytics/bridge-volume", {"limit": 21}),
        ("/api/analytics/bridge-volume", {"period": "1y"}),
    ])
    def test_rejected_query(self, client, provider, path, params):
        response = client.get(path, params=params)

        assert response.status_code == 422
        assert provider.calls == {"chains": 0, "stablecoins": 0, "bridges": 0}

    @pytest.mark.parametrize("chains", [
        ["Ethereum"],
        ["A", "B", "C", "D", "E", "F"],
    ])
    def test_rejected_compare_sizes(self, client, provider, chains):
        response = client.post("/api/analytics/chain-compare", json={"chains": chains})

        assert response.status_code == 422
        assert provider.calls["bridges"] == 0


class TestProviderFailure:

    def test_upstream_failure_is_502(self, build_client):
        provider = AsyncMock()
        provider.fetch_chains.side_effect = ProviderUnavailable("chains", "503", status_code=503)
        client = build_client(provider)

        response = client.get("/api/analytics/overview")

        assert response.status_code == 502
        assert "chains" in response.json()["detail"]


def test_entrypoints_catalog(client):
    response = client.get("/api/analytics/entrypoints")

    assert response.status_code == 200
    entrypoints = {e["key"]: e for e in response.json()["entrypoints"]}
    assert set(entrypoints) == {
        "overview", "chain-details", "top-chains",
        "stablecoin-flows", "bridge-volume", "chain-compare",
    }
    assert entrypoints["overview"]["priceUsd"] == "0.000"
    assert entrypoints["chain-compare"]["price"] == "5000"
    assert entrypoints["chain-compare"]["priceUsd"] == "0.005"
    assert entrypoints["chain-compare"]["method"] == "POST"
    assert entrypoints["top-chains"]["path"] == "/api/analytics/top-chains"
