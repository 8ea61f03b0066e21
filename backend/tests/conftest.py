"""
Shared fixtures: in-memory DefiLlama provider, fixed clock, sample feeds
"""

import os
import sys
from datetime import datetime, timezone

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from services.chain_models import BridgeRecord, NetworkRecord, StablecoinRecord  # noqa: E402

FIXED_NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class StaticProvider:
    """Serves fixed collections; counts fetches per feed"""

    def __init__(self, chains=None, stables=None, bridges=None):
        self.chains = list(chains or [])
        self.stables = list(stables or [])
        self.bridges = list(bridges or [])
        self.calls = {"chains": 0, "stablecoins": 0, "bridges": 0}

    async def fetch_chains(self):
        self.calls["chains"] += 1
        return list(self.chains)

    async def fetch_stablecoin_chains(self):
        self.calls["stablecoins"] += 1
        return list(self.stables)

    async def fetch_bridges(self):
        self.calls["bridges"] += 1
        return list(self.bridges)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def sample_chains():
    """Feed order deliberately not sorted by TVL"""
    return [
        NetworkRecord(name="Base", tvl=5_000_000_000, token_symbol=None, gecko_id=None, chain_id=8453),
        NetworkRecord(name="Ethereum", tvl=50_000_000_000, token_symbol="ETH", gecko_id="ethereum", chain_id=1),
        NetworkRecord(name="Arbitrum", tvl=3_000_000_000, token_symbol="ARB", gecko_id="arbitrum", chain_id=42161),
        NetworkRecord(name="Solana", tvl=8_000_000_000, token_symbol="SOL", gecko_id="solana", chain_id=None),
        NetworkRecord(name="Avalanche", tvl=1_000_000_000, token_symbol="AVAX", gecko_id="avalanche-2", chain_id=43114),
        NetworkRecord(name="Tron", tvl=7_000_000_000, token_symbol="TRX", gecko_id="tron", chain_id=None),
        NetworkRecord(name="Sui", tvl=1_000_000_000, token_symbol="SUI", gecko_id="sui", chain_id=None),
    ]


@pytest.fixture
def sample_stables():
    return [
        StablecoinRecord(name="Ethereum", circulating_usd=80_000_000_000, token_symbol="ETH"),
        StablecoinRecord(name="Tron", circulating_usd=60_000_000_000, token_symbol="TRX"),
        StablecoinRecord(name="Base", circulating_usd=4_000_000_000, token_symbol=None),
        StablecoinRecord(name="Sui", circulating_usd=0, token_symbol="SUI"),
    ]


@pytest.fixture
def sample_bridges():
    return [
        BridgeRecord(id=1, name="wormhole", display_name="Wormhole",
                     last_24h_volume=30_000_000, weekly_volume=200_000_000, monthly_volume=900_000_000,
                     chains=["Ethereum", "Solana", "Base", "Arbitrum", "Sui", "Avalanche"]),
        BridgeRecord(id=2, name="stargate", display_name="Stargate",
                     last_24h_volume=70_000_000, weekly_volume=0, monthly_volume=1_100_000_000,
                     chains=["ethereum", "Arbitrum"]),
        BridgeRecord(id=3, name="dormant", display_name="Dormant Bridge",
                     last_24h_volume=0, weekly_volume=0, monthly_volume=0,
                     chains=["Base"]),
    ]


@pytest.fixture
def provider(sample_chains, sample_stables, sample_bridges):
    return StaticProvider(sample_chains, sample_stables, sample_bridges)


@pytest.fixture
def make_provider():
    return StaticProvider
