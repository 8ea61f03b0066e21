"""
Chain Analytics API Router
Live TVL, stablecoin, bridge and comparison views over DefiLlama data

Endpoints:
- GET  /api/analytics/overview          - Market overview (free)
- GET  /api/analytics/chain-details     - One chain's TVL, rank and stablecoins
- GET  /api/analytics/top-chains        - Filtered TVL ranking
- GET  /api/analytics/stablecoin-flows  - Stablecoin distribution
- GET  /api/analytics/bridge-volume     - Bridge volume ranking
- POST /api/analytics/chain-compare     - Side-by-side comparison
- GET  /api/analytics/entrypoints       - View catalog with prices
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from config.settings import ENTRYPOINTS, USDC_DECIMALS
from data_sources.defillama import ProviderUnavailable, defillama_client
from services.chain_analytics import ChainAnalytics
from services.chain_models import BridgePeriod, ChainCategory

logger = logging.getLogger("AnalyticsAPI")

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])

# ============================================
# MODELS
# ============================================

class ChainCompareRequest(BaseModel):
    """Chains to compare side-by-side"""
    chains: List[str] = Field(..., min_length=2, max_length=5, description="Chain names to compare")


# ============================================
# HELPERS
# ============================================

def get_chain_analytics() -> ChainAnalytics:
    """Analytics engine backed by the live DefiLlama client"""
    return ChainAnalytics(defillama_client)


async def _run(view: str, coro):
    try:
        return await coro
    except ProviderUnavailable as e:
        logger.error(f"[{view}] Upstream unavailable: {e}")
        raise HTTPException(status_code=502, detail=f"Data source unavailable: {e.source} ({e.detail})")


# ============================================
# ENDPOINTS
# ============================================

@router.get("/overview")
async def get_overview(analytics: ChainAnalytics = Depends(get_chain_analytics)):
    """Free market overview - total chains, TVL, and top 5"""
    return await _run("overview", analytics.overview())


@router.get("/chain-details")
async def get_chain_details(
    chain: str = Query(..., min_length=1, description='Chain name (e.g., "Ethereum", "Base", "Arbitrum")'),
    analytics: ChainAnalytics = Depends(get_chain_analytics),
):
    """
    Detailed TVL and metrics for a specific chain.

    Unknown chains return 200 with `error` and a sample of valid names.
    """
    return await _run("chain-details", analytics.chain_details(chain))


@router.get("/top-chains")
async def get_top_chains(
    limit: int = Query(20, ge=1, le=50),
    min_tvl: float = Query(0, description="Minimum TVL in USD"),
    category: ChainCategory = Query(ChainCategory.ALL, description="all, l2, l1 or alt-l1"),
    analytics: ChainAnalytics = Depends(get_chain_analytics),
):
    """Top chains by TVL with filtering options"""
    return await _run("top-chains", analytics.top_chains(limit=limit, min_tvl=min_tvl, category=category))


@router.get("/stablecoin-flows")
async def get_stablecoin_flows(
    limit: int = Query(20, ge=1, le=50),
    analytics: ChainAnalytics = Depends(get_chain_analytics),
):
    """Stablecoin distribution across chains"""
    return await _run("stablecoin-flows", analytics.stablecoin_flows(limit=limit))


@router.get("/bridge-volume")
async def get_bridge_volume(
    limit: int = Query(10, ge=1, le=20),
    period: BridgePeriod = Query(BridgePeriod.LAST_24H, description="24h, 7d or 30d"),
    analytics: ChainAnalytics = Depends(get_chain_analytics),
):
    """Cross-chain bridge volumes and rankings"""
    return await _run("bridge-volume", analytics.bridge_volume(limit=limit, period=period))


@router.post("/chain-compare")
async def post_chain_compare(
    request: ChainCompareRequest,
    analytics: ChainAnalytics = Depends(get_chain_analytics),
):
    """Compare 2-5 chains side-by-side"""
    return await _run("chain-compare", analytics.compare_chains(request.chains))


@router.get("/entrypoints")
async def get_entrypoints():
    """
    Catalog of analytics views and their prices.
    Prices are USDC base units (6 decimals); informational only.
    """
    entrypoints = []
    for key, meta in ENTRYPOINTS.items():
        entrypoints.append({
            "key": key,
            "description": meta["description"],
            "method": meta["method"],
            "path": f"{router.prefix}/{key}",
            "price": str(meta["price"]),
            "priceUsd": f"{meta['price'] / 10 ** USDC_DECIMALS:.3f}",
        })

    return {
        "success": True,
        "count": len(entrypoints),
        "entrypoints": entrypoints,
    }
