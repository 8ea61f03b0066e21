"""
Chain Analytics Service
Overview, chain details, top chains, stablecoin distribution, bridge ranking
and side-by-side chain comparison over live DefiLlama data.

Each view fetches what it needs fresh (concurrently when it needs several
feeds), joins by name via the entity matcher and returns a plain dict.
Views hold no state between calls.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Sequence

from services import entity_matcher
from services.chain_models import BridgePeriod, ChainCategory
from services.classifier import ChainClassifier
from services.formatting import format_share, format_usd
from services.ranker import rank, rank_of

logger = logging.getLogger("ChainAnalytics")

TOP_OVERVIEW = 5
AVAILABLE_CHAINS_SAMPLE = 20
BRIDGE_CHAINS_SAMPLE = 5


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


async def _fetch_all(*fetches):
    """Await fetches concurrently. On the first failure the rest are cancelled
    and collected before the error propagates."""
    tasks = [asyncio.ensure_future(f) for f in fetches]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class ChainAnalytics:
    """
    Args:
        provider: object with async fetch_chains / fetch_stablecoin_chains / fetch_bridges
        classifier: chain category classifier (defaults to configured lists)
        clock: returns the evaluation time stamped on each result
    """

    def __init__(
        self,
        provider,
        classifier: Optional[ChainClassifier] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.provider = provider
        self.classifier = classifier or ChainClassifier()
        self.clock = clock

    def _fetched_at(self) -> str:
        return self.clock().isoformat()

    # ============================================
    # OVERVIEW
    # ============================================

    async def overview(self) -> Dict[str, Any]:
        chains = await self.provider.fetch_chains()
        ranked = rank(chains, by=lambda c: c.tvl)
        total_tvl = sum(c.tvl for c in chains)

        return {
            "fetchedAt": self._fetched_at(),
            "market": {
                "totalChains": len(chains),
                "totalTVL": format_usd(total_tvl, "B", 1),
                "totalTVLRaw": total_tvl,
            },
            "top5": [
                {
                    "rank": entry.rank,
                    "name": entry.item.name,
                    "tvl": format_usd(entry.value, "B", 2),
                    "tvlRaw": entry.value,
                }
                for entry in ranked[:TOP_OVERVIEW]
            ],
            "dataSource": "DefiLlama (live)",
        }

    # ============================================
    # CHAIN DETAILS
    # ============================================

    async def chain_details(self, chain: str) -> Dict[str, Any]:
        chains, stables = await _fetch_all(
            self.provider.fetch_chains(),
            self.provider.fetch_stablecoin_chains(),
        )

        chain_data = entity_matcher.find(chains, chain)
        if chain_data is None:
            logger.info(f"[ChainAnalytics] Chain not found: {chain!r}")
            return {
                "fetchedAt": self._fetched_at(),
                "error": "Chain not found",
                "query": chain,
                "availableChains": entity_matcher.sample_names(chains, AVAILABLE_CHAINS_SAMPLE),
            }

        stable_data = entity_matcher.find(stables, chain)
        ranked = rank(chains, by=lambda c: c.tvl)

        stablecoins = None
        if stable_data is not None:
            stablecoins = {
                "totalUSD": format_usd(stable_data.circulating_usd, "M", 1),
                "totalUSDRaw": stable_data.circulating_usd,
            }

        return {
            "fetchedAt": self._fetched_at(),
            "query": chain,
            "chain": {
                "name": chain_data.name,
                "tvl": format_usd(chain_data.tvl, "B", 3),
                "tvlRaw": chain_data.tvl,
                "rank": rank_of(ranked, chain_data),
                "totalChains": len(chains),
                "category": self.classifier.label(chain_data),
                "tokenSymbol": chain_data.token_symbol,
                "geckoId": chain_data.gecko_id,
                "chainId": chain_data.chain_id,
            },
            "stablecoins": stablecoins,
        }

    # ============================================
    # TOP CHAINS
    # ============================================

    async def top_chains(
        self,
        limit: int = 20,
        min_tvl: float = 0,
        category: ChainCategory = ChainCategory.ALL,
    ) -> Dict[str, Any]:
        chains = await self.provider.fetch_chains()

        filtered = [
            c for c in chains
            if c.tvl >= min_tvl and self.classifier.matches(c, category)
        ]
        ranked = rank(filtered, by=lambda c: c.tvl, limit=limit)
        total_tvl = sum(entry.value for entry in ranked)

        return {
            "fetchedAt": self._fetched_at(),
            "filters": {"limit": limit, "minTvl": min_tvl, "category": category.value},
            "count": len(ranked),
            "totalTVL": format_usd(total_tvl, "B", 2),
            "totalTVLRaw": total_tvl,
            "chains": [
                {
                    "rank": entry.rank,
                    "name": entry.item.name,
                    "tvl": format_usd(entry.value, "B", 3),
                    "tvlRaw": entry.value,
                    "category": self.classifier.label(entry.item),
                    "tokenSymbol": entry.item.token_symbol,
                }
                for entry in ranked
            ],
        }

    # ============================================
    # STABLECOIN DISTRIBUTION
    # ============================================

    async def stablecoin_flows(self, limit: int = 20) -> Dict[str, Any]:
        stables = await self.provider.fetch_stablecoin_chains()

        with_usd = [s for s in stables if s.circulating_usd > 0]
        # Shares are of the displayed top-N, not of the whole market
        ranked = rank(with_usd, by=lambda s: s.circulating_usd, limit=limit)
        total = sum(entry.value for entry in ranked)

        return {
            "fetchedAt": self._fetched_at(),
            "limit": limit,
            "totalStablecoins": format_usd(total, "B", 1),
            "totalStablecoinsRaw": total,
            "chainCount": len(ranked),
            "distribution": [
                {
                    "rank": entry.rank,
                    "chain": entry.item.name,
                    "tokenSymbol": entry.item.token_symbol,
                    "stablecoins": format_usd(entry.value, "B", 3),
                    "stablecoinsRaw": entry.value,
                    "share": format_share(entry.share),
                    "shareRaw": entry.share,
                }
                for entry in ranked
            ],
        }

    # ============================================
    # BRIDGE RANKING
    # ============================================

    async def bridge_volume(
        self,
        limit: int = 10,
        period: BridgePeriod = BridgePeriod.LAST_24H,
    ) -> Dict[str, Any]:
        bridges = await self.provider.fetch_bridges()

        active = [b for b in bridges if b.volume_for(period) > 0]
        # Shares are of the displayed top-N, not of all bridges
        ranked = rank(active, by=lambda b: b.volume_for(period), limit=limit)
        total = sum(entry.value for entry in ranked)

        return {
            "fetchedAt": self._fetched_at(),
            "period": period.value,
            "limit": limit,
            "totalVolume": format_usd(total, "B", 2),
            "totalVolumeRaw": total,
            "bridgeCount": len(ranked),
            "bridges": [
                {
                    "rank": entry.rank,
                    "id": entry.item.id,
                    "name": entry.item.display_name,
                    "volume": format_usd(entry.value, "M", 1),
                    "volumeRaw": entry.value,
                    "share": format_share(entry.share),
                    "shareRaw": entry.share,
                    "supportedChains": len(entry.item.chains),
                    "chains": entry.item.chains[:BRIDGE_CHAINS_SAMPLE],
                }
                for entry in ranked
            ],
        }

    # ============================================
    # CHAIN COMPARISON
    # ============================================

    async def compare_chains(self, chain_names: Sequence[str]) -> Dict[str, Any]:
        chains, stables, bridges = await _fetch_all(
            self.provider.fetch_chains(),
            self.provider.fetch_stablecoin_chains(),
            self.provider.fetch_bridges(),
        )
        ranked = rank(chains, by=lambda c: c.tvl)

        comparison = [
            self._compare_entry(name, chains, stables, bridges, ranked)
            for name in chain_names
        ]

        # max() keeps the first of equal values, so not-found (0) entries never
        # beat a real one and an all-zero set resolves to the first name asked for
        winners = {}
        if comparison:
            winners = {
                "highestTVL": max(comparison, key=lambda c: c["tvlRaw"])["name"],
                "mostStablecoins": max(comparison, key=lambda c: c["stablecoinsRaw"])["name"],
            }

        return {
            "fetchedAt": self._fetched_at(),
            "chains": list(chain_names),
            "chainsCompared": len(chain_names),
            "comparison": comparison,
            "winners": winners,
            "summary": " | ".join(f"{c['name']}: {c['tvl'] or 'N/A'}" for c in comparison),
        }

    def _compare_entry(self, name, chains, stables, bridges, ranked) -> Dict[str, Any]:
        chain = entity_matcher.find(chains, name)
        stable = entity_matcher.find(stables, name)
        if chain is None:
            logger.info(f"[ChainAnalytics] Compare: chain not found: {name!r}")

        stable_usd = stable.circulating_usd if stable is not None else 0.0
        bridge_count = sum(1 for b in bridges if b.supports_chain(name))

        return {
            "name": chain.name if chain is not None else name,
            "found": chain is not None,
            "tvl": format_usd(chain.tvl, "B", 3) if chain is not None else None,
            "tvlRaw": chain.tvl if chain is not None else 0,
            "rank": rank_of(ranked, chain) if chain is not None else None,
            "tokenSymbol": chain.token_symbol if chain is not None else None,
            "stablecoins": format_usd(stable_usd, "M", 1) if stable_usd else None,
            "stablecoinsRaw": stable_usd,
            "bridgesSupported": bridge_count,
        }
