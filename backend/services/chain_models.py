"""
Chain Analytics data model
Records parsed from the three DefiLlama feeds, plus ranking wrappers
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, List, Mapping, Optional, TypeVar

T = TypeVar("T")


class ChainCategory(Enum):
    ALL = "all"
    L2 = "l2"
    L1 = "l1"
    ALT_L1 = "alt-l1"


class BridgePeriod(Enum):
    LAST_24H = "24h"
    WEEKLY = "7d"
    MONTHLY = "30d"


def _number(value: Any) -> float:
    """Loose coercion to a finite, non-negative amount. None, bools, junk,
    NaN, infinities and negatives all become 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(result):
        return 0.0
    return max(0.0, result)


def _optional_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class NetworkRecord:
    """A chain from /v2/chains"""
    name: str
    tvl: float = 0.0
    token_symbol: Optional[str] = None
    gecko_id: Optional[str] = None
    chain_id: Optional[int] = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "NetworkRecord":
        return cls(
            name=str(raw.get("name") or ""),
            tvl=_number(raw.get("tvl")),
            token_symbol=raw.get("tokenSymbol"),
            gecko_id=raw.get("gecko_id"),
            chain_id=_optional_int(raw.get("chainId")),
        )


@dataclass(frozen=True)
class StablecoinRecord:
    """Stablecoin supply attributed to a chain, from /stablecoinchains"""
    name: str
    circulating_usd: float = 0.0
    token_symbol: Optional[str] = None
    gecko_id: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "StablecoinRecord":
        circulating = raw.get("totalCirculatingUSD") or {}
        if not isinstance(circulating, Mapping):
            circulating = {}
        return cls(
            name=str(raw.get("name") or ""),
            circulating_usd=_number(circulating.get("peggedUSD")),
            token_symbol=raw.get("tokenSymbol"),
            gecko_id=raw.get("gecko_id"),
        )


@dataclass(frozen=True)
class BridgeRecord:
    """A bridge from /bridges with its volume windows"""
    id: int
    name: str
    display_name: str
    last_24h_volume: float = 0.0
    weekly_volume: float = 0.0
    monthly_volume: float = 0.0
    chains: List[str] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "BridgeRecord":
        name = str(raw.get("name") or "")
        chains = raw.get("chains") or []
        return cls(
            id=_optional_int(raw.get("id")) or 0,
            name=name,
            display_name=str(raw.get("displayName") or name),
            last_24h_volume=_number(raw.get("last24hVolume")),
            weekly_volume=_number(raw.get("weeklyVolume")),
            monthly_volume=_number(raw.get("monthlyVolume")),
            chains=[str(c) for c in chains if isinstance(c, str)],
        )

    def volume_for(self, period: BridgePeriod) -> float:
        if period is BridgePeriod.LAST_24H:
            return self.last_24h_volume
        if period is BridgePeriod.WEEKLY:
            return self.weekly_volume
        return self.monthly_volume

    def supports_chain(self, chain_name: str) -> bool:
        target = chain_name.lower()
        return any(c.lower() == target for c in self.chains)


@dataclass(frozen=True)
class RankedEntry(Generic[T]):
    """An item with its 1-based rank and percentage share of the ranked set"""
    item: T
    rank: int
    value: float
    share: float = 0.0


def parse_records(raw_items: Any, record_cls) -> List[Any]:
    """Parse a loosely-typed feed payload, skipping anything that isn't a mapping"""
    if not isinstance(raw_items, list):
        return []
    return [record_cls.from_raw(item) for item in raw_items if isinstance(item, Mapping)]

