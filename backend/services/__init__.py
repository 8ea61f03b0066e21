"""
Chain Analytics Services
Join, rank, classify and compare chain metrics from DefiLlama feeds
"""

from .chain_models import (
    BridgePeriod,
    BridgeRecord,
    ChainCategory,
    NetworkRecord,
    RankedEntry,
    StablecoinRecord,
)
from .classifier import ChainClassifier
from .chain_analytics import ChainAnalytics

__all__ = [
    # Records
    "NetworkRecord",
    "StablecoinRecord",
    "BridgeRecord",
    "RankedEntry",

    # Enums
    "ChainCategory",
    "BridgePeriod",

    # Engine
    "ChainClassifier",
    "ChainAnalytics",
]
