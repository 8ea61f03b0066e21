"""
Chain Analytics settings
DefiLlama feed endpoints, curated chain category lists and the view price catalog
"""

import json
import os
from typing import Dict, List, Optional

from dotenv import load_dotenv

load_dotenv()

# ============================================
# DEFILLAMA FEEDS
# ============================================

DEFILLAMA_CHAINS_URL = os.getenv("DEFILLAMA_CHAINS_URL", "https://api.llama.fi/v2/chains")
DEFILLAMA_STABLECOINS_URL = os.getenv(
    "DEFILLAMA_STABLECOINS_URL", "https://stablecoins.llama.fi/stablecoinchains"
)
DEFILLAMA_BRIDGES_URL = os.getenv("DEFILLAMA_BRIDGES_URL", "https://bridges.llama.fi/bridges")
DEFILLAMA_TIMEOUT = float(os.getenv("DEFILLAMA_TIMEOUT", 15))

PORT = int(os.getenv("PORT", 8000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# ============================================
# CHAIN CATEGORIES
# Substring lists, matched case-insensitively against chain names.
# Heuristic only: "Scrollback" would count as an L2.
# ============================================

DEFAULT_CHAIN_CATEGORIES: Dict[str, List[str]] = {
    "l2": [
        "Base", "Arbitrum", "OP Mainnet", "Scroll", "Linea", "Blast",
        "zkSync Era", "Polygon zkEVM", "Mantle", "Mode", "Starknet", "Taiko", "Manta",
    ],
    "l1": ["Ethereum", "BSC", "Solana", "Tron", "Bitcoin"],
}


def load_chain_categories(path: Optional[str] = None) -> Dict[str, List[str]]:
    """
    Load the curated category lists.

    Reads a JSON file of the form {"l2": [...], "l1": [...]} from `path`
    (or CHAIN_CATEGORIES_PATH). Falls back to the built-in lists.
    """
    path = path or os.getenv("CHAIN_CATEGORIES_PATH")
    if not path:
        return {key: list(names) for key, names in DEFAULT_CHAIN_CATEGORIES.items()}

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Category file {path} must contain a JSON object")

    categories = {}
    for key in ("l2", "l1"):
        names = data.get(key, DEFAULT_CHAIN_CATEGORIES[key])
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise ValueError(f"Category '{key}' in {path} must be a list of strings")
        categories[key] = list(names)

    unknown = set(data) - {"l2", "l1"}
    if unknown:
        raise ValueError(f"Unknown categories in {path}: {sorted(unknown)}")

    return categories


# ============================================
# ENTRYPOINT CATALOG
# Prices in USDC base units (6 decimals), informational
# ============================================

ENTRYPOINTS = {
    "overview": {
        "description": "Free market overview - total chains, TVL, and top 5 (LIVE DATA)",
        "method": "GET",
        "price": 0,
    },
    "chain-details": {
        "description": "Detailed TVL and metrics for a specific chain",
        "method": "GET",
        "price": 1000,
    },
    "top-chains": {
        "description": "Top chains by TVL with filtering options",
        "method": "GET",
        "price": 2000,
    },
    "stablecoin-flows": {
        "description": "Stablecoin distribution across chains",
        "method": "GET",
        "price": 2000,
    },
    "bridge-volume": {
        "description": "Cross-chain bridge volumes and rankings",
        "method": "GET",
        "price": 3000,
    },
    "chain-compare": {
        "description": "Compare multiple chains side-by-side",
        "method": "POST",
        "price": 5000,
    },
}

USDC_DECIMALS = 6
