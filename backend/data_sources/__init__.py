"""
Data Sources Package
Live chain, stablecoin and bridge data from DefiLlama
"""

from .defillama import defillama_client, DefiLlamaClient, ProviderUnavailable

__all__ = [
    "defillama_client",
    "DefiLlamaClient",
    "ProviderUnavailable",
]
