"""
DefiLlama API Client
Chains (TVL), stablecoin supply per chain, and bridge volumes.

One attempt per fetch: no retry, no cache. Anything short of a 200 with a
JSON body raises ProviderUnavailable.
"""
import logging
from typing import Any, List, Optional

import httpx

from config.settings import (
    DEFILLAMA_BRIDGES_URL,
    DEFILLAMA_CHAINS_URL,
    DEFILLAMA_STABLECOINS_URL,
    DEFILLAMA_TIMEOUT,
)
from infrastructure.api_metrics import FetchTimer, ProviderMetricsTracker, provider_metrics
from services.chain_models import (
    BridgeRecord,
    NetworkRecord,
    StablecoinRecord,
    parse_records,
)

logger = logging.getLogger("DefiLlama")


class ProviderUnavailable(Exception):
    """A required DefiLlama feed could not be fetched"""

    def __init__(self, source: str, detail: str, status_code: Optional[int] = None, timed_out: bool = False):
        self.source = source
        self.detail = detail
        self.status_code = status_code
        self.timed_out = timed_out
        super().__init__(f"{source} API error: {detail}")


class DefiLlamaClient:
    """Client for the public DefiLlama APIs (free, no API key needed)"""

    def __init__(
        self,
        chains_url: str = DEFILLAMA_CHAINS_URL,
        stablecoins_url: str = DEFILLAMA_STABLECOINS_URL,
        bridges_url: str = DEFILLAMA_BRIDGES_URL,
        timeout: float = DEFILLAMA_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        metrics: Optional[ProviderMetricsTracker] = None,
    ):
        self.chains_url = chains_url
        self.stablecoins_url = stablecoins_url
        self.bridges_url = bridges_url
        self.timeout = timeout
        self.transport = transport
        self.metrics = metrics or provider_metrics
        logger.info("🦙 DefiLlama client initialized")

    async def _get_json(self, source: str, url: str) -> Any:
        with FetchTimer(source, url, self.metrics) as timer:
            try:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                    response = await client.get(url)
            except httpx.TimeoutException as e:
                logger.error(f"[DefiLlama] {source} fetch timed out after {self.timeout}s")
                raise ProviderUnavailable(source, "timeout", timed_out=True) from e
            except httpx.HTTPError as e:
                logger.error(f"[DefiLlama] {source} request failed: {e}")
                raise ProviderUnavailable(source, str(e) or type(e).__name__) from e

            timer.status_code = response.status_code
            if response.status_code != 200:
                logger.error(f"[DefiLlama] {source} API error: {response.status_code}")
                raise ProviderUnavailable(source, str(response.status_code), status_code=response.status_code)

            try:
                return response.json()
            except ValueError as e:
                logger.error(f"[DefiLlama] {source} returned malformed JSON")
                raise ProviderUnavailable(source, "malformed JSON", status_code=response.status_code) from e

    async def fetch_chains(self) -> List[NetworkRecord]:
        data = await self._get_json("chains", self.chains_url)
        chains = parse_records(data, NetworkRecord)
        logger.debug(f"[DefiLlama] Fetched {len(chains)} chains")
        return chains

    async def fetch_stablecoin_chains(self) -> List[StablecoinRecord]:
        data = await self._get_json("stablecoins", self.stablecoins_url)
        stables = parse_records(data, StablecoinRecord)
        logger.debug(f"[DefiLlama] Fetched stablecoin supply for {len(stables)} chains")
        return stables

    async def fetch_bridges(self) -> List[BridgeRecord]:
        data = await self._get_json("bridges", self.bridges_url)
        raw_bridges = data.get("bridges", []) if isinstance(data, dict) else []
        bridges = parse_records(raw_bridges, BridgeRecord)
        logger.debug(f"[DefiLlama] Fetched {len(bridges)} bridges")
        return bridges


# Singleton instance
defillama_client = DefiLlamaClient()
