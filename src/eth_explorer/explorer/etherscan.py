# File: src/eth_explorer/explorer/etherscan.py

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config.settings import DEFAULT_ETHERSCAN_URL
from ..exceptions import UpstreamRejectedError, UpstreamUnavailableError
from ..monitoring.metrics import MetricsCollector

logger = logging.getLogger(__name__)

UPSTREAM = "etherscan"
SUCCESS_STATUS = "1"


class EtherscanClient:
    """Thin wrapper around the Etherscan HTTP API.

    One GET per operation; no retries, no rate-limit handling, no pagination.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_ETHERSCAN_URL,
        chain_id: str = "1",
        timeout: float = 10,
        metrics: Optional[MetricsCollector] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.chain_id = str(chain_id)
        self.metrics = metrics
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self):
        if self._owns_client:
            await self.client.aclose()

    async def get_transactions(self, address: str) -> List[Dict[str, Any]]:
        """Normal transactions sent from or to an address, oldest first."""
        params = {
            "module": "account",
            "action": "txlist",
            "address": address,
            "startblock": 0,
            "endblock": 99999999,
            "sort": "asc",
        }
        return await self._request("txlist", params)

    async def get_contract_abi(self, address: str) -> str:
        params = {
            "module": "contract",
            "action": "getabi",
            "address": address,
        }
        return await self._request("getabi", params)

    async def get_contract_source(self, address: str) -> Dict[str, Any]:
        params = {
            "module": "contract",
            "action": "getsourcecode",
            "address": address,
        }
        result = await self._request("getsourcecode", params)
        if not result:
            raise UpstreamRejectedError("no source code returned")
        return result[0]

    async def _request(self, operation: str, params: Dict[str, Any]) -> Any:
        merged = {**params, "chainid": self.chain_id, "apikey": self.api_key}
        logger.debug("etherscan %s %s", operation, params.get("address"))

        try:
            if self.metrics is not None:
                with self.metrics.track_upstream(UPSTREAM, operation):
                    payload = await self._get(merged)
            else:
                payload = await self._get(merged)
        except httpx.HTTPError as e:
            logger.warning("etherscan %s failed: %s", operation, e)
            raise UpstreamUnavailableError(f"failed to reach Etherscan: {e}") from e

        return self._unwrap(payload)

    async def _get(self, params: Dict[str, Any]) -> Dict[str, Any]:
        response = await self.client.get(self.base_url, params=params)
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamUnavailableError("failed to parse response from Etherscan") from e
        if not isinstance(payload, dict):
            raise UpstreamUnavailableError("unexpected response from Etherscan")
        return payload

    def _unwrap(self, payload: Dict[str, Any]) -> Any:
        """Return the envelope's result, or raise with Etherscan's own message."""
        status = str(payload.get("status", ""))
        if status != SUCCESS_STATUS:
            message = payload.get("message") or "unknown Etherscan error"
            result = payload.get("result")
            detail = result if isinstance(result, str) and result != message else None
            raise UpstreamRejectedError(message, detail=detail)
        return payload.get("result")
