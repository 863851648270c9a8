# src/eth_explorer/chain/client.py

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Sequence

import aiohttp
from web3 import AsyncWeb3
from web3.exceptions import BlockNotFound, TransactionNotFound, Web3Exception

from ..exceptions import ConfigurationError, NotFoundError, UpstreamUnavailableError
from ..monitoring.metrics import MetricsCollector

logger = logging.getLogger(__name__)

UPSTREAM = "node"

# Errors web3 surfaces for an unreachable node or a failed RPC call
UPSTREAM_ERRORS = (
    Web3Exception,
    aiohttp.ClientError,
    asyncio.TimeoutError,
    ConnectionError,
    ValueError,
)


class ChainClient:
    """Pass-through to an Ethereum JSON-RPC node.

    Every coroutine is exactly one round trip; nothing is retried or cached.
    """

    def __init__(
        self,
        node_url: str,
        timeout: Optional[float] = None,
        metrics: Optional[MetricsCollector] = None,
        w3: Optional[AsyncWeb3] = None
    ):
        if w3 is None:
            if not node_url:
                raise ConfigurationError("ETH_NODE_URL is not configured")
            request_kwargs = {}
            if timeout:
                request_kwargs["timeout"] = aiohttp.ClientTimeout(total=timeout)
            w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(node_url, request_kwargs=request_kwargs))

        self.node_url = node_url
        self.w3 = w3
        self.metrics = metrics

    @asynccontextmanager
    async def _round_trip(self, operation: str, action: str):
        """Translate web3/transport failures for one node call."""
        logger.debug("node %s", operation)
        try:
            if self.metrics is not None:
                with self.metrics.track_upstream(UPSTREAM, operation):
                    yield
            else:
                yield
        except (BlockNotFound, TransactionNotFound) as e:
            raise NotFoundError(f"failed to {action}: {e}") from e
        except UPSTREAM_ERRORS as e:
            logger.warning("node %s failed: %s", operation, e)
            raise UpstreamUnavailableError(f"failed to {action}: {e}") from e

    async def is_connected(self) -> bool:
        try:
            return bool(await self.w3.is_connected())
        except UPSTREAM_ERRORS as e:
            logger.debug("node connectivity probe failed: %s", e)
            return False

    async def get_block(self, number: Optional[int] = None) -> Dict[str, Any]:
        """Fetch a block by number, or the chain head when number is None."""
        identifier = "latest" if number is None else number
        async with self._round_trip("get_block", "fetch block"):
            return await self.w3.eth.get_block(identifier, full_transactions=False)

    async def get_transaction(self, tx_hash: str) -> Dict[str, Any]:
        async with self._round_trip("get_transaction", "fetch transaction"):
            return await self.w3.eth.get_transaction(tx_hash)

    async def get_transaction_receipt(self, tx_hash: str) -> Dict[str, Any]:
        async with self._round_trip("get_transaction_receipt", "fetch transaction receipt"):
            return await self.w3.eth.get_transaction_receipt(tx_hash)

    async def get_balance(self, address: str) -> int:
        async with self._round_trip("get_balance", "fetch balance"):
            return await self.w3.eth.get_balance(address)

    async def suggest_gas_price(self) -> int:
        async with self._round_trip("gas_price", "fetch gas price"):
            return await self.w3.eth.gas_price

    async def call_contract(self, to: str, data: bytes) -> bytes:
        """Execute a read-only call against the latest block."""
        async with self._round_trip("call", "call contract"):
            return await self.w3.eth.call({"to": to, "data": data}, "latest")

    async def filter_logs(
        self,
        address: Optional[str] = None,
        topics: Optional[Sequence[Optional[str]]] = None,
        from_block: Optional[int] = None,
        to_block: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """Run eth_getLogs. Omitted block bounds default to the latest block on the node."""
        params: Dict[str, Any] = {}
        if address is not None:
            params["address"] = address
        if topics:
            params["topics"] = list(topics)
        if from_block is not None:
            params["fromBlock"] = from_block
        if to_block is not None:
            params["toBlock"] = to_block

        async with self._round_trip("get_logs", "filter logs"):
            return await self.w3.eth.get_logs(params)
