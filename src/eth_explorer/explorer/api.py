# File: src/eth_explorer/explorer/api.py
import logging
from typing import Iterable, List, Optional

from ..chain.client import ChainClient
from ..chain.erc20 import TRANSFER_EVENT_TOPIC, address_topic, encode_balance_of
from ..exceptions import NotFoundError
from ..utils.parsing import (
    parse_block_number,
    parse_optional_block,
    parse_topics,
    validate_address,
    validate_tx_hash,
)
from . import mapper
from .etherscan import EtherscanClient
from .models import (
    Balance,
    Block,
    ContractABI,
    ContractSource,
    EventLog,
    GasPrice,
    TokenBalance,
    TokenTransfer,
    Transaction,
    TransactionHistory,
)

logger = logging.getLogger(__name__)


class ExplorerAPI:
    """Validates request parameters, calls the node or Etherscan once and maps the result."""

    def __init__(self, chain: ChainClient, etherscan: EtherscanClient):
        self.chain = chain
        self.etherscan = etherscan

    async def get_block(self, block_id: str) -> Block:
        """Get block by decimal number, 0x-hex number or 'latest'."""
        number = parse_block_number(block_id)
        block = await self.chain.get_block(number)
        if block is None:
            raise NotFoundError(f"block {block_id} not found")
        return mapper.block_to_model(block)

    async def get_latest_block(self) -> Block:
        return await self.get_block("latest")

    async def get_transaction(self, tx_hash: str) -> Transaction:
        """Get transaction by hash, with receipt status once it is mined."""
        tx_hash = validate_tx_hash(tx_hash)
        tx = await self.chain.get_transaction(tx_hash)
        if tx is None:
            raise NotFoundError(f"transaction {tx_hash} not found")

        if tx.get("blockHash") is None:
            # Pending: no receipt yet
            return mapper.transaction_to_model(tx)

        receipt = await self.chain.get_transaction_receipt(tx_hash)
        return mapper.transaction_to_model(tx, receipt)

    async def get_balance(self, address: str) -> Balance:
        address = validate_address(address)
        wei = await self.chain.get_balance(address)
        return mapper.balance_to_model(address, wei)

    async def get_gas_price(self) -> GasPrice:
        wei = await self.chain.suggest_gas_price()
        return mapper.gas_price_to_model(wei)

    async def get_transaction_history(self, address: str) -> TransactionHistory:
        address = validate_address(address)
        entries = await self.etherscan.get_transactions(address) or []
        return TransactionHistory(
            address=address,
            transactions=[mapper.etherscan_transaction_to_model(e) for e in entries],
        )

    async def get_token_balance(self, address: str, token_address: str) -> TokenBalance:
        """ERC-20 balanceOf(address) via eth_call, in the token's smallest unit."""
        address = validate_address(address)
        token_address = validate_address(token_address)
        result = await self.chain.call_contract(token_address, encode_balance_of(address))
        return mapper.token_balance_to_model(address, token_address, result)

    async def get_token_transfers(
        self,
        address: str,
        from_block: Optional[str] = None,
        to_block: Optional[str] = None
    ) -> List[TokenTransfer]:
        """ERC-20 Transfer events received by an address."""
        address = validate_address(address)
        logs = await self.chain.filter_logs(
            topics=[TRANSFER_EVENT_TOPIC, None, address_topic(address)],
            from_block=parse_optional_block(from_block),
            to_block=parse_optional_block(to_block),
        )
        # ERC-721 shares the signature but indexes a fourth topic and has no data
        return [
            mapper.log_to_token_transfer(log)
            for log in logs
            if len(log.get("topics", [])) == 3
        ]

    async def get_contract_abi(self, address: str) -> ContractABI:
        address = validate_address(address)
        abi = await self.etherscan.get_contract_abi(address)
        return mapper.contract_abi_to_model(address, abi)

    async def get_contract_source(self, address: str) -> ContractSource:
        address = validate_address(address)
        entry = await self.etherscan.get_contract_source(address)
        return mapper.contract_source_to_model(address, entry)

    async def get_event_logs(
        self,
        address: str,
        topics: Iterable[str] = (),
        from_block: Optional[str] = None,
        to_block: Optional[str] = None
    ) -> List[EventLog]:
        address = validate_address(address)
        logs = await self.chain.filter_logs(
            address=address,
            topics=parse_topics(topics),
            from_block=parse_optional_block(from_block),
            to_block=parse_optional_block(to_block),
        )
        logger.debug("found %d logs for %s", len(logs), address)
        return [mapper.log_to_event_log(log) for log in logs]

    async def close(self):
        await self.etherscan.aclose()
