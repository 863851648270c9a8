# File: src/eth_explorer/explorer/mapper.py
"""Projections from web3 / Etherscan structures onto the response models.

Every function here is pure: no I/O, no errors beyond what a malformed
upstream structure would raise.
"""

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from web3 import Web3

from ..chain.erc20 import decode_uint256, topic_to_address
from ..utils.units import wei_to_ether, wei_to_gwei
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
)


def to_hex(value: Any) -> str:
    """0x-prefixed hex for bytes; strings are assumed to be hex already."""
    if value is None:
        return "0x"
    if isinstance(value, str):
        return value if value.startswith("0x") else "0x" + value
    return Web3.to_hex(bytes(value))


def _int(value: Any) -> int:
    if isinstance(value, str):
        return int(value, 16) if value.startswith("0x") else int(value)
    return int(value or 0)


def _dec(value: Any) -> str:
    return str(_int(value))


def block_to_model(block: Mapping[str, Any]) -> Block:
    return Block(
        number=_dec(block["number"]),
        hash=to_hex(block["hash"]),
        parent_hash=to_hex(block["parentHash"]),
        timestamp=datetime.fromtimestamp(_int(block["timestamp"]), tz=timezone.utc),
        miner=block["miner"],
        gas_limit=_dec(block["gasLimit"]),
        gas_used=_dec(block["gasUsed"]),
        difficulty=_dec(block.get("difficulty", 0)),
        size=_dec(block.get("size", 0)),
        transactions=[
            to_hex(tx["hash"] if isinstance(tx, Mapping) else tx)
            for tx in block.get("transactions", [])
        ],
    )


def transaction_to_model(
    tx: Mapping[str, Any],
    receipt: Optional[Mapping[str, Any]] = None
) -> Transaction:
    """Map a node transaction; block and status fields come from the receipt, if any."""
    fields = {}
    if receipt is not None:
        fields = {
            "block_number": _dec(receipt["blockNumber"]),
            "block_hash": to_hex(receipt["blockHash"]),
            "transaction_index": _dec(receipt["transactionIndex"]),
            "gas_used": _dec(receipt["gasUsed"]) if receipt.get("gasUsed") is not None else None,
            "status": "1" if _int(receipt["status"]) == 1 else "0",
        }

    return Transaction(
        hash=to_hex(tx["hash"]),
        from_address=tx["from"],
        to=tx.get("to") or None,
        value=wei_to_ether(_int(tx["value"])),
        gas=_dec(tx["gas"]),
        gas_price=wei_to_gwei(_int(tx.get("gasPrice", 0))),
        nonce=_dec(tx["nonce"]),
        input=to_hex(tx.get("input")),
        **fields,
    )


def etherscan_transaction_to_model(entry: Mapping[str, Any]) -> Transaction:
    """Map one Etherscan txlist entry (camelCase, decimal strings)."""
    status = entry.get("txreceipt_status") or None
    if status is None and entry.get("isError") is not None:
        # Pre-Byzantium receipts carry no status field
        status = "0" if entry["isError"] == "1" else "1"

    return Transaction(
        hash=entry["hash"],
        block_number=entry.get("blockNumber") or None,
        block_hash=entry.get("blockHash") or None,
        transaction_index=entry.get("transactionIndex") or None,
        from_address=entry["from"],
        to=entry.get("to") or None,
        value=wei_to_ether(_int(entry["value"])),
        gas=_dec(entry["gas"]),
        gas_price=wei_to_gwei(_int(entry.get("gasPrice") or 0)),
        gas_used=entry.get("gasUsed") or None,
        nonce=_dec(entry["nonce"]),
        input=to_hex(entry.get("input")),
        status=status,
    )


def balance_to_model(address: str, wei: int) -> Balance:
    return Balance(address=address, balance=wei_to_ether(wei), balance_wei=str(wei))


def gas_price_to_model(wei: int) -> GasPrice:
    return GasPrice(gas_price=wei_to_gwei(wei), gas_price_wei=str(wei))


def token_balance_to_model(address: str, token_address: str, result: Any) -> TokenBalance:
    return TokenBalance(
        address=address,
        token_address=token_address,
        balance=str(decode_uint256(result)),
    )


def log_to_event_log(log: Mapping[str, Any]) -> EventLog:
    return EventLog(
        address=log["address"],
        topics=[to_hex(topic) for topic in log.get("topics", [])],
        data=to_hex(log.get("data")),
        block_number=_dec(log["blockNumber"]),
        block_hash=to_hex(log["blockHash"]),
        tx_hash=to_hex(log["transactionHash"]),
        tx_index=_dec(log["transactionIndex"]),
        log_index=_dec(log["logIndex"]),
        removed=bool(log.get("removed", False)),
    )


def log_to_token_transfer(log: Mapping[str, Any]) -> TokenTransfer:
    """Map a Transfer(address,address,uint256) log with indexed from/to."""
    topics = log["topics"]
    return TokenTransfer(
        token_address=log["address"],
        from_address=topic_to_address(topics[1]),
        to=topic_to_address(topics[2]),
        value=str(decode_uint256(log.get("data") or b"")),
        block_number=_dec(log["blockNumber"]),
        block_hash=to_hex(log["blockHash"]),
        tx_hash=to_hex(log["transactionHash"]),
    )


def contract_abi_to_model(address: str, abi: str) -> ContractABI:
    return ContractABI(address=address, abi=abi)


def contract_source_to_model(address: str, entry: Mapping[str, Any]) -> ContractSource:
    return ContractSource(
        address=address,
        source_code=entry.get("SourceCode") or "",
        contract_name=entry.get("ContractName") or None,
        compiler_version=entry.get("CompilerVersion") or None,
    )
