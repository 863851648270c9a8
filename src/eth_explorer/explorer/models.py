# File: src/eth_explorer/explorer/models.py
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import List, Optional


class Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Block(Record):
    number: str
    hash: str
    parent_hash: str
    timestamp: datetime
    miner: str
    gas_limit: str
    gas_used: str
    difficulty: str
    size: str
    transactions: List[str]


class Transaction(Record):
    hash: str
    block_number: Optional[str] = None
    block_hash: Optional[str] = None
    transaction_index: Optional[str] = None
    from_address: str = Field(alias="from")
    to: Optional[str] = None  # None for contract creation
    value: str  # ether
    gas: str
    gas_price: str  # gwei
    gas_used: Optional[str] = None
    nonce: str
    input: str
    status: Optional[str] = None  # "1" success, "0" failure; needs a receipt


class TransactionHistory(Record):
    address: str
    transactions: List[Transaction]


class Balance(Record):
    address: str
    balance: str
    balance_wei: str


class GasPrice(Record):
    gas_price: str
    gas_price_wei: str


class TokenBalance(Record):
    address: str
    token_address: str
    balance: str


class TokenTransfer(Record):
    token_address: str
    from_address: str = Field(alias="from")
    to: str
    value: str
    block_number: str
    block_hash: str
    tx_hash: str


class ContractABI(Record):
    address: str
    abi: str


class ContractSource(Record):
    address: str
    source_code: str
    contract_name: Optional[str] = None
    compiler_version: Optional[str] = None


class EventLog(Record):
    address: str
    topics: List[str]
    data: str
    block_number: str
    block_hash: str
    tx_hash: str
    tx_index: str
    log_index: str
    removed: bool  # log's block was reorganized out of the canonical chain


class ErrorResponse(Record):
    error: str
    message: str
    detail: Optional[str] = None


class HealthStatus(Record):
    status: str = "healthy"
