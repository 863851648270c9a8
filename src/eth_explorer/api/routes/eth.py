# File: src/eth_explorer/api/routes/eth.py
from fastapi import APIRouter, Depends, Query, Request
from typing import List, Optional

from eth_explorer.explorer.api import ExplorerAPI
from eth_explorer.explorer.models import (
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

router = APIRouter(prefix="/eth", tags=["eth"])


def get_explorer(request: Request) -> ExplorerAPI:
    return request.app.state.explorer


@router.get("/block/{number}", response_model=Block)
async def get_block(number: str, explorer: ExplorerAPI = Depends(get_explorer)):
    return await explorer.get_block(number)


@router.get("/latest-block", response_model=Block)
async def get_latest_block(explorer: ExplorerAPI = Depends(get_explorer)):
    return await explorer.get_latest_block()


@router.get("/transaction/{tx_hash}", response_model=Transaction, response_model_exclude_none=True)
async def get_transaction(tx_hash: str, explorer: ExplorerAPI = Depends(get_explorer)):
    return await explorer.get_transaction(tx_hash)


@router.get("/balance/{address}", response_model=Balance)
async def get_balance(address: str, explorer: ExplorerAPI = Depends(get_explorer)):
    return await explorer.get_balance(address)


@router.get("/gas-price", response_model=GasPrice)
async def get_gas_price(explorer: ExplorerAPI = Depends(get_explorer)):
    return await explorer.get_gas_price()


@router.get("/transactions/{address}", response_model=TransactionHistory, response_model_exclude_none=True)
async def get_transaction_history(address: str, explorer: ExplorerAPI = Depends(get_explorer)):
    return await explorer.get_transaction_history(address)


@router.get("/token-balance/{address}/{token_address}", response_model=TokenBalance)
async def get_token_balance(
    address: str,
    token_address: str,
    explorer: ExplorerAPI = Depends(get_explorer)
):
    return await explorer.get_token_balance(address, token_address)


@router.get("/token-transfers/{address}", response_model=List[TokenTransfer])
async def get_token_transfers(
    address: str,
    from_block: Optional[str] = None,
    to_block: Optional[str] = None,
    explorer: ExplorerAPI = Depends(get_explorer)
):
    return await explorer.get_token_transfers(address, from_block, to_block)


@router.get("/contract-abi/{address}", response_model=ContractABI)
async def get_contract_abi(address: str, explorer: ExplorerAPI = Depends(get_explorer)):
    return await explorer.get_contract_abi(address)


@router.get("/contract-source/{address}", response_model=ContractSource, response_model_exclude_none=True)
async def get_contract_source(address: str, explorer: ExplorerAPI = Depends(get_explorer)):
    return await explorer.get_contract_source(address)


@router.get("/event-logs/{address}", response_model=List[EventLog])
async def get_event_logs(
    address: str,
    topics: List[str] = Query(default=[]),
    from_block: Optional[str] = None,
    to_block: Optional[str] = None,
    explorer: ExplorerAPI = Depends(get_explorer)
):
    return await explorer.get_event_logs(address, topics, from_block, to_block)
