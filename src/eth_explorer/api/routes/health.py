# File: src/eth_explorer/api/routes/health.py
from fastapi import APIRouter

from eth_explorer.explorer.models import HealthStatus

router = APIRouter()


@router.get("/health", response_model=HealthStatus)
async def health():
    return HealthStatus()
