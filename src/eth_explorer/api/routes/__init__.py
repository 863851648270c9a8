from .eth import router as eth_router
from .health import router as health_router

__all__ = ['eth_router', 'health_router']
