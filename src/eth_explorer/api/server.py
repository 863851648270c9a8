# File: src/eth_explorer/api/server.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from eth_explorer import __version__
from eth_explorer.chain.client import ChainClient
from eth_explorer.config.settings import AppConfig
from eth_explorer.exceptions import ExplorerError
from eth_explorer.explorer.api import ExplorerAPI
from eth_explorer.explorer.etherscan import EtherscanClient
from eth_explorer.explorer.models import ErrorResponse
from eth_explorer.monitoring.metrics import MetricsCollector
from .routes import eth_router, health_router

API_PREFIX = "/api/v1"
UNMATCHED_ROUTE = "<unmatched>"

logger = logging.getLogger(__name__)


def build_explorer(config: AppConfig, metrics: Optional[MetricsCollector] = None) -> ExplorerAPI:
    """Wire the node and Etherscan adapters from configuration."""
    chain = ChainClient(
        config.eth_node_url,
        timeout=config.get("node.timeout"),
        metrics=metrics,
    )
    etherscan = EtherscanClient(
        api_key=config.etherscan_api_key,
        base_url=config.get("etherscan.base_url"),
        chain_id=config.get("etherscan.chain_id"),
        timeout=config.get("etherscan.timeout"),
        metrics=metrics,
    )
    if not config.etherscan_api_key:
        logger.warning("ETHERSCAN_API_KEY is not set; explorer endpoints will be rejected upstream")
    return ExplorerAPI(chain, etherscan)


def _error_response(status_code: int, error: str, message: str, detail: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def explorer_error_handler(request: Request, exc: ExplorerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return _error_response(exc.status_code, exc.label, exc.message, exc.detail)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return _error_response(400, "Invalid input", messages)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s %s crashed", request.method, request.url.path)
    return _error_response(500, "Internal server error", str(exc) or exc.__class__.__name__)


def create_app(
    config: Optional[AppConfig] = None,
    explorer: Optional[ExplorerAPI] = None,
    metrics: Optional[MetricsCollector] = None
) -> FastAPI:
    metrics = metrics or MetricsCollector()
    if explorer is None:
        explorer = build_explorer(config or AppConfig(), metrics)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if await explorer.chain.is_connected():
            logger.info("Connected to Ethereum node")
        else:
            logger.warning("Ethereum node is not reachable; node endpoints will fail")
        yield
        await explorer.close()

    app = FastAPI(title="Ethereum Explorer API", version=__version__, lifespan=lifespan)
    app.state.explorer = explorer
    app.state.metrics = metrics

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.middleware("http")
    async def count_requests(request: Request, call_next):
        try:
            response = await call_next(request)
        except Exception:
            metrics.record_http_request(request.method, _route_path(request), 500)
            raise
        metrics.record_http_request(request.method, _route_path(request), response.status_code)
        return response

    app.add_exception_handler(ExplorerError, explorer_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Include routers
    app.include_router(eth_router, prefix=API_PREFIX)
    app.include_router(health_router, prefix=API_PREFIX)

    @app.get("/metrics", include_in_schema=False)
    async def prometheus_metrics():
        return Response(content=metrics.render(), media_type=metrics.content_type)

    return app


def _route_path(request: Request) -> str:
    """Label for the request metrics: the full route template, e.g. /api/v1/eth/block/{number}.

    Requests that matched no route share one label so unknown URLs cannot grow the series set.
    """
    route = request.scope.get("route")
    template = getattr(route, "path_format", None) or getattr(route, "path", None)
    if not template:
        return UNMATCHED_ROUTE

    # included routers may leave their prefix off route.path; recover it from the request path
    try:
        concrete = template.format(**request.path_params)
    except (KeyError, IndexError, ValueError):
        return template
    path = request.url.path
    if concrete != path and path.endswith(concrete):
        return path[:len(path) - len(concrete)] + template
    return template
