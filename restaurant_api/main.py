"""
FastAPI Application Entry Point

Restaurant Ordering API - dishes and orders held in memory, every request
validated by an ordered chain of stages.

Endpoints:
    - GET  /dishes, POST /dishes
    - GET  /dishes/{dishId}, PUT /dishes/{dishId}
    - GET  /orders, POST /orders
    - GET  /orders/{orderId}, PUT /orders/{orderId}, DELETE /orders/{orderId}
    - GET  /health: System health check

Version: 1.0.0
"""

import json
import logging
from datetime import datetime
from typing import Any, Optional
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter, FastAPI, Depends, Request, Response
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from restaurant_api.core.chain import Chain, RequestContext
from restaurant_api.core.config import Settings, get_settings, setup_logging
from restaurant_api.core.errors import ChainFailure
from restaurant_api.handlers import dishes, orders
from restaurant_api.schemas import (
    DishEnvelope,
    DishListEnvelope,
    OrderEnvelope,
    OrderListEnvelope,
    ErrorResponse,
    HealthResponse,
)
from restaurant_api.seed import load_seed_file
from restaurant_api.services.ids import create_id_generator
from restaurant_api.store import Store, get_store

logger = logging.getLogger(__name__)

router = APIRouter()

FAILURE_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

async def read_body(request: Request) -> Any:
    """Decode the JSON body; an empty or malformed body decodes to {}."""
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}


def respond(chain: Chain, context: RequestContext, response: Response) -> Optional[dict[str, Any]]:
    """Run a chain and turn its outcome into the response envelope."""
    outcome = chain.run(context).unwrap()
    response.status_code = outcome.status
    return outcome.envelope()


def build_store(settings: Settings) -> Store:
    """Create the process store and load seed data if configured."""
    store = Store(create_id_generator(settings.id_strategy))
    if settings.seed_file:
        load_seed_file(store, settings.seed_file)
    return store


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@router.get("/", tags=["Root"])
async def root(request: Request) -> dict[str, str]:
    """API root with navigation links."""
    settings: Settings = request.app.state.settings
    return {
        "message": f"🍽️ Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "dishes": "/dishes",
        "orders": "/orders",
        "health": "/health",
    }


@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(store: Store = Depends(get_store)) -> HealthResponse:
    """Report collection sizes and the active id strategy."""
    return HealthResponse(
        status="operational",
        dishes=len(store.dishes),
        orders=len(store.orders),
        id_strategy=store.ids.strategy_name,
        timestamp=datetime.now(),
    )


# =============================================================================
# DISH ENDPOINTS
# =============================================================================

@router.get("/dishes", response_model=DishListEnvelope, tags=["Dishes"])
async def list_dishes(response: Response, store: Store = Depends(get_store)):
    """List every dish in insertion order."""
    return respond(dishes.list_all, RequestContext(store=store), response)


@router.post(
    "/dishes",
    status_code=201,
    response_model=DishEnvelope,
    responses=FAILURE_RESPONSES,
    tags=["Dishes"],
)
async def create_dish(request: Request, response: Response, store: Store = Depends(get_store)):
    """Create a dish from ``{"data": {name, description, price, image_url}}``."""
    context = RequestContext.from_body(store, await read_body(request))
    return respond(dishes.create, context, response)


@router.get(
    "/dishes/{dishId}",
    response_model=DishEnvelope,
    responses=FAILURE_RESPONSES,
    tags=["Dishes"],
)
async def read_dish(dishId: str, response: Response, store: Store = Depends(get_store)):
    context = RequestContext(store=store, params={"dishId": dishId})
    return respond(dishes.read, context, response)


@router.put(
    "/dishes/{dishId}",
    response_model=DishEnvelope,
    responses=FAILURE_RESPONSES,
    tags=["Dishes"],
)
async def update_dish(
    dishId: str,
    request: Request,
    response: Response,
    store: Store = Depends(get_store),
):
    context = RequestContext.from_body(store, await read_body(request), dishId=dishId)
    return respond(dishes.update, context, response)


# =============================================================================
# ORDER ENDPOINTS
# =============================================================================

@router.get("/orders", response_model=OrderListEnvelope, tags=["Orders"])
async def list_orders(response: Response, store: Store = Depends(get_store)):
    """List every order in insertion order."""
    return respond(orders.list_all, RequestContext(store=store), response)


@router.post(
    "/orders",
    status_code=201,
    response_model=OrderEnvelope,
    responses=FAILURE_RESPONSES,
    tags=["Orders"],
)
async def create_order(request: Request, response: Response, store: Store = Depends(get_store)):
    """Create an order from ``{"data": {deliverTo, mobileNumber, dishes[, status]}}``."""
    context = RequestContext.from_body(store, await read_body(request))
    return respond(orders.create, context, response)


@router.get(
    "/orders/{orderId}",
    response_model=OrderEnvelope,
    responses=FAILURE_RESPONSES,
    tags=["Orders"],
)
async def read_order(orderId: str, response: Response, store: Store = Depends(get_store)):
    context = RequestContext(store=store, params={"orderId": orderId})
    return respond(orders.read, context, response)


@router.put(
    "/orders/{orderId}",
    response_model=OrderEnvelope,
    responses=FAILURE_RESPONSES,
    tags=["Orders"],
)
async def update_order(
    orderId: str,
    request: Request,
    response: Response,
    store: Store = Depends(get_store),
):
    context = RequestContext.from_body(store, await read_body(request), orderId=orderId)
    return respond(orders.update, context, response)


@router.delete(
    "/orders/{orderId}",
    status_code=204,
    response_class=Response,
    responses=FAILURE_RESPONSES,
    tags=["Orders"],
)
async def delete_order(orderId: str, store: Store = Depends(get_store)) -> Response:
    """Delete a pending order."""
    context = RequestContext(store=store, params={"orderId": orderId})
    outcome = orders.delete.run(context).unwrap()
    return Response(status_code=outcome.status)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

async def chain_failure_handler(request: Request, exc: ChainFailure) -> JSONResponse:
    """Render a stage failure with its own status and message."""
    return JSONResponse(status_code=exc.status, content=exc.to_dict())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing failures: unknown path or unsupported method."""
    if exc.status_code == 404:
        message = f"Path not found: {request.url.path}"
    elif exc.status_code == 405:
        message = f"{request.method} not allowed for {request.url.path}"
    else:
        message = str(exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


def make_global_exception_handler(settings: Settings):
    show_detail = settings.debug and not settings.is_production

    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all exception handler."""
        logger.exception(f"Unhandled exception: {exc}")

        return JSONResponse(
            status_code=500,
            content={
                "message": str(exc) if show_detail else "An unexpected error occurred",
            },
        )

    return global_exception_handler


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use (defaults to the cached environment settings)

    Returns:
        FastAPI: Configured application; its store is created on startup
    """
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application startup and shutdown events.
        """
        # Startup
        logger.info("=" * 60)
        logger.info(f"🚀 Starting {settings.app_name}")
        logger.info(f"   Version: {settings.app_version}")
        logger.info(f"   Environment: {settings.env_mode.value}")
        logger.info(f"   Debug: {settings.debug}")
        if settings.is_development:
            logger.info(f"   Docs: http://{settings.api_host}:{settings.api_port}/docs")
        logger.info("=" * 60)

        store = build_store(settings)
        app.state.store = store
        logger.info(f"✅ Store ready: {len(store.dishes)} dishes, {len(store.orders)} orders")
        logger.info(f"✅ Id Strategy: {store.ids.strategy_name}")

        logger.info("=" * 60)
        logger.info("✅ Application ready!")
        logger.info("=" * 60)

        yield  # Application runs

        # Shutdown
        logger.info("Shutting down...")
        store.clear()
        logger.info("✅ Cleanup complete")

    app = FastAPI(
        title=settings.app_name,
        description=(
            "Dishes and orders for a restaurant ordering demo. "
            "Data is kept in memory and vanishes on restart."
        ),
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    app.add_exception_handler(ChainFailure, chain_failure_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, make_global_exception_handler(settings))

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "restaurant_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    run()
