# backend/app/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .clients.payment_gateway import PaymentAuthorizationError
from .config import settings
from .db import init_db
from .logging_config import configure_logging

from .middleware.request_id import RequestIDMiddleware
from .middleware.structured_logging import StructuredLoggingMiddleware

from .routers.health import router as health_router
from .routers.metrics import router as metrics_router

from .routers.users import router as users_router
from .routers.apartments import router as apartments_router
from .routers.announcements import router as announcements_router

from .routers.agreements import router as agreements_router
from .routers.contracts import router as contracts_router
from .routers.coupons import router as coupons_router
from .routers.payments import router as payments_router

log = logging.getLogger("buildcare.app")


def _cors_origins() -> list[str]:
    val = getattr(settings, "cors_allow_origins", ["*"])
    if isinstance(val, str):
        v = val.strip()
        return ["*"] if v == "*" else [x.strip() for x in v.split(",") if x.strip()]
    if isinstance(val, list) and val:
        return val
    return ["*"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if settings.auto_create_tables:
        init_db()
    yield


async def _internal_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # no retry, no compensation: surface to the caller and the operator log
    log.error("store failure", exc_info=exc, extra={"path": request.url.path})
    return JSONResponse(status_code=500, content={"detail": "internal error"})


async def _payment_error(request: Request, exc: PaymentAuthorizationError) -> JSONResponse:
    log.error("payment authorization failure", exc_info=exc, extra={"path": request.url.path})
    return JSONResponse(status_code=502, content={"detail": "payment authorization failed"})


def create_app() -> FastAPI:
    app = FastAPI(
        title="BuildCare Backend",
        version=settings.app_version,
        lifespan=lifespan,
    )

    # Last added runs first: request id -> structured logging -> CORS -> routes,
    # so every log line carries the id and preflights are logged too.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(StructuredLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(SQLAlchemyError, _internal_error)
    app.add_exception_handler(PaymentAuthorizationError, _payment_error)

    # Core
    app.include_router(health_router)
    app.include_router(metrics_router)

    # Identity + inventory accessors
    app.include_router(users_router)
    app.include_router(apartments_router)
    app.include_router(announcements_router)

    # Agreement -> membership -> billing
    app.include_router(agreements_router)
    app.include_router(contracts_router)
    app.include_router(coupons_router)
    app.include_router(payments_router)

    return app


app = create_app()
