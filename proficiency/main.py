from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from proficiency.api.assessment import router as assessment_router
from proficiency.api.health import router as health_router
from proficiency.api.metrics_endpoint import router as metrics_router
from proficiency.api.users import router as users_router
from proficiency.core.config import SETTINGS
from proficiency.core.logging import setup_logging
from proficiency.db.engine import lifespan_db
from proficiency.db.redis import lifespan_redis
from proficiency.middleware.metrics import MetricsMiddleware
from proficiency.middleware.request_context import (
    RequestContextMiddleware,
    install_log_filter,
)

# Configure logging before the app and its middleware are built.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)
install_log_filter()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    # Nested so teardown runs in reverse order.
    async with lifespan_db():
        async with lifespan_redis():
            yield


app = FastAPI(
    title="proficiency-service",
    lifespan=lifespan,
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Missing or malformed fields are client errors (400), with the same
    # {"detail": {"message": ...}} shape as every other error.
    fields = sorted(
        {".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in exc.errors()}
    )
    logger.warning("Request validation failed  fields=%s", fields)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": {"message": "Missing required fields", "fields": fields}},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=list(SETTINGS.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Last-added runs first: RequestContext → Metrics → CORS → route handler.
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(assessment_router)
app.include_router(users_router)

logger.info(
    "proficiency-service started  env=%s log_level=%s port=%d docs=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    "on" if SETTINGS.is_dev else "off",
)
