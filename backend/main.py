# ---------------------------------------------------------
# backend/main.py
# Asset Manager - inventory tracking backend
#
# Run: uvicorn backend.main:app --reload (from repo root)
#
# - FastAPI + SQLAlchemy (PostgreSQL, or SQLite for local dev)
# - /assets      : list / create
# - /assets/{id} : get / update (merge) / delete
# - /health      : liveness
#
# DATABASE_URL (or POSTGRES_URL) is required; startup fails without it,
# and on an unknown ASSET_UPDATE_MODE.
# ---------------------------------------------------------

from __future__ import annotations

import logging
from typing import Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from backend.config import CORS_ORIGINS, ENV, IS_PROD, LOG_LEVEL, atomic_writes_enabled, get_update_mode
from backend.db import dispose_engine, init_engine
from backend.errors import AssetError
from backend.logging_config import setup_logging
from backend.migrate import run_migrations
from backend.routes_assets import router as assets_router

logger = logging.getLogger(__name__)

# Pydantic error types on "name" that mean the client did not give a usable name
_MISSING_NAME_ERRORS = {"missing", "string_type", "value_error"}


app = FastAPI(title="Asset Manager Backend", version="1.0.0")

# CORS configuration from config module
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS if IS_PROD else ["*"],  # Restrict origins in production
    allow_credentials=IS_PROD,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup() -> None:
    setup_logging(LOG_LEVEL)
    logger.info("[CONFIG] Environment: %s", ENV)
    # Raises ValueError on a bad ASSET_UPDATE_MODE, aborting startup
    logger.info(
        "[CONFIG] Update mode: %s, atomic writes: %s",
        get_update_mode(),
        atomic_writes_enabled(),
    )
    # Raises RuntimeError when DATABASE_URL is missing, aborting startup
    init_engine()
    run_migrations()


@app.on_event("shutdown")
def shutdown() -> None:
    dispose_engine()


# ---------------------------------------------------------
# Error handlers
# ---------------------------------------------------------
def validation_message(method: str, errors: List[dict]) -> str:
    """
    Map FastAPI/Pydantic validation errors to the API's 400 message.

    A create request whose body is missing or whose name is missing, null,
    not a string or blank answers "Name is required"; everything else is a
    malformed body.
    """
    if method == "POST":
        for err in errors:
            loc = tuple(err.get("loc", ()))
            if loc == ("body",) and err.get("type") == "missing":
                return "Name is required"
            if loc[:2] == ("body", "name") and err.get("type") in _MISSING_NAME_ERRORS:
                return "Name is required"
    return "Invalid request body"


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = validation_message(request.method, exc.errors())
    logger.debug("[ASSETS] Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(AssetError)
async def asset_error_handler(request: Request, exc: AssetError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# ---------------------------------------------------------
# Routes
# ---------------------------------------------------------
@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Asset Manager Backend is running"


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


app.include_router(assets_router)
