"""Module: main."""

import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from petcare.api.v1.api import api_router
from petcare.core.config import settings
from petcare.core.errors import PetCareError
from petcare.core.logging import configure_logging
from petcare.db.init_db import init_db

configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_schema:
        init_db()
        logger.info("schema_created")
    yield


app = FastAPI(title="PetCare API", version="0.1.0", lifespan=lifespan)

app.include_router(api_router, prefix="/api/v1")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Bind request metadata so every log line of the request carries it.
@app.middleware("http")
async def bind_request_context(request: Request, call_next):
    structlog.contextvars.clear_contextvars()
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
    )
    response = await call_next(request)
    response.headers["x-request-id"] = request_id
    return response


@app.exception_handler(PetCareError)
async def handle_petcare_error(request: Request, exc: PetCareError):
    return JSONResponse(status_code=exc.status_code, content=exc.as_dict())


# Store failures are reported without leaking driver or SQL details.
@app.exception_handler(SQLAlchemyError)
async def handle_store_error(request: Request, exc: SQLAlchemyError):
    logger.error("store_error", error_type=type(exc).__name__, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"code": "INTERNAL", "message": "Internal server error"},
    )
