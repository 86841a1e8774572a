"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from chatterly import models  # noqa: F401  (registers tables on Base.metadata)
from chatterly.config import configure_logging, get_settings
from chatterly.database import Base, dispose_engine, initialize_database
from chatterly.domain.common.exceptions import (
    DomainError,
    InvalidStateError,
    ValidationError,
)
from chatterly.exceptions import ChatterlyError
from chatterly.infrastructure.achievements.routers import badges
from chatterly.infrastructure.practice.routers import sessions, turns
from chatterly.infrastructure.progress.routers import progress

settings = get_settings()
configure_logging(settings.ENVIRONMENT)

logger = structlog.get_logger(__name__)

HTTP_ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: "VALIDATION_ERROR",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
}


def error_response(
    status_code: int, code: str, message: str, details: object = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {"code": code, "message": message, "details": jsonable_encoder(details)}
        },
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    engine = initialize_database(settings)
    Base.metadata.create_all(bind=engine)
    logger.info("application_started", environment=settings.ENVIRONMENT)
    yield
    dispose_engine()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ChatterlyError)
async def chatterly_error_handler(request: Request, exc: ChatterlyError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "request_failed",
            path=request.url.path,
            code=exc.code,
            error=exc.message,
            details=exc.details,
        )
    return error_response(exc.status_code, exc.code, exc.message, exc.details)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if isinstance(exc, ValidationError | InvalidStateError):
        return error_response(status.HTTP_400_BAD_REQUEST, exc.code, exc.message, exc.details)

    logger.error("domain_invariant_violated", path=request.url.path, error=exc.message)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, exc.code, exc.message, exc.details
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        ValidationError.code,
        "Invalid request data",
        {"errors": exc.errors()},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = HTTP_ERROR_CODES.get(exc.status_code, ChatterlyError.code)
    return error_response(exc.status_code, code, str(exc.detail))


app.include_router(sessions.router, prefix=settings.API_V1_PREFIX)
app.include_router(turns.router, prefix=settings.API_V1_PREFIX)
app.include_router(progress.router, prefix=settings.API_V1_PREFIX)
app.include_router(badges.router, prefix=settings.API_V1_PREFIX)


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "healthy"}
