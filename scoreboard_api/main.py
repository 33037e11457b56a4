from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .exceptions import ScoreboardError
from .logging_config import configure_logging
from .middleware.logging import StructuredLoggingMiddleware
from .routers import important, sports
from .routers.responses import error_response, result_code_for
from .routers.schemas import ResultCode
from .validate_env import validate_env

logger = logging.getLogger(__name__)

SERVICE_NAME = "scoreboard-api"


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    validate_env()
    configure_logging(SERVICE_NAME, settings.environment, settings.log_level)
    yield


app = FastAPI(title=SERVICE_NAME, version="1.0.0", lifespan=lifespan)

app.add_middleware(StructuredLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(sports.router)
app.include_router(important.router)


@app.exception_handler(ScoreboardError)
async def scoreboard_error_handler(request: Request, exc: ScoreboardError) -> JSONResponse:
    code = result_code_for(exc)
    logger.warning(
        "Request failed",
        extra={"path": request.url.path, "result": code.value, "error": str(exc)},
    )
    return JSONResponse(error_response(code, str(exc)))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(error_response(ResultCode.BAD_REQUEST, "Invalid query parameters"))


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return JSONResponse({"result": "error_not_found"}, status_code=404)
    return await http_exception_handler(request, exc)


@app.get("/healthz")
def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
