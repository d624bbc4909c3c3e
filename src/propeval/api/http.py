# src/propeval/api/http.py
from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from propeval.adapters.config import config
from propeval.adapters.logging_utils import get_logger, log_event
from propeval.domain.errors import PropertyValidationError
from propeval.services.analyzer import analyze_property, iso_timestamp
from .schemas import AnalyzeResponse, ErrorResponse, HealthResponse

logger = get_logger(__name__)

app = FastAPI(title="Real Estate Analysis API", version=config.API_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.CORS_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def access_log(request: Request, call_next):
    t0 = time.perf_counter()
    status = 500  # stays 500 if call_next raises
    try:
        response = await call_next(request)
        status = response.status_code
        return response
    finally:
        log_event(
            logger,
            "http_request",
            method=request.method,
            path=request.url.path,
            status=status,
            duration_ms=round((time.perf_counter() - t0) * 1000.0, 2),
        )


# -----------------------------
# Error envelopes
# -----------------------------
@app.exception_handler(PropertyValidationError)
async def _property_validation_error(request: Request, exc: PropertyValidationError) -> JSONResponse:
    body = ErrorResponse(error=exc.message, fields=exc.fields or None)
    return JSONResponse(status_code=400, content=body.to_content())


@app.exception_handler(RequestValidationError)
async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # malformed / missing JSON body
    body = ErrorResponse(error="Request body must be a JSON object")
    return JSONResponse(status_code=400, content=body.to_content())


@app.exception_handler(StarletteHTTPException)
async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        message = "Endpoint not found"
    else:
        message = str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content=ErrorResponse(error=message).to_content())


@app.exception_handler(Exception)
async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    log_event(logger, "unhandled_error", logging.ERROR, path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content=ErrorResponse(error="Internal server error").to_content())


# -----------------------------
# Endpoints
# -----------------------------
@app.get("/api/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(
        status="OK",
        message="Real Estate Analysis API is running",
        timestamp=iso_timestamp(datetime.now(timezone.utc)),
        version=config.API_VERSION,
    )


@app.post("/api/analyze", response_model=AnalyzeResponse)
def analyze_endpoint(payload: Any = Body(...)) -> AnalyzeResponse:
    """
    Run the full analysis on one property.

    Bad input -> 400 with the offending fields; anything else that breaks
    is a server fault -> 500.
    """
    try:
        result = analyze_property(payload)
    except PropertyValidationError:
        raise
    except Exception as e:
        log_event(logger, "analysis_error", logging.ERROR, exc_info=True, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error during analysis") from e

    return AnalyzeResponse(data=result.to_dict())
