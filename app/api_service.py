from __future__ import annotations

import logging
import os

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dea.submission import FormNotSubmittable
from ops.structured_logger import setup_logging
from utils.request_context import clear_request_id, resolve_request_id, set_request_id

from app.routers.forms import router as forms_router
from app.routers.health import router as health_router
from app.routers.identifiers import router as identifiers_router

setup_logging()

app = FastAPI(title="Controlled Substance Compliance API", version="1.0.0")
log = logging.getLogger("compliance.api")


def _get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or request.headers.get("x-request-id") or ""


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    rid = resolve_request_id(request.headers.get("x-request-id"))
    request.state.request_id = rid
    set_request_id(rid)
    try:
        response = await call_next(request)
    finally:
        clear_request_id()
    response.headers["X-Request-Id"] = rid
    return response


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    rid = _get_request_id(request)
    log.warning(
        "http_exception",
        extra={
            "extra": {
                "event": "http_exception",
                "status_code": exc.status_code,
                "detail": exc.detail,
                "path": request.url.path,
                "method": request.method,
                "request_id": rid,
            }
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "request_id": rid, "revision": os.getenv("K_REVISION") or ""},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    rid = _get_request_id(request)
    log.warning(
        "validation_error",
        extra={
            "extra": {
                "event": "validation_error",
                "path": request.url.path,
                "method": request.method,
                "request_id": rid,
            }
        },
    )
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_errors(exc), "request_id": rid, "revision": os.getenv("K_REVISION") or ""},
    )


def jsonable_errors(exc: RequestValidationError):
    # ctx may hold exception instances that json cannot encode.
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]


@app.exception_handler(FormNotSubmittable)
async def form_not_submittable_handler(request: Request, exc: FormNotSubmittable):
    rid = _get_request_id(request)
    log.warning(
        "form_not_submittable",
        extra={
            "extra": {
                "event": "form_not_submittable",
                "form_id": exc.form_id,
                "violations": len(exc.violations),
                "path": request.url.path,
                "request_id": rid,
            }
        },
    )
    return JSONResponse(
        status_code=422,
        content={"detail": "form_not_submittable", "form_id": exc.form_id, "violations": exc.violations, "request_id": rid},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    rid = _get_request_id(request)
    log.error(
        "internal_unhandled_exception",
        extra={
            "extra": {
                "event": "internal_unhandled_exception",
                "error_type": type(exc).__name__,
                "message": str(exc),
                "path": request.url.path,
                "method": request.method,
                "request_id": rid,
            }
        },
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"error": "internal_unhandled_exception", "request_id": rid, "revision": os.getenv("K_REVISION") or ""},
    )


# The returns portal calls these endpoints straight from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(health_router, tags=["health"])
app.include_router(identifiers_router, prefix="/api", tags=["identifiers"])
app.include_router(forms_router, prefix="/api", tags=["forms"])
