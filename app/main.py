import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy.exc import IntegrityError
from starlette.requests import Request

import app.models  # noqa: F401  registra todas as tabelas
from app.api.v1.router import api_router
from app.core.config import settings
from app.core.exceptions import AchivaError
from app.core.logging import setup_logging
from app.db.bootstrap import run_migrations_and_seed

setup_logging()
logger = logging.getLogger("app")

api = FastAPI(
    title="Achiva - Student Achievement API",
    description="Certificates, projects, faculty verification and public portfolios.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    swagger_ui_parameters={"displayRequestDuration": True, "persistAuthorization": True},
)

api.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# /metrics para o Prometheus
Instrumentator().instrument(api).expose(api, include_in_schema=False, should_gzip=True)

api.include_router(api_router, prefix="/api/v1")

@api.get("/healthz", tags=["health"])
def healthz():
    return {"status": "ok"}

@api.on_event("startup")
def on_startup():
    if not settings.RUN_MIGRATIONS_ON_STARTUP:
        logger.info("startup migrations disabled")
        return
    run_migrations_and_seed()
    logger.info("database migrated and seeded")

# ------------------------- corpo de erro único -------------------------
# {"code", "message", "details"} em todas as respostas de erro

@api.exception_handler(AchivaError)
def handle_domain_error(request: Request, exc: AchivaError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

@api.exception_handler(RequestValidationError)
def handle_request_validation(request: Request, exc: RequestValidationError):
    errors = [{"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()]
    return JSONResponse(
        status_code=422,
        content={"code": "VALIDATION_ERROR", "message": "Invalid data", "details": {"errors": errors}},
    )

@api.exception_handler(IntegrityError)
def handle_integrity_error(request: Request, exc: IntegrityError):
    logger.warning("integrity error", extra={"path": request.url.path})
    return JSONResponse(
        status_code=409,
        content={"code": "UNIQUE_VIOLATION", "message": "Duplicate record.", "details": {"error": str(getattr(exc, "orig", exc))}},
    )

@api.exception_handler(Exception)
def handle_unexpected(request: Request, exc: Exception):
    logger.exception("unhandled error", extra={"path": request.url.path})
    return JSONResponse(
        status_code=500,
        content={"code": "INTERNAL_ERROR", "message": "Internal error.", "details": {}},
    )
