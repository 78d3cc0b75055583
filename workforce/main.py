from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CollectorRegistry
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .db import create_store
from .logging import setup_logging, RequestIdMiddleware
from .storage.provider import StorageProvider
from .auth.router import router as auth_router
from .routes.users import router as users_router
from .routes.workers import router as workers_router
from .routes.jobs import router as jobs_router
from .routes.job_reports import router as job_reports_router
from .routes.activities import router as activities_router
from .routes.time_tracking import router as time_tracking_router
from .routes.dashboard import router as dashboard_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = app.state.store
    structlog.get_logger().info(
        "startup",
        app_name=settings.app_name,
        environment=settings.environment,
        users=len(store.list_users()),
        jobs=len(store.get_all_jobs()),
    )
    yield
    structlog.get_logger().info("shutdown")


def create_app(store: Optional[StorageProvider] = None) -> FastAPI:
    setup_logging()
    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    # The store is owned by the app; tests inject their own
    app.state.store = store if store is not None else create_store(seed=settings.seed_demo_data)

    # Middlewares
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse({"message": exc.detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None))

    # Must stay sync: SlowAPIMiddleware calls it without awaiting for sync endpoints
    @app.exception_handler(RateLimitExceeded)
    def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        structlog.get_logger().info("rate_limited", path=request.url.path, limit=str(exc.detail))
        return JSONResponse({"message": "Too many requests"}, status_code=429)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        structlog.get_logger().info("request_invalid", path=request.url.path, errors=len(exc.errors()))
        return JSONResponse({"message": "Invalid request data"}, status_code=400)

    # Routers
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(workers_router)
    app.include_router(jobs_router)
    app.include_router(job_reports_router)
    app.include_router(activities_router)
    app.include_router(time_tracking_router)
    app.include_router(dashboard_router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # Metrics (own registry so several apps can live in one process)
    Instrumentator(registry=CollectorRegistry()).instrument(app).expose(app)

    return app


app = create_app()
