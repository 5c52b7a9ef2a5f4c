from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from flightwatch.api import health, users, searches, prices, alerts
from flightwatch.config import get_settings
from flightwatch.database import init_db
from flightwatch.exceptions import (
    FlightwatchError,
    NotFound,
    InvalidTemporalRange,
    Inactive,
    ReferentialViolation,
    UniquenessViolation,
)

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    NotFound: 404,
    InvalidTemporalRange: 422,
    Inactive: 409,
    ReferentialViolation: 409,
    UniquenessViolation: 409,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Flightwatch")

    if settings.database_url.startswith("sqlite"):
        logger.info("SQLite detected - creating tables if needed")
        init_db()

    yield

    logger.info("Shutting down Flightwatch")


def setup_error_handlers(app: FastAPI) -> None:
    """Turn domain errors into JSON responses with a stable error name."""

    @app.exception_handler(FlightwatchError)
    async def flightwatch_error_handler(request: Request, exc: FlightwatchError) -> JSONResponse:
        status_code = next(
            (code for cls, code in ERROR_STATUS_CODES.items() if isinstance(exc, cls)),
            400,
        )
        logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content={"detail": exc.message, "error": type(exc).__name__},
        )


app = FastAPI(
    title="Flightwatch",
    description="Flight price monitor: searches, price history and alerts",
    version="0.1.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH"],
    allow_headers=["*"],
)

setup_error_handlers(app)

app.include_router(health.router, tags=["health"])
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(searches.router, prefix="/api/searches", tags=["searches"])
app.include_router(prices.router, prefix="/api", tags=["prices"])
app.include_router(alerts.router, prefix="/api/alerts", tags=["alerts"])
