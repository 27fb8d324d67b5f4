# kerbside/main.py
"""
FastAPI application entry point.
Includes CORS, request timing, the global error handler and all routers.

Run: uvicorn kerbside.main:app --host 0.0.0.0 --port $PORT
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from kerbside.routers import health, predict, sensor_data, street
from kerbside.config import settings
from kerbside.services.reference_store import load_datasets
from kerbside.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="Melbourne Parking Availability API",
    description="On-street parking availability from zone restrictions, time-of-day patterns and live bay sensors.",
    version="3.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (public read-only API, any origin) ──────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Global Exception Handler ─────────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"status": "error", "detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(health.router,                     tags=["💚 Health"])
app.include_router(street.router,      prefix="/api", tags=["🅿️  Street Search"])
app.include_router(predict.router,     prefix="/api", tags=["📈 Prediction"])
app.include_router(sensor_data.router, prefix="/api", tags=["📡 Sensor Data"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("🚀 Melbourne Parking API starting up...")
    datasets = load_datasets()
    logger.info(f"📂 Reference datasets in {settings.DATA_DIR}: {sorted(datasets) or 'none'}")
    logger.info(f"🧮 Estimation strategy: {settings.ESTIMATION_STRATEGY}")
    logger.info(f"📡 Sensor feed: {settings.SENSOR_FEED_URL} (cache {settings.SENSOR_CACHE_TTL_SECONDS:.0f}s)")
    logger.info(f"🌐 Listening on http://{settings.BACKEND_IP}:{settings.PORT}")
    logger.info("📖 API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("🛑 Melbourne Parking API shutting down...")
