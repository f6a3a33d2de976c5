from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import asyncio
from datetime import datetime
import logging
import os
from dotenv import load_dotenv

from .routes import drone, media
from .dependencies import BATTERY_AUDIT_INTERVAL, build_battery_audit_service
from .schemas.models import BaseResponse
from src.database.connection import check_db_connection, get_db, init_db
from src.services.exceptions import DronesApiError, ValidationFailed
from src.services.validation import RequestValidator

# Load environment variables
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Drones API",
    description="API for registering drones and loading them with medications",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(drone.router, prefix="/drones", tags=["drones"])
app.include_router(media.router, prefix="/media", tags=["media"])

request_validator = RequestValidator()

def _error_response(status_code: int, message: str, data=None) -> JSONResponse:
    envelope = BaseResponse(response_code=status_code, response_message=message, data=data)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(envelope.model_dump(by_alias=True))
    )

@app.exception_handler(ValidationFailed)
async def validation_failed_handler(request: Request, exc: ValidationFailed):
    logger.info(
        f"{request.method} {request.url.path} rejected: "
        + "; ".join(v.message for v in exc.violations)
    )
    return _error_response(exc.status_code, exc.message, [v.model_dump() for v in exc.violations])

@app.exception_handler(DronesApiError)
async def drones_api_error_handler(request: Request, exc: DronesApiError):
    logger.info(f"{request.method} {request.url.path} failed: {exc.message}")
    return _error_response(exc.status_code, exc.message)

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    failure = ValidationFailed(request_validator.violations(exc.errors()))
    return await validation_failed_handler(request, failure)

def run_battery_audit() -> int:
    """One sweep over the fleet in its own session."""
    with get_db() as db:
        return build_battery_audit_service(db).audit_fleet()

# Background task to audit fleet battery levels
async def audit_battery_levels():
    while True:
        await asyncio.sleep(BATTERY_AUDIT_INTERVAL)
        try:
            # Blocking database work stays off the event loop
            await asyncio.to_thread(run_battery_audit)
        except Exception:
            logger.exception("Battery audit failed")

@app.on_event("startup")
async def startup_event():
    # Initialize database
    init_db()
    # Start background task
    if BATTERY_AUDIT_INTERVAL > 0:
        app.state.battery_audit_task = asyncio.create_task(audit_battery_levels())

@app.on_event("shutdown")
async def shutdown_event():
    task = getattr(app.state, "battery_audit_task", None)
    if task:
        task.cancel()

@app.get("/health")
async def health_check():
    database_ok = check_db_connection()
    return {
        "status": "healthy" if database_ok else "degraded",
        "database": "up" if database_ok else "down",
        "timestamp": datetime.utcnow(),
        "version": "1.0.0"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "src.api.main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", 8000)),
        reload=True
    )
