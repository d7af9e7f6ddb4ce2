import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import settings
from .db import SessionLocal, init_db, ensure_settings_row
from .routers import api
from .services.countries import CountriesFetchError
from .services.data_service import (
    BookingConflictError,
    DataServiceError,
    RecordNotFoundError,
    RecordValidationError,
)

# --- Logging configuration ---
_level = logging.DEBUG if getattr(settings, "DEBUG", False) else logging.INFO
logging.basicConfig(
    level=_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
# Align uvicorn loggers with our level (useful under Docker Compose)
for _name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
    logging.getLogger(_name).setLevel(_level)
logger = logging.getLogger("app.startup")
logger.info("Starting %s (DEBUG=%s)", settings.APP_NAME, getattr(settings, "DEBUG", False))

app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    description=(
        f"{settings.APP_NAME}: cabin booking data service.\n\n"
        "Cabins, guests, bookings, settings and cabin availability under /api/v1."
    ),
    openapi_tags=[
        {
            "name": "data-api",
            "description": "JSON access to cabins, guests, bookings and settings.",
        }
    ],
)

@app.on_event("startup")
def startup_event():
    """Creates missing tables and the singleton settings row."""
    logger.info("Running startup tasks...")
    init_db()
    db = SessionLocal()
    try:
        ensure_settings_row(db)
    finally:
        db.close()
    logger.info("Startup tasks complete.")


@app.exception_handler(DataServiceError)
def data_service_error_handler(request: Request, exc: DataServiceError):
    if isinstance(exc, BookingConflictError):
        status_code = 409
    elif isinstance(exc, RecordValidationError):
        status_code = 400
    elif isinstance(exc, RecordNotFoundError):
        status_code = 404
    else:
        status_code = 500
    return JSONResponse({"detail": str(exc)}, status_code=status_code)


@app.exception_handler(CountriesFetchError)
def countries_error_handler(request: Request, exc: CountriesFetchError):
    return JSONResponse({"detail": str(exc)}, status_code=502)


app.include_router(api.router)

@app.get("/healthz")
def healthz():
    return {"status": "ok"}
