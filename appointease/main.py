import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

# Import models so every table is registered with Base before create_all
from . import models  # noqa: F401
from .config import ALLOWED_ORIGINS, SECURITY_HEADERS_ENABLED
from .database import Base, engine
from .domain.appointments.router import router as appointments_router
from .domain.auth.router import router as auth_router
from .domain.employees.router import router as employees_router
from .domain.providers.router import router as providers_router
from .domain.services.router import router as services_router
from .domain.users.router import router as users_router
from .errors import AppointEaseError, StorageError, Unauthenticated, ValidationError
from .security_headers import SecurityHeadersMiddleware

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except SQLAlchemyError as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")
            raise

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="AppointEase API", version="1.0.0", lifespan=lifespan)


def _error_response(error: AppointEaseError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(AppointEaseError)
async def domain_exception_handler(request: Request, exc: AppointEaseError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} - {exc.kind}: {exc.message}")
        return _error_response(StorageError())
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Report malformed requests as 400 ValidationError, except problems with the
    Authorization header which are authentication failures
    """
    errors = exc.errors()
    for error in errors:
        if error.get("loc") and "authorization" in str(error.get("loc")).lower():
            logger.warning(
                f"Authentication failed for {request.url.path}: Missing or invalid Authorization header"
            )
            return _error_response(
                Unauthenticated(
                    "Not authenticated. Please provide a valid Bearer token in the Authorization header."
                )
            )

    logger.warning(f"Validation error for {request.url.path}: {errors}")
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return _error_response(ValidationError(f"{field}: {message}" if field else message))


@app.exception_handler(SQLAlchemyError)
async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"❌ Storage failure on {request.method} {request.url.path}: {exc}")
    return _error_response(StorageError())


if SECURITY_HEADERS_ENABLED:
    app.add_middleware(SecurityHeadersMiddleware, exclude_paths=["/docs", "/openapi.json"])
    logger.info("Security headers enabled")
else:
    logger.warning("Security headers DISABLED - only use in development!")

logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Routes
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(providers_router)
app.include_router(services_router)
app.include_router(employees_router)
app.include_router(appointments_router)


@app.get("/")
def root():
    return {"status": "ok", "service": "AppointEase API"}


@app.get("/health")
def health():
    return {"status": "healthy"}
