import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import CORS_ORIGINS
from .domain.bookings import router as bookings_router
from .domain.bookings.registry import WorkflowRegistry
from .domain.catalog import router as catalog_router
from .domain.dashboard import router as dashboard_router
from .domain.technicians import router as technicians_router
from .firebase import get_firestore_client
from .routes import auth_router
from .store import DocumentStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("google").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    # A store set before startup (tests, embedding) is kept
    if getattr(app.state, "store", None) is None:
        try:
            app.state.store = DocumentStore(get_firestore_client())
            logger.info("Firestore client ready")
        except Exception as e:
            logger.error(f"Failed to initialize Firestore: {e}")
            raise
    if getattr(app.state, "workflows", None) is None:
        app.state.workflows = WorkflowRegistry()

    try:
        from .rate_limiter import get_redis_client

        if get_redis_client() is None:
            logger.info("Login rate limiting will count in memory only")
    except Exception as e:
        logger.warning(f"Redis check failed - rate limiting falls back to memory: {e}")

    yield

    logger.info("Application shutting down...")
    app.state.workflows.close_all()


app = FastAPI(title="Booking Admin API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Convert 422 validation errors from HTTPBearer to 401 authentication errors
    when the issue is with the Authorization header
    """
    for error in exc.errors():
        if error.get("loc") and "authorization" in str(error.get("loc")).lower():
            logger.warning(
                f"Authentication failed for {request.url.path}: Missing or invalid Authorization header"
            )
            return JSONResponse(
                status_code=401,
                content={
                    "detail": "Not authenticated. Please provide a valid Bearer token in the Authorization header."
                },
            )

    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": exc.errors()})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


logger.info(f"CORS allowed origins: {CORS_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(auth_router)
app.include_router(dashboard_router)
app.include_router(bookings_router)
app.include_router(technicians_router)
app.include_router(catalog_router)


@app.get("/")
def root():
    return {"message": "Booking Admin API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
