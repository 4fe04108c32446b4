from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from botocore.exceptions import ClientError
from contextlib import asynccontextmanager
import logging
import random
import string
import time

from storefront.config import settings
from storefront.api import auth, categories, enquiries, health, images, notifications, products, testimonials
from storefront.api.responses import error_response, format_validation_errors, validation_message
from storefront.exceptions import AppError, DatabaseError

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def new_request_id() -> str:
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"req_{int(time.time() * 1000)}_{suffix}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Starting {settings.app_name} ({settings.environment})...")
    logger.info(f"Region: {settings.aws_region}, image bucket: {settings.bucket_name}")
    if not settings.admin_token:
        logger.warning("ADMIN_TOKEN is not set; admin endpoints will answer 500")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}...")


app = FastAPI(
    title="Kalakala Corner Storefront API",
    description="""
    Catalogue backend for the Kalakala Corner storefront.

    **Features:**
    - Product browsing and administration with S3-hosted images
    - Category management with cascading renames and deletes
    - Customer testimonials
    - Customer enquiries with email/SMS alerts
    - Downloadable catalogue (JSON or PDF)

    **Authentication:**
    Admin endpoints accept the session token issued by `POST /api/login`,
    either as the `auth_token` cookie or in the Authorization header:
    ```
    Authorization: Bearer <token>
    ```
    """,
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# Credentialed CORS needs a concrete origin; "*" is echoed back per request instead
app.add_middleware(
    CORSMiddleware,
    allow_origins=[] if settings.cors_origin == "*" else [o.strip() for o in settings.cors_origin.split(",")],
    allow_origin_regex=".*" if settings.cors_origin == "*" else None,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept", "Origin", "X-Requested-With"],
    expose_headers=[REQUEST_ID_HEADER],
    max_age=3600,
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Tag each request with an id and log method, path, status and duration"""
    request_id = new_request_id()
    request.state.request_id = request_id
    started = time.perf_counter()
    logger.info(f"[{request_id}] {request.method} {request.url.path}")

    response = await call_next(request)

    duration_ms = (time.perf_counter() - started) * 1000
    logger.info(f"[{request_id}] {request.method} {request.url.path} -> {response.status_code} ({duration_ms:.0f}ms)")
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def custom_openapi():
    """Custom OpenAPI schema with JWT Bearer and cookie authentication"""
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": "Token from POST /api/login. Format: Bearer <token>"
        },
        "CookieAuth": {
            "type": "apiKey",
            "in": "cookie",
            "name": "auth_token",
            "description": "Session cookie set by POST /api/login"
        }
    }

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Render application errors as the error envelope"""
    if exc.status_code >= 500:
        logger.error(f"{exc.code}: {exc.message} ({request.method} {request.url.path})")
    else:
        logger.warning(f"{exc.code}: {exc.message} ({request.method} {request.url.path})")
    return error_response(exc.status_code, exc.code, exc.message, exc.details)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return error_response(404, "NOT_FOUND", f"Route {request.method} {request.url.path} not found")
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return error_response(405, "METHOD_NOT_ALLOWED", f"Method {request.method} not allowed for {request.url.path}")
    return error_response(exc.status_code, "HTTP_ERROR", str(exc.detail), headers=getattr(exc, "headers", None))


# Validation error handler
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors"""
    details = format_validation_errors(exc.errors())
    logger.warning(f"Validation error on {request.method} {request.url.path}: {details}")
    return error_response(status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", validation_message(details), details)


@app.exception_handler(ClientError)
async def aws_client_error_handler(request: Request, exc: ClientError):
    """AWS SDK failures that services logged and re-raised"""
    error = DatabaseError(
        "AWS request failed",
        details={"code": exc.response.get("Error", {}).get("Code")} if settings.enable_detailed_errors else None,
    )
    return error_response(error.status_code, error.code, error.message, error.details)


# Global exception handler for unhandled exceptions
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions and log them properly"""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
        }
    )
    details = {"type": type(exc).__name__} if settings.enable_detailed_errors else None
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_SERVER_ERROR", "Internal server error", details)


# Include routers
app.include_router(health.router)
app.include_router(products.router)
app.include_router(categories.router)
app.include_router(images.router)
app.include_router(testimonials.router)
app.include_router(enquiries.router)
app.include_router(auth.router)
app.include_router(notifications.router)


@app.get("/")
async def root():
    return {
        "message": "Kalakala Corner Storefront API",
        "version": settings.version,
        "environment": settings.environment,
    }
