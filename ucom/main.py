import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from ucom.config import settings
from ucom.core.exceptions import (
    UnauthorizedException,
    NotFoundException,
    ValidationException,
    ConflictException,
    TenantIsolationError,
    LineageViolationError,
)
from ucom.core.logging import configure_logging, get_logger
from ucom.routes import brand_routes, location_routes, org_routes

configure_logging()
logger = get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,  # Disable in production
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS middleware
cors_origins = settings.cors_origins_list
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def clear_log_context(request: Request, call_next):
    # tenant_id is bound per request by get_tenant_context
    structlog.contextvars.clear_contextvars()
    return await call_next(request)


# Exception handlers
@app.exception_handler(UnauthorizedException)
async def unauthorized_exception_handler(request: Request, exc: UnauthorizedException):
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(NotFoundException)
async def not_found_exception_handler(request: Request, exc: NotFoundException):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(ValidationException)
async def validation_exception_handler(request: Request, exc: ValidationException):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.exception_handler(ConflictException)
async def conflict_exception_handler(request: Request, exc: ConflictException):
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Conflicts with an existing record"},
    )


@app.exception_handler(TenantIsolationError)
async def tenant_isolation_exception_handler(request: Request, exc: TenantIsolationError):
    logger.warning("tenant_isolation_violation", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"detail": "Write rejected by tenant isolation policy"},
    )


@app.exception_handler(LineageViolationError)
async def lineage_exception_handler(request: Request, exc: LineageViolationError):
    logger.warning("tenant_lineage_violation", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Parent record does not belong to this tenant"},
    )


# Health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": settings.APP_VERSION}


# Root endpoint
@app.get("/")
async def root():
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs" if settings.DEBUG else "Documentation disabled in production",
    }


# Include routers
app.include_router(org_routes.router, prefix="/api/orgs", tags=["Orgs"])
app.include_router(brand_routes.router, prefix="/api/brands", tags=["Brands"])
app.include_router(location_routes.router, prefix="/api/locations", tags=["Locations"])
