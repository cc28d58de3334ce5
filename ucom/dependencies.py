import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from ucom.core.exceptions import UnauthorizedException
from ucom.core.security import decode_jwt, extract_tenant_id
from ucom.database import SessionLocal, get_engine
from ucom.db.tenant_session import bind_tenant
from ucom.models.tenant_context import TenantContext

security = HTTPBearer(auto_error=False)


async def get_tenant_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> TenantContext:
    """
    FastAPI dependency to validate JWT and build the tenant context.

    Flow:
    1. Extract token from Authorization: Bearer <token>
    2. Validate JWT using shared SECRET_KEY
    3. Extract 'sub' and 'tenant_id' claims
    4. Bind tenant_id to the log context and return TenantContext

    Raises:
        HTTPException 401: If token missing, invalid, expired, or lacks a tenant
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_jwt(credentials.credentials)
        context = TenantContext(tenant_id=extract_tenant_id(payload), subject=payload["sub"])
    except UnauthorizedException as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Bound here, in the request task, so endpoints and exception handlers see it
    structlog.contextvars.bind_contextvars(tenant_id=str(context.tenant_id))
    return context


def get_tenant_db(context: TenantContext = Depends(get_tenant_context)) -> Session:
    """
    FastAPI dependency for tenant-scoped database sessions.

    The session is bound to the request's tenant before it is handed out, so
    the tenant setting is the first statement of every transaction it runs.
    """
    db = SessionLocal(bind=get_engine())
    try:
        bind_tenant(db, context.tenant_id)
        yield db
    finally:
        db.close()
