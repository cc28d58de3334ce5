from uuid import UUID

from jose import JWTError, jwt

from ucom.config import settings
from ucom.core.exceptions import UnauthorizedException


def decode_jwt(token: str) -> dict:
    """
    Decode and validate JWT token using shared SECRET_KEY.

    Args:
        token: JWT access token from Authorization header

    Returns:
        Decoded token payload with 'sub', 'tenant_id', 'exp', etc.

    Raises:
        UnauthorizedException: If token invalid, expired, or malformed
    """
    if not settings.SECRET_KEY:
        raise UnauthorizedException("Token validation is not configured")

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])
    except JWTError as e:
        raise UnauthorizedException(f"Invalid token: {str(e)}")

    # jose checks expiry when present, but does not require the claim
    if payload.get("exp") is None:
        raise UnauthorizedException("Token missing expiration")

    if payload.get("sub") is None:
        raise UnauthorizedException("Token missing user identifier")

    return payload


def extract_tenant_id(payload: dict) -> UUID:
    """Extract the tenant UUID from a decoded token payload"""
    raw = payload.get("tenant_id")
    if raw is None:
        raise UnauthorizedException("Token missing tenant identifier")
    try:
        return UUID(str(raw))
    except ValueError:
        raise UnauthorizedException("Token tenant identifier is not a valid UUID")
