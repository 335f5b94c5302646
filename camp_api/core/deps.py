"""FastAPI dependencies for authentication, authorization, and database access."""

from typing import Generator
from uuid import UUID

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from camp_api.core.config import settings
from camp_api.core.rate_limit import RateLimiter
from camp_api.core.security import decode_session_token
from camp_api.db.session import SessionLocal


# Cookie and header names
COOKIE_NAME = "camp_session"
CSRF_HEADER = "X-Requested-With"
CSRF_HEADER_VALUE = "XMLHttpRequest"

UNKNOWN_CLIENT = "unknown"


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Get authenticated staff user from session cookie.

    Validates:
    - Session cookie exists
    - JWT is valid and not expired
    - User exists and is active
    - Token version matches (for revocation support)

    Raises:
        HTTPException 401: Authentication failed
    """
    # Import here to avoid circular imports
    from camp_api.db.models import User

    token = request.cookies.get(COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        payload = decode_session_token(token)
    except Exception:
        raise HTTPException(status_code=401, detail="Invalid session")

    user = db.query(User).filter(User.id == _parse_uuid(payload.get("sub"))).first()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    if not user.is_active:
        raise HTTPException(status_code=401, detail="Account disabled")

    # Token version check (revocation support)
    if user.token_version != payload.get("token_version"):
        raise HTTPException(status_code=401, detail="Session revoked")

    return user


def require_admin(user=Depends(get_current_user)):
    """
    Admin-only guard.

    The admin flag is read from the database, not the token, so a demotion
    takes effect on the next request.

    Raises:
        HTTPException 403: Authenticated but not an admin
    """
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Forbidden")
    return user


def require_csrf_header(request: Request) -> None:
    """
    Verify CSRF header on mutations.

    Apply to state-changing endpoints (POST, PUT, DELETE).

    Raises:
        HTTPException 403: Missing or invalid CSRF header
    """
    if request.headers.get(CSRF_HEADER) != CSRF_HEADER_VALUE:
        raise HTTPException(
            status_code=403,
            detail=f"Missing CSRF header. Include '{CSRF_HEADER}: {CSRF_HEADER_VALUE}'"
        )


def get_client_ip(request: Request) -> str:
    """
    Source key for rate limiting.

    Only trusts X-Forwarded-For / X-Real-IP when TRUST_PROXY_HEADERS=True
    (behind nginx/Cloudflare).
    """
    if settings.TRUST_PROXY_HEADERS:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            # X-Forwarded-For: client, proxy1, proxy2 - take first
            first = forwarded.split(",")[0].strip()
            if first:
                return first
        real_ip = request.headers.get("x-real-ip")
        if real_ip and real_ip.strip():
            return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host

    return UNKNOWN_CLIENT


def get_application_limiter(request: Request) -> RateLimiter:
    """Limiter guarding public application submissions."""
    return request.app.state.application_limiter


def get_click_limiter(request: Request) -> RateLimiter:
    """Limiter guarding public click tracking."""
    return request.app.state.click_limiter


def _parse_uuid(value) -> UUID:
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid session")
