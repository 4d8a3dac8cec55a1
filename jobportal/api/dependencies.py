"""FastAPI dependencies for authentication and storage."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from jobportal.database import get_db
from jobportal.errors import AuthError
from jobportal.schemas.auth import TokenClaims
from jobportal.services.auth import verify_token
from jobportal.services.portal_store import PortalStore

# auto_error is off so a missing header is reported as a 401, not a 403
security = HTTPBearer(auto_error=False)


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> TokenClaims:
    """Get the caller's identity from the bearer token. No database lookup."""
    if credentials is None or not credentials.credentials:
        raise AuthError("Authorization token required")

    payload = verify_token(credentials.credentials)
    if payload is None:
        raise AuthError("Invalid or expired token")

    return TokenClaims.model_validate(payload)


def get_portal_store(
    db: Annotated[Session, Depends(get_db)],
) -> PortalStore:
    """Get portal store bound to the request's session."""
    return PortalStore(db)
