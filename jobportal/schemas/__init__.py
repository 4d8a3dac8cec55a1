"""Pydantic schemas for API requests and responses."""

from jobportal.schemas.auth import (
    LoginResponse,
    RegisterResponse,
    TokenClaims,
    UserLogin,
    UserRegister,
    UserResponse,
)
from jobportal.schemas.portal import (
    MessageResponse,
    PortalCreate,
    PortalCreated,
    PortalResponse,
    PortalUpdate,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "RegisterResponse",
    "LoginResponse",
    "TokenClaims",
    "PortalCreate",
    "PortalUpdate",
    "PortalResponse",
    "PortalCreated",
    "MessageResponse",
]
