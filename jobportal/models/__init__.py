"""SQLAlchemy models."""

from jobportal.models.portal import Portal
from jobportal.models.user import User

__all__ = [
    "User",
    "Portal",
]
