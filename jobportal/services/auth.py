"""Authentication service for JWT and password handling."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from jose.utils import base64url_decode, base64url_encode
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobportal.config import get_settings
from jobportal.errors import AuthError, ConflictError, ValidationError
from jobportal.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def issue_token(user_id: int, email: str, name: str, now: datetime | None = None) -> str:
    """Create a signed access token carrying the user's identity.

    The token is ``header.payload.signature``, each segment base64url-encoded
    without padding, signed with HMAC-SHA256 over ``header.payload``.
    """
    issued_at = now or datetime.now(UTC)
    expire = issued_at + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "user_id": user_id,
        "email": email,
        "name": name,
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def _is_canonical_segment(segment: str) -> bool:
    # base64 decoding ignores trailing bits, so several spellings of the last
    # character decode to the same signature; only the canonical one is accepted
    try:
        raw = segment.encode("ascii")
        return base64url_encode(base64url_decode(raw)) == raw
    except (UnicodeEncodeError, ValueError):
        return False


def verify_token(token: str) -> dict | None:
    """Decode and validate an access token.

    Returns the claims, or ``None`` when the token is malformed, its signature
    does not match, or it has expired. Never raises.
    """
    if token.count(".") != 2:
        return None
    if not _is_canonical_segment(token.rsplit(".", 1)[1]):
        return None
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require_exp": True},
        )
    except JWTError as e:
        logger.warning(f"Rejected token: {e}")
        return None
    if payload.get("user_id") is None:
        return None
    return payload


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def register_user(db: Session, name: str | None, email: str | None, password: str | None) -> int:
    """Create a new user and return its id."""
    if not name or not email or not password:
        raise ValidationError("Email, password, and name are required")

    if get_user_by_email(db, email):
        raise ConflictError("User already exists")

    user = User(name=name, email=email, password_hash=get_password_hash(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        db.rollback()
        raise ConflictError("User already exists") from None
    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user.id


def authenticate_user(db: Session, email: str | None, password: str | None) -> tuple[str, User]:
    """Authenticate a user by email and password and issue a token.

    An unknown email and a wrong password fail with the same error.
    """
    if not email or not password:
        raise ValidationError("Email and password are required")

    user = get_user_by_email(db, email)
    if not user:
        # Spend the same hashing time as a real check
        pwd_context.dummy_verify()
        logger.warning("Failed login for unknown email")
        raise AuthError("Invalid credentials")
    if not verify_password(password, user.password_hash):
        logger.warning(f"Failed login for user {user.id}")
        raise AuthError("Invalid credentials")

    token = issue_token(user.id, user.email, user.name)
    logger.info(f"User {user.id} logged in")
    return token, user
