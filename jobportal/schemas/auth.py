"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict

# Fields are optional at the schema level; presence is checked by the auth service
# so a missing field is reported as a 400 with a readable message.


class UserRegister(BaseModel):
    """User registration request."""

    name: str | None = None
    email: str | None = None
    password: str | None = None


class UserLogin(BaseModel):
    """User login request."""

    email: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class RegisterResponse(BaseModel):
    """Registration response."""

    message: str
    user_id: int


class LoginResponse(BaseModel):
    """Login response with token and user info."""

    message: str
    token: str
    user: UserResponse


class TokenClaims(BaseModel):
    """Verified bearer token claims, used as the caller's identity."""

    user_id: int
    email: str
    name: str
    exp: int
