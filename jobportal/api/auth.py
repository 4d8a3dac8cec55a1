"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobportal.database import get_db
from jobportal.schemas.auth import (
    LoginResponse,
    RegisterResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from jobportal.services.auth import authenticate_user, register_user

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user."""
    user_id = register_user(db, user_data.name, user_data.email, user_data.password)
    return RegisterResponse(message="User registered successfully", user_id=user_id)


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    token, user = authenticate_user(db, credentials.email, credentials.password)

    return LoginResponse(
        message="Login successful",
        token=token,
        user=UserResponse.model_validate(user),
    )
