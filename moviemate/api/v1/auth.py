"""
Authentication endpoints.
"""

from fastapi import APIRouter, HTTPException, status

from moviemate.api.deps import CurrentIdentity, Identities
from moviemate.kernel.identity.errors import MismatchFailure
from moviemate.schemas.auth import (
    AuthResponse,
    ProfileResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)
from moviemate.schemas.common import ErrorResponse

router = APIRouter()


@router.post(
    "/auth/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def register(data: UserCreate, identities: Identities):
    """
    Register a new user account.

    Returns a session token on successful registration.
    """
    try:
        user, token = await identities.register_user(
            username=data.username,
            email=data.email,
            password=data.password,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return AuthResponse(
        token=token,
        user=UserResponse.model_validate(user),
        message="User registered successfully",
    )


@router.post("/auth/login", response_model=AuthResponse, responses={401: {"model": ErrorResponse}})
async def login(data: UserLogin, identities: Identities):
    """Authenticate user and return a session token."""
    try:
        user, token = await identities.authenticate(
            username=data.username,
            password=data.password,
        )
    except MismatchFailure:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    return AuthResponse(
        token=token,
        user=UserResponse.model_validate(user),
        message="Login successful",
    )


@router.get("/profile", response_model=ProfileResponse, responses={401: {"model": ErrorResponse}})
async def get_profile(identity: CurrentIdentity, identities: Identities):
    """Get current user's profile."""
    user = await identities.get_user_by_id(identity.user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return ProfileResponse(user=UserResponse.model_validate(user))
