"""
Signup and signin endpoints.
"""

from fastapi import APIRouter, status

from gadgetops.api.deps import DbSession
from gadgetops.kernel.identity.identity_service import IdentityService
from gadgetops.schemas.auth import (
    SigninRequest,
    SigninResponse,
    SignupRequest,
    SignupResponse,
    UserResponse,
)

router = APIRouter()


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(data: SignupRequest, db: DbSession):
    """
    Register a new user with role BASIC or ADMIN.

    Fails with 400 on an unknown role or a taken username.
    """
    user = await IdentityService(db).signup(
        username=data.username,
        password=data.password,
        role=data.role,
    )
    return SignupResponse(user=UserResponse.model_validate(user))


@router.post("/signin", response_model=SigninResponse)
async def signin(data: SigninRequest, db: DbSession):
    """Exchange username and password for a one-hour session token."""
    _, token = await IdentityService(db).signin(
        username=data.username,
        password=data.password,
    )
    return SigninResponse(token=token)
