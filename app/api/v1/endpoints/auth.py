from fastapi import APIRouter, Depends, status
from app.api.deps import get_auth_service, get_current_user
from app.schemas.auth import (
    CurrentUserResponse,
    LoginRequest,
    LoginResponse,
    Principal,
    SignupRequest,
    SignupResponse,
)
from app.services.auth_service import AuthService

router = APIRouter()

@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    return await service.login(credentials.email, credentials.password)

@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    signup_in: SignupRequest,
    service: AuthService = Depends(get_auth_service),
):
    """
    Register a user. Business owners also get a default business row.
    """
    return await service.signup(
        signup_in.email, signup_in.password, name=signup_in.name, role=signup_in.role
    )

@router.get("/me", response_model=CurrentUserResponse)
async def get_me(
    current_user: Principal = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    return await service.current_user(current_user)
