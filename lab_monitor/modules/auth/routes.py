from fastapi import APIRouter, Depends
from lab_monitor.config.roles_config import ROLES
from lab_monitor.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse, MeResponse
)
from lab_monitor.modules.auth.service import AuthService
from lab_monitor.modules.profiles.schemas import ProfileResponse
from lab_monitor.core.dependencies import (
    get_auth_service, get_current_token, get_current_user, get_current_profile
)
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new student or lecturer"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate the session"""
    service.logout(token)
    return {"message": "Signed out successfully"}


@router.get("/me", response_model=MeResponse)
def get_me(
    current_user: Dict = Depends(get_current_user),
    profile: ProfileResponse = Depends(get_current_profile)
):
    """Get the authenticated user, their profile and the dashboard their role renders"""
    return MeResponse(
        id=current_user["id"],
        email=current_user.get("email"),
        user_metadata=current_user.get("user_metadata") or {},
        profile=profile,
        dashboard=ROLES[profile.role]["dashboard"],
    )
