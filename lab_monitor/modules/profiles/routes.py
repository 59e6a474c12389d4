from fastapi import APIRouter, Depends
from lab_monitor.modules.profiles.schemas import ProfileUpdate, ProfileRoleUpdate, ProfileResponse
from lab_monitor.modules.profiles.service import ProfileService
from lab_monitor.core.dependencies import get_current_profile, get_user_supabase, require_role
from supabase import Client
from typing import List

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_user_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(profile: ProfileResponse = Depends(get_current_profile)):
    """Get the caller's profile"""
    return profile


@router.put("/me", response_model=ProfileResponse)
def update_my_profile(
    profile_data: ProfileUpdate,
    profile: ProfileResponse = Depends(get_current_profile),
    service: ProfileService = Depends(get_profile_service)
):
    """Update the caller's profile"""
    return service.update_profile(profile.id, profile_data)


@router.get("", response_model=List[ProfileResponse])
def list_profiles(
    profile: ProfileResponse = Depends(require_role("admin")),
    service: ProfileService = Depends(get_profile_service)
):
    """List all profiles (admin)"""
    return service.list_profiles()


@router.put("/{user_id}/role", response_model=ProfileResponse)
def set_profile_role(
    user_id: str,
    role_data: ProfileRoleUpdate,
    profile: ProfileResponse = Depends(require_role("admin")),
    service: ProfileService = Depends(get_profile_service)
):
    """Change a user's role (admin)"""
    return service.set_role(user_id, role_data.role)
