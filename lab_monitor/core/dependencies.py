"""
Core dependencies for token resolution and role-gated views.

Table calls are made with a client authenticated as the caller, so the
backend's row-level security policies decide what is readable and writable.
The role checks here only pick which dashboard and actions a caller is shown.
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from lab_monitor.database.supabase_client import SupabaseClient, get_supabase
from lab_monitor.modules.auth.service import AuthService
from lab_monitor.modules.profiles.schemas import ProfileResponse
from lab_monitor.modules.profiles.service import ProfileService
from supabase import Client
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Dict[str, Any]:
    """Resolve the token into the Supabase Auth user"""
    return auth_service.get_current_user(token)


def get_user_supabase(
    token: str = Depends(get_current_token),
    user_data: Dict[str, Any] = Depends(get_current_user)
) -> Client:
    """Supabase client acting as the caller"""
    return SupabaseClient.for_user(token)


def get_current_profile(
    user_data: Dict[str, Any] = Depends(get_current_user),
    supabase: Client = Depends(get_user_supabase)
) -> ProfileResponse:
    """Load the caller's profile, which carries their role"""
    try:
        return ProfileService(supabase).get_profile(user_data["id"])
    except HTTPException as e:
        logger.error(f"Error fetching user role for {user_data['id']}: {e.detail}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Failed to load user profile"
        )


def require_role(*roles: str):
    """Factory function to create a role check dependency"""
    def check_role(
        profile: ProfileResponse = Depends(get_current_profile)
    ) -> ProfileResponse:
        if profile.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"This view is only available to: {', '.join(roles)}"
            )
        return profile
    return check_role
