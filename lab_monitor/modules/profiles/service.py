from supabase import Client
from lab_monitor.core.errors import backend_error
from lab_monitor.modules.profiles.schemas import ProfileUpdate, ProfileResponse
from typing import List
from fastapi import HTTPException


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_id: str) -> ProfileResponse:
        """Get a profile by user ID"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            return ProfileResponse(**result.data)
        except Exception as e:
            raise backend_error("Failed to load user profile", e)

    def list_profiles(self) -> List[ProfileResponse]:
        """List all profiles"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .order("full_name")\
                .execute()
            return [ProfileResponse(**profile) for profile in result.data or []]
        except Exception as e:
            raise backend_error("Failed to fetch profiles", e)

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Update the editable profile fields"""
        try:
            update_data = profile_data.model_dump(exclude_unset=True)
            if not update_data:
                return self.get_profile(user_id)

            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            return ProfileResponse(**result.data[0])
        except Exception as e:
            raise backend_error("Failed to update profile", e)

    def set_role(self, user_id: str, role: str) -> ProfileResponse:
        """Change a user's role"""
        try:
            result = self.supabase.table("profiles")\
                .update({"role": role})\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            return ProfileResponse(**result.data[0])
        except Exception as e:
            raise backend_error("Failed to update role", e)
