from pydantic import BaseModel
from typing import Optional, Literal
from datetime import datetime

Role = Literal["admin", "lecturer", "student"]


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None


class ProfileRoleUpdate(BaseModel):
    role: Role


class ProfileResponse(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    role: Role
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileRef(BaseModel):
    """Profile columns embedded into request and issue rows"""
    full_name: Optional[str] = None
    email: Optional[str] = None
