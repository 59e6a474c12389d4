from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime

LabStatus = Literal["available", "occupied", "maintenance"]


class LabCreate(BaseModel):
    name: str
    location: Optional[str] = None
    capacity: int = Field(ge=0)
    equipment: List[str] = []
    status: LabStatus = "available"


class LabUpdate(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    equipment: Optional[List[str]] = None
    status: Optional[LabStatus] = None


class LabLockRequest(BaseModel):
    locked: bool


class LabResponse(BaseModel):
    id: str
    name: str
    location: Optional[str] = None
    capacity: Optional[int] = None
    equipment: Optional[List[str]] = None
    status: str
    locked: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LabLockResponse(BaseModel):
    lab: LabResponse
    message: str


class LabRef(BaseModel):
    """Lab columns embedded into request and issue rows"""
    name: Optional[str] = None
