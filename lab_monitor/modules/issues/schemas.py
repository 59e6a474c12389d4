from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime
from lab_monitor.modules.labs.schemas import LabRef
from lab_monitor.modules.profiles.schemas import ProfileRef

IssueType = Literal["Microphone", "Projector", "PC/Computer", "Air Conditioning", "Network", "Other"]
IssueStatus = Literal["open", "in_progress", "resolved"]


class IssueCreate(BaseModel):
    lab_id: str
    issue_type: IssueType
    description: str = Field(min_length=1)


class IssueStatusUpdate(BaseModel):
    status: IssueStatus


class IssueResponse(BaseModel):
    id: str
    lab_id: str
    reported_by: str
    issue_type: str
    description: str
    status: str
    resolved_by: Optional[str] = None
    resolved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    lab: Optional[LabRef] = None
    reporter: Optional[ProfileRef] = None

    class Config:
        from_attributes = True


class IssueActionResponse(BaseModel):
    issue: IssueResponse
    message: str
