from pydantic import BaseModel, model_validator
from typing import Optional, Literal
from datetime import date, time, datetime
from lab_monitor.modules.labs.schemas import LabRef
from lab_monitor.modules.profiles.schemas import ProfileRef


class LabRequestCreate(BaseModel):
    lab_id: str
    request_date: date
    start_time: time
    end_time: time
    purpose: Optional[str] = None

    @model_validator(mode="after")
    def end_after_start(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class LabRequestReview(BaseModel):
    status: Literal["approved", "rejected"]
    admin_notes: str = ""


class LabRequestResponse(BaseModel):
    id: str
    lab_id: str
    lecturer_id: str
    request_date: date
    start_time: time
    end_time: time
    purpose: Optional[str] = None
    status: str
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    admin_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    lab: Optional[LabRef] = None
    lecturer: Optional[ProfileRef] = None

    class Config:
        from_attributes = True


class LabRequestReviewResponse(BaseModel):
    request: LabRequestResponse
    message: str
