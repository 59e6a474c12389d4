from pydantic import BaseModel
from typing import List, Literal, Union
from lab_monitor.modules.labs.schemas import LabResponse
from lab_monitor.modules.lab_requests.schemas import LabRequestResponse
from lab_monitor.modules.issues.schemas import IssueResponse


class DashboardHeader(BaseModel):
    title: str = "Lab Monitor"
    user_name: str
    role: str


class AdminStats(BaseModel):
    available_labs: int
    total_labs: int
    pending_requests: int
    open_issues: int


class AdminDashboard(BaseModel):
    variant: Literal["admin"] = "admin"
    header: DashboardHeader
    stats: AdminStats
    pending_requests: List[LabRequestResponse]
    open_issues: List[IssueResponse]
    labs: List[LabResponse]


class LecturerStats(BaseModel):
    available_labs: int
    pending_requests: int
    approved_requests: int


class LecturerDashboard(BaseModel):
    variant: Literal["lecturer"] = "lecturer"
    header: DashboardHeader
    stats: LecturerStats
    requests: List[LabRequestResponse]
    labs: List[LabResponse]
    issues: List[IssueResponse]
    issue_types: List[str]


class StudentLabCard(LabResponse):
    status_label: str
    badge: str
    indicator: str


class StudentStats(BaseModel):
    available_labs: int
    occupied_labs: int


class StudentDashboard(BaseModel):
    variant: Literal["student"] = "student"
    header: DashboardHeader
    stats: StudentStats
    labs: List[StudentLabCard]


Dashboard = Union[AdminDashboard, LecturerDashboard, StudentDashboard]
