from fastapi import APIRouter, Depends
from lab_monitor.config.roles_config import ISSUE_TYPES
from lab_monitor.modules.issues.schemas import (
    IssueCreate, IssueStatusUpdate, IssueResponse, IssueActionResponse
)
from lab_monitor.modules.issues.service import IssueService
from lab_monitor.modules.profiles.schemas import ProfileResponse
from lab_monitor.core.dependencies import get_current_profile, get_user_supabase, require_role
from supabase import Client
from typing import List

router = APIRouter(prefix="/issues", tags=["issues"])


def get_issue_service(supabase: Client = Depends(get_user_supabase)) -> IssueService:
    return IssueService(supabase)


@router.get("/types", response_model=List[str])
def list_issue_types(profile: ProfileResponse = Depends(get_current_profile)):
    """Issue types offered on the report form"""
    return ISSUE_TYPES


@router.get("", response_model=List[IssueResponse])
def list_issues(
    open_only: bool = False,
    profile: ProfileResponse = Depends(require_role("admin")),
    service: IssueService = Depends(get_issue_service)
):
    """List all issues with lab and reporter (admin)"""
    return service.list_issues(open_only=open_only)


@router.get("/mine", response_model=List[IssueResponse])
def list_my_issues(
    profile: ProfileResponse = Depends(require_role("lecturer")),
    service: IssueService = Depends(get_issue_service)
):
    """List the caller's own issue reports (lecturer)"""
    return service.list_my_issues(profile.id)


@router.post("", response_model=IssueResponse, status_code=201)
def report_issue(
    issue_data: IssueCreate,
    profile: ProfileResponse = Depends(require_role("lecturer")),
    service: IssueService = Depends(get_issue_service)
):
    """Report an equipment issue (lecturer)"""
    return service.report_issue(issue_data, profile.id)


@router.post("/{issue_id}/resolve", response_model=IssueActionResponse)
def resolve_issue(
    issue_id: str,
    profile: ProfileResponse = Depends(require_role("admin")),
    service: IssueService = Depends(get_issue_service)
):
    """Mark an issue as resolved (admin)"""
    issue = service.resolve_issue(issue_id, profile.id)
    return IssueActionResponse(issue=issue, message="Issue marked as resolved")


@router.put("/{issue_id}/status", response_model=IssueActionResponse)
def set_issue_status(
    issue_id: str,
    status_data: IssueStatusUpdate,
    profile: ProfileResponse = Depends(require_role("admin")),
    service: IssueService = Depends(get_issue_service)
):
    """Move an issue to open, in_progress or resolved (admin)"""
    issue = service.set_status(issue_id, status_data.status, profile.id)
    if status_data.status == "resolved":
        message = "Issue marked as resolved"
    else:
        message = f"Issue marked as {status_data.status.replace('_', ' ')}"
    return IssueActionResponse(issue=issue, message=message)
