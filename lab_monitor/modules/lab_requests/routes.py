from fastapi import APIRouter, Depends
from lab_monitor.modules.lab_requests.schemas import (
    LabRequestCreate, LabRequestReview, LabRequestResponse, LabRequestReviewResponse
)
from lab_monitor.modules.lab_requests.service import LabRequestService
from lab_monitor.modules.profiles.schemas import ProfileResponse
from lab_monitor.core.dependencies import get_user_supabase, require_role
from supabase import Client
from typing import List, Literal, Optional

router = APIRouter(prefix="/lab-requests", tags=["lab-requests"])


def get_lab_request_service(supabase: Client = Depends(get_user_supabase)) -> LabRequestService:
    return LabRequestService(supabase)


@router.get("", response_model=List[LabRequestResponse])
def list_requests(
    status: Optional[Literal["pending", "approved", "rejected"]] = None,
    profile: ProfileResponse = Depends(require_role("admin")),
    service: LabRequestService = Depends(get_lab_request_service)
):
    """List all lab requests with lab and lecturer (admin)"""
    return service.list_requests(status=status)


@router.get("/mine", response_model=List[LabRequestResponse])
def list_my_requests(
    profile: ProfileResponse = Depends(require_role("lecturer")),
    service: LabRequestService = Depends(get_lab_request_service)
):
    """List the caller's own lab requests (lecturer)"""
    return service.list_my_requests(profile.id)


@router.post("", response_model=LabRequestResponse, status_code=201)
def create_request(
    request_data: LabRequestCreate,
    profile: ProfileResponse = Depends(require_role("lecturer")),
    service: LabRequestService = Depends(get_lab_request_service)
):
    """Submit a lab booking request (lecturer)"""
    return service.create_request(request_data, profile.id)


@router.post("/{request_id}/review", response_model=LabRequestReviewResponse)
def review_request(
    request_id: str,
    review: LabRequestReview,
    profile: ProfileResponse = Depends(require_role("admin")),
    service: LabRequestService = Depends(get_lab_request_service)
):
    """Approve or reject a lab request (admin)"""
    request = service.review_request(request_id, review.status, profile.id, review.admin_notes)
    return LabRequestReviewResponse(request=request, message=f"Request {review.status}")
