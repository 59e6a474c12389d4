from fastapi import APIRouter, Depends, HTTPException
from lab_monitor.modules.labs.schemas import LabCreate, LabUpdate, LabLockRequest, LabResponse, LabLockResponse
from lab_monitor.modules.labs.service import LabService
from lab_monitor.modules.profiles.schemas import ProfileResponse
from lab_monitor.core.dependencies import get_current_profile, get_user_supabase, require_role
from supabase import Client
from typing import List

router = APIRouter(prefix="/labs", tags=["labs"])


def get_lab_service(supabase: Client = Depends(get_user_supabase)) -> LabService:
    return LabService(supabase)


@router.get("", response_model=List[LabResponse])
def list_labs(
    unlocked_only: bool = False,
    profile: ProfileResponse = Depends(get_current_profile),
    service: LabService = Depends(get_lab_service)
):
    """List labs ordered by name"""
    return service.list_labs(unlocked_only=unlocked_only)


@router.get("/{lab_id}", response_model=LabResponse)
def get_lab(
    lab_id: str,
    profile: ProfileResponse = Depends(get_current_profile),
    service: LabService = Depends(get_lab_service)
):
    """Get lab by ID"""
    return service.get_lab(lab_id)


@router.post("", response_model=LabResponse, status_code=201)
def create_lab(
    lab_data: LabCreate,
    profile: ProfileResponse = Depends(require_role("admin")),
    service: LabService = Depends(get_lab_service)
):
    """Create a new lab (admin)"""
    return service.create_lab(lab_data)


@router.put("/{lab_id}", response_model=LabResponse)
def update_lab(
    lab_id: str,
    lab_data: LabUpdate,
    profile: ProfileResponse = Depends(require_role("admin")),
    service: LabService = Depends(get_lab_service)
):
    """Update lab details (admin)"""
    return service.update_lab(lab_id, lab_data)


@router.delete("/{lab_id}", status_code=204)
def delete_lab(
    lab_id: str,
    profile: ProfileResponse = Depends(require_role("admin")),
    service: LabService = Depends(get_lab_service)
):
    """Delete lab (admin)"""
    if not service.delete_lab(lab_id):
        raise HTTPException(status_code=404, detail="Lab not found")
    return None


@router.put("/{lab_id}/lock", response_model=LabLockResponse)
def set_lab_lock(
    lab_id: str,
    lock_data: LabLockRequest,
    profile: ProfileResponse = Depends(require_role("admin")),
    service: LabService = Depends(get_lab_service)
):
    """Lock a lab for maintenance or unlock it (admin)"""
    lab = service.set_lock(lab_id, lock_data.locked)
    message = "Lab locked for maintenance" if lock_data.locked else "Lab unlocked"
    return LabLockResponse(lab=lab, message=message)
