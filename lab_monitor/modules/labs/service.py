from supabase import Client
from lab_monitor.core.errors import backend_error
from lab_monitor.modules.labs.schemas import LabCreate, LabUpdate, LabResponse
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class LabService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_labs(self, unlocked_only: bool = False) -> List[LabResponse]:
        """List labs ordered by name; unlocked_only hides labs locked for maintenance"""
        try:
            query = self.supabase.table("labs").select("*")
            if unlocked_only:
                query = query.eq("locked", False)
            result = query.order("name").execute()
            return [LabResponse(**lab) for lab in result.data or []]
        except Exception as e:
            raise backend_error("Failed to fetch labs", e)

    def get_lab(self, lab_id: str) -> LabResponse:
        """Get lab by ID"""
        try:
            result = self.supabase.table("labs")\
                .select("*")\
                .eq("id", lab_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Lab not found")

            return LabResponse(**result.data)
        except Exception as e:
            raise backend_error("Failed to fetch lab", e)

    def create_lab(self, lab_data: LabCreate) -> LabResponse:
        """Create a new lab"""
        try:
            result = self.supabase.table("labs").insert(lab_data.model_dump()).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create lab")

            return LabResponse(**result.data[0])
        except Exception as e:
            raise backend_error("Failed to create lab", e)

    def update_lab(self, lab_id: str, lab_data: LabUpdate) -> LabResponse:
        """Update lab details"""
        try:
            update_data = lab_data.model_dump(exclude_unset=True)
            if not update_data:
                return self.get_lab(lab_id)

            result = self.supabase.table("labs")\
                .update(update_data)\
                .eq("id", lab_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Lab not found")

            return LabResponse(**result.data[0])
        except Exception as e:
            raise backend_error("Failed to update lab", e)

    def delete_lab(self, lab_id: str) -> bool:
        """Delete lab"""
        try:
            result = self.supabase.table("labs")\
                .delete()\
                .eq("id", lab_id)\
                .execute()

            return len(result.data or []) > 0
        except Exception as e:
            raise backend_error("Failed to delete lab", e)

    def set_lock(self, lab_id: str, locked: bool) -> LabResponse:
        """Lock a lab for maintenance, or unlock it back to available"""
        try:
            result = self.supabase.table("labs")\
                .update({"locked": locked, "status": "maintenance" if locked else "available"})\
                .eq("id", lab_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Lab not found")

            logger.info(f"Lab {lab_id} {'locked' if locked else 'unlocked'}")
            return LabResponse(**result.data[0])
        except Exception as e:
            raise backend_error("Failed to update lab status", e)


def is_available(lab: LabResponse) -> bool:
    return lab.status == "available" and not lab.locked


def status_label(lab: LabResponse) -> str:
    if lab.locked:
        return "Maintenance"
    return lab.status[:1].upper() + lab.status[1:]


def status_badge(lab: LabResponse) -> str:
    if lab.locked:
        return "destructive"
    return {
        "available": "default",
        "occupied": "secondary",
        "maintenance": "destructive",
    }.get(lab.status, "secondary")


def status_indicator(lab: LabResponse) -> str:
    if lab.locked or lab.status == "maintenance":
        return "destructive"
    if lab.status == "available":
        return "success"
    return "warning"
