from supabase import Client
from lab_monitor.core.errors import backend_error
from lab_monitor.modules.lab_requests.schemas import LabRequestCreate, LabRequestResponse
from typing import List, Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

ADMIN_SELECT = """
    *,
    lab:labs(name),
    lecturer:profiles!lab_requests_lecturer_id_fkey(full_name, email)
"""
LECTURER_SELECT = """
    *,
    lab:labs(name)
"""


class LabRequestService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_requests(self, status: Optional[str] = None) -> List[LabRequestResponse]:
        """List all requests, newest first, with lab and lecturer embedded"""
        try:
            query = self.supabase.table("lab_requests").select(ADMIN_SELECT)
            if status:
                query = query.eq("status", status)
            result = query.order("created_at", desc=True).execute()
            return [LabRequestResponse(**r) for r in result.data or []]
        except Exception as e:
            raise backend_error("Failed to fetch requests", e)

    def list_my_requests(self, lecturer_id: str) -> List[LabRequestResponse]:
        """List a lecturer's own requests, newest first"""
        try:
            result = self.supabase.table("lab_requests")\
                .select(LECTURER_SELECT)\
                .eq("lecturer_id", lecturer_id)\
                .order("created_at", desc=True)\
                .execute()
            return [LabRequestResponse(**r) for r in result.data or []]
        except Exception as e:
            raise backend_error("Failed to fetch requests", e)

    def create_request(self, request_data: LabRequestCreate, lecturer_id: str) -> LabRequestResponse:
        """Submit a booking request for a lab"""
        try:
            insert_data = request_data.model_dump(mode="json")
            insert_data["lecturer_id"] = lecturer_id
            result = self.supabase.table("lab_requests").insert(insert_data).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to submit request")

            logger.info(f"Lab request {result.data[0]['id']} submitted by {lecturer_id}")
            return LabRequestResponse(**result.data[0])
        except Exception as e:
            raise backend_error("Failed to submit request", e)

    def review_request(
        self,
        request_id: str,
        status: str,
        reviewer_id: str,
        admin_notes: str = ""
    ) -> LabRequestResponse:
        """Approve or reject a request"""
        try:
            result = self.supabase.table("lab_requests")\
                .update({
                    "status": status,
                    "reviewed_by": reviewer_id,
                    "reviewed_at": datetime.now(timezone.utc).isoformat(),
                    "admin_notes": admin_notes,
                })\
                .eq("id", request_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Request not found")

            logger.info(f"Lab request {request_id} {status} by {reviewer_id}")
            return LabRequestResponse(**result.data[0])
        except Exception as e:
            raise backend_error("Failed to update request", e)
