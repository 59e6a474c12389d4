from supabase import Client
from lab_monitor.core.errors import backend_error
from lab_monitor.modules.issues.schemas import IssueCreate, IssueResponse
from typing import List
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

ADMIN_SELECT = """
    *,
    lab:labs(name),
    reporter:profiles!issues_reported_by_fkey(full_name)
"""
REPORTER_SELECT = """
    *,
    lab:labs(name)
"""


class IssueService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_issues(self, open_only: bool = False) -> List[IssueResponse]:
        """List all issues, newest first, with lab and reporter embedded"""
        try:
            query = self.supabase.table("issues").select(ADMIN_SELECT)
            if open_only:
                query = query.neq("status", "resolved")
            result = query.order("created_at", desc=True).execute()
            return [IssueResponse(**i) for i in result.data or []]
        except Exception as e:
            raise backend_error("Failed to fetch issues", e)

    def list_my_issues(self, reporter_id: str) -> List[IssueResponse]:
        """List the issues a user reported, newest first"""
        try:
            result = self.supabase.table("issues")\
                .select(REPORTER_SELECT)\
                .eq("reported_by", reporter_id)\
                .order("created_at", desc=True)\
                .execute()
            return [IssueResponse(**i) for i in result.data or []]
        except Exception as e:
            raise backend_error("Failed to fetch issues", e)

    def report_issue(self, issue_data: IssueCreate, reporter_id: str) -> IssueResponse:
        """Report an equipment issue in a lab"""
        try:
            insert_data = issue_data.model_dump()
            insert_data["reported_by"] = reporter_id
            result = self.supabase.table("issues").insert(insert_data).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to report issue")

            logger.info(f"Issue {result.data[0]['id']} ({issue_data.issue_type}) reported by {reporter_id}")
            return IssueResponse(**result.data[0])
        except Exception as e:
            raise backend_error("Failed to report issue", e)

    def resolve_issue(self, issue_id: str, resolver_id: str) -> IssueResponse:
        """Mark an issue as resolved"""
        try:
            result = self.supabase.table("issues")\
                .update({
                    "status": "resolved",
                    "resolved_by": resolver_id,
                    "resolved_at": datetime.now(timezone.utc).isoformat(),
                })\
                .eq("id", issue_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Issue not found")

            logger.info(f"Issue {issue_id} resolved by {resolver_id}")
            return IssueResponse(**result.data[0])
        except Exception as e:
            raise backend_error("Failed to resolve issue", e)

    def set_status(self, issue_id: str, status: str, user_id: str) -> IssueResponse:
        """Move an issue between open, in_progress and resolved"""
        if status == "resolved":
            return self.resolve_issue(issue_id, user_id)
        try:
            result = self.supabase.table("issues")\
                .update({"status": status, "resolved_by": None, "resolved_at": None})\
                .eq("id", issue_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Issue not found")

            return IssueResponse(**result.data[0])
        except Exception as e:
            raise backend_error("Failed to update issue", e)
