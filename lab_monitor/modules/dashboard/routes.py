import json
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse
from starlette.concurrency import run_in_threadpool
from lab_monitor.config.roles_config import get_watched_tables
from lab_monitor.config.settings import settings
from lab_monitor.modules.dashboard.schemas import (
    AdminDashboard, LecturerDashboard, StudentDashboard
)
from lab_monitor.modules.dashboard.service import DashboardService
from lab_monitor.modules.profiles.schemas import ProfileResponse
from lab_monitor.core.dependencies import get_current_profile, get_user_supabase, require_role
from lab_monitor.realtime.change_feed import ChangeFeed, change_feed
from supabase import Client
from typing import Optional, Union

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_service(supabase: Client = Depends(get_user_supabase)) -> DashboardService:
    return DashboardService(supabase)


def _sse(event: str, data: str) -> str:
    return f"event: {event}\ndata: {data}\n\n"


@router.get("", response_model=Union[AdminDashboard, LecturerDashboard, StudentDashboard])
def get_dashboard(
    profile: ProfileResponse = Depends(get_current_profile),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Render the dashboard variant for the caller's role"""
    return service.build(profile)


@router.get("/admin", response_model=AdminDashboard)
def get_admin_dashboard(
    profile: ProfileResponse = Depends(require_role("admin")),
    service: DashboardService = Depends(get_dashboard_service)
):
    return service.admin_dashboard(profile)


@router.get("/lecturer", response_model=LecturerDashboard)
def get_lecturer_dashboard(
    profile: ProfileResponse = Depends(require_role("lecturer")),
    service: DashboardService = Depends(get_dashboard_service)
):
    return service.lecturer_dashboard(profile)


@router.get("/student", response_model=StudentDashboard)
def get_student_dashboard(
    profile: ProfileResponse = Depends(require_role("student")),
    service: DashboardService = Depends(get_dashboard_service)
):
    return service.student_dashboard(profile)


async def dashboard_events(
    request: Request,
    profile: ProfileResponse,
    service: DashboardService,
    feed: ChangeFeed = change_feed,
    keepalive_seconds: Optional[float] = None,
):
    """SSE frames for one dashboard: a snapshot, then a change and a fresh snapshot per relayed change"""
    tables = get_watched_tables(profile.role)
    if keepalive_seconds is None:
        keepalive_seconds = settings.stream_keepalive_seconds

    async def snapshot() -> str:
        try:
            dashboard = await run_in_threadpool(service.build, profile)
        except HTTPException as e:
            return _sse("error", json.dumps({"detail": e.detail}))
        return _sse("snapshot", dashboard.model_dump_json())

    async with feed.subscribe(tables) as subscription:
        yield await snapshot()
        while not await request.is_disconnected():
            change = await subscription.next_change(timeout=keepalive_seconds)
            if change is None:
                yield ": keepalive\n\n"
                continue
            yield _sse("change", json.dumps({"table": change.table, "event": change.event}))
            yield await snapshot()
    logger.debug(f"Dashboard stream closed for {profile.id}")


@router.get("/stream")
async def stream_dashboard(
    request: Request,
    profile: ProfileResponse = Depends(get_current_profile),
    service: DashboardService = Depends(get_dashboard_service)
):
    """
    Server-sent events: a dashboard snapshot now, then a change event and a
    fresh snapshot every time a table watched by the caller's dashboard changes.
    """
    return StreamingResponse(
        dashboard_events(request, profile, service),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
