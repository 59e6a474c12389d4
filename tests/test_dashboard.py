import asyncio
import json

import pytest

from lab_monitor.modules.dashboard.routes import _sse, dashboard_events
from lab_monitor.modules.dashboard.service import DashboardService
from lab_monitor.modules.profiles.schemas import ProfileResponse
from lab_monitor.realtime.change_feed import ChangeFeed


def test_admin_dashboard(make_client):
    client = make_client("admin")
    r = client.get("/api/v1/dashboard")
    assert r.status_code == 200
    body = r.json()
    assert body["variant"] == "admin"
    assert body["header"] == {"title": "Lab Monitor", "user_name": "admin@uni.edu", "role": "Admin"}
    assert body["stats"] == {"available_labs": 1, "total_labs": 3, "pending_requests": 1, "open_issues": 2}
    assert [r["id"] for r in body["pending_requests"]] == ["req-1"]
    assert [i["id"] for i in body["open_issues"]] == ["iss-1", "iss-3"]
    assert len(body["labs"]) == 3


def test_lecturer_dashboard(make_client):
    client = make_client("lecturer")
    r = client.get("/api/v1/dashboard")
    assert r.status_code == 200
    body = r.json()
    assert body["variant"] == "lecturer"
    assert body["header"]["role"] == "Lecturer"
    assert body["stats"] == {"available_labs": 1, "pending_requests": 1, "approved_requests": 1}
    # Locked labs are not offered for booking
    assert [lab["id"] for lab in body["labs"]] == ["lab-1", "lab-2"]
    assert len(body["requests"]) == 2
    assert len(body["issues"]) == 3
    assert "PC/Computer" in body["issue_types"]


def test_student_dashboard_shows_display_status(make_client):
    client = make_client("student")
    r = client.get("/api/v1/dashboard")
    assert r.status_code == 200
    body = r.json()
    assert body["variant"] == "student"
    assert body["stats"] == {"available_labs": 1, "occupied_labs": 1}
    cards = {lab["id"]: lab for lab in body["labs"]}
    assert (cards["lab-1"]["status_label"], cards["lab-1"]["badge"], cards["lab-1"]["indicator"]) == \
        ("Available", "default", "success")
    assert (cards["lab-2"]["status_label"], cards["lab-2"]["badge"], cards["lab-2"]["indicator"]) == \
        ("Occupied", "secondary", "warning")
    assert (cards["lab-3"]["status_label"], cards["lab-3"]["badge"], cards["lab-3"]["indicator"]) == \
        ("Maintenance", "destructive", "destructive")


def test_locked_lab_shows_maintenance_whatever_its_status(make_client, fake_supabase):
    fake_supabase.rows("labs", id="lab-2")[0]["locked"] = True
    client = make_client("student")
    body = client.get("/api/v1/dashboard").json()
    card = next(lab for lab in body["labs"] if lab["id"] == "lab-2")
    assert card["status_label"] == "Maintenance"
    assert card["badge"] == "destructive"
    assert body["stats"]["occupied_labs"] == 1


def test_role_specific_dashboards_are_gated(make_client):
    client = make_client("student")
    assert client.get("/api/v1/dashboard/student").status_code == 200
    assert client.get("/api/v1/dashboard/admin").status_code == 403
    assert client.get("/api/v1/dashboard/lecturer").status_code == 403


def test_missing_profile_fails_to_load(make_client, fake_supabase):
    fake_supabase.tables["profiles"] = []
    client = make_client("student")
    r = client.get("/api/v1/dashboard")
    assert r.status_code == 403
    assert r.json()["detail"] == "Failed to load user profile"


def test_failed_fetch_surfaces_backend_message(make_client, fake_supabase):
    fake_supabase.errors["issues"] = Exception("connection reset")
    client = make_client("admin")
    r = client.get("/api/v1/dashboard")
    assert r.status_code == 500
    assert r.json()["detail"] == "Failed to fetch issues: connection reset"


def test_sse_event_format():
    assert _sse("change", '{"table": "labs"}') == 'event: change\ndata: {"table": "labs"}\n\n'


class FakeRequest:
    def __init__(self):
        self.disconnected = False

    async def is_disconnected(self):
        return self.disconnected


def _parse(frame):
    event, data = frame.strip().split("\n")
    return event[len("event: "):], json.loads(data[len("data: "):])


STUDENT = ProfileResponse(id="student-1", email="student@uni.edu", full_name="Sam Student", role="student")


def test_stream_sends_snapshot_then_change_and_fresh_snapshot(fake_supabase):
    async def scenario():
        feed = ChangeFeed()
        request = FakeRequest()
        events = dashboard_events(request, STUDENT, DashboardService(fake_supabase), feed=feed, keepalive_seconds=0.01)

        event, data = _parse(await events.__anext__())
        assert event == "snapshot"
        assert data["variant"] == "student"
        assert data["stats"]["available_labs"] == 1
        assert feed.subscriber_count("labs") == 1
        assert feed.subscriber_count("lab_requests") == 0

        assert await events.__anext__() == ": keepalive\n\n"

        fake_supabase.rows("labs", id="lab-2")[0]["status"] = "available"
        feed.publish("labs", {"data": {"type": "UPDATE"}})
        assert _parse(await events.__anext__()) == ("change", {"table": "labs", "event": "UPDATE"})
        event, data = _parse(await events.__anext__())
        assert event == "snapshot"
        assert data["stats"]["available_labs"] == 2

        request.disconnected = True
        with pytest.raises(StopAsyncIteration):
            await events.__anext__()
        assert feed.subscriber_count("labs") == 0

    asyncio.run(scenario())


def test_stream_reports_failed_refetch_and_keeps_going(fake_supabase):
    async def scenario():
        feed = ChangeFeed()
        request = FakeRequest()
        events = dashboard_events(request, STUDENT, DashboardService(fake_supabase), feed=feed, keepalive_seconds=1)
        assert _parse(await events.__anext__())[0] == "snapshot"

        fake_supabase.errors["labs"] = Exception("connection reset")
        feed.publish("labs")
        assert _parse(await events.__anext__())[0] == "change"
        assert _parse(await events.__anext__()) == ("error", {"detail": "Failed to fetch labs: connection reset"})

        del fake_supabase.errors["labs"]
        feed.publish("labs")
        assert _parse(await events.__anext__())[0] == "change"
        assert _parse(await events.__anext__())[0] == "snapshot"
        await events.aclose()
        assert feed.subscriber_count("labs") == 0

    asyncio.run(scenario())
