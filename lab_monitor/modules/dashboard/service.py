"""
Dashboard assembly.

Each role sees one variant built from the same list/detail pieces: the shared
header, a row of stat cards and the lists behind them. The fetches behind a
variant run together; if any of them fails the whole dashboard fails with
that fetch's error.
"""

from concurrent.futures import ThreadPoolExecutor
from supabase import Client
from lab_monitor.config.roles_config import ISSUE_TYPES, get_role_label
from lab_monitor.modules.dashboard.schemas import (
    Dashboard, DashboardHeader,
    AdminDashboard, AdminStats,
    LecturerDashboard, LecturerStats,
    StudentDashboard, StudentStats, StudentLabCard,
)
from lab_monitor.modules.issues.service import IssueService
from lab_monitor.modules.lab_requests.service import LabRequestService
from lab_monitor.modules.labs.service import (
    LabService, is_available, status_label, status_badge, status_indicator
)
from lab_monitor.modules.profiles.schemas import ProfileResponse


def _fetch_together(*fetches):
    with ThreadPoolExecutor(max_workers=len(fetches)) as pool:
        futures = [pool.submit(fetch) for fetch in fetches]
        return [future.result() for future in futures]


class DashboardService:
    def __init__(self, supabase: Client):
        self.labs = LabService(supabase)
        self.requests = LabRequestService(supabase)
        self.issues = IssueService(supabase)

    def header(self, profile: ProfileResponse) -> DashboardHeader:
        role = get_role_label(profile.role)
        return DashboardHeader(user_name=profile.email or role, role=role)

    def build(self, profile: ProfileResponse) -> Dashboard:
        """Build the dashboard variant for the profile's role"""
        builders = {
            "admin": self.admin_dashboard,
            "lecturer": self.lecturer_dashboard,
            "student": self.student_dashboard,
        }
        return builders[profile.role](profile)

    def admin_dashboard(self, profile: ProfileResponse) -> AdminDashboard:
        labs, requests, issues = _fetch_together(
            self.labs.list_labs,
            self.requests.list_requests,
            self.issues.list_issues,
        )
        pending = [r for r in requests if r.status == "pending"]
        open_issues = [i for i in issues if i.status != "resolved"]
        return AdminDashboard(
            header=self.header(profile),
            stats=AdminStats(
                available_labs=sum(1 for lab in labs if is_available(lab)),
                total_labs=len(labs),
                pending_requests=len(pending),
                open_issues=len(open_issues),
            ),
            pending_requests=pending,
            open_issues=open_issues,
            labs=labs,
        )

    def lecturer_dashboard(self, profile: ProfileResponse) -> LecturerDashboard:
        labs, requests, issues = _fetch_together(
            lambda: self.labs.list_labs(unlocked_only=True),
            lambda: self.requests.list_my_requests(profile.id),
            lambda: self.issues.list_my_issues(profile.id),
        )
        return LecturerDashboard(
            header=self.header(profile),
            stats=LecturerStats(
                available_labs=sum(1 for lab in labs if lab.status == "available"),
                pending_requests=sum(1 for r in requests if r.status == "pending"),
                approved_requests=sum(1 for r in requests if r.status == "approved"),
            ),
            requests=requests,
            labs=labs,
            issues=issues,
            issue_types=ISSUE_TYPES,
        )

    def student_dashboard(self, profile: ProfileResponse) -> StudentDashboard:
        labs = self.labs.list_labs()
        cards = [
            StudentLabCard(
                **lab.model_dump(),
                status_label=status_label(lab),
                badge=status_badge(lab),
                indicator=status_indicator(lab),
            )
            for lab in labs
        ]
        return StudentDashboard(
            header=self.header(profile),
            stats=StudentStats(
                available_labs=sum(1 for lab in labs if is_available(lab)),
                occupied_labs=sum(1 for lab in labs if lab.status == "occupied"),
            ),
            labs=cards,
        )
