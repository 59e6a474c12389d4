import copy
import itertools
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from lab_monitor.core.dependencies import get_current_user, get_user_supabase
from lab_monitor.database.supabase_client import get_supabase
from lab_monitor.main import app


USERS = {
    "admin": {"id": "admin-1", "email": "admin@uni.edu", "user_metadata": {}, "app_metadata": {}},
    "lecturer": {"id": "lecturer-1", "email": "lecturer@uni.edu", "user_metadata": {}, "app_metadata": {}},
    "student": {"id": "student-1", "email": "student@uni.edu", "user_metadata": {}, "app_metadata": {}},
}


def seed_tables():
    return {
        "profiles": [
            {"id": "admin-1", "email": "admin@uni.edu", "full_name": "Ada Admin", "role": "admin"},
            {"id": "lecturer-1", "email": "lecturer@uni.edu", "full_name": "Lee Lecturer", "role": "lecturer"},
            {"id": "student-1", "email": "student@uni.edu", "full_name": "Sam Student", "role": "student"},
        ],
        "labs": [
            {"id": "lab-1", "name": "Chemistry Lab", "location": "Block A", "capacity": 30,
             "equipment": ["Projector"], "status": "available", "locked": False},
            {"id": "lab-2", "name": "Computer Lab", "location": "Block B", "capacity": 40,
             "equipment": ["PC/Computer", "Network"], "status": "occupied", "locked": False},
            {"id": "lab-3", "name": "Biology Lab", "location": "Block C", "capacity": 20,
             "equipment": [], "status": "maintenance", "locked": True},
        ],
        "lab_requests": [
            {"id": "req-1", "lab_id": "lab-1", "lecturer_id": "lecturer-1", "request_date": "2026-10-20",
             "start_time": "09:00:00", "end_time": "11:00:00", "purpose": "Titration practical",
             "status": "pending", "created_at": "2026-10-18T10:00:00+00:00",
             "lab": {"name": "Chemistry Lab"},
             "lecturer": {"full_name": "Lee Lecturer", "email": "lecturer@uni.edu"}},
            {"id": "req-2", "lab_id": "lab-2", "lecturer_id": "lecturer-1", "request_date": "2026-10-21",
             "start_time": "13:00:00", "end_time": "15:00:00", "purpose": None,
             "status": "approved", "created_at": "2026-10-17T10:00:00+00:00",
             "lab": {"name": "Computer Lab"},
             "lecturer": {"full_name": "Lee Lecturer", "email": "lecturer@uni.edu"}},
        ],
        "issues": [
            {"id": "iss-1", "lab_id": "lab-2", "reported_by": "lecturer-1", "issue_type": "Projector",
             "description": "Projector flickers", "status": "open", "created_at": "2026-10-18T08:00:00+00:00",
             "lab": {"name": "Computer Lab"}, "reporter": {"full_name": "Lee Lecturer"}},
            {"id": "iss-2", "lab_id": "lab-1", "reported_by": "lecturer-1", "issue_type": "Network",
             "description": "No wifi", "status": "resolved", "created_at": "2026-10-16T08:00:00+00:00",
             "lab": {"name": "Chemistry Lab"}, "reporter": {"full_name": "Lee Lecturer"}},
            {"id": "iss-3", "lab_id": "lab-1", "reported_by": "lecturer-1", "issue_type": "Other",
             "description": "Broken stool", "status": "in_progress", "created_at": "2026-10-17T08:00:00+00:00",
             "lab": {"name": "Chemistry Lab"}, "reporter": {"full_name": "Lee Lecturer"}},
        ],
    }


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Chainable stand-in for the PostgREST request builder, backed by in-memory rows"""

    def __init__(self, fake, table):
        self.fake = fake
        self.table = table
        self.operation = "select"
        self.columns = "*"
        self.payload = None
        self.filters = []
        self.orders = []
        self.single_row = None

    def select(self, columns="*"):
        self.columns = columns
        return self

    def insert(self, payload):
        self.operation = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.operation = "update"
        self.payload = payload
        return self

    def delete(self):
        self.operation = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, lambda v: v == value))
        return self

    def neq(self, column, value):
        self.filters.append((column, lambda v: v != value))
        return self

    def in_(self, column, values):
        self.filters.append((column, lambda v: v in values))
        return self

    def order(self, column, desc=False):
        self.orders.append((column, desc))
        return self

    def single(self):
        self.single_row = "single"
        return self

    def maybe_single(self):
        self.single_row = "maybe"
        return self

    def _matches(self, row):
        return all(check(row.get(column)) for column, check in self.filters)

    def execute(self):
        self.fake.calls.append(self)
        if self.table in self.fake.errors:
            raise self.fake.errors[self.table]
        rows = self.fake.tables.setdefault(self.table, [])
        if self.operation == "insert":
            row = dict(self.payload)
            row.setdefault("id", f"{self.table}-{next(self.fake.ids)}")
            row.setdefault("created_at", "2026-10-19T12:00:00+00:00")
            for column, default in self.fake.defaults.get(self.table, {}).items():
                row.setdefault(column, default)
            rows.append(row)
            return FakeResponse([copy.deepcopy(row)])
        matched = [row for row in rows if self._matches(row)]
        if self.operation == "update":
            for row in matched:
                row.update(self.payload)
            return FakeResponse(copy.deepcopy(matched))
        if self.operation == "delete":
            self.fake.tables[self.table] = [row for row in rows if row not in matched]
            return FakeResponse(copy.deepcopy(matched))
        for column, desc in reversed(self.orders):
            matched = sorted(matched, key=lambda r: r.get(column) or "", reverse=desc)
        matched = copy.deepcopy(matched)
        if self.single_row:
            if not matched:
                return None if self.single_row == "maybe" else FakeResponse(None)
            return FakeResponse(matched[0])
        return FakeResponse(matched)


class FakeAuth:
    def __init__(self):
        self.signed_up = []
        self.signed_out = []
        self.admin = SimpleNamespace(sign_out=self.signed_out.append)

    def sign_up(self, credentials):
        self.signed_up.append(credentials)
        user = SimpleNamespace(id="new-user", email=credentials["email"])
        return SimpleNamespace(user=user, session=None)

    def sign_in_with_password(self, credentials):
        if credentials["password"] != "correct-horse":
            raise Exception("Invalid login credentials")
        user = SimpleNamespace(id="lecturer-1", email=credentials["email"])
        return SimpleNamespace(user=user, session=SimpleNamespace(access_token="token-123"))

    def get_user(self, jwt=None):
        if jwt != "token-123":
            raise Exception("invalid JWT: unable to parse or verify signature")
        user = SimpleNamespace(
            id="lecturer-1", email="lecturer@uni.edu",
            user_metadata={"full_name": "Lee Lecturer"}, app_metadata={}
        )
        return SimpleNamespace(user=user)


class FakeSupabase:
    def __init__(self):
        self.tables = seed_tables()
        self.errors = {}
        self.calls = []
        self.ids = itertools.count(1)
        self.defaults = {
            "lab_requests": {"status": "pending"},
            "issues": {"status": "open"},
        }
        self.auth = FakeAuth()

    def table(self, name):
        return FakeQuery(self, name)

    def rows(self, table, **match):
        return [r for r in self.tables[table] if all(r.get(k) == v for k, v in match.items())]


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def make_client(fake_supabase):
    """TestClient signed in as the given role; table calls go to fake_supabase"""
    def _make(role=None):
        app.dependency_overrides[get_supabase] = lambda: fake_supabase
        app.dependency_overrides[get_user_supabase] = lambda: fake_supabase
        if role is not None:
            app.dependency_overrides[get_current_user] = lambda: USERS[role]
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
