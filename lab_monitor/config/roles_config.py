"""
Role Configuration
Defines the three user roles, the dashboard variant each one renders and the
tables whose change notifications refresh that dashboard.
"""

ADMIN = "admin"
LECTURER = "lecturer"
STUDENT = "student"

ROLES = {
    ADMIN: {
        "label": "Admin",
        "dashboard": "admin",
        "watched_tables": ["labs", "lab_requests", "issues"],
        "description": "Approves/rejects lab requests, resolves issues, locks labs for maintenance"
    },
    LECTURER: {
        "label": "Lecturer",
        "dashboard": "lecturer",
        "watched_tables": ["labs", "lab_requests", "issues"],
        "description": "Requests lab bookings and reports equipment issues"
    },
    STUDENT: {
        "label": "Student",
        "dashboard": "student",
        "watched_tables": ["labs"],
        "description": "Views live lab occupancy"
    }
}

# Roles a user may pick when signing up; admins are provisioned on the backend
SELF_REGISTRATION_ROLES = [STUDENT, LECTURER]

# Tables relayed from the realtime change feed
REALTIME_TABLES = ["labs", "lab_requests", "issues"]

ISSUE_TYPES = [
    "Microphone",
    "Projector",
    "PC/Computer",
    "Air Conditioning",
    "Network",
    "Other",
]


def get_role_label(role: str) -> str:
    return ROLES[role]["label"]


def get_watched_tables(role: str) -> list:
    return list(ROLES[role]["watched_tables"])
