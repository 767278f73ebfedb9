"""Shared fixtures and utilities for tests."""

import os
from datetime import datetime

import pytest

from schemas.candidates import Candidate
from schemas.jobs import Job
from schemas.leaves import LeaveRequest
from schemas.users import User


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables before running tests."""
    os.environ.setdefault("APP_ENV", "development")
    os.environ.setdefault("LOG_LEVEL", "DEBUG")
    os.environ.setdefault("JSON_LOGS", "false")


def make_user(user_id: str, designation: str | None, reporter: str | None = None, name: str = "") -> User:
    return User(id=user_id, name=name or user_id, designation=designation, reporter=reporter)


@pytest.fixture
def org_users() -> list[User]:
    """
    Reference organization.

    a1 (Admin)
    n1 (Manager)
    ├── m1 (Mentor)
    │   ├── r1 (Recruiter)
    │   ├── r2 (Recruiter)
    │   ├── m3 (Mentor, misplaced under a mentor)
    │   └── x1 (Intern, unrecognized designation)
    ├── m2 (Mentor)
    │   └── r3 (Recruiter)
    └── r4 (Recruiter, reports to the manager directly)
    """
    return [
        make_user("a1", "Admin"),
        make_user("n1", "Manager"),
        make_user("m1", "Mentor", "n1"),
        make_user("m2", "mentor", "n1"),
        make_user("r1", "Recruiter", "m1", name="Riya"),
        make_user("r2", "RECRUITER", "m1"),
        make_user("r3", "Recruiter", "m2"),
        make_user("r4", "Recruiter", "n1"),
        make_user("m3", "Mentor", "m1"),
        make_user("x1", "Intern", "m1"),
    ]


@pytest.fixture
def users_by_id(org_users) -> dict[str, User]:
    return {user.id: user for user in org_users}


@pytest.fixture
def jobs() -> list[Job]:
    return [
        Job(
            id="j1",
            title="Frontend Engineer",
            client_name="Acme",
            created_by="r1",
            lead_recruiter="r1",
            stages=["Screening", "Technical", "HR"],
        ),
        Job(
            id="j2",
            title="Backend Engineer",
            client_name="Globex",
            created_by="r4",
            assigned_recruiters=["r2"],
            stages=["Technical", "Managerial"],
        ),
        Job(
            id="j3",
            title="Data Analyst",
            client_name="Globex",
            created_by="r3",
            status="Closed",
        ),
    ]


@pytest.fixture
def candidates() -> list[Candidate]:
    return [
        Candidate(
            id="c1",
            created_by="r1",
            job_id="j1",
            status="New",
            dynamic_fields={
                "Full Name": "Alice Smith",
                "Email": "alice@example.com",
                "Phone": "555-010-2000",
                "Key Skills": ["React", "TypeScript"],
            },
            created_at=datetime(2024, 3, 5, 9, 0),
        ),
        Candidate(
            id="c2",
            created_by="r4",
            job_id="j2",
            status="Interviewed",
            interview_stage="Technical",
            dynamic_fields={"Name": "Bob Jones", "Skills": "Go, Postgres"},
            created_at=datetime(2024, 3, 10, 9, 0),
        ),
        Candidate(
            id="c3",
            created_by="r3",
            job_id="j3",
            status="Selected",
            dynamic_fields={"Name": "Carol White"},
            created_at=datetime(2024, 2, 1, 9, 0),
            selection_date=datetime(2024, 3, 20, 9, 0),
        ),
        Candidate(
            id="c4",
            status="Rejected",
            dynamic_fields={"Name": "Orphan Record"},
        ),
        Candidate(
            id="c5",
            created_by="r2",
            job_id="j1",
            status="Joined",
            interview_stage="HR",
            dynamic_fields={"Name": "Dan Brown"},
            created_at=datetime(2024, 1, 15, 9, 0),
            joining_date=datetime(2024, 3, 25, 9, 0),
        ),
    ]


@pytest.fixture
def leaves() -> list[LeaveRequest]:
    return [
        LeaveRequest(id="l1", user="r1", status="Pending", leave_type="Sick", reason="Flu",
                     from_date="2024-03-01", to_date="2024-03-02"),
        LeaveRequest(id="l2", user="m1", status="Approved", leave_type="Casual", reason="Family event",
                     from_date="2024-03-04", to_date="2024-03-04"),
        LeaveRequest(id="l3", user="r4", status="Rejected", leave_type="Casual", reason="Travel",
                     from_date="2024-03-10", to_date="2024-03-12"),
        LeaveRequest(id="l4", user="n1", status="Pending", leave_type="Earned", reason="Vacation",
                     from_date="2024-04-01", to_date="2024-04-05"),
        LeaveRequest(id="l5", user={"_id": "r3", "name": "R3"}, status="approved", leave_type="Sick",
                     reason="Checkup"),
    ]
