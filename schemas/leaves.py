"""Leave request schemas."""

from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, Optional

from pydantic import AliasChoices, Field, field_validator

from core.utils.datetime import days_inclusive
from schemas.common import RecordModel, extract_ref_id, require_id


class LeaveStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class LeaveRequest(RecordModel):
    """A leave application owned by the user who filed it."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    user_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("user_id", "user", "userId")
    )
    status: LeaveStatus = LeaveStatus.PENDING
    leave_type: str = Field(
        default="", validation_alias=AliasChoices("leave_type", "leaveType")
    )
    from_date: Optional[date] = Field(
        default=None, validation_alias=AliasChoices("from_date", "fromDate")
    )
    to_date: Optional[date] = Field(
        default=None, validation_alias=AliasChoices("to_date", "toDate")
    )
    reason: str = ""
    reporter: Optional[str] = None
    applied_date: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("applied_date", "appliedDate")
    )

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v: Any) -> Any:
        return require_id(v)

    @field_validator("user_id", "reporter", mode="before")
    @classmethod
    def normalize_refs(cls, v: Any) -> Optional[str]:
        return extract_ref_id(v)

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, v: Any) -> Any:
        if v is None or v == "":
            return LeaveStatus.PENDING
        if isinstance(v, str):
            for member in LeaveStatus:
                if member.value.lower() == v.strip().lower():
                    return member
        return v

    @field_validator("from_date", "to_date", mode="before")
    @classmethod
    def day_only(cls, v: Any) -> Any:
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v

    @field_validator("leave_type", "reason", mode="before")
    @classmethod
    def blank_text(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def owner_id(self) -> Optional[str]:
        return self.user_id

    @property
    def job_id(self) -> Optional[str]:
        """Leave requests are never attached to a job."""
        return None

    @property
    def created_at(self) -> Optional[datetime]:
        return self.applied_date

    @property
    def days(self) -> int:
        return days_inclusive(self.from_date, self.to_date)

    def search_values(self, fields: Iterable[str] = ()) -> list[str]:
        """Leave requests are searched by type and reason; ``fields`` is ignored."""
        return [value for value in (self.leave_type, self.reason) if value]
