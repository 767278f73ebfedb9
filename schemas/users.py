"""User directory schemas."""

from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, Field, field_validator

from schemas.common import RecordModel, extract_ref_id, require_id


# ==================== Designation ===================== #
class Designation(str, Enum):
    ADMIN = "Admin"  # sees every record in the organization
    MANAGER = "Manager"  # manages mentors, who manage recruiters
    MENTOR = "Mentor"  # manages recruiters
    RECRUITER = "Recruiter"  # individual contributor

    @classmethod
    def parse(cls, value: Any) -> Optional["Designation"]:
        """Case-insensitive lookup; returns None for unrecognized values."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip().lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        return None


class User(RecordModel):
    """A member of the organization directory."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    email: Optional[str] = None
    designation: Optional[str] = None
    reporter: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("reporter", "reporter_id", "reporterId"),
    )

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v: Any) -> Any:
        return require_id(v)

    @field_validator("reporter", mode="before")
    @classmethod
    def normalize_reporter(cls, v: Any) -> Optional[str]:
        """Reporter may arrive populated; keep only its id."""
        return extract_ref_id(v)

    @field_validator("designation", mode="before")
    @classmethod
    def normalize_designation(cls, v: Any) -> Optional[str]:
        if isinstance(v, Enum):
            return v.value
        if isinstance(v, str):
            return v.strip() or None
        return v

    @property
    def role(self) -> Optional[Designation]:
        """Parsed designation, or None when unrecognized."""
        return Designation.parse(self.designation)
