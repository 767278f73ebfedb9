"""Candidate schemas."""

from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from schemas.common import RecordModel, extract_ref_id, require_id


# ==================== Candidate Status ===================== #
class CandidateStatus(str, Enum):
    NEW = "New"
    SHORTLISTED = "Shortlisted"
    INTERVIEWED = "Interviewed"
    SELECTED = "Selected"
    JOINED = "Joined"
    REJECTED = "Rejected"  # terminal side-branch, not part of the funnel

    @classmethod
    def parse(cls, value: Any) -> "CandidateStatus":
        """
        Case-insensitive lookup that also accepts legacy screening labels.

        Raises:
            ValueError: If the value is not a known status
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            key = LEGACY_STATUS_ALIASES.get(key, key)
            for member in cls:
                if member.value.lower() == key:
                    return member
        raise ValueError(f"Unknown candidate status: {value!r}")


# Older records were written by a screening flow that used different labels
LEGACY_STATUS_ALIASES = {
    "screen": "shortlisted",
    "screened": "shortlisted",
}

FUNNEL_ORDER = (
    CandidateStatus.NEW,
    CandidateStatus.SHORTLISTED,
    CandidateStatus.INTERVIEWED,
    CandidateStatus.SELECTED,
    CandidateStatus.JOINED,
)
ACTIVE_STATUSES = frozenset({
    CandidateStatus.NEW,
    CandidateStatus.SHORTLISTED,
    CandidateStatus.INTERVIEWED,
})
HIRED_STATUSES = frozenset({
    CandidateStatus.SELECTED,
    CandidateStatus.JOINED,
})


class StatusChange(BaseModel):
    """A single entry of a candidate's status history."""

    status: str
    timestamp: Optional[datetime] = None
    comment: str = ""


class Candidate(RecordModel):
    """A candidate submitted against a job."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    created_by: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("created_by", "createdBy")
    )
    job_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("job_id", "jobId")
    )
    status: CandidateStatus = CandidateStatus.NEW
    dynamic_fields: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("dynamic_fields", "dynamicFields"),
    )
    interview_stage: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("interview_stage", "interviewStage")
    )
    status_history: list[StatusChange] = Field(
        default_factory=list,
        validation_alias=AliasChoices("status_history", "statusHistory"),
    )
    created_at: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("created_at", "createdAt")
    )
    joining_date: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("joining_date", "joiningDate")
    )
    selection_date: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("selection_date", "selectionDate")
    )

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v: Any) -> Any:
        return require_id(v)

    @field_validator("created_by", "job_id", mode="before")
    @classmethod
    def normalize_refs(cls, v: Any) -> Optional[str]:
        return extract_ref_id(v)

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, v: Any) -> CandidateStatus:
        if v is None or v == "":
            return CandidateStatus.NEW
        return CandidateStatus.parse(v)

    @field_validator("dynamic_fields", mode="before")
    @classmethod
    def default_fields(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("status_history", mode="before")
    @classmethod
    def default_history(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("interview_stage", mode="before")
    @classmethod
    def blank_stage(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def owner_id(self) -> Optional[str]:
        return self.created_by

    def field_values(self, field: str) -> list[str]:
        """
        Collect dynamic field values whose key mentions ``field``.

        Keys are free-form ("Full Name", "Email Address", "Key Skills"), so
        the lookup is a case-insensitive substring match on the key.
        """
        needle = field.lower()
        values: list[str] = []
        for key, value in self.dynamic_fields.items():
            if needle not in str(key).lower() or value is None:
                continue
            if isinstance(value, (list, tuple, set)):
                values.append(", ".join(str(item) for item in value))
            else:
                values.append(str(value))
        return values

    def search_values(self, fields: Iterable[str]) -> list[str]:
        """Values searched by free-text filtering, for the given dynamic fields."""
        values: list[str] = []
        for field in fields:
            values.extend(self.field_values(field))
        return values

    @property
    def display_name(self) -> str:
        names = self.field_values("name")
        return names[0] if names else ""
