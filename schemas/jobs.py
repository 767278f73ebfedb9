"""Job schemas."""

from typing import Any, Optional

from pydantic import AliasChoices, Field, field_validator, model_validator

from schemas.common import RecordModel, extract_ref_id, extract_ref_ids, require_id


class Stage(RecordModel):
    """One step of a job's interview pipeline."""

    name: str = Field(min_length=1)
    responsible: str = "Recruiter"
    mandatory: bool = True

    @model_validator(mode="before")
    @classmethod
    def accept_bare_name(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"name": data}
        return data


class Job(RecordModel):
    """A job opening with its recruiting team."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    title: str = ""
    client_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("client_id", "clientId")
    )
    client_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("client_name", "clientName")
    )
    lead_recruiter: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("lead_recruiter", "leadRecruiter")
    )
    assigned_recruiters: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("assigned_recruiters", "assignedRecruiters"),
    )
    created_by: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("created_by", "createdBy", "CreatedBy")
    )
    status: str = "Open"
    stages: list[Stage] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def unpack_client(cls, data: Any) -> Any:
        """
        Split a populated client reference into id and display name.

        ``clientId`` (or ``client``) may be a raw id, a populated client
        document, or, for ``client``, the display name itself.
        """
        if not isinstance(data, dict):
            return data

        data = dict(data)
        client = data.pop("client", None)
        if client is None:
            client = data.get("clientId", data.get("client_id"))
        elif isinstance(client, str):
            data.setdefault("client_name", client)
            client = None

        if isinstance(client, dict):
            data["client_id"] = extract_ref_id(client)
            data.pop("clientId", None)
            name = client.get("companyName") or client.get("name")
            if name and not (data.get("client_name") or data.get("clientName")):
                data["client_name"] = name
        elif client is not None:
            data.setdefault("client_id", client)
            data.pop("clientId", None)

        return data

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v: Any) -> Any:
        return require_id(v)

    @field_validator("client_id", "lead_recruiter", "created_by", mode="before")
    @classmethod
    def normalize_refs(cls, v: Any) -> Optional[str]:
        return extract_ref_id(v)

    @field_validator("assigned_recruiters", mode="before")
    @classmethod
    def normalize_team(cls, v: Any) -> list[str]:
        return extract_ref_ids(v)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("stages", mode="before")
    @classmethod
    def default_stages(cls, v: Any) -> Any:
        return v or []

    @property
    def stage_names(self) -> list[str]:
        return [stage.name for stage in self.stages]

    def is_assigned(self, user_id: Optional[str]) -> bool:
        """Check if the user leads or is on the job's recruiting team."""
        if not user_id:
            return False
        return self.lead_recruiter == user_id or user_id in self.assigned_recruiters
