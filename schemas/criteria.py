"""Filter criteria entered on listing screens."""

from datetime import date
from typing import Any, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from core.errors import InvalidCriteria, sanitize_error_message

ALL = "all"

DATE_RANGES = (
    ("created_from", "created_to"),
    ("joined_from", "joined_to"),
    ("selected_from", "selected_to"),
)


class FilterCriteria(BaseModel):
    """
    User-entered filters for a record listing.

    Selector fields use the ``"all"`` sentinel for pass-through. Query
    parameter names used by the portal (``statusFilter``, ``filterClient``,
    ``searchTerm``...) are accepted as aliases.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    status: str = Field(default=ALL, validation_alias=AliasChoices("status", "statusFilter"))
    client: str = Field(default=ALL, validation_alias=AliasChoices("client", "filterClient"))
    job_title: str = Field(
        default=ALL, validation_alias=AliasChoices("job_title", "jobTitle", "filterJobTitle")
    )
    stage: str = Field(default=ALL, validation_alias=AliasChoices("stage", "filterStage"))
    search: str = Field(default="", validation_alias=AliasChoices("search", "searchTerm"))

    created_from: Optional[date] = Field(
        default=None, validation_alias=AliasChoices("created_from", "startDate")
    )
    created_to: Optional[date] = Field(
        default=None, validation_alias=AliasChoices("created_to", "endDate")
    )
    joined_from: Optional[date] = Field(
        default=None, validation_alias=AliasChoices("joined_from", "joinStartDate")
    )
    joined_to: Optional[date] = Field(
        default=None, validation_alias=AliasChoices("joined_to", "joinEndDate")
    )
    selected_from: Optional[date] = Field(
        default=None, validation_alias=AliasChoices("selected_from", "selectStartDate")
    )
    selected_to: Optional[date] = Field(
        default=None, validation_alias=AliasChoices("selected_to", "selectEndDate")
    )

    @field_validator("status", "client", "job_title", "stage", mode="before")
    @classmethod
    def default_to_all(cls, v: Any) -> Any:
        """Blank or missing selectors mean pass-through."""
        if v is None:
            return ALL
        if isinstance(v, str):
            v = v.strip()
            if not v or v.lower() == ALL:
                return ALL
        return v

    @field_validator("search", mode="before")
    @classmethod
    def normalize_search(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator(
        "created_from", "created_to", "joined_from", "joined_to",
        "selected_from", "selected_to",
        mode="before",
    )
    @classmethod
    def blank_date(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def check_ranges(self) -> "FilterCriteria":
        for start_field, end_field in DATE_RANGES:
            start = getattr(self, start_field)
            end = getattr(self, end_field)
            if start and end and start > end:
                raise ValueError(f"{start_field} must not be after {end_field}")
        return self

    @property
    def effective_stage(self) -> str:
        """Stage filtering only applies once a job title is selected."""
        if self.job_title == ALL:
            return ALL
        return self.stage

    @property
    def is_passthrough(self) -> bool:
        return (
            self.status == ALL
            and self.client == ALL
            and self.job_title == ALL
            and not self.search
            and all(getattr(self, name) is None for pair in DATE_RANGES for name in pair)
        )

    @classmethod
    def from_params(cls, params: Optional[Mapping[str, Any]] = None) -> "FilterCriteria":
        """
        Build criteria from query parameters.

        Args:
            params: Mapping of query parameter names to values

        Returns:
            Validated criteria

        Raises:
            InvalidCriteria: If a parameter cannot be interpreted
        """
        try:
            return cls.model_validate(dict(params or {}))
        except ValidationError as exc:
            raise InvalidCriteria(sanitize_error_message(str(exc))) from exc
