"""Common Pydantic building blocks shared by the record schemas."""

import logging
from enum import Enum
from typing import Any, Iterable, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from core.config import settings
from core.errors import MalformedRecord, get_safe_error_details

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def extract_ref_id(value: Any) -> Optional[str]:
    """
    Normalize a reference to an identifier string.

    The directory and job services return references either as raw ids or as
    populated documents, so both shapes are accepted here.

    Args:
        value: Raw id (str/int), embedded object with ``_id``/``id``,
            a model instance, or None

    Returns:
        The identifier as a stripped string, or None when absent
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, BaseModel):
        value = getattr(value, "id", None)
    elif isinstance(value, dict):
        value = value.get("_id", value.get("id"))

    if isinstance(value, Enum):
        value = value.value

    if isinstance(value, (str, int)) and not isinstance(value, bool):
        text = str(value).strip()
        return text or None

    return None


def extract_ref_ids(values: Any) -> list[str]:
    """Normalize a collection of references, dropping blanks and duplicates."""
    if values is None:
        return []
    if isinstance(values, (str, int, dict, BaseModel)):
        values = [values]

    seen: list[str] = []
    for value in values:
        ref = extract_ref_id(value)
        if ref is not None and ref not in seen:
            seen.append(ref)
    return seen


def enum_value(value: Any) -> Any:
    """Return an enum member's value, or the input unchanged."""
    if isinstance(value, Enum):
        return value.value
    return value


def require_id(value: Any) -> Any:
    """Normalize a record's own id; returns the input unchanged when it has none."""
    ref = extract_ref_id(value)
    return ref if ref is not None else value


class RecordModel(BaseModel):
    """Base model for records supplied by the surrounding application."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


def load_records(
    model: type[M],
    items: Iterable[Any],
    skip_invalid: Optional[bool] = None,
) -> list[M]:
    """
    Validate a raw collection into model instances.

    Args:
        model: Target schema class
        items: Raw dicts or already-built instances
        skip_invalid: Skip malformed items instead of raising
            (defaults to ``settings.skip_malformed_records``)

    Returns:
        List of validated instances, in input order

    Raises:
        MalformedRecord: If an item is invalid and skipping is disabled
    """
    if skip_invalid is None:
        skip_invalid = settings.skip_malformed_records

    records: list[M] = []
    for index, item in enumerate(items or ()):
        if isinstance(item, model):
            records.append(item)
            continue
        try:
            records.append(model.model_validate(item))
        except ValidationError as exc:
            details = get_safe_error_details(exc)
            if not skip_invalid:
                raise MalformedRecord(
                    f"Invalid {model.__name__} at index {index}: {details['message']}",
                    index=index,
                ) from exc
            logger.warning(
                f"Skipping malformed {model.__name__} at index {index} "
                f"({exc.error_count()} validation errors)"
            )

    return records
