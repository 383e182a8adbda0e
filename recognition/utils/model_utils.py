# Standard library imports
from datetime import datetime
import enum
from typing import Any
import uuid

# Third-party imports
from pydantic import BaseModel
from sqlalchemy import inspect

# Local application imports
from recognition.models.base import Base

# Bookkeeping columns never reported as changes
IGNORED_FIELDS = frozenset({"id", "created_at", "updated_at"})


def update_model_fields(model_instance: Base, update_data: BaseModel, partial_update: bool = True) -> None:
    """
    Updates model fields based on the provided update_data.

    - If `partial_update=True` (PATCH), updates only fields the caller set.
    - If `partial_update=False` (PUT), updates all fields, setting unspecified ones to None.
    """
    update_dict = update_data.model_dump(exclude_unset=partial_update)
    if partial_update:
        fields_to_update = {k: v for k, v in update_dict.items() if v is not None and hasattr(model_instance, k)}
    else:
        fields_to_update = {k: v for k, v in update_dict.items() if hasattr(model_instance, k)}

    for field, value in fields_to_update.items():
        setattr(model_instance, field, value)


def to_plain(value: Any) -> Any:
    """Convert a column value to something JSON columns accept."""
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [to_plain(v) for v in value]
    return value


def model_snapshot(model_instance: Base) -> dict[str, Any]:
    """Column values of ``model_instance`` keyed by attribute name."""
    mapper = inspect(model_instance).mapper
    return {attr.key: to_plain(getattr(model_instance, attr.key)) for attr in mapper.column_attrs}
