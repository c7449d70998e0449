"""Serialization utilities for converting models to API responses."""
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def serialize_datetime(value: Optional[datetime]) -> Optional[str]:
    """
    Serialize datetime to an ISO format string with a UTC offset.

    Naive values are taken to be UTC.

    Args:
        value: Datetime value or None

    Returns:
        ISO format string or None
    """
    if not value:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def serialize_model_to_dict(
    model: Any,
    datetime_fields: Optional[list[str]] = None,
) -> Dict[str, Any]:
    """
    Serialize a SQLAlchemy model to a dictionary.

    Args:
        model: SQLAlchemy model instance
        datetime_fields: List of field names that are datetimes

    Returns:
        Dictionary representation of the model
    """
    datetime_fields = datetime_fields or []

    result = {}
    for column in model.__table__.columns:
        value = getattr(model, column.name)

        if column.name in datetime_fields:
            result[column.name] = serialize_datetime(value)
        else:
            result[column.name] = value

    return result
