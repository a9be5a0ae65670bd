from __future__ import annotations

from typing import Any, Optional

from ..core.enums import RecordStatus
from ..core.exceptions import NotFoundError, ValidationError


def get_validated_id(value: Any, *, label: str = "Record") -> int:
    """Parse a record id taken from a URL segment or a form field."""
    text = str(value if value is not None else "").strip()
    if not text.isdigit() or int(text) <= 0:
        raise NotFoundError(f"{label} record not found")
    return int(text)


def optional_id(value: Optional[str]) -> Optional[int]:
    if value is None or value == "":
        return None
    return get_validated_id(value)


def parse_status(value: Optional[str]) -> Optional[RecordStatus]:
    if value is None or value == "":
        return None
    try:
        return RecordStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown status {value!r}")
