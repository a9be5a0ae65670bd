from __future__ import annotations

from enum import Enum, IntEnum


class RecordStatus(str, Enum):
    """Status stored on employee and department rows."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"

    def toggled(self) -> "RecordStatus":
        return RecordStatus.INACTIVE if self is RecordStatus.ACTIVE else RecordStatus.ACTIVE


class StatusCode(IntEnum):
    OK = 200
    BAD_REQUEST = 400
    FORBIDDEN = 403
    NOT_FOUND = 404
