from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """A login account.

    Plain data: no database access lives here.
    """

    user_id: int
    username: str
    password_hash: str
    employee_id: Optional[int] = None
