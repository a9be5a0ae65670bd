from __future__ import annotations

from ..forms import MinLength, Schema, string

LoginSchema = Schema(
    string("username", MinLength(1)),
    string("password"),
    name="login",
)
