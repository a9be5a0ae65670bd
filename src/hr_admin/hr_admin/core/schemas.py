from __future__ import annotations

from ..forms import OneOf, string
from .enums import RecordStatus

STATUS_CHOICES = tuple(s.value for s in RecordStatus)


def status_field(name: str = "status"):
    return string(name, OneOf(STATUS_CHOICES))


def status_filter_field(name: str = "status"):
    return string(name, OneOf(STATUS_CHOICES), optional=True, allow_empty=True)


def id_filter_field(name: str):
    return string(name, optional=True, allow_empty=True)
