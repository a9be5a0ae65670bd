"""Submission state for one rendered form.

A :class:`SubmissionContext` belongs to exactly one form instance. It is
created when the form mounts, changed only by the transport's lifecycle events
(start, receive, fail) and dropped on unmount. Reads go through
:meth:`SubmissionContext.value_of`, :meth:`SubmissionContext.errors_of` and
:attr:`SubmissionContext.is_submitting`.

Lifecycle::

    IDLE --start--> PENDING --receive(ok)-------> IDLE_SUCCESS
                            --receive(errors)---> IDLE_WITH_ERRORS
                            --fail--------------> IDLE_WITH_ERRORS

Only the submission returned by the latest :meth:`start` can settle the
context, and nothing settles it once it is unmounted.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional

from .errors import MalformedSubmissionError, SubmissionInFlightError, TransportError
from .responses import SubmissionResponse
from .schema import RawFields, RawValue

logger = logging.getLogger(__name__)

TRANSPORT_ERROR_MESSAGE = "Could not reach the server, please try again"


class SubmissionState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    IDLE_WITH_ERRORS = "idle_with_errors"
    IDLE_SUCCESS = "idle_success"


@dataclass(frozen=True)
class Submission:
    number: int
    data: RawFields = field(default_factory=dict)


class SubmissionContext:
    def __init__(self, defaults: Optional[Mapping[str, RawValue]] = None):
        self._defaults = dict(defaults or {})
        self._response: Optional[SubmissionResponse] = None
        self._pending: Optional[Submission] = None
        self._transport_error: Optional[str] = None
        self._state = SubmissionState.IDLE
        self._counter = 0
        self._mounted = True

    @classmethod
    def from_response(
        cls,
        response: SubmissionResponse,
        defaults: Optional[Mapping[str, RawValue]] = None,
    ) -> "SubmissionContext":
        """Context for a server-side re-render of a submission already handled."""
        ctx = cls(defaults)
        submission = ctx.start(response.fields)
        ctx.receive(submission, response)
        return ctx

    def __repr__(self) -> str:
        return f"SubmissionContext(state={self._state.value!r}, mounted={self._mounted})"

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def is_submitting(self) -> bool:
        return self._pending is not None

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    @property
    def response(self) -> Optional[SubmissionResponse]:
        return self._response

    @property
    def pending(self) -> Optional[Submission]:
        return self._pending

    @property
    def form_error(self) -> Optional[str]:
        if self._transport_error is not None:
            return self._transport_error
        if self._response is not None:
            return self._response.form_error
        return None

    def value_of(self, name: str) -> RawValue:
        if self._response is not None and name in self._response.fields:
            return self._response.fields[name]
        return self._defaults.get(name, "")

    def errors_of(self, name: str) -> List[str]:
        if self._response is None:
            return []
        return self._response.errors_for(name)

    # Transport lifecycle events.

    def start(self, data: Optional[Mapping[str, RawValue]] = None) -> Optional[Submission]:
        if not self._mounted:
            return None
        if self._pending is not None:
            raise SubmissionInFlightError("A submission is already in flight for this form")
        self._counter += 1
        self._pending = Submission(self._counter, dict(data or {}))
        self._state = SubmissionState.PENDING
        return self._pending

    def receive(self, submission: Optional[Submission], response: SubmissionResponse) -> bool:
        if not self._settles(submission):
            return False
        self._response = response
        self._transport_error = None
        self._pending = None
        self._state = SubmissionState.IDLE_SUCCESS if response.ok else SubmissionState.IDLE_WITH_ERRORS
        return True

    def fail(self, submission: Optional[Submission], message: Optional[str] = None) -> bool:
        # The previous response stays; only the form error changes.
        if not self._settles(submission):
            return False
        self._transport_error = message or TRANSPORT_ERROR_MESSAGE
        self._pending = None
        self._state = SubmissionState.IDLE_WITH_ERRORS
        return True

    def reset(self) -> None:
        if not self._mounted:
            return
        if self._pending is not None:
            raise SubmissionInFlightError("Cannot reset a form while it is submitting")
        self._response = None
        self._transport_error = None
        self._state = SubmissionState.IDLE

    def unmount(self) -> None:
        self._mounted = False
        self._pending = None

    def _settles(self, submission: Optional[Submission]) -> bool:
        return self._mounted and submission is not None and self._pending is submission


Send = Callable[[RawFields], Any]


class FormSubmitter:
    """Drives a context over a ``send(form_data) -> json`` callable.

    ``send`` raises :class:`TransportError` (or an ``OSError`` such as a
    timeout) when no reply came back; its return value is the decoded JSON
    reply.
    """

    def __init__(self, context: SubmissionContext, send: Send):
        self._context = context
        self._send = send

    @property
    def context(self) -> SubmissionContext:
        return self._context

    def submit(self, data: Mapping[str, RawValue]) -> Optional[SubmissionResponse]:
        submission = self._context.start(data)
        if submission is None:
            return None

        try:
            payload = self._send(submission.data)
        except (TransportError, OSError) as e:
            logger.warning("Submission %s failed at transport level: %s", submission.number, e)
            self._context.fail(submission)
            return None
        except Exception:
            self._context.fail(submission)
            raise

        try:
            response = SubmissionResponse.from_json(payload)
        except MalformedSubmissionError:
            self._context.fail(submission)
            raise

        self._context.receive(submission, response)
        return response


def client_transport(client: Any, url: str, *, headers: Optional[Mapping[str, str]] = None) -> Send:
    """Build a ``send`` posting through a Flask/werkzeug test client."""
    request_headers = {"Accept": "application/json", "X-Requested-With": "fetch"}
    request_headers.update(headers or {})

    def send(data: RawFields) -> Any:
        reply = client.post(url, data=data, headers=request_headers)
        status = reply.status_code
        if status >= 500:
            raise TransportError(f"Server answered {status}")
        payload = reply.get_json(silent=True)
        if payload is None:
            raise MalformedSubmissionError(f"Server answered {status} without JSON")
        return payload

    return send
