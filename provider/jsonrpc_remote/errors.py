"""Error taxonomy for the JSON-RPC remote plugin.

Every error class carries the reason string that is put on the wire. The
processor never leaks the exception message itself: ``InvalidParams`` and
``HandlerFault`` both surface as ``"invalid method call"`` and are only told
apart in the logs.
"""

from __future__ import annotations

from .constants import (
    REASON_ENVELOPE_INCOMPLETE,
    REASON_INVALID_METHOD,
    REASON_INVALID_METHOD_CALL,
    REASON_INVALID_REQUEST,
)


class RpcError(Exception):
    """Base class for all request-level failures."""

    reason: str = REASON_INVALID_METHOD_CALL

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.reason)
        self.message = message or self.reason


class MalformedPayload(RpcError):
    """The payload could not be decoded as a JSON object."""

    reason = REASON_INVALID_REQUEST


class EnvelopeIncomplete(RpcError):
    """The envelope lacks a ``method`` or an ``id`` member."""

    reason = REASON_ENVELOPE_INCOMPLETE


class UnknownMethod(RpcError):
    """The named method is not registered."""

    reason = REASON_INVALID_METHOD

    def __init__(self, method: object) -> None:
        super().__init__(f"method {method!r} is not registered")
        self.method = method


class HandlerError(RpcError):
    """Raised while a handler executes."""

    reason = REASON_INVALID_METHOD_CALL


class InvalidParams(HandlerError):
    """A required parameter is missing or has the wrong kind."""

    def __init__(self, key: str, message: str | None = None) -> None:
        super().__init__(message or f"invalid or missing parameter '{key}'")
        self.key = key


class HandlerFault(HandlerError):
    """Any other failure inside a handler, including collaborator lookups."""

    def __init__(self, method: str, cause: BaseException) -> None:
        super().__init__(f"{method} failed: {cause!r}")
        self.method = method
        self.cause = cause
