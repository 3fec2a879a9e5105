from __future__ import annotations

import enum
import json
from typing import Any


class ErrorKind(str, enum.Enum):
    INVALID_REQUEST = "invalid_request"
    UNAUTHORIZED = "unauthorized"
    CONTENT_MODERATION = "content_moderation"
    RECORD_NOT_FOUND = "record_not_found"
    UNKNOWN = "unknown"
    MALFORMED_RESPONSE = "malformed_response"
    INVALID_INPUT = "invalid_input"


class StabilityAIError(Exception):
    """Base exception for all Stability AI SDK errors."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, status_code: int | None = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class InvalidRequestError(StabilityAIError):
    """Raised when the API rejects the request parameters (400)."""

    kind = ErrorKind.INVALID_REQUEST


class UnauthorizedError(StabilityAIError):
    """Raised when the API key is missing or invalid (401)."""

    kind = ErrorKind.UNAUTHORIZED


class ContentModerationError(StabilityAIError):
    """Raised when the request was flagged by content moderation (403)."""

    kind = ErrorKind.CONTENT_MODERATION


class RecordNotFoundError(StabilityAIError):
    """Raised when the requested record, e.g. a job id, does not exist (404)."""

    kind = ErrorKind.RECORD_NOT_FOUND


class UnknownError(StabilityAIError):
    """Raised for any other non-success status."""

    kind = ErrorKind.UNKNOWN


class MalformedResponseError(StabilityAIError):
    """Raised when a success response does not have the shape the API documents."""

    kind = ErrorKind.MALFORMED_RESPONSE


class InvalidInputError(StabilityAIError, ValueError):
    """Raised for caller input that cannot be sent, e.g. an unresolvable image."""

    kind = ErrorKind.INVALID_INPUT


_STATUS_ERRORS: dict[int, type[StabilityAIError]] = {
    400: InvalidRequestError,
    401: UnauthorizedError,
    403: ContentModerationError,
    404: RecordNotFoundError,
}


def _serialize_payload(payload: Any) -> str:
    try:
        return json.dumps(payload)
    except (TypeError, ValueError):
        return ""


def classify_error(status_code: int, message: str, payload: Any = None) -> StabilityAIError:
    """Build the error for a non-success *status_code*.

    Never raises itself: a payload that cannot be serialized leaves an empty
    segment in the message.
    """
    exc_cls = _STATUS_ERRORS.get(status_code, UnknownError)
    return exc_cls(
        f"{message}: {_serialize_payload(payload)}",
        status_code=status_code,
        payload=payload,
    )
