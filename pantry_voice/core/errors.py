"""Error classification utilities for voice sessions and inventory queries."""

from enum import Enum, StrEnum
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel


if TYPE_CHECKING:
    from pantry_voice.core.lexicon import Lexicon


class VoiceErrorKind(StrEnum):
    """Terminal, user-visible failures of a voice session. Reported, never raised."""

    CAPABILITY_UNAVAILABLE = "capability_unavailable"
    RECOGNITION_FAILED = "recognition_failed"
    QUERY_COLLABORATOR_FAILURE = "query_collaborator_failure"
    UNRECOGNIZED = "unrecognized"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ErrorCode:
    """Error codes for specific error conditions."""

    ERR_CAPABILITY_UNAVAILABLE = "ERR_CAPABILITY_UNAVAILABLE"
    ERR_RECOGNITION_FAILED = "ERR_RECOGNITION_FAILED"
    ERR_QUERY_COLLABORATOR_FAILURE = "ERR_QUERY_COLLABORATOR_FAILURE"
    ERR_UNRECOGNIZED = "ERR_UNRECOGNIZED"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    kind: VoiceErrorKind
    message: str
    suggestion: str
    severity: ErrorSeverity


class InventoryUnavailableError(RuntimeError):
    """The inventory collaborator could not provide or accept items."""


_ERROR_CODES: dict[VoiceErrorKind, tuple[str, ErrorSeverity]] = {
    VoiceErrorKind.CAPABILITY_UNAVAILABLE: (ErrorCode.ERR_CAPABILITY_UNAVAILABLE, ErrorSeverity.HIGH),
    VoiceErrorKind.RECOGNITION_FAILED: (ErrorCode.ERR_RECOGNITION_FAILED, ErrorSeverity.MEDIUM),
    VoiceErrorKind.QUERY_COLLABORATOR_FAILURE: (ErrorCode.ERR_QUERY_COLLABORATOR_FAILURE, ErrorSeverity.MEDIUM),
    VoiceErrorKind.UNRECOGNIZED: (ErrorCode.ERR_UNRECOGNIZED, ErrorSeverity.LOW),
}


def build_error_response(kind: VoiceErrorKind, lexicon: "Lexicon", *, transcript: str = "") -> ErrorResponse:
    """Build the user-facing error for a session failure kind.

    Args:
        kind: The failure kind
        lexicon: Locale tables holding the user-facing sentences
        transcript: Recognized text, quoted back for UNRECOGNIZED

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    responses = lexicon.responses
    code, severity = _ERROR_CODES[kind]

    if kind == VoiceErrorKind.CAPABILITY_UNAVAILABLE:
        message, suggestion = responses.capability_unavailable, responses.capability_unavailable_suggestion
    elif kind == VoiceErrorKind.RECOGNITION_FAILED:
        message, suggestion = responses.recognition_failed, responses.recognition_failed_suggestion
    elif kind == VoiceErrorKind.QUERY_COLLABORATOR_FAILURE:
        message, suggestion = responses.query_error, responses.query_error_summary
    else:
        message = responses.unrecognized.format(transcript=transcript)
        suggestion = responses.unrecognized_suggestion

    return ErrorResponse(code=code, kind=kind, message=message, suggestion=suggestion, severity=severity)


_ERROR_PATTERNS: dict[
    Literal["timeout", "network", "server", "payload"],
    dict[str, list[str] | set[str]],
] = {
    "timeout": {
        "phrases": ["timeout", "timed out"],
        "exception_types": {"TimeoutError", "TimeoutException", "ReadTimeout", "ConnectTimeout"},
    },
    "network": {
        "phrases": ["connection", "unreachable", "network", "name resolution"],
        "exception_types": {"ConnectionError", "ConnectError", "NetworkError"},
    },
    "server": {
        "phrases": ["500", "502", "503", "504", "server error"],
        "exception_types": {"HTTPStatusError"},
    },
    "payload": {
        "phrases": ["validation error", "json", "expecting value"],
        "exception_types": {"ValidationError", "JSONDecodeError", "TypeError"},
    },
}


def _match_error_pattern(
    *,
    error_str: str,
    exception_type: str,
    pattern_type: Literal["timeout", "network", "server", "payload"],
) -> bool:
    """Return True if the error matches the configured pattern type."""
    patterns = _ERROR_PATTERNS[pattern_type]
    return any(phrase in error_str for phrase in patterns["phrases"]) or exception_type in patterns["exception_types"]


def classify_inventory_error(exception: BaseException) -> str:
    """Classify an inventory fetch failure for log context.

    Type names are checked before message phrases so a timeout whose message
    mentions the connection is still reported as a timeout.

    Args:
        exception: The exception raised while fetching inventory items

    Returns:
        One of "timeout", "network", "server", "payload" or "unknown"
    """
    error_str = str(exception).lower()
    exception_type = type(exception).__name__

    for pattern_type in ("timeout", "network", "server", "payload"):
        if exception_type in _ERROR_PATTERNS[pattern_type]["exception_types"]:
            return pattern_type

    for pattern_type in ("timeout", "network", "server", "payload"):
        if _match_error_pattern(error_str=error_str, exception_type=exception_type, pattern_type=pattern_type):
            return pattern_type

    return "unknown"
