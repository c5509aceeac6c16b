"""Error taxonomy for quote lookups and request dispatch."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Why a turn produced no quote.

    Network and parse failures are folded into an empty result before they
    reach the pager; the kind survives only in log records.
    """

    NETWORK_FAILURE = "network_failure"
    PARSE_FAILURE = "parse_failure"
    EMPTY_RESULT = "empty_result"
    NO_ACTIVE_SESSION = "no_active_session"
    SESSION_EXHAUSTED = "session_exhausted"


class QuoteParseError(Exception):
    """Raised when a lookup payload does not have the expected structure."""

    kind = ErrorKind.PARSE_FAILURE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidIntentError(Exception):
    """Raised when the dispatcher receives an intent it does not handle."""

    def __init__(self, intent_name: str) -> None:
        super().__init__(f"Invalid intent: {intent_name!r}")
        self.intent_name = intent_name
