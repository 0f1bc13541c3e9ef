from enum import Enum
from typing import Optional


class ExtractionErrorKind(str, Enum):
    TRANSPORT_FAILURE = "transport_failure"  # Model service unreachable or call failed
    SCHEMA_VIOLATION = "schema_violation"  # Response is not JSON of the expected shape
    NO_RESULT_AVAILABLE = "no_result_available"  # e.g. zero images generated


class ExtractionError(Exception):
    """A structured model call did not produce a usable result.

    Callers only display a failure message and let the user retry; `kind` and
    `cause` are kept for logging.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ExtractionErrorKind,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.cause = cause


class ChatSessionBusyError(Exception):
    """A message was sent while the previous reply is still streaming."""


class ChatSessionClosedError(Exception):
    """A message was sent to a session that has been discarded."""
