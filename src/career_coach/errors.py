"""
Error taxonomy for the Career Coach API.

Every error carries a stable error code, so the HTTP layer can map it to a
status and a response body without inspecting messages.
"""

from typing import Any, Dict, Optional


class CareerCoachError(Exception):
    """Base class for errors surfaced to API callers."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.error_code,
            "detail": self.message,
            **self.details,
        }


class MissingField(CareerCoachError):
    """A required input was absent or empty."""

    def __init__(self, *fields: str):
        names = ", ".join(fields)
        super().__init__(f"Missing required field(s): {names}")
        self.details["fields"] = list(fields)


class UnknownSession(CareerCoachError):
    """No live session exists for the given id."""

    def __init__(self, session_id: Optional[str], reason: str = "Invalid session"):
        super().__init__(f"{reason}: {session_id}")
        self.details["session_id"] = session_id


class InvalidStage(CareerCoachError):
    """A stage value outside the interview script was used."""

    def __init__(self, stage: Any):
        super().__init__(f"Unrecognized interview stage: {stage!r}")
        self.details["stage"] = str(stage)


class GenerationFailed(CareerCoachError):
    """The upstream text generation failed, timed out or returned nothing."""

    def __init__(self, message: str = "Text generation failed", session_id: Optional[str] = None):
        super().__init__(message)
        if session_id is not None:
            self.details["session_id"] = session_id


class InvalidRequest(CareerCoachError):
    """The request was well-formed but asked for something unsupported."""
