"""Exception hierarchy for the OHS inspection report engine.

Scoring and assembly never raise for malformed inspection data; these types
cover the collaborators around them: fetching audit documents from the
inspection application and reading persisted reports.
"""

from __future__ import annotations


class ReportError(Exception):
    """Base exception for all report-engine errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class ReportConnectionError(ReportError):
    """Raised when the inspection application is unreachable."""


class ReportAuthError(ReportError):
    """Raised when the inspection API rejects the credentials (401)."""


class ReportPermissionError(ReportError):
    """Raised when the token lacks access to the requested audit (403)."""


class ReportNotFoundError(ReportError):
    """Raised when an audit or stored report does not exist."""


class ReportAPIError(ReportError):
    """Raised for unexpected API responses (5xx, malformed payload, success=false)."""

    def __init__(self, message: str, status_code: int | None = None, details: dict | None = None) -> None:
        super().__init__(message, details)
        self.status_code = status_code
