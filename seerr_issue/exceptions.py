"""Exceptions raised by the issue reporting workflow.

Field validation problems are not exceptions: ``form.validate`` returns
them as a mapping so they can be shown next to the offending field.
"""
from typing import Optional


class IssueReportError(Exception):
    """Base exception for issue reporting errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DataUnavailableError(IssueReportError):
    """Raised when the media/availability data for a title cannot be loaded.

    The report dialog stays in its loading state with every control
    disabled instead of guessing defaults.
    """

    def __init__(self, message: str, media_type: Optional[str] = None, tmdb_id: Optional[int] = None) -> None:
        self.media_type = media_type
        self.tmdb_id = tmdb_id
        super().__init__(message)


class SubmissionError(IssueReportError):
    """Raised when Overseerr rejects or never answers an issue creation.

    The form keeps its values so the user can retry.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class SubmissionInProgressError(IssueReportError):
    """Raised when a form is submitted again while a submission is in flight."""

    def __init__(self) -> None:
        super().__init__("A submission is already in progress for this form")
