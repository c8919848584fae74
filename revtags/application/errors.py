"""
Draft Errors
============

Failures that reach the caller. Each carries the HTTP status the web layer
answers with; attempt-level failures never get this far.
"""


class ReviewDraftError(Exception):
    """Base exception for draft failures surfaced to the caller."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputError(ReviewDraftError):
    """A required request field is missing."""
    status_code = 400


class ConfigError(ReviewDraftError):
    """The generation service credential is not configured."""
    status_code = 500


class UpstreamFatalError(ReviewDraftError):
    """Every attempt failed at the generation service; nothing to validate."""
    status_code = 500
