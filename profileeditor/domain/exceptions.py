"""
Domain-specific exception hierarchy for the profile editor.
"""


class ProfileEditorError(Exception):
    """Base class for all application-level errors."""


class InvalidDateError(ProfileEditorError, ValueError):
    """Raised when a stored or typed date cannot be read as a calendar day."""


class InvalidFieldValueError(ProfileEditorError, ValueError):
    """Raised when a service field update does not fit the field's type."""


class ProfileStoreError(ProfileEditorError):
    """Raised when the profile store cannot load or save a profile."""


class IncompleteServicesError(ProfileEditorError):
    """
    Raised when saving services would drop drafts that failed validation.

    The rejected commit is attached so the caller can show what is missing.
    """

    def __init__(self, result) -> None:
        self.result = result
        names = ", ".join(
            f"#{outcome.index + 1} ({', '.join(r.value for r in outcome.reasons)})"
            for outcome in result.rejected
        )
        super().__init__(f"{len(result.rejected)} incomplete service(s) would be dropped: {names}")
