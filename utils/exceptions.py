class TruScoreError(Exception):
    """Base exception for the project."""

class ReferenceDataError(TruScoreError):
    """Raised when the rubric or a reference table cannot be loaded."""
