"""
Exceptions raised on invalid inputs.
"""


class ValidationError(Exception):
    """Raised when input validation fails."""

    pass


class InsufficientPointsError(ValidationError):
    """Raised when a triangle fan is requested for fewer than 2 points."""

    pass
