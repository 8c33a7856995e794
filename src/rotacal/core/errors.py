"""Common rotacal-specific exceptions."""


class RotacalValueError(ValueError):
    """Raised when rotacal detects invalid user-provided data."""


class InvalidPatternError(RotacalValueError):
    """Raised when a rotation pattern string cannot be parsed into on/off days."""


class ScheduleStoreError(RotacalValueError):
    """Raised when a schedule store file is unreadable or malformed."""


__all__ = ["RotacalValueError", "InvalidPatternError", "ScheduleStoreError"]
