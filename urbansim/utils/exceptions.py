"""Exceptions raised by the planning core."""


class ValidationError(ValueError):
    """Raised when city parameters or user input fail validation."""


class RangeError(ValueError):
    """Raised when a placement coordinate lies outside the placement grid."""


class ProjectFileError(IOError):
    """Raised when a project file cannot be read or parsed at all."""
