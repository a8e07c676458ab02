"""Custom exceptions for protex-specs."""


class ProtexSpecsError(Exception):
    """Base exception for protex-specs."""

    pass


class InputError(ProtexSpecsError):
    """Raised when a products file cannot be read or is not a JSON array."""

    pass
