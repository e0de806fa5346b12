"""Engine exceptions."""


class ValidationError(ValueError):
    """Raised when input fails domain validation."""
