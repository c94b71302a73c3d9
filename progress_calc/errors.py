"""Error types raised by the progression engine."""


class InvalidInputError(ValueError):
    """Raised when a caller passes a value outside an operation's domain."""
