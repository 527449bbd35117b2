"""Engine error types."""


class InvalidArgument(ValueError):
    """Raised when engine inputs are out of range. No partial result is produced."""
