"""Progress state errors."""


class StateError(Exception):
    """Raised when persisted progress cannot be read or written."""
