"""
Exceptions raised by the store and the URL service.

Hierarchy:
    ShortlinkError
    ├── StoreError
    │   ├── CollisionError      - put() on a code that already exists
    │   ├── NotFoundError       - get() on a code that was never stored
    │   └── PersistenceError    - the backend itself failed
    ├── CodeGenerationError     - every regenerate-and-retry attempt collided
    └── InvalidTargetURLError   - nothing to shorten

The HTTP layer maps these to status codes in main.py.
"""


class ShortlinkError(Exception):
    """Base class for all service errors."""
    pass


class StoreError(ShortlinkError):
    """Base class for URL store errors."""
    pass


class CollisionError(StoreError):
    """Raised when inserting a code that is already mapped."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Short code '{code}' already exists")


class NotFoundError(StoreError):
    """Raised when a code has no mapping."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Short code '{code}' not found")


class PersistenceError(StoreError):
    """Raised when the storage backend is unreachable or fails."""
    pass


class CodeGenerationError(ShortlinkError):
    """Raised when no free short code was found within the retry budget."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"Could not generate unique short code after {attempts} attempts"
        )


class InvalidTargetURLError(ShortlinkError):
    """Raised when the URL to shorten is empty."""
    pass
