"""
EntityNotFoundError - Raised when an operation requires an entity that does not exist.
Plain lookups return None instead. Maps to: HTTP 404 Not Found
"""


class EntityNotFoundError(Exception):
    """Exception raised when a requested entity is not found."""

    def __init__(self, message: str = "The requested entity was not found."):
        super().__init__(message)
        self.message = message
