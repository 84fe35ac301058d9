"""
InvalidInputError - Raised when arguments are missing or malformed.
Raised before any storage access. Maps to: HTTP 400 Bad Request
"""


class InvalidInputError(Exception):
    """Exception raised for malformed or missing arguments."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
