"""
DuplicateIdentityError - A user id, email or phone number is already registered.
Maps to: HTTP 409 Conflict
"""


class DuplicateIdentityError(Exception):
    def __init__(self, message: str = "User already exists"):
        super().__init__(message)
        self.message = message
