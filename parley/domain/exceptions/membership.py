"""
Membership errors.

AlreadyMemberError maps to HTTP 409 Conflict.
NotMemberError maps to HTTP 403 Forbidden; it is what gates every read and
write on a conversation.
"""


class AlreadyMemberError(Exception):
    def __init__(self, message: str = "User already part of conversation"):
        super().__init__(message)
        self.message = message


class NotMemberError(Exception):
    def __init__(self, message: str = "User is not part of conversation"):
        super().__init__(message)
        self.message = message
