"""
UnknownSenderError - The sender of a message is not a registered user.
Maps to: HTTP 403 Forbidden
"""


class UnknownSenderError(Exception):
    def __init__(self, message: str = "Sender is not valid"):
        super().__init__(message)
        self.message = message
