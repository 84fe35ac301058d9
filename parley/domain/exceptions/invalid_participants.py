"""
InvalidParticipantsError - One or more user ids do not resolve to a user.
Maps to: HTTP 400 Bad Request
"""


class InvalidParticipantsError(Exception):
    def __init__(self, message: str = "UserIds not valid"):
        super().__init__(message)
        self.message = message
