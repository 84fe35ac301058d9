"""
DOMAIN EXCEPTIONS - Business rule violations

These exceptions are raised by domain and application logic and caught by the
presentation layer, which maps them to HTTP status codes. Their messages are
stable and safe to show to end users.
"""

from parley.domain.exceptions.invalid_input import InvalidInputError
from parley.domain.exceptions.invalid_participants import InvalidParticipantsError
from parley.domain.exceptions.duplicate_identity import DuplicateIdentityError
from parley.domain.exceptions.membership import AlreadyMemberError, NotMemberError
from parley.domain.exceptions.unknown_sender import UnknownSenderError
from parley.domain.exceptions.entity_not_found import EntityNotFoundError
from parley.domain.exceptions.conditional_write import ConditionalWriteError

__all__ = [
    "InvalidInputError",
    "InvalidParticipantsError",
    "DuplicateIdentityError",
    "AlreadyMemberError",
    "NotMemberError",
    "UnknownSenderError",
    "EntityNotFoundError",
    "ConditionalWriteError",
]
