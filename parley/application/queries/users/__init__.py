"""User queries."""

from parley.application.queries.users.get_user import GetUserQuery, GetUserHandler
from parley.application.queries.users.lookup_user import (
    LookupUserByEmailQuery,
    LookupUserByEmailHandler,
    LookupUserByPhoneNumberQuery,
    LookupUserByPhoneNumberHandler,
)
from parley.application.queries.users.validate_user_ids import (
    ValidateUserIdsQuery,
    ValidateUserIdsHandler,
)

__all__ = [
    "GetUserQuery",
    "GetUserHandler",
    "LookupUserByEmailQuery",
    "LookupUserByEmailHandler",
    "LookupUserByPhoneNumberQuery",
    "LookupUserByPhoneNumberHandler",
    "ValidateUserIdsQuery",
    "ValidateUserIdsHandler",
]
