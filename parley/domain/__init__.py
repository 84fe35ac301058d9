"""
DOMAIN LAYER - Users, conversations and messages

This layer contains:
- Entities: Business objects with identity (User, Membership, Message)
- Value Objects: Immutable types (UserId, ConversationId, UserEmail, PhoneNumber)
- Ports: Interfaces that infrastructure implements (repositories, push notifier)
- Exceptions: Domain-specific errors with stable, displayable messages

RULES:
1. NO framework imports (no FastAPI, Prisma, Redis, Pydantic, etc.)
2. NO I/O operations
3. Only depends on Python stdlib (phone parsing is the single exception)
"""
