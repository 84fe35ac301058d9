"""
APPLICATION LAYER - Use Cases & Orchestration

This layer contains:
- commands/  → Write operations (CQRS): registration, conversation lifecycle, posting
- queries/   → Read operations (CQRS): lookups, conversation views, history
- services/  → Orchestration shared by handlers (user directory, resolver, reader)
- dto/       → Data Transfer Objects for the HTTP layer
- common/    → Shared interfaces (Command, Query base classes)

Rules:
- Depends on Domain layer only
- No HTTP/framework code here
- Every business invariant is checked here, before any write
"""
