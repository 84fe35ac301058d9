"""
INFRASTRUCTURE LAYER - Implementations of domain ports

- memory/: in-process repositories (tests, local development)
- persistence/: Prisma (PostgreSQL) repositories
- cache/: Redis caching decorators
- notifications/: PushNotifier implementations
"""
