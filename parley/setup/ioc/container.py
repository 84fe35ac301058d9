"""
Dishka DI Container Setup.

- Registers storage, services and every command/query handler
- Maps abstract ports to concrete implementations
- Manages lifecycle: storage is APP scoped (one per container), services
  and handlers are REQUEST scoped

Storage backend is chosen by Config.STORAGE_BACKEND:
- "memory": dict-backed repositories living as long as the container
- "prisma": PostgreSQL through the generated Prisma client, connected when
  the container first needs it and disconnected when it closes

With Config.REDIS_CACHE_ENABLED the message repository is wrapped in the
Redis read-through cache.

Flow:
  Container → Storage → UserDirectory → RegisterUserWithEmailHandler
                  ↓
          UserRepository port
"""

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass

from dishka import AsyncContainer, Provider, Scope, make_async_container, provide

from parley.application.commands.conversations import (
    InitiateConversationHandler,
    JoinConversationHandler,
    RemoveFromConversationHandler,
)
from parley.application.commands.messages import PostMessageHandler
from parley.application.commands.users import (
    DeleteUserHandler,
    RegisterUserWithEmailHandler,
    RegisterUserWithPhoneNumberHandler,
    UpdateUserHandler,
)
from parley.application.queries.conversations import (
    ExistingConversationIdAmongstUsersHandler,
    GetConversationHandler,
    GetConversationHistoryHandler,
    GetConversationIdsHandler,
    GetConversationUsersHandler,
)
from parley.application.queries.users import (
    GetUserHandler,
    LookupUserByEmailHandler,
    LookupUserByPhoneNumberHandler,
    ValidateUserIdsHandler,
)
from parley.application.services import (
    ConversationReader,
    ConversationResolver,
    UserDirectory,
)
from parley.config.settings import Config
from parley.domain.ports.repositories import (
    MembershipRepository,
    MessageRepository,
    UserRepository,
)
from parley.domain.ports.services import PushNotifier
from parley.infrastructure.memory import (
    InMemoryMembershipRepository,
    InMemoryMessageRepository,
    InMemoryUserRepository,
)
from parley.infrastructure.notifications import LoggingPushNotifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Storage:
    users: UserRepository
    memberships: MembershipRepository
    messages: MessageRepository


def with_message_cache(messages: MessageRepository) -> MessageRepository:
    if not Config.REDIS_CACHE_ENABLED:
        return messages
    from parley.config.redis_client import get_redis
    from parley.infrastructure.cache import CachedMessageRepository

    return CachedMessageRepository(messages, get_redis().redis)


class AppProvider(Provider):
    """
    Application dependency provider.

    Registers all dependencies and their implementations.
    """

    # ==================== STORAGE ====================

    @provide(scope=Scope.APP)
    async def get_storage(self) -> AsyncIterator[Storage]:
        """
        Provide the three storage collaborators (singleton, app-scoped).

        The Prisma client and repositories are imported only for the
        "prisma" backend, so the memory backend runs without a generated client.
        """
        if Config.STORAGE_BACKEND == "prisma":
            from prisma import Prisma
            from parley.infrastructure.persistence import (
                PrismaMembershipRepository,
                PrismaMessageRepository,
                PrismaUserRepository,
            )

            prisma = Prisma()
            await prisma.connect()
            logger.info("Connected Prisma storage backend")
            yield Storage(
                users=PrismaUserRepository(prisma),
                memberships=PrismaMembershipRepository(prisma),
                messages=with_message_cache(PrismaMessageRepository(prisma)),
            )
            await prisma.disconnect()
        else:
            logger.info("Using in-memory storage backend")
            yield Storage(
                users=InMemoryUserRepository(),
                memberships=InMemoryMembershipRepository(),
                messages=with_message_cache(InMemoryMessageRepository()),
            )

    # ==================== REPOSITORIES ====================

    @provide(scope=Scope.APP)
    def get_user_repository(self, storage: Storage) -> UserRepository:
        return storage.users

    @provide(scope=Scope.APP)
    def get_membership_repository(self, storage: Storage) -> MembershipRepository:
        return storage.memberships

    @provide(scope=Scope.APP)
    def get_message_repository(self, storage: Storage) -> MessageRepository:
        return storage.messages

    @provide(scope=Scope.APP)
    def get_push_notifier(self) -> PushNotifier:
        return LoggingPushNotifier()

    # ==================== SERVICES ====================

    @provide(scope=Scope.REQUEST)
    def get_user_directory(self, user_repository: UserRepository) -> UserDirectory:
        return UserDirectory(user_repository, Config.DEFAULT_PHONE_REGION)

    @provide(scope=Scope.REQUEST)
    def get_conversation_resolver(
        self,
        membership_repository: MembershipRepository,
        user_directory: UserDirectory,
    ) -> ConversationResolver:
        return ConversationResolver(membership_repository, user_directory)

    @provide(scope=Scope.REQUEST)
    def get_conversation_reader(
        self,
        membership_repository: MembershipRepository,
        message_repository: MessageRepository,
        user_directory: UserDirectory,
    ) -> ConversationReader:
        return ConversationReader(
            membership_repository, message_repository, user_directory
        )

    # ==================== USER HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_register_with_email_handler(
        self, user_directory: UserDirectory
    ) -> RegisterUserWithEmailHandler:
        return RegisterUserWithEmailHandler(user_directory)

    @provide(scope=Scope.REQUEST)
    def get_register_with_phone_handler(
        self, user_directory: UserDirectory
    ) -> RegisterUserWithPhoneNumberHandler:
        return RegisterUserWithPhoneNumberHandler(user_directory)

    @provide(scope=Scope.REQUEST)
    def get_update_user_handler(self, user_directory: UserDirectory) -> UpdateUserHandler:
        return UpdateUserHandler(user_directory)

    @provide(scope=Scope.REQUEST)
    def get_delete_user_handler(self, user_directory: UserDirectory) -> DeleteUserHandler:
        return DeleteUserHandler(user_directory)

    @provide(scope=Scope.REQUEST)
    def get_get_user_handler(self, user_directory: UserDirectory) -> GetUserHandler:
        return GetUserHandler(user_directory)

    @provide(scope=Scope.REQUEST)
    def get_lookup_by_email_handler(
        self, user_directory: UserDirectory
    ) -> LookupUserByEmailHandler:
        return LookupUserByEmailHandler(user_directory)

    @provide(scope=Scope.REQUEST)
    def get_lookup_by_phone_handler(
        self, user_directory: UserDirectory
    ) -> LookupUserByPhoneNumberHandler:
        return LookupUserByPhoneNumberHandler(user_directory)

    @provide(scope=Scope.REQUEST)
    def get_validate_user_ids_handler(
        self, user_directory: UserDirectory
    ) -> ValidateUserIdsHandler:
        return ValidateUserIdsHandler(user_directory)

    # ==================== CONVERSATION HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_initiate_conversation_handler(
        self, conversation_resolver: ConversationResolver
    ) -> InitiateConversationHandler:
        return InitiateConversationHandler(conversation_resolver)

    @provide(scope=Scope.REQUEST)
    def get_join_conversation_handler(
        self,
        membership_repository: MembershipRepository,
        conversation_reader: ConversationReader,
        user_directory: UserDirectory,
    ) -> JoinConversationHandler:
        return JoinConversationHandler(
            membership_repository, conversation_reader, user_directory
        )

    @provide(scope=Scope.REQUEST)
    def get_remove_from_conversation_handler(
        self, membership_repository: MembershipRepository
    ) -> RemoveFromConversationHandler:
        return RemoveFromConversationHandler(membership_repository)

    @provide(scope=Scope.REQUEST)
    def get_existing_conversation_id_handler(
        self, conversation_resolver: ConversationResolver
    ) -> ExistingConversationIdAmongstUsersHandler:
        return ExistingConversationIdAmongstUsersHandler(conversation_resolver)

    @provide(scope=Scope.REQUEST)
    def get_conversation_ids_handler(
        self, conversation_reader: ConversationReader
    ) -> GetConversationIdsHandler:
        return GetConversationIdsHandler(conversation_reader)

    @provide(scope=Scope.REQUEST)
    def get_conversation_users_handler(
        self, conversation_reader: ConversationReader
    ) -> GetConversationUsersHandler:
        return GetConversationUsersHandler(conversation_reader)

    @provide(scope=Scope.REQUEST)
    def get_conversation_handler(
        self, conversation_reader: ConversationReader
    ) -> GetConversationHandler:
        return GetConversationHandler(conversation_reader)

    @provide(scope=Scope.REQUEST)
    def get_conversation_history_handler(
        self, conversation_reader: ConversationReader
    ) -> GetConversationHistoryHandler:
        return GetConversationHistoryHandler(conversation_reader)

    # ==================== MESSAGE HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_post_message_handler(
        self,
        message_repository: MessageRepository,
        conversation_reader: ConversationReader,
        user_directory: UserDirectory,
        push_notifier: PushNotifier,
    ) -> PostMessageHandler:
        return PostMessageHandler(
            message_repository,
            conversation_reader,
            user_directory,
            push_notifier,
            notifications_enabled=Config.PUSH_NOTIFICATIONS_ENABLED,
        )


def create_container() -> AsyncContainer:
    """
    Create and configure the DI container.

    Each container owns its own storage, so tests get a clean in-memory
    backend per container.
    """
    return make_async_container(AppProvider())
