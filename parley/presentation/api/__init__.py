"""
API Routers - FastAPI endpoint definitions.
"""

from parley.presentation.api.users import router as users_router
from parley.presentation.api.conversations import router as conversations_router
from parley.presentation.api.metrics import router as metrics_router

__all__ = [
    "users_router",
    "conversations_router",
    "metrics_router",
]
