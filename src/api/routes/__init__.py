"""
API routes for the case-lifecycle engine.

Available routers:
- health: Health check endpoint
- protocols: Protocol to resource conversion
- sessions: Session completion, agenda, votings and distributions
- decisions: Decisions and their publication ledger
- notification_lists: Notification lists, items and delivery attempts
"""

from src.api.routes.decisions import router as decisions_router
from src.api.routes.health import router as health_router
from src.api.routes.notification_lists import router as notification_lists_router
from src.api.routes.protocols import router as protocols_router
from src.api.routes.sessions import router as sessions_router

__all__: list[str] = [
    "decisions_router",
    "health_router",
    "notification_lists_router",
    "protocols_router",
    "sessions_router",
]
