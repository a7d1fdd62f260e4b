"""Application services for the case-lifecycle engine.

Each service derives from LoggingMixin and runs every public operation as
one transaction against the case store.

Available services:
- SequenceAllocator: year-scoped numbering with retry on collisions
- ProtocolResourceConverter: admitted protocol -> resource, exactly once
- SessionLifecycleService: session state, agenda and voting order
- DecisionPublicationLedger: decisions and their append-only publication log
- NotificationWorkflowService: notification lists, items and attempts
"""

from src.application.services.decision_publication_ledger import (
    DecisionPublicationLedger,
    DecisionRecord,
    PublicationBatchResult,
    PublicationFailure,
    PublishedDecision,
)
from src.application.services.notification_workflow_service import (
    NotificationItemView,
    NotificationListView,
    NotificationWorkflowService,
)
from src.application.services.protocol_resource_converter import (
    ProtocolResourceConverter,
)
from src.application.services.sequence_allocator import (
    SequenceAllocator,
    allocate_sequence_number,
)
from src.application.services.session_lifecycle_service import (
    SessionAgenda,
    SessionLifecycleService,
    VotingOrder,
)

__all__: list[str] = [
    "DecisionPublicationLedger",
    "DecisionRecord",
    "NotificationItemView",
    "NotificationListView",
    "NotificationWorkflowService",
    "ProtocolResourceConverter",
    "PublicationBatchResult",
    "PublicationFailure",
    "PublishedDecision",
    "SequenceAllocator",
    "SessionAgenda",
    "SessionLifecycleService",
    "VotingOrder",
    "allocate_sequence_number",
]
