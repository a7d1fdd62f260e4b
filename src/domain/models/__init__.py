"""Domain models for the case-lifecycle engine.

Immutable dataclasses with enum state machines. State changes return new
instances; no model touches infrastructure.
"""

from src.domain.models.case_protocol import CaseProtocol, ProtocolStatus
from src.domain.models.decision import Decision, DecisionPublication, DecisionStatus
from src.domain.models.notification import (
    AttemptChannel,
    AttemptStatus,
    NotificationAttempt,
    NotificationItem,
    NotificationList,
    NotificationListStatus,
    NotificationListType,
)
from src.domain.models.resource import (
    SESSION_ASSIGNABLE_STATUSES,
    TERMINAL_ADJUDICATION_STATUSES,
    Resource,
    ResourceStatus,
    ResourceType,
)
from src.domain.models.sequence import (
    AllocatedNumber,
    SequenceScope,
    format_sequence_number,
)
from src.domain.models.session import (
    Session,
    SessionDistributionRecord,
    SessionResource,
    SessionResult,
    SessionStatus,
)

__all__: list[str] = [
    "AllocatedNumber",
    "AttemptChannel",
    "AttemptStatus",
    "CaseProtocol",
    "Decision",
    "DecisionPublication",
    "DecisionStatus",
    "NotificationAttempt",
    "NotificationItem",
    "NotificationList",
    "NotificationListStatus",
    "NotificationListType",
    "ProtocolStatus",
    "Resource",
    "ResourceStatus",
    "ResourceType",
    "SESSION_ASSIGNABLE_STATUSES",
    "SequenceScope",
    "Session",
    "SessionDistributionRecord",
    "SessionResource",
    "SessionResult",
    "SessionStatus",
    "TERMINAL_ADJUDICATION_STATUSES",
    "format_sequence_number",
]
