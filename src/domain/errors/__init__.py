"""Domain errors for the case-lifecycle engine.

Every concrete error subclasses exactly one kind from
``src.domain.exceptions`` and carries the identifiers involved as
attributes.
"""

from src.domain.errors.decision import (
    DecisionAlreadyExistsError,
    DecisionNotFoundError,
    DecisionNotPendingError,
    DuplicateDecisionNumberError,
    InvalidDecisionInputError,
    NoPendingDecisionsError,
    NoPublicationToRestoreError,
    PublicationOrderConflictError,
    PublishedDecisionDeletionError,
)
from src.domain.errors.notification import (
    AttemptAlreadyConfirmedError,
    AttemptExpiredError,
    AttemptNotPendingError,
    ConfirmedAttemptDeletionError,
    InvalidNotificationInputError,
    NotificationAttemptNotFoundError,
    NotificationItemNotFoundError,
    NotificationListFinalizedError,
    NotificationListNotEmptyError,
    NotificationListNotFoundError,
    ResourceAlreadyInListError,
)
from src.domain.errors.protocol import (
    InvalidProtocolInputError,
    InvalidResourceTypeError,
    ProtocolAlreadyConvertedError,
    ProtocolNotAdmittedError,
    ProtocolNotFoundError,
    ProtocolNotInAnalysisError,
)
from src.domain.errors.resource import ResourceNotFoundError
from src.domain.errors.sequence import SequenceConflictError
from src.domain.errors.session import (
    DistributionNotFoundError,
    DuplicateDistributionError,
    DuplicateSessionNumberError,
    IncompleteMinutesError,
    InvalidAdjudicationStatusError,
    InvalidSessionInputError,
    InvalidSessionTransitionError,
    InvalidVotingOrderError,
    MissingAdjudicationDetailError,
    PendingSessionResourcesError,
    ResourceAlreadyOnAgendaError,
    SessionNotFoundError,
    SessionNotOpenError,
    SessionResourceNotFoundError,
    VotingNotFoundError,
)

__all__: list[str] = [
    # Decision errors
    "DecisionAlreadyExistsError",
    "DecisionNotFoundError",
    "DecisionNotPendingError",
    "DuplicateDecisionNumberError",
    "InvalidDecisionInputError",
    "NoPendingDecisionsError",
    "NoPublicationToRestoreError",
    "PublicationOrderConflictError",
    "PublishedDecisionDeletionError",
    # Notification errors
    "AttemptAlreadyConfirmedError",
    "AttemptExpiredError",
    "AttemptNotPendingError",
    "ConfirmedAttemptDeletionError",
    "InvalidNotificationInputError",
    "NotificationAttemptNotFoundError",
    "NotificationItemNotFoundError",
    "NotificationListFinalizedError",
    "NotificationListNotEmptyError",
    "NotificationListNotFoundError",
    "ResourceAlreadyInListError",
    # Protocol errors
    "InvalidProtocolInputError",
    "InvalidResourceTypeError",
    "ProtocolAlreadyConvertedError",
    "ProtocolNotAdmittedError",
    "ProtocolNotFoundError",
    "ProtocolNotInAnalysisError",
    # Resource errors
    "ResourceNotFoundError",
    # Sequence errors
    "SequenceConflictError",
    # Session errors
    "DistributionNotFoundError",
    "DuplicateDistributionError",
    "DuplicateSessionNumberError",
    "IncompleteMinutesError",
    "InvalidAdjudicationStatusError",
    "InvalidSessionInputError",
    "InvalidSessionTransitionError",
    "InvalidVotingOrderError",
    "MissingAdjudicationDetailError",
    "PendingSessionResourcesError",
    "ResourceAlreadyOnAgendaError",
    "SessionNotFoundError",
    "SessionNotOpenError",
    "SessionResourceNotFoundError",
    "VotingNotFoundError",
]
