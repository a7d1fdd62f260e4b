"""In-memory tables shared by the case store stubs.

Values are frozen dataclasses, so a shallow copy of every dict is a full
snapshot of the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from uuid import UUID

from src.domain.models.case_protocol import CaseProtocol
from src.domain.models.decision import Decision, DecisionPublication
from src.domain.models.notification import (
    NotificationAttempt,
    NotificationItem,
    NotificationList,
)
from src.domain.models.resource import Resource
from src.domain.models.session import (
    Session,
    SessionDistributionRecord,
    SessionResource,
    SessionResult,
)


@dataclass
class CaseTables:
    """Every table of the in-memory store, keyed by entity ID."""

    protocols: dict[UUID, CaseProtocol] = field(default_factory=dict)
    resources: dict[UUID, Resource] = field(default_factory=dict)
    sessions: dict[UUID, Session] = field(default_factory=dict)
    session_resources: dict[UUID, SessionResource] = field(default_factory=dict)
    session_results: dict[UUID, SessionResult] = field(default_factory=dict)
    distributions: dict[UUID, SessionDistributionRecord] = field(default_factory=dict)
    decisions: dict[UUID, Decision] = field(default_factory=dict)
    publications: dict[UUID, DecisionPublication] = field(default_factory=dict)
    notification_lists: dict[UUID, NotificationList] = field(default_factory=dict)
    notification_items: dict[UUID, NotificationItem] = field(default_factory=dict)
    notification_attempts: dict[UUID, NotificationAttempt] = field(default_factory=dict)

    def snapshot(self) -> CaseTables:
        """Return a copy that later writes to this instance do not affect."""
        return CaseTables(**{f.name: dict(getattr(self, f.name)) for f in fields(self)})

    def restore(self, snapshot: CaseTables) -> None:
        """Replace every table's content with the snapshot's, in place."""
        for f in fields(self):
            table = getattr(self, f.name)
            table.clear()
            table.update(getattr(snapshot, f.name))

    def clear(self) -> None:
        """Empty every table (for test cleanup)."""
        for f in fields(self):
            getattr(self, f.name).clear()
