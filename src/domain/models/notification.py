"""Notification (intimação) list domain models.

A NotificationList groups formal notices. Each NotificationItem targets one
Resource and owns the delivery attempts made for it. Only attempt state is
tracked here; how a message is actually delivered is outside the core.

List State Machine:
    PENDENTE (open) -> FINALIZADA (terminal; items and attempts frozen)

Attempt State Machine:
    PENDENTE -> CONFIRMADO (receipt confirmed; terminal, never deleted)
    PENDENTE -> EXPIRADO (deadline passed; terminal)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from src.domain.models.sequence import SequenceScope, format_sequence_number


class NotificationListType(Enum):
    """Purpose of a notification list."""

    ADMISSIBILIDADE = "ADMISSIBILIDADE"
    SESSAO = "SESSAO"
    DILIGENCIA = "DILIGENCIA"
    DECISAO = "DECISAO"
    OUTRO = "OUTRO"


class NotificationListStatus(Enum):
    """Lifecycle status of a notification list.

    States:
        PENDENTE: Open; items and attempts may change.
        FINALIZADA: Closed (terminal).
    """

    PENDENTE = "PENDENTE"
    FINALIZADA = "FINALIZADA"


class AttemptChannel(Enum):
    """Channel a delivery attempt was made through."""

    EMAIL = "EMAIL"
    WHATSAPP = "WHATSAPP"
    CORREIOS = "CORREIOS"
    PESSOALMENTE = "PESSOALMENTE"
    EDITAL = "EDITAL"
    SETOR = "SETOR"
    EXTERNO = "EXTERNO"

    @property
    def requires_destination(self) -> bool:
        """True when the channel needs an explicit destination (sent_to)."""
        return self in CHANNELS_REQUIRING_DESTINATION


CHANNELS_REQUIRING_DESTINATION: frozenset[AttemptChannel] = frozenset(
    {AttemptChannel.EMAIL, AttemptChannel.WHATSAPP, AttemptChannel.CORREIOS}
)


class AttemptStatus(Enum):
    """Delivery attempt status. CONFIRMADO and EXPIRADO are terminal."""

    PENDENTE = "PENDENTE"
    CONFIRMADO = "CONFIRMADO"
    EXPIRADO = "EXPIRADO"

    def is_terminal(self) -> bool:
        """Check if no further transition is possible."""
        return self != AttemptStatus.PENDENTE


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class NotificationList:
    """A numbered batch of formal notices.

    Attributes:
        id: Unique identifier.
        sequence_number: Year-scoped list sequence number.
        year: Year of the sequence number.
        type: Purpose of the list.
        status: PENDENTE or FINALIZADA.
        created_by: Actor that opened the list.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    id: UUID
    sequence_number: int
    year: int
    type: NotificationListType
    status: NotificationListStatus = field(default=NotificationListStatus.PENDENTE)
    created_by: str | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    @property
    def list_number(self) -> str:
        """Externally visible number, e.g. ``"001/2025"``."""
        return format_sequence_number(
            SequenceScope.NOTIFICATION_LIST, self.sequence_number, self.year
        )

    @property
    def is_finalized(self) -> bool:
        """True once the list is FINALIZADA."""
        return self.status == NotificationListStatus.FINALIZADA

    def finalized(self) -> NotificationList:
        """Return a copy in FINALIZADA."""
        return replace(
            self, status=NotificationListStatus.FINALIZADA, updated_at=_utc_now()
        )


@dataclass(frozen=True, eq=True)
class NotificationItem:
    """A resource targeted by a notification list.

    At most one item exists per ``(list_id, resource_id)``.
    """

    id: UUID
    list_id: UUID
    resource_id: UUID
    observations: str | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)


@dataclass(frozen=True, eq=True)
class NotificationAttempt:
    """A delivery attempt for a notification item.

    Attributes:
        id: Unique identifier.
        item_id: Owning item.
        attempt_number: 1, 2, 3, ... per item.
        channel: Delivery channel.
        status: PENDENTE, CONFIRMADO or EXPIRADO.
        deadline: Moment after which a pending attempt may expire.
        sent_to: Destination (address, e-mail, phone) when applicable.
        observations: Free text.
        confirmed_at: When receipt was confirmed.
        confirmed_by: Actor that confirmed receipt.
        created_at: Creation timestamp (UTC).
    """

    id: UUID
    item_id: UUID
    attempt_number: int
    channel: AttemptChannel
    status: AttemptStatus = field(default=AttemptStatus.PENDENTE)
    deadline: datetime | None = field(default=None)
    sent_to: str | None = field(default=None)
    observations: str | None = field(default=None)
    confirmed_at: datetime | None = field(default=None)
    confirmed_by: str | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)

    def is_overdue(self, now: datetime) -> bool:
        """True for a pending attempt whose deadline has passed."""
        return (
            self.status == AttemptStatus.PENDENTE
            and self.deadline is not None
            and self.deadline < now
        )

    def confirmed(self, confirmed_by: str, confirmed_at: datetime | None = None) -> NotificationAttempt:
        """Return a copy in CONFIRMADO.

        Raises:
            AttemptAlreadyConfirmedError: If the attempt is already confirmed.
            AttemptExpiredError: If the attempt has expired.
        """
        from src.domain.errors.notification import (
            AttemptAlreadyConfirmedError,
            AttemptExpiredError,
        )

        if self.status == AttemptStatus.CONFIRMADO:
            raise AttemptAlreadyConfirmedError(attempt_id=self.id)
        if self.status == AttemptStatus.EXPIRADO:
            raise AttemptExpiredError(attempt_id=self.id)
        return replace(
            self,
            status=AttemptStatus.CONFIRMADO,
            confirmed_at=confirmed_at or _utc_now(),
            confirmed_by=confirmed_by,
        )

    def expired(self) -> NotificationAttempt:
        """Return a copy in EXPIRADO.

        Raises:
            AttemptNotPendingError: If the attempt is already terminal.
        """
        from src.domain.errors.notification import AttemptNotPendingError

        if self.status.is_terminal():
            raise AttemptNotPendingError(
                attempt_id=self.id,
                status=self.status,
                operation="expire",
            )
        return replace(self, status=AttemptStatus.EXPIRADO)
