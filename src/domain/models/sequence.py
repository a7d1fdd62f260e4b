"""Year-scoped sequence numbers for externally visible identifiers.

Resource, decision and notification list numbers have the shape
``"{sequence:0Nd}/{year}"``. Once issued they are stable identifiers and are
never renumbered.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SequenceScope(Enum):
    """Numbering scope. Each scope has its own counter per year.

    Scopes:
        RESOURCE: Appeal case numbers, 4 digits ("0001/2025").
        DECISION: Decision (acórdão) numbers, 4 digits ("0001/2025").
        NOTIFICATION_LIST: Notification list numbers, 3 digits ("001/2025").
    """

    RESOURCE = "resource"
    DECISION = "decision"
    NOTIFICATION_LIST = "list"

    @property
    def width(self) -> int:
        """Zero-padding width of the formatted sequence number."""
        return SEQUENCE_WIDTHS[self]


SEQUENCE_WIDTHS: dict[SequenceScope, int] = {
    SequenceScope.RESOURCE: 4,
    SequenceScope.DECISION: 4,
    SequenceScope.NOTIFICATION_LIST: 3,
}


def format_sequence_number(scope: SequenceScope, sequence_number: int, year: int) -> str:
    """Format a sequence number with the scope's zero-padding width.

    Args:
        scope: Numbering scope.
        sequence_number: Positive sequence number.
        year: Four-digit year.

    Returns:
        Formatted identifier, e.g. ``"001/2025"`` for lists.

    Raises:
        ValueError: If sequence_number is not positive.
    """
    if sequence_number < 1:
        raise ValueError(f"sequence_number must be positive, got {sequence_number}")
    return f"{sequence_number:0{scope.width}d}/{year}"


@dataclass(frozen=True, eq=True)
class AllocatedNumber:
    """A sequence number handed out by the allocator.

    Attributes:
        scope: Numbering scope.
        year: Year the counter belongs to.
        sequence_number: The allocated value (max existing + 1).
    """

    scope: SequenceScope
    year: int
    sequence_number: int

    @property
    def formatted(self) -> str:
        """Externally visible identifier for this number."""
        return format_sequence_number(self.scope, self.sequence_number, self.year)
