"""Unit tests for year-scoped sequence numbering."""

import pytest

from src.domain.models.sequence import (
    AllocatedNumber,
    SequenceScope,
    format_sequence_number,
)


class TestFormatSequenceNumber:
    """Tests for format_sequence_number."""

    def test_resource_numbers_use_four_digits(self) -> None:
        assert format_sequence_number(SequenceScope.RESOURCE, 7, 2025) == "0007/2025"

    def test_decision_numbers_use_four_digits(self) -> None:
        assert format_sequence_number(SequenceScope.DECISION, 12, 2025) == "0012/2025"

    def test_notification_list_numbers_use_three_digits(self) -> None:
        """The first list of a year is 001/YYYY."""
        assert format_sequence_number(SequenceScope.NOTIFICATION_LIST, 1, 2025) == "001/2025"

    def test_numbers_wider_than_padding_are_not_truncated(self) -> None:
        assert format_sequence_number(SequenceScope.NOTIFICATION_LIST, 1234, 2025) == "1234/2025"

    def test_rejects_non_positive_sequence(self) -> None:
        with pytest.raises(ValueError):
            format_sequence_number(SequenceScope.RESOURCE, 0, 2025)


class TestAllocatedNumber:
    def test_formatted_uses_scope_width(self) -> None:
        number = AllocatedNumber(
            scope=SequenceScope.NOTIFICATION_LIST, year=2024, sequence_number=42
        )
        assert number.formatted == "042/2024"
