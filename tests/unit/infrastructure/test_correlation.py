"""Unit tests for correlation ID management."""

import asyncio
import re

import pytest

from src.infrastructure.observability.correlation import (
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)


class TestGenerateCorrelationId:
    def test_generate_returns_uuid4_format(self) -> None:
        uuid_pattern = re.compile(
            r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
            re.IGNORECASE,
        )
        assert uuid_pattern.match(generate_correlation_id()) is not None

    def test_generate_returns_unique_ids(self) -> None:
        ids = [generate_correlation_id() for _ in range(100)]
        assert len(set(ids)) == 100


class TestCorrelationIdContext:
    """Tests for correlation ID context management."""

    def test_reset_restores_previous_value(self) -> None:
        outer = set_correlation_id("outer")
        inner = set_correlation_id("inner")
        assert get_correlation_id() == "inner"

        reset_correlation_id(inner)
        assert get_correlation_id() == "outer"

        reset_correlation_id(outer)
        assert get_correlation_id() == ""

    @pytest.mark.asyncio
    async def test_context_isolation_between_tasks(self) -> None:
        """Concurrent requests never see each other's ID."""
        seen: dict[str, str] = {}

        async def _serve(name: str) -> None:
            token = set_correlation_id(f"request-{name}")
            try:
                await asyncio.sleep(0)
                seen[name] = get_correlation_id()
            finally:
                reset_correlation_id(token)

        await asyncio.gather(_serve("a"), _serve("b"), _serve("c"))

        assert seen == {"a": "request-a", "b": "request-b", "c": "request-c"}


class TestCorrelationIdProcessor:
    def test_adds_correlation_id_when_set(self) -> None:
        token = set_correlation_id("abc-123")
        try:
            event_dict = correlation_id_processor(None, "info", {"event": "decision_created"})
        finally:
            reset_correlation_id(token)

        assert event_dict["correlation_id"] == "abc-123"
        assert event_dict["event"] == "decision_created"

    def test_explicit_value_wins(self) -> None:
        token = set_correlation_id("from-context")
        try:
            event_dict = correlation_id_processor(
                None, "info", {"event": "x", "correlation_id": "explicit"}
            )
        finally:
            reset_correlation_id(token)

        assert event_dict["correlation_id"] == "explicit"

    def test_skips_when_unset(self) -> None:
        event_dict = correlation_id_processor(None, "info", {"event": "x"})
        assert "correlation_id" not in event_dict
