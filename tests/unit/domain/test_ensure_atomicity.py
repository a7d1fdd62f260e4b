"""Unit tests for AtomicOperationContext."""

import pytest

from src.domain.primitives.ensure_atomicity import AtomicOperationContext


class TestAtomicOperationContext:
    @pytest.mark.asyncio
    async def test_success_skips_rollback(self) -> None:
        calls: list[str] = []

        async with AtomicOperationContext(operation="publish") as ctx:
            ctx.add_rollback(lambda: calls.append("undo"))

        assert calls == []
        assert ctx.rolled_back is False

    @pytest.mark.asyncio
    async def test_handlers_run_in_reverse_order(self) -> None:
        calls: list[str] = []

        async def _undo_async() -> None:
            calls.append("second")

        with pytest.raises(ValueError, match="write failed"):
            async with AtomicOperationContext(operation="convert") as ctx:
                ctx.add_rollback(lambda: calls.append("first"))
                ctx.add_rollback(_undo_async)
                raise ValueError("write failed")

        assert calls == ["second", "first"]
        assert ctx.rolled_back is True

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_stop_others(self) -> None:
        calls: list[str] = []

        def _broken() -> None:
            raise RuntimeError("cannot undo")

        with pytest.raises(KeyError):
            async with AtomicOperationContext() as ctx:
                ctx.add_rollback(lambda: calls.append("restored"))
                ctx.add_rollback(_broken)
                raise KeyError("missing")

        assert calls == ["restored"]
