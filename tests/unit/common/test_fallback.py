"""Tests for common.fallback module."""

import asyncio
import logging
from unittest.mock import AsyncMock

import pytest

from common.errors import BatchFailure, EmptyResult
from common.fallback import Attempt, execute_or_raise, execute_with_fallback


async def _slow() -> str:
    await asyncio.sleep(1)
    return "too late"


class TestExecuteWithFallback:
    @pytest.mark.asyncio
    async def test_primary_success_skips_fallback(self) -> None:
        primary = AsyncMock(return_value="primary")
        fallback = AsyncMock(return_value="fallback")

        result = await execute_with_fallback(
            Attempt("p", primary), Attempt("f", fallback), sentinel="none"
        )

        assert result.value == "primary"
        assert result.provider == "p"
        assert not result.degraded
        fallback.assert_not_called()

    @pytest.mark.asyncio
    async def test_primary_error_uses_fallback_and_logs(self, caplog) -> None:
        primary = AsyncMock(side_effect=RuntimeError("quota exceeded"))
        fallback = AsyncMock(return_value="fallback")

        with caplog.at_level(logging.WARNING, logger="common.fallback"):
            result = await execute_with_fallback(
                Attempt("p", primary), Attempt("f", fallback), sentinel="none"
            )

        assert result.value == "fallback"
        assert result.provider == "f"
        assert len(result.failures) == 1
        assert "quota exceeded" in caplog.text
        fallback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_both_fail_returns_sentinel(self) -> None:
        primary = AsyncMock(side_effect=RuntimeError("a"))
        fallback = AsyncMock(side_effect=ValueError("b"))

        result = await execute_with_fallback(
            Attempt("p", primary), Attempt("f", fallback), sentinel="none"
        )

        assert result.value == "none"
        assert result.degraded
        assert [f.provider for f in result.failures] == ["p", "f"]

    @pytest.mark.asyncio
    async def test_rejected_value_triggers_fallback(self) -> None:
        primary = AsyncMock(return_value=b"")
        fallback = AsyncMock(return_value=b"audio")

        result = await execute_with_fallback(
            Attempt("p", primary), Attempt("f", fallback), sentinel=None, accept=bool
        )

        assert result.value == b"audio"
        assert isinstance(result.failures[0], EmptyResult)

    @pytest.mark.asyncio
    async def test_timeout_triggers_fallback(self) -> None:
        fallback = AsyncMock(return_value="fallback")

        result = await execute_with_fallback(
            Attempt("p", _slow), Attempt("f", fallback), sentinel="none", timeout=0.01
        )

        assert result.value == "fallback"
        assert "timed out" in str(result.failures[0])


class TestExecuteOrRaise:
    @pytest.mark.asyncio
    async def test_empty_primary_calls_fallback_once(self) -> None:
        primary = AsyncMock(return_value=[])
        fallback = AsyncMock(return_value=["article"])

        result = await execute_or_raise(Attempt("p", primary), Attempt("f", fallback), accept=bool)

        assert result.value == ["article"]
        fallback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_both_fail_raises_batch_failure(self) -> None:
        primary = AsyncMock(side_effect=RuntimeError("a"))
        fallback = AsyncMock(side_effect=RuntimeError("b"))

        with pytest.raises(BatchFailure) as exc_info:
            await execute_or_raise(Attempt("p", primary), Attempt("f", fallback), label="fetch news")

        assert exc_info.value.operation == "fetch news"
        assert len(exc_info.value.failures) == 2
