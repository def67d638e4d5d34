"""Primary/fallback execution shared by every pipeline stage.

Each capability has exactly one primary and one fallback provider. Item-level
work (one summary, one audio clip) degrades to a sentinel when both fail;
batch-level work (the article list) raises instead, since there is nothing
meaningful to return.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from common.errors import BatchFailure, EmptyResult, ProviderFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Attempt(Generic[T]):
    """A named provider call. ``call`` must return a fresh coroutine each time."""
    name: str
    call: Callable[[], Awaitable[T]]


@dataclass
class FallbackResult(Generic[T]):
    value: T
    provider: Optional[str]
    failures: list[ProviderFailure] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return self.provider is None


async def _run_attempt(
    attempt: Attempt[T],
    timeout: float | None,
    accept: Callable[[T], bool] | None,
) -> T:
    try:
        if timeout is None:
            value = await attempt.call()
        else:
            value = await asyncio.wait_for(attempt.call(), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise ProviderFailure(attempt.name, f"timed out after {timeout}s") from e
    except Exception as e:
        raise ProviderFailure(attempt.name, e) from e

    if accept is not None and not accept(value):
        raise EmptyResult(attempt.name)
    return value


async def _try_in_order(
    primary: Attempt[T],
    fallback: Attempt[T],
    timeout: float | None,
    accept: Callable[[T], bool] | None,
    label: str,
) -> tuple[Optional[T], Optional[str], list[ProviderFailure]]:
    failures: list[ProviderFailure] = []
    for attempt in (primary, fallback):
        try:
            value = await _run_attempt(attempt, timeout, accept)
        except ProviderFailure as failure:
            failures.append(failure)
            if attempt is primary:
                logger.warning("%s: %s failed, falling back to %s: %s", label, primary.name, fallback.name, failure.cause)
            else:
                logger.error("%s: fallback %s failed: %s", label, fallback.name, failure.cause)
            continue
        logger.info("%s: used %s", label, attempt.name)
        return value, attempt.name, failures
    return None, None, failures


async def execute_with_fallback(
    primary: Attempt[T],
    fallback: Attempt[T],
    *,
    sentinel: T,
    timeout: float | None = None,
    accept: Callable[[T], bool] | None = None,
    label: str = "provider call",
) -> FallbackResult[T]:
    """Run primary, then fallback; return ``sentinel`` if both fail.

    Any exception, a timeout, or a value rejected by ``accept`` counts as a
    failure. Provider errors are logged, never raised.
    """
    value, provider, failures = await _try_in_order(primary, fallback, timeout, accept, label)
    if provider is None:
        logger.warning("%s: all providers failed, using sentinel", label)
        return FallbackResult(value=sentinel, provider=None, failures=failures)
    return FallbackResult(value=value, provider=provider, failures=failures)


async def execute_or_raise(
    primary: Attempt[T],
    fallback: Attempt[T],
    *,
    timeout: float | None = None,
    accept: Callable[[T], bool] | None = None,
    label: str = "provider call",
) -> FallbackResult[T]:
    """Run primary, then fallback; raise BatchFailure if both fail."""
    value, provider, failures = await _try_in_order(primary, fallback, timeout, accept, label)
    if provider is None:
        raise BatchFailure(label, failures)
    return FallbackResult(value=value, provider=provider, failures=failures)
