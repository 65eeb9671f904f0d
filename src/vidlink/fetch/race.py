"""
First-success racing over concurrent retrieval attempts.

``first_success`` is the general combinator: it resolves with the first
awaitable that completes without raising, and only fails when every one of
them has failed. ``race`` applies it to retrieval attempts and reports each
settled attempt to an optional diagnostic hook.

Losing attempts are not cancelled. They keep running in the background and
their outcomes are dropped when they settle. Whatever they depend on can
still end them: resolve() closes the HTTP client it created once the race
is decided, which aborts any requests still in flight. A client passed in
by the caller stays open, and those requests run to completion.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from vidlink.exceptions import (
    AllAttemptsExhausted,
    TransportFailure,
    ValidationFailure,
)
from vidlink.models.channel import AttemptEvent, RetrievalAttempt

logger = logging.getLogger(__name__)

T = TypeVar("T")

AttemptHook = Callable[[AttemptEvent], None]
FetchFunc = Callable[[RetrievalAttempt], Awaitable[str]]

# Strong references to abandoned tasks until they settle
_abandoned: set[asyncio.Future] = set()


def _discard(task: asyncio.Future) -> None:
    _abandoned.discard(task)
    if not task.cancelled():
        # Mark the exception as retrieved so asyncio does not log it
        task.exception()


def _abandon(tasks: Iterable[asyncio.Future]) -> None:
    for task in tasks:
        if task.done():
            _discard(task)
            continue
        _abandoned.add(task)
        task.add_done_callback(_discard)


async def first_success(awaitables: Iterable[Awaitable[T]]) -> T:
    """Resolve with the first awaitable that succeeds.

    Every awaitable is scheduled immediately. Failures are collected and
    ignored until all have failed.

    Args:
        awaitables: Coroutines or futures to race.

    Returns:
        The value of the first awaitable to complete successfully.

    Raises:
        AllAttemptsExhausted: If every awaitable raised (or none were given).
            ``errors`` holds the exceptions in input order.
    """
    tasks = [asyncio.ensure_future(aw) for aw in awaitables]
    if not tasks:
        raise AllAttemptsExhausted(errors=[])

    pending = set(tasks)
    try:
        while pending:
            done, pending = await asyncio.wait(
                pending, return_when=asyncio.FIRST_COMPLETED
            )
            # Input order breaks ties between attempts settling together
            for task in (t for t in tasks if t in done):
                if task.cancelled() or task.exception() is not None:
                    continue
                return task.result()
    finally:
        _abandon(tasks)

    errors: list[BaseException] = []
    for task in tasks:
        if task.cancelled():
            errors.append(asyncio.CancelledError())
        else:
            errors.append(task.exception())
    raise AllAttemptsExhausted(errors=errors)


def _outcome(exc: BaseException) -> str:
    if isinstance(exc, TransportFailure):
        return "timeout" if exc.timed_out else "transport_error"
    if isinstance(exc, ValidationFailure):
        return "invalid"
    return "transport_error"


def _emit(hook: AttemptHook | None, event: AttemptEvent) -> None:
    if hook is None:
        return
    try:
        hook(event)
    except Exception:
        logger.exception("Attempt hook raised; ignoring")


async def race(
    attempts: list[RetrievalAttempt],
    fetch: FetchFunc,
    on_event: AttemptHook | None = None,
) -> tuple[RetrievalAttempt, str]:
    """Run every attempt concurrently and return the first validated body.

    Args:
        attempts: Retrieval attempts to dispatch.
        fetch: Coroutine function that retrieves and validates one attempt,
            raising an AttemptError on failure.
        on_event: Optional hook called once per settled attempt. It cannot
            influence the race.

    Returns:
        (winning attempt, its document body)

    Raises:
        AllAttemptsExhausted: If every attempt failed.
    """

    async def run(attempt: RetrievalAttempt) -> tuple[RetrievalAttempt, str]:
        start = time.monotonic()
        try:
            body = await fetch(attempt)
        except Exception as e:
            outcome = _outcome(e)
            logger.debug(
                f"Attempt {attempt.index} via {attempt.channel.name} failed "
                f"({outcome}): {e}"
            )
            _emit(
                on_event,
                AttemptEvent(
                    index=attempt.index,
                    variant=attempt.variant,
                    channel=attempt.channel.name,
                    outcome=outcome,
                    detail=str(e),
                    elapsed=time.monotonic() - start,
                ),
            )
            raise
        _emit(
            on_event,
            AttemptEvent(
                index=attempt.index,
                variant=attempt.variant,
                channel=attempt.channel.name,
                outcome="success",
                elapsed=time.monotonic() - start,
            ),
        )
        return attempt, body

    logger.debug(f"Racing {len(attempts)} retrieval attempts")
    return await first_success(run(a) for a in attempts)
