# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Parallel aggregation over a payment list.

The list is cut into ``parts`` contiguous chunks of ``ceil(n / parts)``
payments (the last chunks may be shorter or empty) and each chunk is handled
by its own worker. Workers only read the list; every worker produces a
partial result that is combined after all of them finish, so no shared
accumulator is touched concurrently. The payment list must not be mutated
while an aggregation is running.
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import AsyncIterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

from wallet.types import Money, Payment, PaymentPredicate, Progress

logger = logging.getLogger("wallet.aggregation")

T = TypeVar("T")


def partition(items: Sequence[T], parts: int) -> list[list[T]]:
    """
    Split ``items`` into exactly ``parts`` contiguous chunks.

    Every chunk holds ``ceil(len(items) / parts)`` items except the trailing
    ones, which may be shorter or empty.

    Raises:
        ValueError: If ``parts`` is less than 1.
    """
    if parts < 1:
        raise ValueError(f"parts must be >= 1; got {parts}.")
    size = math.ceil(len(items) / parts)
    return [list(items[index * size : (index + 1) * size]) for index in range(parts)]


def _sum_chunk(chunk: list[Payment]) -> Money:
    total = 0
    for payment in chunk:
        total += payment.amount
    return total


def sum_payments(payments: Sequence[Payment], parts: int) -> Money:
    """Return the total amount of ``payments``, summed across ``parts`` workers."""
    chunks = partition(payments, parts)
    logger.debug(
        "sum_payments_started",
        extra={"payments": len(payments), "parts": parts, "chunk_size": len(chunks[0])},
    )
    with ThreadPoolExecutor(max_workers=parts) as executor:
        partials = list(executor.map(_sum_chunk, chunks))
    return sum(partials, 0)


def filter_payments_by_fn(
    payments: Sequence[Payment],
    predicate: PaymentPredicate,
    parts: int,
) -> list[Payment]:
    """
    Return the payments for which ``predicate`` is true.

    Each worker filters its own chunk into a local list; the lists are
    concatenated in chunk order, so the result keeps the input order.
    """
    chunks = partition(payments, parts)

    def _filter_chunk(chunk: list[Payment]) -> list[Payment]:
        return [payment for payment in chunk if predicate(payment)]

    with ThreadPoolExecutor(max_workers=parts) as executor:
        matches = list(executor.map(_filter_chunk, chunks))

    results: list[Payment] = []
    for chunk_matches in matches:
        results.extend(chunk_matches)
    return results


def filter_payments(payments: Sequence[Payment], account_id: int, parts: int) -> list[Payment]:
    """Return the payments made from ``account_id``."""
    return filter_payments_by_fn(
        payments,
        lambda payment: payment.account_id == account_id,
        parts,
    )


# ─── Progress stream ──────────────────────────────────────────────────────────

# Queue sentinel: pushed once after every producer has finished.
_DONE = object()


def sum_payments_with_progress(
    payments: Sequence[Payment],
    parts: int,
) -> AsyncIterator[Progress]:
    """
    Yield one Progress message per payment while summing ``payments``.

    One producer task per chunk pushes messages onto a shared queue; the
    stream ends once every producer has finished. Messages from different
    chunks may interleave, but the ``result`` fields always add up to the
    sequential total.

    ``parts`` is checked when the stream is created, not on first iteration.

    Usage::

        async for progress in sum_payments_with_progress(payments, parts=4):
            bar.advance(progress.result)
    """
    return _stream_progress(partition(payments, parts))


async def _stream_progress(chunks: list[list[Payment]]) -> AsyncIterator[Progress]:
    queue: asyncio.Queue[object] = asyncio.Queue()

    async def _produce(part: int, chunk: list[Payment]) -> None:
        for payment in chunk:
            await queue.put(Progress(part=part, result=payment.amount))
            await asyncio.sleep(0)

    async def _run_producers() -> None:
        try:
            await asyncio.gather(*(_produce(part, chunk) for part, chunk in enumerate(chunks)))
        finally:
            await queue.put(_DONE)

    producers = asyncio.create_task(_run_producers())
    try:
        while True:
            message = await queue.get()
            if not isinstance(message, Progress):
                break
            yield message
    finally:
        if not producers.done():
            producers.cancel()
        await asyncio.gather(producers, return_exceptions=True)
