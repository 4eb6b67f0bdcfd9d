"""Concurrent resolution of cross-referenced sequences."""

from __future__ import annotations

import logging
import math
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeout
from typing import Callable, Iterable, Optional

from .models import OEISSequence, SearchOutcome, Single

logger = logging.getLogger(__name__)


class _Task:
    """One lookup plus the moment a worker picked it up."""

    def __init__(self, identifier: str, lookup: Callable[[str], SearchOutcome]):
        self.identifier = identifier
        self.lookup = lookup
        self.started = threading.Event()
        self.started_at = 0.0

    def run(self) -> SearchOutcome:
        self.started_at = time.monotonic()
        self.started.set()
        return self.lookup(self.identifier)


def _wait(task: _Task, fut: Future, timeout: Optional[float], budget_end: float) -> SearchOutcome:
    if timeout is None:
        return fut.result()
    if not task.started.wait(max(0.0, budget_end - time.monotonic())):
        fut.cancel()
        raise FuturesTimeout("task never started before the deadline")
    remaining = task.started_at + timeout - time.monotonic()
    return fut.result(timeout=max(0.0, remaining))


def resolve_identifiers(
    identifiers: Iterable[str],
    lookup: Callable[[str], SearchOutcome],
    *,
    max_concurrency: int = 5,
    timeout: Optional[float] = None,
) -> list[OEISSequence]:
    """Look up every identifier on a bounded worker pool.

    Each task gets *timeout* seconds of wall-clock time from the moment a
    worker starts it; a task still running after that is abandoned. A task
    that cannot start before every worker slot's worth of time has elapsed
    is dropped as well. Only single-match outcomes are kept; anything else,
    including a raised exception, drops that identifier without affecting its
    siblings. Results follow the order of *identifiers*.
    """
    identifiers = list(identifiers)
    if not identifiers:
        return []

    workers = max(1, max_concurrency)
    tasks = [_Task(identifier, lookup) for identifier in identifiers]
    budget_end = math.inf
    if timeout is not None:
        budget_end = time.monotonic() + timeout * math.ceil(len(tasks) / workers)

    resolved: list[OEISSequence] = []
    ex = ThreadPoolExecutor(max_workers=workers)
    try:
        futures = [ex.submit(task.run) for task in tasks]
        for task, fut in zip(tasks, futures):
            try:
                outcome = _wait(task, fut, timeout, budget_end)
            except FuturesTimeout:
                logger.debug("Dropping xref %s: timed out after %ss", task.identifier, timeout)
                continue
            except Exception as exc:
                logger.debug("Dropping xref %s: %s", task.identifier, exc)
                continue
            if isinstance(outcome, Single):
                resolved.append(outcome.sequence)
            else:
                logger.debug("Dropping xref %s: %s outcome", task.identifier, outcome.kind)
    finally:
        # Abandoned lookups finish in the background; nothing waits on them.
        ex.shutdown(wait=False, cancel_futures=True)

    logger.info("Resolved %d of %d cross-references", len(resolved), len(identifiers))
    return resolved
