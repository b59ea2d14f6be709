"""Batch orchestration: probe many URLs in sequential, fixed-size groups.

Each group is probed concurrently and awaited as a whole before the next
one starts.  Results land in their input slot, so the output order always
matches the input order regardless of which probe finishes first.
Cancellation is cooperative and checked between groups only: a group that
is already in flight always completes.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from urlchecker.config import settings
from urlchecker.probe.fetcher import probe_url
from urlchecker.probe.models import ProbeFunc, ProbeResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchProgress:
    completed: int
    total: int

    @property
    def percent(self) -> int:
        if self.total == 0:
            return 100
        return round(self.completed / self.total * 100)


ProgressCallback = Callable[[BatchProgress], None]


class CancellationToken:
    """Thread-safe flag a caller sets to stop a run after the current group."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


def chunked(items: Sequence[str], size: int) -> List[List[str]]:
    """Split *items* into consecutive groups of at most *size* elements."""
    if size < 1:
        raise ValueError(f"group size must be >= 1, got {size}")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


@dataclass
class BatchRun:
    """State of one batch run: inputs, accumulated results, progress, cancellation."""

    urls: Tuple[str, ...]
    token: CancellationToken = field(default_factory=CancellationToken)
    results: List[ProbeResult] = field(default_factory=list)

    @property
    def progress(self) -> BatchProgress:
        return BatchProgress(completed=len(self.results), total=len(self.urls))

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    def cancel(self) -> None:
        self.token.cancel()

    def snapshot(self) -> Tuple[ProbeResult, ...]:
        """Immutable view of the results gathered so far."""
        return tuple(self.results)

    async def execute(
        self,
        probe: ProbeFunc = probe_url,
        on_progress: Optional[ProgressCallback] = None,
        batch_size: Optional[int] = None,
        delay: Optional[float] = None,
    ) -> Tuple[ProbeResult, ...]:
        """Probe every URL group by group and return the results in input order."""
        size = batch_size if batch_size is not None else settings.batch_size
        pause = delay if delay is not None else settings.batch_delay
        groups = chunked(self.urls, size)

        for index, group in enumerate(groups):
            if self.cancelled:
                logger.info(
                    "Batch cancelled after %d/%d URLs", len(self.results), len(self.urls)
                )
                break

            group_results = await _probe_group(probe, group)
            self.results.extend(group_results)
            logger.debug("Group %d/%d done (%s)", index + 1, len(groups), self.progress)

            if on_progress is not None:
                on_progress(self.progress)

            if index < len(groups) - 1 and not self.cancelled and pause > 0:
                await asyncio.sleep(pause)

        return self.snapshot()


async def _probe_group(probe: ProbeFunc, group: List[str]) -> List[ProbeResult]:
    """Probe every URL of *group* concurrently; one result per URL, in order."""
    outcomes = await asyncio.gather(*(probe(url) for url in group), return_exceptions=True)
    results: List[ProbeResult] = []
    for url, outcome in zip(group, outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            logger.error("Probe raised for %s", url, exc_info=outcome)
            results.append(ProbeResult.failed(url, str(outcome) or outcome.__class__.__name__))
        else:
            results.append(outcome)
    return results


async def run_batch(
    urls: Sequence[str],
    probe: ProbeFunc = probe_url,
    *,
    on_progress: Optional[ProgressCallback] = None,
    cancel_token: Optional[CancellationToken] = None,
    batch_size: Optional[int] = None,
    delay: Optional[float] = None,
) -> List[ProbeResult]:
    """Probe *urls* in groups and return one result per URL, in input order.

    Args:
        urls: Normalised URLs to check.
        probe: Coroutine function checking a single URL.  Defaults to the
            in-process :func:`~urlchecker.probe.fetcher.probe_url`.
        on_progress: Called with a :class:`BatchProgress` after each group.
        cancel_token: When cancelled, no further groups are started and the
            results gathered so far are returned.
        batch_size: Group size; defaults to ``settings.batch_size``.
        delay: Pause between groups in seconds; defaults to
            ``settings.batch_delay``.
    """
    run = BatchRun(urls=tuple(urls), token=cancel_token or CancellationToken())
    results = await run.execute(
        probe, on_progress=on_progress, batch_size=batch_size, delay=delay
    )
    return list(results)
