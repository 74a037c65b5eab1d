"""Parallel multi-rule search streamed as protocol events.

keyword + rules -> one concurrent search per rule -> Init / Progress |
Result ... / Done, first-finished-first-emitted.
"""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import AsyncIterator, Callable, Sequence

import structlog

from animesearch.domain.entities import (
    ERROR_COLOR,
    DoneEvent,
    InitEvent,
    PlatformSearchResult,
    ProgressEvent,
    ResultEvent,
    Rule,
    StreamEvent,
    StreamProgress,
    StreamResult,
)
from animesearch.domain.ports import RuleSearchPort

log = structlog.get_logger(__name__)

DEFAULT_CHANNEL_CAPACITY = 100

# Type alias for the injected wire encoder.
_EncodeFn = Callable[[StreamEvent], str]


class EventChannel:
    """Bounded single-consumer channel with best-effort delivery.

    Once the consumer closes it, ``send`` is a no-op, including for senders
    that were already waiting on a full queue.
    """

    _END = object()

    def __init__(self, capacity: int = DEFAULT_CHANNEL_CAPACITY) -> None:
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=capacity)
        self._closed = False

    async def send(self, item: str) -> bool:
        """Enqueue *item*; returns False when the consumer is gone."""
        if self._closed:
            return False
        await self._queue.put(item)
        if self._closed:
            # Woken after close: free the slot for the next waiting sender.
            self._drain()
            return False
        return True

    async def finish(self) -> None:
        """Signal end of stream to the consumer."""
        if not self._closed:
            await self._queue.put(self._END)

    def close(self) -> None:
        """Consumer side: stop accepting items and release blocked senders."""
        self._closed = True
        self._drain()

    def _drain(self) -> None:
        while True:
            try:
                self._queue.get_nowait()
            except asyncio.QueueEmpty:
                return

    async def __aiter__(self) -> AsyncIterator[str]:
        try:
            while True:
                item = await self._queue.get()
                if item is self._END:
                    return
                yield item  # type: ignore[misc]
        finally:
            self.close()


def build_event(
    rule: Rule, result: PlatformSearchResult, progress: StreamProgress
) -> StreamEvent:
    """Result event when there is something to show, else bare progress."""
    if not result.has_output:
        return ProgressEvent(progress=progress)

    return ResultEvent(
        progress=progress,
        result=StreamResult(
            name=rule.name,
            color=ERROR_COLOR if result.error is not None else rule.color,
            tags=list(rule.tags),
            items=result.items,
            error=result.error,
        ),
    )


class SearchStreamUseCase:
    """Fan out one search per rule and stream the outcomes.

    Args:
        searcher: Runs a single rule's search (never raises per-rule errors).
        encode: Turns a protocol event into one wire line.
        channel_capacity: Bound of the outbound event queue.
    """

    def __init__(
        self,
        *,
        searcher: RuleSearchPort,
        encode: _EncodeFn,
        channel_capacity: int = DEFAULT_CHANNEL_CAPACITY,
    ) -> None:
        self._searcher = searcher
        self._encode = encode
        self._channel_capacity = channel_capacity
        # Keep strong references so running coordinators are not collected.
        self._running: set[asyncio.Task[None]] = set()

    def stream(
        self,
        keyword: str,
        rules: Sequence[Rule],
        *,
        fetch_episodes: bool = False,
    ) -> AsyncIterator[str]:
        """Start the search in the background and return its event lines.

        Must be called from a running event loop.  The iterator is
        single-consumer and ends right after the ``Done`` line.
        """
        channel = EventChannel(self._channel_capacity)
        task = asyncio.create_task(
            self._run(keyword, list(rules), channel, fetch_episodes)
        )
        self._running.add(task)
        task.add_done_callback(self._running.discard)
        return channel.__aiter__()

    async def _run(
        self,
        keyword: str,
        rules: list[Rule],
        channel: EventChannel,
        fetch_episodes: bool,
    ) -> None:
        total = len(rules)
        completed = itertools.count(1)

        log.info(
            "search_started",
            keyword=keyword,
            rules=total,
            fetch_episodes=fetch_episodes,
        )

        try:
            if not await channel.send(self._encode(InitEvent(total=total))):
                log.info("search_client_gone", keyword=keyword, stage="init")
                return

            tasks = [
                asyncio.create_task(
                    self._search_one(
                        rule, keyword, total, completed, channel, fetch_episodes
                    )
                )
                for rule in rules
            ]

            outcomes = await asyncio.gather(*tasks, return_exceptions=True)
            for rule, outcome in zip(rules, outcomes):
                if isinstance(outcome, BaseException):
                    log.error(
                        "rule_task_failed",
                        rule=rule.name,
                        error_type=type(outcome).__name__,
                        error=str(outcome),
                    )

            await channel.send(self._encode(DoneEvent()))
        finally:
            await channel.finish()

        log.info("search_finished", keyword=keyword, rules=total)

    async def _search_one(
        self,
        rule: Rule,
        keyword: str,
        total: int,
        completed: itertools.count[int],
        channel: EventChannel,
        fetch_episodes: bool,
    ) -> None:
        result = await self._searcher.search(
            rule, keyword, fetch_episodes=fetch_episodes
        )
        progress = StreamProgress(completed=next(completed), total=total)

        log.debug(
            "rule_search_done",
            rule=rule.name,
            count=result.count,
            error=result.error,
            completed=progress.completed,
            total=total,
        )

        await channel.send(self._encode(build_event(rule, result, progress)))
