from __future__ import annotations

import asyncio
import inspect
import logging
from contextlib import suppress
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set, Type, Union

from .events import ReaderEvent

EventCallback = Callable[[Any], Union[None, Awaitable[None]]]


class EventBus:
    """
    Async publish/subscribe bus shared by the components of one reading session.

    Notes:
    - `publish()` never blocks; events are queued and delivered in order by the
      dispatcher task.
    - Subscribers register per event type. Plain callables run inline; coroutine
      callbacks are spawned as independent tasks so overlapping work is neither
      queued behind nor cancelled by later events.
    - `drain()` waits until every queued event and spawned task has settled.
    """

    def __init__(self) -> None:
        self.events: asyncio.Queue[ReaderEvent] = asyncio.Queue()
        self._subscribers: Dict[Type[Any], List[EventCallback]] = {}
        self._tasks: Set[asyncio.Task[Any]] = set()
        self._running = False
        self._dispatch_task: Optional[asyncio.Task[None]] = None
        self._logger = logging.getLogger("pagewise.reading.bus")

    def subscribe(self, event_type: Type[Any], callback: EventCallback) -> None:
        callbacks = self._subscribers.setdefault(event_type, [])
        callbacks.append(callback)

    def unsubscribe(self, event_type: Type[Any], callback: EventCallback) -> None:
        callbacks = self._subscribers.get(event_type, [])
        with suppress(ValueError):
            callbacks.remove(callback)

    def publish(self, event: ReaderEvent) -> None:
        self.events.put_nowait(event)

    async def start_dispatcher(self) -> None:
        if (
            self._running
            and self._dispatch_task is not None
            and not self._dispatch_task.done()
        ):
            return
        self._running = True
        self._dispatch_task = asyncio.create_task(self._dispatch_loop())

    async def stop_dispatcher(self) -> None:
        self._running = False
        task = self._dispatch_task
        self._dispatch_task = None
        if task is not None:
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task

    async def drain(self) -> None:
        """Wait for queued events and the tasks they spawned to settle."""
        if self._dispatch_task is None:
            await self.dispatch_pending()
        while True:
            if self._dispatch_task is not None:
                await self.events.join()
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                if self.events.empty():
                    return
                if self._dispatch_task is None:
                    await self.dispatch_pending()
                continue
            await asyncio.gather(*pending, return_exceptions=True)
            if self._dispatch_task is None:
                await self.dispatch_pending()

    async def dispatch_pending(self) -> int:
        """Deliver everything currently queued without a dispatcher task."""
        delivered = 0
        while not self.events.empty():
            event = self.events.get_nowait()
            try:
                self._deliver(event)
            finally:
                self.events.task_done()
            delivered += 1
        return delivered

    async def _dispatch_loop(self) -> None:
        while self._running:
            try:
                event = await self.events.get()
                try:
                    self._deliver(event)
                finally:
                    self.events.task_done()
            except asyncio.CancelledError:
                break
            except Exception as exc:
                self._logger.error("Dispatcher loop error: %s", exc)

    def _deliver(self, event: ReaderEvent) -> None:
        for callback in list(self._subscribers.get(type(event), [])):
            try:
                result = callback(event)
            except Exception as exc:
                self._logger.error(
                    "Subscriber failed for %s: %s", type(event).__name__, exc
                )
                continue
            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                self._tasks.add(task)
                task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._logger.error("Subscriber task failed: %s", exc)

    @property
    def pending_events(self) -> int:
        return self.events.qsize()

    @property
    def pending_tasks(self) -> int:
        return sum(1 for task in self._tasks if not task.done())
