"""Run store calls off the UI thread and hand results back to it."""
from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, TypeVar
import functools
import logging
import queue

from weather_locations.errors import StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")
Dispatch = Callable[[Callable[[], None]], None]


class Worker(ABC):
    """Runs ``task`` and delivers its result through ``on_success``/``on_error``.

    ``on_error`` receives ``StoreError``. Other exceptions are bugs: the inline
    worker lets them propagate to the caller.
    """

    @abstractmethod
    def submit(
        self,
        task: Callable[[], T],
        on_success: Callable[[T], None],
        on_error: Callable[[StoreError], None],
    ) -> Optional[Future]:
        raise NotImplementedError

    def shutdown(self, wait: bool = True) -> None:
        return None


class InlineWorker(Worker):
    """Runs the task synchronously on the calling thread."""

    def submit(
        self,
        task: Callable[[], T],
        on_success: Callable[[T], None],
        on_error: Callable[[StoreError], None],
    ) -> Optional[Future]:
        try:
            result = task()
        except StoreError as exc:
            on_error(exc)
            return None
        on_success(result)
        return None


class QueueDispatcher:
    """Collects callbacks posted from the worker until the UI loop drains them."""

    def __init__(self) -> None:
        self._pending: "queue.Queue[Callable[[], None]]" = queue.Queue()

    def __call__(self, callback: Callable[[], None]) -> None:
        self._pending.put(callback)

    def drain(self, block: bool = False, timeout: float | None = None) -> int:
        """Run pending callbacks on the calling thread; return how many ran."""
        ran = 0
        while True:
            try:
                callback = self._pending.get(block=block and ran == 0, timeout=timeout)
            except queue.Empty:
                return ran
            callback()
            ran += 1


class BackgroundWorker(Worker):
    """Single background thread; results are posted back through ``dispatch``.

    An unexpected exception is logged, reported to ``on_error`` as a generic
    ``StoreError`` so the view still hears about it, and left on the returned
    ``Future``.
    """

    def __init__(self, dispatch: Dispatch, thread_name_prefix: str = "location-store") -> None:
        self.dispatch = dispatch
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=thread_name_prefix)

    def submit(
        self,
        task: Callable[[], T],
        on_success: Callable[[T], None],
        on_error: Callable[[StoreError], None],
    ) -> Optional[Future]:
        def run() -> Any:
            try:
                result = task()
            except StoreError as exc:
                self.dispatch(functools.partial(on_error, exc))
                return None
            except Exception as exc:
                logger.exception("Unexpected error in background store call")
                self.dispatch(functools.partial(on_error, StoreError(f"Unexpected error: {exc}")))
                raise
            self.dispatch(functools.partial(on_success, result))
            return result

        return self._executor.submit(run)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
