"""Bounded thread-pool fan-out shared by the fetch and scan stages."""
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterable, List, Optional, TypeVar

T = TypeVar("T")
R = TypeVar("R")

_SKIPPED = object()


def run_bounded(func: Callable[[T], R], items: Iterable[T], max_workers: int,
                cancel: Optional[threading.Event] = None) -> List[R]:
    """Run ``func`` over ``items`` with at most ``max_workers`` in flight.

    Blocks until every submitted task has finished and returns their results
    in completion order. Tasks that have not started when ``cancel`` is set
    return without calling ``func`` and are left out of the result.

    If a task raises, or the caller is interrupted while waiting, ``cancel``
    is set, pending tasks are dropped and the exception propagates.
    """
    cancel = cancel if cancel is not None else threading.Event()

    def _guarded(item):
        if cancel.is_set():
            return _SKIPPED
        return func(item)

    results = []
    executor = ThreadPoolExecutor(max_workers=max(1, max_workers))
    try:
        futures = [executor.submit(_guarded, item) for item in items]
        for future in as_completed(futures):
            value = future.result()
            if value is not _SKIPPED:
                results.append(value)
    except BaseException:
        cancel.set()
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown(wait=True)
    return results
