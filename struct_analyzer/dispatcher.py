"""Concurrent execution of per-repository analysis tasks."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from .errors import BatchAnalysisError
from .logging import get_logger

T = TypeVar("T")
U = TypeVar("U")

logger = get_logger("dispatcher")


def execute_all(
    args: Sequence[T],
    mapper: Callable[[T], U],
    *,
    max_workers: Optional[int] = None,
) -> List[U]:
    """Apply ``mapper`` to every argument concurrently and return results in input order.

    Every task runs to completion even when others fail. If any task raised,
    the failures are combined into a single ``BatchAnalysisError`` and no
    results are returned.
    """
    if not args:
        return []

    workers = max_workers or len(args)
    slots: List[Optional[U]] = [None] * len(args)
    failures: List[Tuple[str, BaseException]] = []

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="struct-analyzer") as executor:
        futures = [executor.submit(mapper, arg) for arg in args]
        for index, (arg, future) in enumerate(zip(args, futures)):
            exc = future.exception()
            if exc is not None:
                logger.debug("Task for %s failed: %s", arg, exc)
                failures.append((str(arg), exc))
                continue
            slots[index] = future.result()

    if failures:
        raise BatchAnalysisError(failures)
    return list(slots)  # type: ignore[arg-type]


__all__ = ["execute_all"]
