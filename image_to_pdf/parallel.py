"""Order-preserving parallel ingestion of images."""

from __future__ import annotations

import functools
import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Callable, Dict, Iterable, List, Optional, TypeVar

from .exceptions import ConfigurationError, ParallelIngestionError

LOGGER = logging.getLogger("image_to_pdf.parallel")

T = TypeVar("T")
S = TypeVar("S")

Producer = Callable[[], T]

_MISSING = object()


def validate_max_workers(max_workers: Optional[int]) -> Optional[int]:
    if max_workers is None:
        return None
    if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1:
        raise ConfigurationError(f"max_workers must be a positive integer, got {max_workers!r}")
    return max_workers


def producers_from(func: Callable[[S], T], items: Iterable[S]) -> List[Producer[T]]:
    """Bind *func* to every item, giving one zero-argument producer per item."""

    return [functools.partial(func, item) for item in items]


def collect_ordered(
    producers: Iterable[Producer[T]],
    *,
    max_workers: Optional[int] = None,
) -> List[T]:
    """Run *producers* on a thread pool and return their results in input order.

    Results are scattered into a pre-sized list by submission index, so the
    output matches sequential evaluation no matter which worker finishes
    first. The call blocks until every producer has finished. If any of them
    raised, :class:`ParallelIngestionError` is raised for the lowest failing
    index and every result is discarded.
    """

    workers = validate_max_workers(max_workers)
    tasks = list(producers)
    if not tasks:
        return []

    results: List[object] = [_MISSING] * len(tasks)
    failures: Dict[int, BaseException] = {}

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="image-to-pdf") as executor:
        futures: Dict[Future, int] = {
            executor.submit(task): index for index, task in enumerate(tasks)
        }
        for future in as_completed(futures):
            index = futures[future]
            try:
                results[index] = future.result()
            except Exception as exc:
                failures[index] = exc
                LOGGER.debug("Producer %d failed: %s", index, exc)

    if failures:
        first = min(failures)
        raise ParallelIngestionError(
            f"Parallel ingestion failed for item {first + 1} of {len(tasks)} "
            f"({len(failures)} failed): {failures[first]}",
            index=first,
            failures=len(failures),
        ) from failures[first]

    LOGGER.debug("Collected %d results in parallel", len(results))
    return results  # type: ignore[return-value]


__all__ = ["Producer", "collect_ordered", "producers_from", "validate_max_workers"]
