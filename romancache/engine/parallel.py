from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple, TypeVar

from romancache.core.errors import ValidationError

T = TypeVar("T")  # source element
R = TypeVar("R")  # per-partition result


@dataclass(frozen=True, slots=True)
class Partition:
    index: int
    start: int
    stop: int

    def __len__(self) -> int:
        return self.stop - self.start


def partition(length: int, chunk_size: int) -> List[Partition]:
    """Split ``range(length)`` into contiguous, disjoint partitions of at most ``chunk_size``."""
    if chunk_size < 1:
        raise ValidationError(f"chunk_size must be >= 1, got {chunk_size}")
    return [
        Partition(idx, start, min(start + chunk_size, length))
        for idx, start in enumerate(range(0, length, chunk_size))
    ]


def run_partitioned(
    source: Sequence[T],
    work_fn: Callable[[int, Sequence[T]], R],
    *,
    max_workers: int,
    chunk_size: int,
) -> List[R]:
    """
    Apply ``work_fn(offset, chunk)`` to each partition of ``source`` and return
    the results in partition order.

    - max_workers <= 1 or a single partition => sequential path, no pool.
    - work_fn MUST NOT mutate shared state; it receives its own slice.
    - If partitions fail, the exception of the lowest-index failing partition
      is re-raised unchanged, independent of completion order.
    """
    parts = partition(len(source), chunk_size)
    if not parts:
        return []

    if max_workers <= 1 or len(parts) == 1:
        return [work_fn(p.start, source[p.start:p.stop]) for p in parts]

    eff_workers = max(1, min(max_workers, len(parts)))
    results: List[R] = []
    errors: List[Tuple[int, BaseException]] = []

    # Submit in a stable order; collect in submit order.
    with ThreadPoolExecutor(max_workers=eff_workers, thread_name_prefix="romancache-par") as ex:
        futures: List[Tuple[Partition, Future[R]]] = [
            (p, ex.submit(work_fn, p.start, source[p.start:p.stop])) for p in parts
        ]
        for p, fut in futures:
            try:
                results.append(fut.result())
            except Exception as e:  # noqa: BLE001
                errors.append((p.index, e))

    if errors:
        errors.sort(key=lambda t: t[0])
        raise errors[0][1]
    return results


__all__ = ["Partition", "partition", "run_partitioned"]
