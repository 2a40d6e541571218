"""
Execution context: the worker pool the aggregation engine runs on.

The pool is an explicit handle owned by the caller and passed into the
engine, so several contexts with different sizes can coexist in one
process (e.g. in tests, or when benchmarking 1 worker against N).
"""

import logging
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor
from typing import Callable, List, TypeVar

import psutil

from .errors import PoolConstructionError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_WORKERS = 255
BACKENDS = ("thread", "process")


def default_num_workers() -> int:
    """Number of logical CPUs, falling back to 1 when it cannot be determined."""
    return psutil.cpu_count(logical=True) or 1


def chunkify(items: List[T], num_chunks: int) -> List[List[T]]:
    """Split items into at most num_chunks contiguous, near-equal chunks."""
    num_items = len(items)
    items_per_chunk = num_items // num_chunks
    remainder = num_items - (num_chunks * items_per_chunk)

    result = []
    start = 0
    for idx in range(num_chunks):
        chunk_size = items_per_chunk + (1 if idx < remainder else 0)
        end = start + chunk_size

        if start < end:
            result.append(items[start:end])
        start = end

    return result


class ExecutionContext:
    """
    Fixed-size worker pool used for every fork-join phase of a run.

    Tasks submitted to the pool never wait on other tasks, so a pool of any
    size, including one worker, makes progress.

    Usage:
        with ExecutionContext(num_workers=4) as context:
            corpus.load_sites("data", context)
    """

    def __init__(self, num_workers: int, backend: str = "thread"):
        """
        Build the pool.

        Args:
            num_workers: Pool size, between 1 and MAX_WORKERS
            backend: "thread" for a thread pool, "process" for a process pool

        Raises:
            PoolConstructionError: If the size is out of range, the backend is
                unknown, or the executor cannot be created
        """
        if backend not in BACKENDS:
            raise PoolConstructionError(f"Unknown backend '{backend}', expected one of {BACKENDS}")
        if not isinstance(num_workers, int) or not 1 <= num_workers <= MAX_WORKERS:
            raise PoolConstructionError(
                f"Worker count must be between 1 and {MAX_WORKERS}, got {num_workers}"
            )

        self.num_workers = num_workers
        self.backend = backend
        try:
            self._executor = self._build_executor()
        except (ValueError, OSError, RuntimeError) as e:
            raise PoolConstructionError(
                f"Could not build a {backend} pool with {num_workers} workers: {e}"
            ) from e
        logger.debug(f"Started {backend} pool with {num_workers} workers")

    def _build_executor(self) -> Executor:
        if self.backend == "process":
            return ProcessPoolExecutor(max_workers=self.num_workers)
        return ThreadPoolExecutor(max_workers=self.num_workers, thread_name_prefix="sitestats")

    def submit(self, fn: Callable[..., T], *args, **kwargs) -> "Future[T]":
        return self._executor.submit(fn, *args, **kwargs)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "ExecutionContext":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()
