"""
Concurrent generation batches and scratch folders.

Every fragment of a track is generated through a PendingBatch. Nothing may
read the scratch folder until PendingBatch.wait_all() has returned, and a
single failed job fails the whole batch.
"""

import logging
import shutil
import tempfile
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Callable, List, Optional, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


class PendingBatch:
    """
    Join-all barrier over concurrently running generation jobs.

    Use as a context manager; the worker pool is shut down on exit.
    """

    def __init__(self, max_workers: int = 8, name: str = "fragments"):
        self.name = name
        self._executor = ThreadPoolExecutor(max_workers=max_workers,
                                            thread_name_prefix=f"gen-{name}")
        self._futures: List[Future] = []
        self._closed = False

    def __enter__(self) -> "PendingBatch":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # Never leave jobs writing into a folder that is about to be removed
        self._executor.shutdown(wait=True, cancel_futures=True)

    def __len__(self) -> int:
        return len(self._futures)

    def submit(self, job: Callable[..., T], *args, **kwargs) -> Future:
        """Register a generation job with the batch."""
        if self._closed:
            raise RuntimeError(f"Batch '{self.name}' has already been awaited")
        future = self._executor.submit(job, *args, **kwargs)
        self._futures.append(future)
        return future

    def wait_all(self) -> List[T]:
        """
        Wait for every job, then return their results in submission order.

        Raises:
            The first failure (in submission order) once all jobs have settled
        """
        self._closed = True
        wait(self._futures)

        failures = [f.exception() for f in self._futures if f.exception() is not None]
        if failures:
            logger.error(
                f"Batch '{self.name}': {len(failures)} of {len(self._futures)} jobs failed"
            )
            raise failures[0]

        logger.debug(f"Batch '{self.name}': all {len(self._futures)} jobs completed")
        return [f.result() for f in self._futures]


class ScratchDirectory:
    """
    Temporary folder for staging fragments of a single track build.

    The folder and everything in it is removed on exit, whether the build
    succeeded or failed.
    """

    def __init__(self, parent: Optional[Path] = None, prefix: str = "fragments-"):
        self.parent = parent
        self.prefix = prefix
        self.path: Optional[Path] = None

    def __enter__(self) -> Path:
        self.path = Path(tempfile.mkdtemp(prefix=self.prefix,
                                          dir=str(self.parent) if self.parent else None))
        logger.debug(f"Created scratch folder {self.path}")
        return self.path

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.path is not None:
            shutil.rmtree(self.path, ignore_errors=True)
            logger.debug(f"Removed scratch folder {self.path}")
