# File: vidcast/core/tasks.py

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from vidcast.core.config.settings import settings

logger = logging.getLogger(__name__)


class TaskRunner:
    """
    Shared pool for detached background work (direct-upload processing,
    metadata generation, publish submissions).
    Callers get a Future back but are never required to wait on it.
    """
    _instance = None
    _lock = threading.Lock()

    def __new__(cls, *args, **kwargs):
        with cls._lock:
            if cls._instance is None:
                cls._instance = super(TaskRunner, cls).__new__(cls)
                cls._instance._initialized = False
        return cls._instance

    def __init__(self, max_workers: Optional[int] = None):
        if self._initialized:
            return
        self._max_workers = max_workers or settings.TASK_WORKERS
        self._executor: Optional[ThreadPoolExecutor] = None
        self._initialized = True

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers,
                    thread_name_prefix="vidcast-task"
                )
            return self._executor

    def spawn(self, name: str, fn: Callable, *args, **kwargs) -> Future:
        future = self._get_executor().submit(fn, *args, **kwargs)
        future.add_done_callback(lambda f: self._report(name, f))
        return future

    def _report(self, name: str, future: Future):
        if future.cancelled():
            logger.warning(f"Task {name} was cancelled")
            return
        exc = future.exception()
        if exc is not None:
            logger.error(f"Task {name} failed: {exc!r}")

    def shutdown(self, wait: bool = True):
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)


tasks = TaskRunner()
