from __future__ import annotations

import logging
import threading
import time
from typing import List, Optional, Sequence

from ..engine.base import WatcherHandle


class KeepAlive:
    """
    Owns watcher handles for the rest of the process.

    There is no release path: `wait()` blocks for as long as at least one
    handle is registered, which is forever once anything is registered.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._handles: List[WatcherHandle] = []

    def register(self, handles: Sequence[WatcherHandle]) -> None:
        with self._cond:
            self._handles.extend(handles)
            self._cond.notify_all()

    @property
    def active(self) -> int:
        with self._cond:
            return len(self._handles)

    def wait(self) -> None:
        with self._cond:
            while self._handles:
                self._cond.wait()


class LifecycleManager:
    def __init__(self, logger: logging.Logger, keep_alive: Optional[KeepAlive] = None):
        self.logger = logger
        self.keep_alive = keep_alive or KeepAlive()

    def finish(self, handles: Sequence[WatcherHandle], start: float) -> None:
        """
        Return after logging the elapsed time when nothing is watching;
        otherwise block until the process is interrupted from outside.
        """
        if not handles:
            self.logger.info(f"Processing time {time.monotonic() - start:.4f} seconds")
            return
        self.keep_alive.register(handles)
        self.logger.info(f"Watching for changes ({len(handles)} watcher(s)). Press Ctrl+C to stop.")
        self.keep_alive.wait()
