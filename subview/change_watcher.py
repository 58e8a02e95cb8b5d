"""Watches the feed file and reports when it is created, modified or removed."""

import logging
import os
import queue
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .exceptions import WatcherError

logger = logging.getLogger(__name__)

class ChangeKind(Enum):
    """What happened to the watched file."""
    CREATED = "created"
    MODIFIED = "modified"
    REMOVED = "removed"

Signature = Tuple[int, int, int]  # (st_mtime_ns, st_size, st_ino)


@dataclass(frozen=True)
class ChangeEvent:
    """One observed change of the watched file."""
    kind: ChangeKind
    path: str


def _signature(path: str) -> Optional[Signature]:
    try:
        st = os.stat(path)
    except OSError:
        return None
    return (st.st_mtime_ns, st.st_size, st.st_ino)


class FileChangeWatcher:
    """
    Reports changes of a single file on a background thread.

    The file is stat'ed every `interval` seconds and any difference in
    modification time, size or inode since the previous poll is pushed onto a
    thread-safe queue as a ChangeEvent. The file (and its directory) may be
    missing; its appearance is reported as CREATED.

    The watcher owns its thread for as long as it runs: use it as a context
    manager, or pair `start()` with `stop()`. It cannot be restarted.
    """

    def __init__(self, path: str, interval: float = 0.25):
        """
        Args:
            path: The file to watch.
            interval: Seconds between polls; must be positive.

        Raises:
            ValueError: If interval is not positive.
        """
        if interval <= 0:
            raise ValueError(f"Watcher interval must be positive, got {interval}.")
        self.path = path
        self.interval = interval
        self._fifo: "queue.Queue[ChangeEvent]" = queue.Queue()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._last: Optional[Signature] = None

    # ── lifecycle ───────────────────────────────────────────────────────
    def start(self) -> "FileChangeWatcher":
        if self._thread is not None:
            raise WatcherError(f"Watcher for {self.path} was already started.")
        self._last = _signature(self.path)
        self._thread = threading.Thread(
            target=self._run, name="subview-watcher", daemon=True
        )
        self._thread.start()
        logger.info(f"Watching subtitle feed: {self.path} (every {self.interval}s)")
        return self

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stops the polling thread and waits for it to finish."""
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout if timeout is not None else self.interval * 4 + 1)
            logger.info(f"Stopped watching subtitle feed: {self.path}")

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop.is_set()

    def __enter__(self) -> "FileChangeWatcher":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # ── producer ────────────────────────────────────────────────────────
    def poll_once(self) -> Optional[ChangeEvent]:
        """Compares the file against the previous poll and queues any change."""
        current = _signature(self.path)
        if current == self._last:
            return None
        if self._last is None:
            kind = ChangeKind.CREATED
        elif current is None:
            kind = ChangeKind.REMOVED
        else:
            kind = ChangeKind.MODIFIED
        self._last = current
        event = ChangeEvent(kind=kind, path=self.path)
        self._fifo.put(event)
        logger.debug(f"Feed {kind.value}: {self.path}")
        return event

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.poll_once()

    # ── consumers ───────────────────────────────────────────────────────
    def get(self, timeout: Optional[float] = None) -> Optional[ChangeEvent]:
        """Returns the next event, waiting at most `timeout` seconds (None if none)."""
        try:
            return self._fifo.get(timeout=timeout)
        except queue.Empty:
            return None

    def drain(self) -> List[ChangeEvent]:
        """Returns every queued event without blocking."""
        events = []
        while True:
            try:
                events.append(self._fifo.get_nowait())
            except queue.Empty:
                return events

    def events(self) -> Iterator[ChangeEvent]:
        """
        Lazily yields events as they arrive, forever (until the watcher stops).

        The iterator shares the watcher's queue: an event consumed here is not
        seen by `drain` or `get`, and vice versa.
        """
        while not self._stop.is_set() or not self._fifo.empty():
            event = self.get(timeout=self.interval)
            if event is not None:
                yield event
