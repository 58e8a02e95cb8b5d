"""Thread-safe holder for the current transcript and feed status flags."""

import threading
from typing import Iterable, List

from .models import SubtitleEntry


class TranscriptStore:
    """
    Owns the de-duplicated transcript behind a single lock.

    The transcript list itself is never handed out: writers install a whole
    new sequence with `replace` (or empty it with `clear`) and readers get an
    independent copy from `snapshot`, so a reader can never observe a mix of
    two reload cycles. The feed-presence and script-installed flags are plain
    values guarded by the same lock.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: List[SubtitleEntry] = []
        self._version = 0
        self._feed_present = False
        self._script_installed = False

    def replace(self, new_transcript: Iterable[SubtitleEntry]) -> None:
        """Atomically installs `new_transcript` as the current transcript."""
        entries = list(new_transcript)  # built outside the lock
        with self._lock:
            self._entries = entries
            self._version += 1

    def snapshot(self) -> List[SubtitleEntry]:
        """Returns a point-in-time copy, unaffected by later updates."""
        with self._lock:
            return list(self._entries)

    def latest(self, count: int) -> List[SubtitleEntry]:
        """
        Returns a copy of the last `count` entries, oldest first.

        Args:
            count: Maximum number of entries to return; values below 1 yield [].
        """
        if count < 1:
            return []
        with self._lock:
            return self._entries[-count:]

    def clear(self) -> None:
        """Empties the transcript."""
        with self._lock:
            self._entries = []
            self._version += 1

    @property
    def version(self) -> int:
        """Counter bumped by every `replace` and `clear`."""
        with self._lock:
            return self._version

    @property
    def feed_present(self) -> bool:
        with self._lock:
            return self._feed_present

    def set_feed_present(self, present: bool) -> None:
        with self._lock:
            self._feed_present = bool(present)

    @property
    def script_installed(self) -> bool:
        with self._lock:
            return self._script_installed

    def set_script_installed(self, installed: bool) -> None:
        with self._lock:
            self._script_installed = bool(installed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
