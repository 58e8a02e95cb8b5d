"""Drives the read, parse, collapse and replace cycle for the subtitle feed."""

import logging
import os
import threading
from typing import Callable, Optional

from .change_watcher import FileChangeWatcher
from .companion_script import check_script_installed
from .exceptions import FeedParseError
from .feed_parser import FeedParser, JsonFeedParser
from .prefix_collapser import collapse
from .transcript_store import TranscriptStore

logger = logging.getLogger(__name__)

class ReloadLoop:
    """
    The single writer of a TranscriptStore.

    Every reload re-reads the whole feed file. Read and parse failures keep
    the previous transcript; the presence flag is the only trace they leave.
    A failed reload is retried when the next change signal arrives.
    """

    def __init__(
        self,
        feed_path: str,
        store: TranscriptStore,
        parser: Optional[FeedParser] = None,
        watcher: Optional[FileChangeWatcher] = None,
        script_path: Optional[str] = None,
    ):
        """
        Initializes the ReloadLoop.

        Args:
            feed_path: Path of the feed file written by the companion script.
            store: The store that receives each new transcript.
            parser: Feed parser; defaults to JsonFeedParser.
            watcher: Source of change signals; required for `process_pending` and `run`.
            script_path: When set, the store's script-installed flag is refreshed on every reload.
        """
        self.feed_path = feed_path
        self.store = store
        self.parser = parser or JsonFeedParser()
        self.watcher = watcher
        self.script_path = script_path

    def reload(self) -> bool:
        """
        Performs one reload cycle. Never raises.

        Returns:
            True if the transcript was replaced, False if it was left untouched.
        """
        self.store.set_feed_present(os.path.exists(self.feed_path))
        if self.script_path:
            self.store.set_script_installed(check_script_installed(self.script_path))

        try:
            with open(self.feed_path, "rb") as f:
                raw = f.read()
        except OSError as e:
            # unreadable counts as absent for the renderer
            self.store.set_feed_present(False)
            logger.debug(f"Could not read subtitle feed {self.feed_path}: {e}")
            return False

        try:
            entries = self.parser.parse(raw)
        except FeedParseError as e:
            # Usually a half-written file; the next change signal will fix it
            logger.debug(f"Ignoring unparseable subtitle feed {self.feed_path}: {e}")
            return False

        transcript = collapse(entries)
        self.store.replace(transcript)
        logger.debug(f"Transcript reloaded: {len(entries)} feed entries, {len(transcript)} after collapsing.")
        return True

    def process_pending(self) -> bool:
        """
        Drains all queued change signals and reloads once if there were any.

        Returns:
            True if a reload replaced the transcript.
        """
        if self.watcher is None:
            return False
        events = self.watcher.drain()
        if not events:
            return False
        if len(events) > 1:
            logger.debug(f"Coalescing {len(events)} feed change events into one reload.")
        return self.reload()

    def run(
        self,
        stop_event: threading.Event,
        on_update: Optional[Callable[[TranscriptStore], None]] = None,
    ) -> None:
        """
        Reloads once, then once per burst of change signals until `stop_event` is set.

        Args:
            stop_event: Set by another thread to end the loop.
            on_update: Called with the store after every successful reload.

        Raises:
            ValueError: If the loop has no watcher.
        """
        if self.watcher is None:
            raise ValueError("ReloadLoop.run requires a watcher.")

        if self.reload() and on_update:
            on_update(self.store)

        while not stop_event.is_set():
            first = self.watcher.get(timeout=self.watcher.interval)
            if first is None:
                continue
            # coalesce the rest of the burst into this reload
            self.watcher.drain()
            if self.reload() and on_update:
                on_update(self.store)
        logger.info("Reload loop stopped.")
