"""Decodes the raw subtitle feed written by the mpv companion script."""

import json
import logging
from abc import ABC, abstractmethod
from typing import List, Union

from .models import SubtitleEntry
from .exceptions import FeedParseError

logger = logging.getLogger(__name__)

class FeedParser(ABC):
    """Abstract base class for feed parsers."""

    @abstractmethod
    def parse(self, raw: Union[str, bytes]) -> List[SubtitleEntry]:
        """
        Parses the entire content of the feed resource.

        Args:
            raw: The full feed content, read in one shot.

        Returns:
            The entries in arrival order (oldest first).

        Raises:
            FeedParseError: If the content is not a well-formed feed.
        """
        pass


class JsonFeedParser(FeedParser):
    """Parses a JSON array of subtitle objects."""

    def parse(self, raw: Union[str, bytes]) -> List[SubtitleEntry]:
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise FeedParseError(f"Feed is not valid UTF-8: {e}") from e

        # The producer truncates before it writes; an empty read is a mid-write state
        if not raw.strip():
            raise FeedParseError("Feed is empty.")

        try:
            document = json.loads(raw)
        except (ValueError, RecursionError) as e:
            # deeply nested garbage exhausts the decoder stack
            raise FeedParseError(f"Invalid JSON in feed: {e}") from e

        if not isinstance(document, list):
            raise FeedParseError(f"Feed root must be an array, got {type(document).__name__}.")

        entries = [SubtitleEntry.from_dict(item) for item in document]
        logger.debug(f"Parsed {len(entries)} feed entries.")
        return entries
