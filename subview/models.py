"""Data models for SubView."""

import numbers
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .exceptions import FeedParseError


def _number(raw: Dict[str, Any], key: str) -> float:
    value = raw[key]
    # bool is an int subclass, but `true` is never a valid time
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise FeedParseError(f"Field '{key}' must be a number, got {type(value).__name__}.")
    return float(value)


@dataclass(frozen=True)
class SubtitleEntry:
    """One fragment of subtitle text as written by the mpv companion script."""
    text: str
    start_time: float
    end_time: Optional[float] = None
    timestamp: int = 0

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "SubtitleEntry":
        """
        Builds an entry from one decoded feed object.

        Args:
            raw: Mapping with 'text', 'start_time', 'timestamp' and an
                 optional 'end_time' (absent or null).

        Returns:
            The corresponding SubtitleEntry.

        Raises:
            FeedParseError: If a required field is missing or has the wrong type.
        """
        if not isinstance(raw, dict):
            raise FeedParseError(f"Feed entry must be an object, got {type(raw).__name__}.")
        for key in ("text", "start_time", "timestamp"):
            if key not in raw:
                raise FeedParseError(f"Feed entry is missing required field '{key}'.")

        text = raw["text"]
        if not isinstance(text, str):
            raise FeedParseError(f"Field 'text' must be a string, got {type(text).__name__}.")

        start_time = _number(raw, "start_time")
        end_time = _number(raw, "end_time") if raw.get("end_time") is not None else None

        timestamp = raw["timestamp"]
        if isinstance(timestamp, float) and timestamp.is_integer():
            timestamp = int(timestamp)
        if isinstance(timestamp, bool) or not isinstance(timestamp, int):
            raise FeedParseError(f"Field 'timestamp' must be an integer, got {timestamp!r}.")

        return cls(text=text, start_time=start_time, end_time=end_time, timestamp=timestamp)

    def to_dict(self) -> Dict[str, Any]:
        """Returns the feed representation; 'end_time' is omitted when unset."""
        data: Dict[str, Any] = {"text": self.text, "start_time": self.start_time}
        if self.end_time is not None:
            data["end_time"] = self.end_time
        data["timestamp"] = self.timestamp
        return data
