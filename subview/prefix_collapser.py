"""Collapses progressively typed subtitle fragments into their final form."""

from typing import List, Sequence

from .models import SubtitleEntry


def collapse(entries: Sequence[SubtitleEntry]) -> List[SubtitleEntry]:
    """
    Drops every entry whose text is a literal prefix of the next entry's text.

    Live captioning produces chains such as "I", "I a", "I am"; only the last
    (longest) member of each chain survives. Unrelated neighbours, including
    ones that merely start alike ("Hello world" / "Hello there"), are kept.
    Comparison is exact and case-sensitive, an empty text is a prefix of
    anything, and the final entry is always kept. Order is preserved and the
    retained entries are the same objects that were passed in.

    Args:
        entries: Entries in arrival order.

    Returns:
        A new list, no longer than the input.
    """
    collapsed: List[SubtitleEntry] = []
    for current, following in zip(entries, entries[1:]):
        if not following.text.startswith(current.text):
            collapsed.append(current)
    if entries:
        collapsed.append(entries[-1])
    return collapsed
