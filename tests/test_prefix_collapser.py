"""Tests for collapsing progressively typed subtitle fragments."""
from subview.models import SubtitleEntry
from subview.prefix_collapser import collapse


def _entries(*texts):
    return [SubtitleEntry(text=t, start_time=float(i), timestamp=1700000000 + i) for i, t in enumerate(texts)]


def _texts(entries):
    return [e.text for e in entries]


def test_empty_input():
    assert collapse([]) == []


def test_single_entry_kept():
    entries = _entries("Only one")
    assert collapse(entries) == entries


def test_prefix_chain_collapses_to_longest():
    assert _texts(collapse(_entries("H", "He", "Hel", "Hell", "Hello"))) == ["Hello"]


def test_chain_followed_by_unrelated_entry():
    result = collapse(_entries("I", "I a", "I am", "Next subtitle"))
    assert _texts(result) == ["I am", "Next subtitle"]


def test_similar_start_is_not_a_prefix():
    entries = _entries("Hello world", "Hello there", "Helicopter")
    assert collapse(entries) == entries


def test_no_prefixes_leaves_sequence_unchanged():
    entries = _entries("one", "two", "three")
    assert collapse(entries) == entries


def test_exact_duplicate_neighbours_collapse():
    assert _texts(collapse(_entries("same", "same", "other"))) == ["same", "other"]


def test_empty_text_is_prefix_of_anything():
    assert _texts(collapse(_entries("", "text"))) == ["text"]


def test_comparison_is_case_and_whitespace_sensitive():
    assert _texts(collapse(_entries("hello", "Hello there"))) == ["hello", "Hello there"]
    assert _texts(collapse(_entries(" I", "I am"))) == [" I", "I am"]


def test_non_adjacent_repeats_are_kept():
    assert _texts(collapse(_entries("a", "b", "a"))) == ["a", "b", "a"]


def test_last_entry_always_kept():
    result = collapse(_entries("longer text", "long"))
    assert _texts(result) == ["longer text", "long"]


def test_multiline_text_prefix():
    assert _texts(collapse(_entries("first line", "first line\nsecond"))) == ["first line\nsecond"]


def test_retained_entries_are_unmodified_originals():
    entries = _entries("I", "I am", "Bye")
    result = collapse(entries)
    assert result[0] is entries[1]
    assert result[1] is entries[2]


def test_input_is_not_modified():
    entries = _entries("a", "ab")
    before = list(entries)
    collapse(entries)
    assert entries == before


def test_accepts_tuples():
    assert _texts(collapse(tuple(_entries("x", "xy")))) == ["xy"]


def test_output_never_longer_than_input():
    for texts in (["a"], ["a", "b"], ["a", "ab", "b", "bc", "c"], ["", "", ""]):
        entries = _entries(*texts)
        assert len(collapse(entries)) <= len(entries)


def test_collapse_is_a_fixed_point_for_chains_and_unrelated_entries():
    entries = _entries("I", "I a", "I am", "Next", "Ne", "New", "New line")
    once = collapse(entries)
    assert collapse(once) == once
