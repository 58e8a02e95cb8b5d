"""Tests for the command-line viewer."""
import io
import json
import logging

import pytest

from subview.cli import CLIHandler, ConsoleRenderer, FEED_MISSING, INSTALL_AND_START, NO_SUBTITLES
from subview.models import SubtitleEntry
from subview.transcript_store import TranscriptStore


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_renderer_shows_latest_entries():
    store = TranscriptStore()
    store.set_feed_present(True)
    store.set_script_installed(True)
    store.replace([SubtitleEntry(text=f"line {i}", start_time=i * 1.5, timestamp=i) for i in range(4)])
    text = ConsoleRenderer(display_count=2).render(store)
    assert text.splitlines()[1:] == ["[3.0s] line 2", "[4.5s] line 3"]


def test_renderer_status_lines():
    store = TranscriptStore()
    text = ConsoleRenderer(display_count=10).render(store)
    assert FEED_MISSING in text
    assert INSTALL_AND_START in text

    store.set_feed_present(True)
    assert NO_SUBTITLES in ConsoleRenderer(display_count=10).render(store)


def test_renderer_show_skips_unchanged_store():
    out = io.StringIO()
    renderer = ConsoleRenderer(display_count=10, out=out)
    store = TranscriptStore()
    store.replace([SubtitleEntry(text="hi", start_time=0.0, timestamp=1)])
    renderer.show(store)
    first = out.getvalue()
    renderer.show(store)
    assert out.getvalue() == first


def test_once_prints_transcript(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    feed = tmp_path / "feed.json"
    feed.write_text(json.dumps([
        {"text": "I", "start_time": 1.0, "timestamp": 1},
        {"text": "I am", "start_time": 1.5, "timestamp": 2},
    ]))
    with pytest.raises(SystemExit) as exc:
        CLIHandler().run(["--once", "--feed", str(feed), "--config", str(tmp_path / "none.yaml")])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "[1.5s] I am" in out
    assert "] I\n" not in out


def test_invalid_config_exits_with_error(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = tmp_path / "config.yaml"
    config.write_text("poll_interval: -1\n")
    with pytest.raises(SystemExit) as exc:
        CLIHandler().run(["--once", "--config", str(config)])
    assert exc.value.code == 1


def test_once_json_prints_collapsed_entries(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    feed = tmp_path / "feed.json"
    feed.write_text(json.dumps([
        {"text": "I", "start_time": 1.0, "timestamp": 1},
        {"text": "I am", "start_time": 1.5, "end_time": 2.0, "timestamp": 2},
        {"text": "Bye", "start_time": 3.0, "timestamp": 3},
    ]))
    with pytest.raises(SystemExit) as exc:
        CLIHandler().run(["--once", "--json", "--feed", str(feed), "--config", str(tmp_path / "none.yaml")])
    assert exc.value.code == 0
    assert json.loads(capsys.readouterr().out) == [
        {"text": "I am", "start_time": 1.5, "end_time": 2.0, "timestamp": 2},
        {"text": "Bye", "start_time": 3.0, "timestamp": 3},
    ]
