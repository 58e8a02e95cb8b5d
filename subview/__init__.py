"""SubView: follows an mpv subtitle feed and keeps a de-duplicated transcript."""

__version__ = "0.1.0"
