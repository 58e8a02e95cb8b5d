"""Locates the mpv companion script that produces the subtitle feed."""

import os

SCRIPT_NAME = "subtitle-monitor.lua"


def default_script_path() -> str:
    """Returns where mpv loads the companion script from for the current user."""
    home_dir = os.environ.get("HOME") or "/tmp"
    return os.path.join(home_dir, ".config", "mpv", "scripts", SCRIPT_NAME)


def check_script_installed(script_path: str) -> bool:
    """Returns True when the companion script exists at `script_path`."""
    return os.path.exists(script_path)
