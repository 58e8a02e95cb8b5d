"""Command-Line Interface handler for SubView."""

import argparse
import json
import logging
import sys
import threading
from typing import List, Optional, TextIO

from .change_watcher import FileChangeWatcher
from .config_loader import ConfigLoader, Settings, build_settings
from .exceptions import SubViewError, ConfigurationError
from .log_setup import setup_logging
from .reload_loop import ReloadLoop
from .transcript_store import TranscriptStore
from .utils import format_start_time

logger = logging.getLogger(__name__) # Get logger for this module

SCRIPT_MISSING = "Script not installed: copy subtitle-monitor.lua into your mpv scripts directory."
FEED_MISSING = "No subtitle data (maybe mpv isn't running?)"
NO_SUBTITLES = "No subtitles yet..."
START_MPV = "Start mpv to see subtitles here."
INSTALL_AND_START = "Install the script and start mpv to see subtitles."


class ConsoleRenderer:
    """Prints the tail of the transcript together with the feed status."""

    def __init__(self, display_count: int, out: Optional[TextIO] = None, as_json: bool = False):
        self.display_count = display_count
        self.as_json = as_json
        self.out = out or sys.stdout
        self._last_version: Optional[int] = None

    def render(self, store: TranscriptStore) -> str:
        """Returns the text block (or JSON array) for the current store state."""
        if self.as_json:
            # same shape as the feed file
            return json.dumps([entry.to_dict() for entry in store.latest(self.display_count)], ensure_ascii=False)
        lines = ["MPV Subtitle History"]
        if not store.script_installed:
            lines.append(SCRIPT_MISSING)
        if not store.feed_present:
            lines.append(FEED_MISSING)

        entries = store.latest(self.display_count)
        if not entries:
            if store.feed_present:
                lines.append(NO_SUBTITLES)
            elif store.script_installed:
                lines.append(START_MPV)
            else:
                lines.append(INSTALL_AND_START)
        for entry in entries:
            lines.append(f"{format_start_time(entry.start_time)} {entry.text}")
        return "\n".join(lines)

    def show(self, store: TranscriptStore) -> None:
        """Prints the store state unless nothing changed since the last call."""
        version = store.version
        if version == self._last_version:
            return
        self._last_version = version
        self.out.write(self.render(store) + "\n\n")
        self.out.flush()


class CLIHandler:
    """Parses arguments and runs the subtitle viewer."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Creates the argument parser for the CLI."""
        parser = argparse.ArgumentParser(
            description="SubView: follow the subtitles mpv is showing as a de-duplicated history.",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter # Show defaults in help
        )
        parser.add_argument(
            "-c", "--config",
            default="config.yaml",
            help="Path to the configuration YAML file (optional)."
        )
        parser.add_argument(
            "-f", "--feed",
            default=None, # Default taken from config
            help="Override the subtitle feed file written by the mpv script."
        )
        parser.add_argument(
            "-n", "--count",
            type=int,
            default=None,
            help="Override how many of the latest subtitles to show (1-50)."
        )
        parser.add_argument(
            "--poll-interval",
            type=float,
            default=None,
            help="Override the seconds between checks of the feed file."
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print the collapsed entries as a JSON array instead of text."
        )
        parser.add_argument(
            "--once",
            action="store_true",
            help="Print the current transcript and exit instead of following the feed."
        )
        parser.add_argument(
            "--log-level",
            default="INFO",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Set the logging level for console and file output."
        )
        return parser

    def _load_settings(self, args: argparse.Namespace) -> Settings:
        try:
            config = ConfigLoader().load_config(args.config)
        except FileNotFoundError:
            logger.warning(f"Configuration file {args.config} not found. Using defaults.")
            config = {}

        if args.feed:
            logger.info(f"Overriding feed_path from config with CLI argument: {args.feed}")
            config['feed_path'] = args.feed
        if args.count is not None:
            config['display_count'] = args.count
        if args.poll_interval is not None:
            config['poll_interval'] = args.poll_interval
        return build_settings(config)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Parses arguments, sets up logging, loads config, and runs the viewer."""
        args = self.parser.parse_args(argv)

        log_level = getattr(logging, args.log_level.upper(), logging.INFO)
        setup_logging(log_level=log_level, log_dir='logs', log_file='subview_init.log')

        try:
            settings = self._load_settings(args)
        except ConfigurationError as e:
            logger.critical(f"Failed to load configuration from {args.config}: {e}")
            sys.exit(1)

        setup_logging(log_level=log_level, log_dir=settings.log_dir, log_file=settings.log_file)

        store = TranscriptStore()
        renderer = ConsoleRenderer(settings.display_count, as_json=args.json)

        try:
            if args.once:
                ReloadLoop(settings.feed_path, store, script_path=settings.script_path).reload()
                renderer.out.write(renderer.render(store) + "\n")
                sys.exit(0)

            stop_event = threading.Event()
            with FileChangeWatcher(settings.feed_path, settings.poll_interval) as watcher:
                loop = ReloadLoop(
                    settings.feed_path,
                    store,
                    watcher=watcher,
                    script_path=settings.script_path,
                )
                try:
                    loop.run(stop_event, on_update=renderer.show)
                except KeyboardInterrupt:
                    stop_event.set()
                    logger.info("Interrupted by user (Ctrl+C). Exiting.")
            sys.exit(0)

        except SubViewError as e:
            logger.error(f"A SubView error occurred: {e}")
            sys.exit(1)
        except Exception as e:
            logger.critical(f"An unexpected critical error occurred at the top level: {e}", exc_info=True)
            sys.exit(2)
