"""
Host loop for the wired configuration core.

Wires the pieces together: the registry is initialized once, the config
directory is watched, and every tick the loop drains watcher events and
reloads. Rendering and D-Bus live elsewhere and receive the registry.
"""
# Module can be run with: python -m wired

import argparse
import asyncio
import logging
import os
import signal
import sys
from pathlib import Path
from typing import List, Optional

try:
    from systemd import journal, daemon as sd_daemon
    SYSTEMD_AVAILABLE = True
except ImportError:
    SYSTEMD_AVAILABLE = False

from .config.file_watcher import DEFAULT_DEBOUNCE_MS, ConfigWatcher, watch
from .config.loader import load_config
from .config.registry import ConfigRegistry
from .errors import ConfigLoadError, WatchError

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class WiredDaemon:
    """Owns the config registry and the watcher for the process lifetime."""

    def __init__(
        self,
        registry: Optional[ConfigRegistry] = None,
        config_path: Optional[Path] = None,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS
    ):
        """
        Initialize daemon.

        Args:
            registry: Config registry to drive (a fresh one by default)
            config_path: Explicit config file, skipping the search paths
            debounce_ms: Watcher debounce window in milliseconds
        """
        self.registry = registry or ConfigRegistry()
        self.config_path = config_path
        self.debounce_ms = debounce_ms
        self.watcher: Optional[ConfigWatcher] = None
        self.shutdown_event = asyncio.Event()
        self.running = False

    def initialize(self) -> None:
        """Load the startup config and start watching it.

        Raises:
            EmbeddedConfigError: If the embedded default config is broken
        """
        watch_path = self.registry.init(self.config_path)
        if watch_path is None:
            logger.info("No config file to watch; hot reload disabled")
            return

        try:
            self.watcher = watch(watch_path, self.debounce_ms)
        except WatchError as e:
            logger.warning(f"There was a problem watching the config for changes, so won't watch: {e}")
            self.watcher = None

    def process_config_events(self) -> bool:
        """
        Apply pending config changes.

        Returns:
            True if the config was reloaded
        """
        if self.watcher is None or self.shutdown_event.is_set():
            return False

        events = self.watcher.drain()
        if not events:
            return False

        logger.debug(f"Config changed ({sum(e.raw_events for e in events)} raw events)")
        return self.registry.reload(events[-1].path)

    def request_shutdown(self) -> None:
        self.shutdown_event.set()

    def request_reload(self) -> None:
        """Reload on demand (SIGHUP)."""
        if self.registry.is_initialized and not self.shutdown_event.is_set():
            self.registry.reload()

    async def run(self) -> None:
        """Tick at the configured poll interval until shutdown is requested."""
        self.running = True
        logger.info("Daemon running")
        try:
            while not self.shutdown_event.is_set():
                self.process_config_events()
                interval = self.registry.get().poll_interval / 1000
                try:
                    await asyncio.wait_for(self.shutdown_event.wait(), timeout=interval)
                except asyncio.TimeoutError:
                    pass
        finally:
            self.running = False

    async def shutdown(self) -> None:
        """Stop watching, then drop the config."""
        logger.info("Stopping daemon...")
        self.shutdown_event.set()

        if self.watcher:
            self.watcher.stop()
            self.watcher = None

        self.registry.teardown()
        logger.info("Daemon stopped")


def setup_logging(level: Optional[str] = None) -> None:
    """Setup logging to systemd journal or stderr."""
    log_level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    unknown_level = log_level not in LOG_LEVELS
    if unknown_level:
        requested, log_level = log_level, "INFO"

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if SYSTEMD_AVAILABLE:
        handler = journal.JournalHandler(SYSLOG_IDENTIFIER="wired")
    else:
        handler = logging.StreamHandler(sys.stderr)

    formatter = logging.Formatter(
        "%(levelname)s [%(name)s] %(message)s"
    )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    if unknown_level:
        logger.warning(f"Unknown log level {requested!r}, using INFO")
    logger.debug(f"Logging configured: level={log_level}")


def check_config(path: Path) -> int:
    """
    Validate a config file without starting the daemon.

    Returns:
        Exit code (0 = valid, 1 = invalid)
    """
    try:
        config = load_config(path)
    except ConfigLoadError as e:
        print(f"❌ {e.message}", file=sys.stderr)
        if e.suggestion:
            print(f"  → {e.suggestion}", file=sys.stderr)
        return 1

    blocks = sum(1 for _ in config.layout.iter_blocks())
    print(f"✅ {path} is valid ({blocks} layout blocks)")
    return 0


async def main_async(args: argparse.Namespace) -> int:
    """Async main function.

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    daemon = WiredDaemon(config_path=args.config)

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, daemon.request_shutdown)
    loop.add_signal_handler(signal.SIGHUP, daemon.request_reload)

    try:
        daemon.initialize()
        if SYSTEMD_AVAILABLE:
            sd_daemon.notify("READY=1")
        await daemon.run()
        return 0

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1

    finally:
        await daemon.shutdown()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wired-config",
        description="Run the wired configuration host loop"
    )
    parser.add_argument("--config", type=Path, help="Config file to use instead of searching")
    parser.add_argument("--check", type=Path, metavar="PATH", help="Validate a config file and exit")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level (default: $LOG_LEVEL or INFO)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.check:
        sys.exit(check_config(args.check))

    setup_logging(args.log_level)
    logger.info("wired config daemon starting...")
    logger.info(f"PID: {os.getpid()}")

    try:
        sys.exit(asyncio.run(main_async(args)))

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)


if __name__ == "__main__":
    main()
