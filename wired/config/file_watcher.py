"""
File watcher for the wired config file.

Watches the directory containing the config file and queues one debounced
ConfigChangeEvent per burst of changes. The host loop drains the queue and
decides whether to reload; nothing here touches the registry.
"""

import logging
import queue
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Union

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from ..errors import WatchError

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 10


@dataclass(frozen=True)
class ConfigChangeEvent:
    """A debounced change to the config file."""

    path: Path
    raw_events: int
    timestamp: float


class Debouncer:
    """Coalesces bursts of triggers into one callback.

    Every trigger restarts the timer; the callback runs once the timer
    expires, with the number of triggers it absorbed. After cancel() no
    callback runs, including one whose timer is about to fire.
    """

    def __init__(
        self,
        callback: Callable[[int], None],
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        timer_factory: Callable[..., threading.Timer] = threading.Timer
    ):
        """
        Initialize debouncer.

        Args:
            callback: Called with the count of coalesced triggers
            debounce_ms: Quiet period in milliseconds
            timer_factory: Builds timers (swappable in tests)
        """
        self.callback = callback
        self.debounce_seconds = debounce_ms / 1000
        self.timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending = 0
        self._generation = 0
        self._cancelled = False

    def trigger(self) -> None:
        """Record one raw event and restart the quiet period."""
        with self._lock:
            if self._cancelled:
                return
            if self._timer is not None:
                self._timer.cancel()
            self._pending += 1
            self._generation += 1
            self._timer = self.timer_factory(self.debounce_seconds, self._fire, args=(self._generation,))
            self._timer.daemon = True
            self._timer.start()

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A timer cancelled too late still runs; the generation check drops it
            if self._cancelled or generation != self._generation:
                return
            count = self._pending
            self._pending = 0
            self._timer = None

        try:
            self.callback(count)
        except Exception as e:
            logger.error(f"Error in debounced callback: {e}")

    def cancel(self) -> None:
        """Drop any pending burst and ignore all later triggers."""
        with self._lock:
            self._cancelled = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._pending = 0

    @property
    def pending(self) -> int:
        return self._pending


class ConfigFileHandler(FileSystemEventHandler):
    """Forwards events that touch the config file to a Debouncer.

    Editors often save by writing a temp file and renaming it over the
    original, so moves onto the config file count as changes.
    """

    def __init__(self, target_filename: str, debouncer: Debouncer):
        super().__init__()
        self.target_filename = target_filename
        self.debouncer = debouncer

    def _should_trigger(self, event: FileSystemEvent) -> bool:
        if event.is_directory:
            return False
        event_path = getattr(event, "dest_path", None) or event.src_path
        return Path(event_path).name == self.target_filename

    def _handle(self, event: FileSystemEvent) -> None:
        if not self._should_trigger(event):
            return
        logger.debug(f"Config file event: {event.event_type} {event.src_path}")
        self.debouncer.trigger()

    def on_modified(self, event: FileSystemEvent) -> None:
        self._handle(event)

    def on_created(self, event: FileSystemEvent) -> None:
        self._handle(event)

    def on_moved(self, event: FileSystemEvent) -> None:
        self._handle(event)


class ConfigWatcher:
    """Handle returned by watch(); the host loop polls it for change events."""

    def __init__(self, config_path: Path, debounce_ms: int = DEFAULT_DEBOUNCE_MS):
        """
        Initialize watcher without starting it.

        Args:
            config_path: Config file whose directory is watched
            debounce_ms: Debounce window in milliseconds
        """
        self.config_path = config_path
        self.watch_dir = config_path.parent
        self.debounce_ms = debounce_ms
        self.events: "queue.Queue[ConfigChangeEvent]" = queue.Queue()
        self.debouncer = Debouncer(self._emit, debounce_ms)
        self.handler = ConfigFileHandler(config_path.name, self.debouncer)
        self.observer: Optional[Observer] = None
        self.running = False

    def _emit(self, raw_events: int) -> None:
        self.events.put(ConfigChangeEvent(
            path=self.config_path,
            raw_events=raw_events,
            timestamp=time.time()
        ))

    def start(self) -> None:
        """
        Start watching the config directory.

        Raises:
            WatchError: If the directory does not exist or cannot be watched
        """
        if self.running:
            logger.warning("Config watcher already running")
            return

        if not self.watch_dir.is_dir():
            raise WatchError(str(self.watch_dir), "directory does not exist")

        observer = Observer()
        try:
            observer.schedule(self.handler, str(self.watch_dir), recursive=False)
            observer.start()
        except OSError as e:
            raise WatchError(str(self.watch_dir), str(e)) from e

        self.observer = observer
        self.running = True
        logger.info(f"Started watching {self.config_path} for changes")

    def stop(self) -> None:
        """Stop watching and release the filesystem subscription."""
        if not self.running:
            return

        # Cancel first so nothing is queued while the observer winds down
        self.debouncer.cancel()
        if self.observer:
            self.observer.stop()
            self.observer.join(timeout=5.0)
            self.observer = None

        self.running = False
        logger.info(f"Stopped watching {self.config_path}")

    def is_running(self) -> bool:
        return self.running

    def try_recv(self) -> Optional[ConfigChangeEvent]:
        """Return the next queued event without blocking, or None."""
        try:
            return self.events.get_nowait()
        except queue.Empty:
            return None

    def recv(self, timeout: Optional[float] = None) -> Optional[ConfigChangeEvent]:
        """Wait up to ``timeout`` seconds for the next event."""
        try:
            return self.events.get(timeout=timeout)
        except queue.Empty:
            return None

    def drain(self) -> List[ConfigChangeEvent]:
        """Return every queued event."""
        drained = []
        while True:
            event = self.try_recv()
            if event is None:
                return drained
            drained.append(event)

    def __enter__(self) -> "ConfigWatcher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()


def watch(config_path: Union[str, Path], debounce_ms: int = DEFAULT_DEBOUNCE_MS) -> ConfigWatcher:
    """
    Watch a config file's directory for changes.

    Args:
        config_path: Path to the config file
        debounce_ms: Debounce window in milliseconds

    Returns:
        Running ConfigWatcher

    Raises:
        WatchError: If the directory cannot be watched
    """
    path = Path(config_path)
    try:
        path = path.parent.resolve(strict=True) / path.name
    except OSError as e:
        raise WatchError(str(path.parent), str(e)) from e

    watcher = ConfigWatcher(path, debounce_ms)
    watcher.start()
    return watcher
