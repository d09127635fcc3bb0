"""
Live-reloading JSON configuration files.

Rule files are cached in memory and re-read when watchdog reports a change on
disk, so heuristics can be tuned without restarting the service. Readers always
get the last successfully parsed document; a broken edit keeps the previous one.
"""
import atexit
import json
import logging
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Set, Union

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

log = logging.getLogger("live_config")


@dataclass
class FileCache:
    """Parsed contents of one JSON file plus modification tracking."""
    path: Path
    data: Any = None
    last_modified: float = 0
    _lock: threading.RLock = field(default_factory=threading.RLock)
    _callbacks: List[Callable[[Any], None]] = field(default_factory=list)

    def add_callback(self, callback: Callable[[Any], None]):
        """Register a callback to be called with the new data after a reload."""
        with self._lock:
            if callback not in self._callbacks:
                self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[Any], None]):
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def reload(self, force: bool = False) -> bool:
        """
        Re-read the file if it changed since the last load.

        Returns True when new data was loaded. Raises OSError / ValueError if
        the file cannot be read or parsed; the previous data is kept.
        """
        if not self.path.exists():
            log.warning(f"File not found: {self.path}")
            return False

        mtime = self.path.stat().st_mtime
        if not force and self.last_modified and mtime <= self.last_modified:
            return False

        with open(self.path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        with self._lock:
            self.data = data
            self.last_modified = mtime
        self._notify_callbacks()
        return True

    def _notify_callbacks(self):
        with self._lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            try:
                callback(self.data)
            except Exception as e:
                log.error(f"Error in callback for {self.path}: {e}")


class ConfigFileHandler(FileSystemEventHandler):
    """Reload cached files when watchdog reports them modified or replaced."""

    def __init__(self, caches: Dict[Path, FileCache], debounce_sec: float = 1.0):
        self.caches = caches
        self.debounce_sec = debounce_sec
        self.last_handled: Dict[Path, float] = {}

    def on_modified(self, event):
        if not event.is_directory:
            self._handle(event.src_path)

    def on_created(self, event):
        if not event.is_directory:
            self._handle(event.src_path)

    def on_moved(self, event):
        # Editors that save via rename
        if not event.is_directory:
            self._handle(event.dest_path)

    def _handle(self, raw_path):
        path = Path(raw_path).resolve()
        cache = self.caches.get(path)
        if cache is None:
            return

        now = time.time()
        if now - self.last_handled.get(path, 0) < self.debounce_sec:
            return
        self.last_handled[path] = now

        log.info(f"Detected change to {path}, reloading...")
        try:
            if cache.reload(force=True):
                log.info(f"Successfully reloaded {path}")
        except (OSError, ValueError) as e:
            log.error(f"Failed to reload {path}, keeping previous data: {e}")


_caches: Dict[Path, FileCache] = {}
_watched_dirs: Set[Path] = set()
_observer: Optional[Observer] = None
_registry_lock = threading.Lock()


def _watch_directory(directory: Path):
    global _observer
    if directory in _watched_dirs or not directory.exists():
        return
    try:
        if _observer is None:
            _observer = Observer()
            _observer.daemon = True
            _observer.start()
            log.info("Started live config file watcher")
        _observer.schedule(ConfigFileHandler(_caches), str(directory), recursive=False)
        _watched_dirs.add(directory)
    except Exception as e:
        # Reloading is best-effort; the cached data is still served
        log.error(f"Failed to watch {directory}: {e}")


def stop_watcher():
    global _observer
    with _registry_lock:
        if _observer is None:
            return
        try:
            _observer.stop()
            _observer.join()
        except Exception as e:
            log.error(f"Error stopping file watcher: {e}")
        _observer = None
        _watched_dirs.clear()


atexit.register(stop_watcher)


def get_file_cache(path: Union[str, Path], default: Any = None, watch: bool = True) -> FileCache:
    """Get or create the cache for a file, optionally watching it for changes."""
    path = Path(path).resolve()
    with _registry_lock:
        cache = _caches.get(path)
        if cache is None:
            cache = FileCache(path=path, data=default)
            _caches[path] = cache
        if watch:
            _watch_directory(path.parent)
    return cache


def load_file(path: Union[str, Path], default: Any = None, force_reload: bool = False, watch: bool = True) -> Any:
    """Load a JSON file through its cache, re-reading it only when it changed."""
    cache = get_file_cache(path, default, watch=watch)
    cache.reload(force=force_reload)
    return cache.data


__all__ = [
    'FileCache',
    'ConfigFileHandler',
    'get_file_cache',
    'load_file',
    'stop_watcher'
]
