"""Polling watcher that turns new files into pipeline events"""
import queue
import threading
from pathlib import Path
from typing import Callable, Optional

from watchdog.events import FileCreatedEvent, FileSystemEventHandler
from watchdog.observers.polling import PollingObserver

from ..models import FileEvent
from ..utils.logger import setup_logger

logger = setup_logger(__name__)

POLL_INTERVAL = 0.1  # seconds


class CreatedFileHandler(FileSystemEventHandler):
    """Forward file creations in the watched directory to a queue"""

    def __init__(self, watch_dir: Path, events: queue.Queue):
        super().__init__()
        self.watch_dir = watch_dir
        self.events = events

    def dispatch(self, event):
        try:
            super().dispatch(event)
        except Exception as e:
            logger.error(f"Watcher error: {e}")

    def on_created(self, event):
        if event.is_directory or not isinstance(event, FileCreatedEvent):
            return

        path = self.watch_dir / Path(event.src_path).name
        self.events.put(FileEvent(path=path))


class DirectoryWatcher:
    """Watches one directory (non-recursively) and drains events serially"""

    def __init__(
        self,
        watch_dir: Path,
        handle_event: Callable[[FileEvent], None],
        poll_interval: float = POLL_INTERVAL
    ):
        """
        Initialize directory watcher

        Args:
            watch_dir: Directory to watch
            handle_event: Called once per created file, one event at a time
            poll_interval: Seconds between directory scans
        """
        self.watch_dir = Path(watch_dir)
        self.handle_event = handle_event
        self.poll_interval = poll_interval
        self.events: queue.Queue = queue.Queue()
        self.observer = PollingObserver(timeout=poll_interval)
        self._worker: Optional[threading.Thread] = None

    def start(self):
        """Start the pipeline worker, then the observer"""
        self._worker = threading.Thread(target=self._drain, name="pipeline-worker", daemon=True)
        self._worker.start()

        handler = CreatedFileHandler(self.watch_dir, self.events)
        self.observer.schedule(handler, str(self.watch_dir), recursive=False)
        self.observer.start()
        logger.info(f"Watching {self.watch_dir} (poll every {int(self.poll_interval * 1000)} ms)")

    def run_forever(self):
        """Start and block until the observer stops"""
        self.start()
        try:
            while self.observer.is_alive():
                self.observer.join(1)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self.stop()

    def stop(self):
        """Stop the observer"""
        if self.observer.is_alive():
            self.observer.stop()
            self.observer.join()
        logger.info("Watcher stopped")

    def _drain(self):
        """Hand queued events to the pipeline, one at a time"""
        while True:
            event = self.events.get()
            try:
                self.handle_event(event)
            except Exception as e:
                logger.error(f"Error handling {event.path}: {e}", exc_info=True)
            finally:
                self.events.task_done()
