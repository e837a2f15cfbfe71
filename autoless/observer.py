import os
import time
import threading
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer as NativeObserver
from watchdog.observers.polling import PollingObserver


def _to_str(path):
    if isinstance(path, bytes):
        return path.decode()
    return path


class _QueueHandler(FileSystemEventHandler):
    """
    Forwards watchdog file events in to an observers change queue.
    """
    def __init__(self, observer):
        self.observer = observer

    def on_any_event(self, event):
        if event.is_directory:
            return
        self.observer.queue_changed(_to_str(event.src_path))
        dest_path = getattr(event, 'dest_path', None)
        if dest_path:
            self.observer.queue_changed(_to_str(dest_path))


class Observer:
    """
    File system observer. File events are queued from the watchdog thread, and signalled from the thread running
    start once a file has stopped changing for changed_timeout seconds.
    """
    changed_timeout = 1
    event_timeout = 2

    def __init__(self, paths, polling=False):
        """
        :param paths: Directory paths to observe.
        :type paths: list[str]
        :param polling: Poll the file system instead of using the platforms native file events.
        :type polling: bool
        """
        self.paths = list(paths)
        self.polling = polling
        self.observer = 'polling' if polling else 'native'
        self.changed = {}
        """:type: dict[str, float]"""
        self.running = False
        self._lock = threading.Lock()
        self._stopped = threading.Event()

    def start(self):
        """
        Start the file system observation loop. Blocks until stop is called.
        """
        watcher = PollingObserver() if self.polling else NativeObserver()
        handler = _QueueHandler(self)
        for path in self.paths:
            watcher.schedule(handler, path, recursive=True)
        watcher.start()
        self.running = True
        self._stopped.clear()
        try:
            while self.running:
                self._stopped.wait(self.event_timeout)
                self.signal_changed()
        finally:
            watcher.stop()
            watcher.join()

    def stop(self):
        self.running = False
        self._stopped.set()

    def queue_changed(self, path):
        """
        Place a file change event in to the change queue.

        :param path: File path to place in to the change queue.
        :type path: str
        """
        if not os.path.isdir(path):
            with self._lock:
                self.changed[os.path.abspath(path)] = time.time()

    def signal_changed(self, now=None):
        """
        Signal queued changes that have passed the changed timeout, oldest first. Files that no longer exist are
        signalled as deleted.

        :param now: Time to compare queued changes against, defaults to the current time.
        :type now: float | None
        """
        now = time.time() if now is None else now
        with self._lock:
            settled = sorted([(mtime, path) for path, mtime in self.changed.items()
                              if mtime + self.changed_timeout <= now])
            for _, path in settled:
                del self.changed[path]

        for _, path in settled:
            if os.path.exists(path):
                self.on_changed(path)
            else:
                self.on_deleted(path)

    def on_changed(self, path):
        """
        Called when a created or modified file has been through the queue. Assign a function to handle it.

        :type path: str
        """
        pass

    def on_deleted(self, path):
        """
        Called when a deleted file has been through the queue.

        :type path: str
        """
        pass
