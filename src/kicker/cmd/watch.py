import os
import time

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from kicker.logutils import logger


def is_under(path: str, roots: set[str]) -> bool:
    return any(path == root or path.startswith(root + os.sep) for root in roots)


class FileEventHandler(FileSystemEventHandler):
    def __init__(self, paths: set[str]):
        self.paths = paths
        self.has_matching_path = False

    def on_modified(self, event: FileSystemEvent):
        self.check_event(event)

    def on_created(self, event: FileSystemEvent):
        self.check_event(event)

    def check_event(self, event: FileSystemEvent):
        if event.is_directory:
            return
        filename = os.path.realpath(os.fsdecode(event.src_path))
        if is_under(filename, self.paths):
            logger.debug("File event: %s", filename)
            self.has_matching_path = True


def watch_roots(paths: set[str]) -> set[str]:
    """Directories to schedule the observer on: the paths themselves, or the parent
    directory for paths that are files."""
    return {path if os.path.isdir(path) else os.path.dirname(path) for path in paths}


def do_watch(paths_to_watch: set[str], poll_interval: float = 0.2):
    """Block until a file under one of the paths is created or modified."""
    normalised_paths = set(os.path.realpath(path) for path in paths_to_watch)
    logger.debug("Watching for file changes in: %s", normalised_paths)

    event_handler = FileEventHandler(normalised_paths)
    observer = Observer()
    for root in watch_roots(normalised_paths):
        observer.schedule(event_handler, root, recursive=True)
    observer.start()

    try:
        while not event_handler.has_matching_path:
            time.sleep(poll_interval)
    finally:
        logger.debug("Stopping watcher")
        observer.stop()
        observer.join()
