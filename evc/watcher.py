from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler
import logging
from pathlib import Path
from typing import Dict, Iterable

from .config import BuildConfig
from .errors import EvcSyntaxError
from .handler import TemplateHandler

logger = logging.getLogger(__name__)


class SourceFile:
    """Template identity for files compiled by the build tool."""

    def __init__(self, path: Path):
        self.identifier = str(path)
        self.source = path.read_text(encoding="utf-8")


def trigger_recompile(write_pairs: Dict[Path, Path], handler: TemplateHandler) -> int:
    """
    Compiles every source to its destination. A file that cannot be read,
    compiled or written is logged and counted; the others still build.
    Returns the number of failures.
    """
    failures = 0
    for (src, dst) in write_pairs.items():
        try:
            output = handler.call(SourceFile(src))
            dst.parent.mkdir(parents=True, exist_ok=True)
            with open(dst, "w", encoding="utf-8") as f:
                f.write(output)
        except (EvcSyntaxError, UnicodeDecodeError, OSError) as e:
            logger.error("Failed to compile %s: %s", src, e)
            failures += 1
            continue
        logger.info("Compiled %s -> %s", src, dst)
    return failures


class ChangeHandler(FileSystemEventHandler):
    def __init__(self, files_to_watch: Iterable[Path], write_pairs: Dict[Path, Path], handler: TemplateHandler):
        self.files_to_watch = {x.resolve() for x in files_to_watch}  # sources + extra watch paths
        self.write_pairs = write_pairs
        self.handler = handler
        logger.info("Handler initialized. Monitoring for changes...")

    def on_modified(self, event):
        if event.is_directory:
            return

        src_path_abs = Path(event.src_path).resolve()
        if src_path_abs in self.files_to_watch:
            logger.info("Detected modification in: %s", src_path_abs)
            trigger_recompile(self.write_pairs, self.handler)

    on_created = on_modified


def build_handler() -> TemplateHandler:
    # Sources change on every rebuild, so cached results would only pile up
    return TemplateHandler(development=True)


def run_watcher(config: BuildConfig):
    """Sets up and runs the watchdog observer."""
    files_to_watch = set(config.write_pairs.keys()) | config.watch_paths
    dirs_to_watch = {p.parent for p in files_to_watch}

    if not dirs_to_watch:
        logger.error("No valid directories provided to watch.")
        return

    handler = build_handler()
    trigger_recompile(config.write_pairs, handler)

    event_handler = ChangeHandler(files_to_watch, config.write_pairs, handler)
    observer = Observer()

    scheduled_count = 0
    for dir_path in dirs_to_watch:
        if not dir_path.is_dir():
            logger.warning("Directory '%s' does not exist. Cannot watch.", dir_path)
            continue

        # Only events directly inside the directory, not subdirectories
        observer.schedule(event_handler, str(dir_path), recursive=False)
        scheduled_count += 1
        logger.info("Scheduled watcher for directory: %s", dir_path)

    if scheduled_count == 0:
        logger.error("No watchers were successfully scheduled. Exiting.")
        return

    observer.start()
    logger.info("Watching for file changes in %d director%s. Press Ctrl+C to stop.",
                scheduled_count, 'y' if scheduled_count == 1 else 'ies')

    try:
        while observer.is_alive():
            observer.join(timeout=1)
    except KeyboardInterrupt:
        logger.info("Stopping watcher (Ctrl+C pressed)...")
    finally:
        if observer.is_alive():
            observer.stop()
        observer.join()
