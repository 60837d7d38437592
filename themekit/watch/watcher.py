"""Rebuild every theme when a watched stylesheet changes."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from PySide6.QtCore import QFileSystemWatcher, QObject, QThread, Signal, Slot

from themekit.core.builder import StyleBuilder
from themekit.core.scanner import list_items_sync
from themekit.errors import ScanError
from themekit.workers.build_worker import BuildWorker, start_build_thread

logger = logging.getLogger(__name__)


class StyleWatcher(QObject):
    """Watches the source tree recursively and triggers full rebuilds.

    ``QFileSystemWatcher`` only reports the directory or file that changed,
    so each notification is diffed against a snapshot of style-file mtimes
    to find out which stylesheets were added, removed or modified.
    Rebuilds are not debounced and may overlap.
    """

    rebuild_started = Signal(str)       # changed file names
    build_finished = Signal(object)     # BuildReport or None

    def __init__(self, builder: StyleBuilder, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._builder = builder
        self._config = builder.config
        self._fs_watcher = QFileSystemWatcher(self)
        self._fs_watcher.directoryChanged.connect(self._on_path_changed)
        self._fs_watcher.fileChanged.connect(self._on_path_changed)
        self._snapshot: dict[Path, int] = {}
        self._running: list[tuple[QThread, BuildWorker]] = []

    @property
    def running_builds(self) -> int:
        return len(self._running)

    def start(self) -> None:
        self._snapshot = self._take_snapshot()
        self._sync_watch_paths()
        logger.info("watching scss files under %s", self._config.watch_root)

    def stop(self) -> None:
        paths = self._fs_watcher.directories() + self._fs_watcher.files()
        if paths:
            self._fs_watcher.removePaths(paths)

    def watched_directories(self) -> list[Path]:
        return sorted(Path(p) for p in self._fs_watcher.directories())

    def _is_output(self, path: Path) -> bool:
        dist = self._config.dist_dir
        return path == dist or dist in path.parents

    def _walk_dirs(self) -> list[Path]:
        root = self._config.watch_root
        if not root.is_dir():
            return []
        found: list[Path] = []
        for dirpath, dirnames, _filenames in os.walk(root):
            current = Path(dirpath)
            dirnames[:] = sorted(d for d in dirnames if not self._is_output(current / d))
            found.append(current)
        return found

    def _take_snapshot(self) -> dict[Path, int]:
        snapshot: dict[Path, int] = {}
        for directory in self._walk_dirs():
            try:
                entries = list_items_sync(directory, filter_files=self._config.style_pattern)
            except ScanError:
                continue
            for entry in entries:
                snapshot[entry.location] = entry.stat.st_mtime_ns
        return snapshot

    def _sync_watch_paths(self) -> None:
        wanted = {str(p) for p in self._walk_dirs()} | {str(p) for p in self._snapshot}
        current = set(self._fs_watcher.directories()) | set(self._fs_watcher.files())
        stale = sorted(current - wanted)
        added = sorted(wanted - current)
        if stale:
            self._fs_watcher.removePaths(stale)
        if added:
            self._fs_watcher.addPaths(added)

    def poll(self) -> list[Path]:
        """Refresh the snapshot and return the stylesheets that changed since the last poll."""
        previous = self._snapshot
        current = self._take_snapshot()
        self._snapshot = current
        changed = set(previous.keys() ^ current.keys())
        changed.update(
            path for path in previous.keys() & current.keys() if previous[path] != current[path]
        )
        self._sync_watch_paths()
        return sorted(changed)

    @Slot(str)
    def _on_path_changed(self, _path: str) -> None:
        changed = self.poll()
        if not changed:
            return
        names = []
        for path in changed:
            try:
                names.append(path.relative_to(self._config.watch_root).as_posix())
            except ValueError:
                names.append(path.name)
        reason = ", ".join(names)
        logger.info("%s changed. recompiling...", reason)
        self.trigger_rebuild(reason)

    def trigger_rebuild(self, reason: str = "") -> BuildWorker:
        worker = BuildWorker(self._builder, reason=reason)
        worker.finished.connect(self.build_finished)
        worker.error.connect(lambda message: logger.error("rebuild failed: %s", message))
        thread = start_build_thread(worker, on_thread_finished=self._on_thread_finished)
        self._running.append((thread, worker))
        self.rebuild_started.emit(reason)
        return worker

    @Slot()
    def _on_thread_finished(self) -> None:
        finished = self.sender()
        self._running = [(t, w) for t, w in self._running if t is not finished]
