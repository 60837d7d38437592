"""Worker that runs a full style build on a background QThread."""

from __future__ import annotations

import asyncio

from PySide6.QtCore import QObject, QThread, Signal

from themekit.core.builder import StyleBuilder


class BuildWorker(QObject):
    """Runs :meth:`StyleBuilder.compile` in its own event loop.

    Usage:
        worker = BuildWorker(builder)
        thread = QThread()
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.finished.connect(thread.quit)
        worker.finished.connect(worker.deleteLater)
        thread.finished.connect(thread.deleteLater)
        thread.start()
    """

    started = Signal()
    finished = Signal(object)           # BuildReport
    error = Signal(str)                 # error message

    def __init__(self, builder: StyleBuilder, reason: str = "") -> None:
        super().__init__()
        self._builder = builder
        self.reason = reason

    def run(self) -> None:
        self.started.emit()
        try:
            report = asyncio.run(self._builder.compile())
        except Exception as e:
            self.error.emit(str(e))
            self.finished.emit(None)
            return
        self.finished.emit(report)


def start_build_thread(
    worker: BuildWorker,
    parent: QObject | None = None,
    *,
    on_thread_finished=None,
) -> QThread:
    """Move ``worker`` to a new QThread, wire the teardown signals and start it.

    ``on_thread_finished`` is connected to ``QThread.finished`` ahead of the
    thread's own ``deleteLater`` and before the thread starts.
    """
    thread = QThread(parent)
    worker.moveToThread(thread)
    thread.started.connect(worker.run)
    worker.finished.connect(thread.quit)
    worker.finished.connect(worker.deleteLater)
    if on_thread_finished is not None:
        thread.finished.connect(on_thread_finished)
    thread.finished.connect(thread.deleteLater)
    thread.start()
    return thread
