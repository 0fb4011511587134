from collections.abc import Callable
import logging
import traceback

from PySide6.QtCore import QThreadPool
from PySide6.QtWidgets import QMessageBox, QWidget

from palm_qt.workers import Worker

logger = logging.getLogger(__name__)


class WorkerManager:
    """Scheduler handed to the sync services.

    ``fn`` runs on the thread pool; ``on_result`` and ``on_error`` are delivered
    on the GUI thread. Callers that pass no ``on_error`` get the default
    handler, which logs, calls ``on_default_error`` and shows a dialog.
    """

    def __init__(
        self,
        thread_pool: QThreadPool,
        parent: QWidget | None,
        on_default_error: Callable[[str], None] | None = None,
    ) -> None:
        self.thread_pool = thread_pool
        self.parent = parent
        self.on_default_error = on_default_error

    def submit(
        self,
        fn: Callable[[], object],
        on_result: Callable[[object], None],
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        active_error_handler = on_error or self._on_worker_error

        def _handle_result(payload: object) -> None:
            try:
                on_result(payload)
            except Exception:
                active_error_handler(traceback.format_exc())

        worker = Worker(fn)
        worker.signals.result.connect(_handle_result)
        worker.signals.error.connect(active_error_handler)
        self.thread_pool.start(worker)

    def wait_for_done(self, timeout_ms: int = 2000) -> bool:
        return bool(self.thread_pool.waitForDone(timeout_ms))

    def _on_worker_error(self, trace_text: str) -> None:
        logger.error("Background operation failed:\n%s", trace_text)
        if self.on_default_error is not None:
            self.on_default_error(trace_text)
        QMessageBox.critical(self.parent, "Operation Error", trace_text)


__all__ = ["WorkerManager"]
