import logging
import traceback

from PySide6.QtCore import QObject, QRunnable, Signal, Slot

logger = logging.getLogger(__name__)


class WorkerSignals(QObject):
    result = Signal(object)
    error = Signal(str)


class Worker(QRunnable):
    """Runs one call on the thread pool and reports back through queued signals."""

    def __init__(self, fn):
        super().__init__()
        self.fn = fn
        self.signals = WorkerSignals()

    @Slot()
    def run(self):
        try:
            result = self.fn()
        except Exception:
            trace_text = traceback.format_exc()
            logger.debug("Worker call raised:\n%s", trace_text)
            self.signals.error.emit(trace_text)
            return
        self.signals.result.emit(result)


__all__ = ["Worker", "WorkerSignals"]
