from palm_qt.helpers.worker_manager import WorkerManager

__all__ = ["WorkerManager"]
