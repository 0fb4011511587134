import logging

from PySide6.QtCore import QThreadPool
from PySide6.QtWidgets import QMainWindow

from palm.constants import ACCOUNT_ID, APP_NAME, PAGE_SIZE, QT_THREAD_POOL_MAX_WORKERS
from palm.infra.config_store import Config
from palm.infra.message_store import SqliteMessageStore
from palm.services.inbox import InboxController
from palm_qt.helpers.worker_manager import WorkerManager
from palm_qt.mixins import InboxListMixin, InboxUiMixin, WindowStateMixin

logger = logging.getLogger(__name__)


class PalmWindow(InboxListMixin, InboxUiMixin, WindowStateMixin, QMainWindow):
    def __init__(self, config=None, store=None):
        super().__init__()
        self.config = config or Config()
        if self.config.load_error:
            logger.warning("Config could not be loaded, using defaults: %s", self.config.load_error)
        self.store = store or SqliteMessageStore(self.config.get("database_path"))
        self.thread_pool = QThreadPool(self)
        self.thread_pool.setMaxThreadCount(QT_THREAD_POOL_MAX_WORKERS)
        self.workers = WorkerManager(self.thread_pool, self)
        self.inbox = InboxController(self.store, self.workers.submit, account_id=ACCOUNT_ID, page_size=PAGE_SIZE)

        self.setWindowTitle(APP_NAME)
        self._restore_window_geometry()
        self.setCentralWidget(self._build_inbox_view())

        self.inbox.list_sync.subscribe(self._on_list_state_changed)
        self.inbox.detail_loader.subscribe(self._on_detail_state_changed)
        self.inbox.mount()


__all__ = ["PalmWindow"]
