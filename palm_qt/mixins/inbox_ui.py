from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QPushButton,
    QSplitter,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from palm.constants import QT_SPLITTER_LEFT_DEFAULT, QT_SPLITTER_RIGHT_DEFAULT
from palm_qt.constants import (
    AVATAR_SIZE_PX,
    DETAIL_EMPTY_TEXT,
    ROOT_LAYOUT_MARGINS,
    ROOT_LAYOUT_SPACING,
)


class InboxUiMixin:
    def _build_inbox_view(self):
        root = QWidget()
        layout = QVBoxLayout(root)
        layout.setContentsMargins(*ROOT_LAYOUT_MARGINS)
        layout.setSpacing(ROOT_LAYOUT_SPACING)
        splitter = QSplitter(Qt.Horizontal)
        layout.addWidget(splitter, 1)

        left_panel = QWidget()
        left_layout = QVBoxLayout(left_panel)
        left_layout.setContentsMargins(6, 6, 6, 6)
        left_layout.setSpacing(8)
        search_row = QHBoxLayout()
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search emails...")
        self.search_btn = QPushButton("Search")
        search_row.addWidget(self.search_input, 1)
        search_row.addWidget(self.search_btn)
        left_layout.addLayout(search_row)

        self.message_list = QListWidget()
        self.message_list.setObjectName("messageList")
        self.message_list.setWordWrap(True)
        self.message_list.setVerticalScrollMode(QAbstractItemView.ScrollPerPixel)
        left_layout.addWidget(self.message_list, 1)
        self.list_status_lbl = QLabel("")
        self.list_status_lbl.setObjectName("listStatus")
        left_layout.addWidget(self.list_status_lbl)

        right_panel = QWidget()
        right_layout = QVBoxLayout(right_panel)
        right_layout.setContentsMargins(6, 6, 6, 6)
        right_layout.setSpacing(8)

        self.message_header = QLabel(DETAIL_EMPTY_TEXT)
        self.message_header.setObjectName("messageHeader")
        self.message_header.setWordWrap(True)
        right_layout.addWidget(self.message_header)

        sender_row = QHBoxLayout()
        self.sender_avatar = QLabel("")
        self.sender_avatar.setFixedSize(AVATAR_SIZE_PX, AVATAR_SIZE_PX)
        self.sender_avatar.setAlignment(Qt.AlignCenter)
        self.sender_avatar.hide()
        sender_row.addWidget(self.sender_avatar)
        self.sender_lbl = QLabel("")
        self.sender_lbl.setObjectName("messageSender")
        sender_row.addWidget(self.sender_lbl, 1)
        right_layout.addLayout(sender_row)

        self.recipients_lbl = QLabel("")
        self.recipients_lbl.setWordWrap(True)
        right_layout.addWidget(self.recipients_lbl)

        self.message_body = QTextBrowser()
        self.message_body.setOpenExternalLinks(True)
        right_layout.addWidget(self.message_body, 1)

        self.attachments_lbl = QLabel("Attachments")
        self.attachments_lbl.hide()
        right_layout.addWidget(self.attachments_lbl)
        self.attachment_list = QListWidget()
        self.attachment_list.hide()
        right_layout.addWidget(self.attachment_list)

        splitter.addWidget(left_panel)
        splitter.addWidget(right_panel)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 2)
        splitter.setSizes([QT_SPLITTER_LEFT_DEFAULT, QT_SPLITTER_RIGHT_DEFAULT])

        self.search_btn.clicked.connect(self._on_search_submitted)
        self.search_input.returnPressed.connect(self._on_search_submitted)
        self.message_list.currentRowChanged.connect(self._on_message_row_changed)
        self.message_list.itemClicked.connect(self._on_message_clicked)
        self.message_list.verticalScrollBar().valueChanged.connect(self._on_list_scrolled)
        return root


__all__ = ["InboxUiMixin"]
