from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QListWidgetItem

from palm.domain.colors import color_for
from palm.domain.helpers import format_long_date, initial_for
from palm_qt.constants import (
    DETAIL_EMPTY_TEXT,
    DETAIL_LOADING_TEXT,
    LIST_EMPTY_TEXT,
    LIST_LOADING_TEXT,
    SCROLL_PROXIMITY_PX,
)
from palm_qt.rendering import (
    avatar_style,
    body_html,
    format_attachment,
    format_list_row,
    format_recipients,
)


class InboxListMixin:
    def _on_search_submitted(self):
        self.inbox.search(self.search_input.text())

    def _is_near_list_end(self, value=None):
        scroll_bar = self.message_list.verticalScrollBar()
        position = scroll_bar.value() if value is None else value
        return scroll_bar.maximum() - position <= SCROLL_PROXIMITY_PX

    def _on_list_scrolled(self, value):
        if self._is_near_list_end(value):
            self.inbox.near_end_of_list()

    def _schedule_fit_check(self):
        QTimer.singleShot(0, self._request_more_if_list_fits)

    def _request_more_if_list_fits(self):
        # A list shorter than the viewport never scrolls, so nothing else asks for more.
        state = self.inbox.list_state
        if state.is_loading or not state.has_more or state.last_error is not None:
            return
        if self.message_list.verticalScrollBar().maximum() == 0:
            self.inbox.near_end_of_list()

    def _on_list_state_changed(self, state):
        self._render_list_items(state.items)
        self._render_list_status(state)
        if not state.is_loading:
            self._schedule_fit_check()

    def _render_list_items(self, items):
        rendered = list(getattr(self, "_rendered_ids", []))
        if len(items) < len(rendered) or [item.id for item in items[: len(rendered)]] != rendered:
            self.message_list.blockSignals(True)
            self.message_list.clear()
            self.message_list.blockSignals(False)
            rendered = []
        for summary in items[len(rendered) :]:
            self.message_list.addItem(self._build_list_item(summary))
            rendered.append(summary.id)
        self._rendered_ids = rendered
        self._restore_selected_row()

    def _build_list_item(self, summary):
        item = QListWidgetItem(format_list_row(summary))
        item.setData(Qt.UserRole, summary.id)
        item.setData(Qt.DecorationRole, QColor(color_for(summary.sender_email)))
        return item

    def _render_list_status(self, state):
        if state.is_loading:
            text = LIST_LOADING_TEXT
        elif state.last_error is not None:
            text = state.last_error.message
        elif not state.items:
            text = LIST_EMPTY_TEXT
        else:
            count = len(state.items)
            text = f"{count} email" if count == 1 else f"{count} emails"
            if state.active_query:
                text += f' matching "{state.active_query}"'
        self.list_status_lbl.setText(text)

    def _restore_selected_row(self):
        selected_id = self.inbox.selected_id
        rendered = getattr(self, "_rendered_ids", [])
        if selected_id is None or selected_id not in rendered:
            return
        row = rendered.index(selected_id)
        if self.message_list.currentRow() == row:
            return
        self.message_list.blockSignals(True)
        self.message_list.setCurrentRow(row)
        self.message_list.blockSignals(False)

    def _on_message_row_changed(self, row):
        self._select_row(row)

    def _on_message_clicked(self, item):
        if item is None:
            return
        self._select_row(self.message_list.row(item))

    def _select_row(self, row):
        rendered = getattr(self, "_rendered_ids", [])
        if row < 0 or row >= len(rendered):
            return
        self.inbox.select(rendered[row])

    def _on_detail_state_changed(self, state):
        if state.selected_id is None:
            self._clear_detail_view(DETAIL_EMPTY_TEXT)
        elif state.is_loading:
            self._clear_detail_view(DETAIL_LOADING_TEXT)
        elif state.last_error is not None:
            self._clear_detail_view(state.last_error.message)
        elif state.loaded_message is None:
            self._clear_detail_view(DETAIL_EMPTY_TEXT)
        else:
            self._render_message_detail(state.loaded_message)

    def _render_message_detail(self, message):
        sender = message.display_sender
        self.message_header.setText(message.subject or "(No subject)")
        self.sender_lbl.setText(f"{sender} <{message.sender_email}> · {format_long_date(message.received_at)}")
        self.sender_avatar.setText(initial_for(sender))
        self.sender_avatar.setStyleSheet(avatar_style(color_for(message.sender_email)))
        self.sender_avatar.show()
        self.recipients_lbl.setText(format_recipients(message.recipients))
        self.message_body.setHtml(body_html(message.body))

        self.attachment_list.clear()
        for attachment in message.attachments:
            self.attachment_list.addItem(format_attachment(attachment))
        has_attachments = bool(message.attachments)
        self.attachments_lbl.setVisible(has_attachments)
        self.attachment_list.setVisible(has_attachments)

    def _clear_detail_view(self, message):
        self.message_header.setText(message)
        self.sender_lbl.setText("")
        self.sender_avatar.hide()
        self.recipients_lbl.setText("")
        self.message_body.setHtml("")
        self.attachment_list.clear()
        self.attachments_lbl.setVisible(False)
        self.attachment_list.setVisible(False)


__all__ = ["InboxListMixin"]
