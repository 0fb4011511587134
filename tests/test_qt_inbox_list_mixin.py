from palm.domain.models import (
    ERROR_TRANSIENT,
    Attachment,
    DetailState,
    ErrorInfo,
    FullMessage,
    ListState,
    Recipient,
    Summary,
)
from palm_qt.constants import DETAIL_EMPTY_TEXT, DETAIL_LOADING_TEXT, LIST_EMPTY_TEXT, LIST_LOADING_TEXT
from palm_qt.mixins.inbox_list import InboxListMixin


def _summary(msg_id):
    return Summary(
        id=msg_id,
        sender_name="Sender",
        sender_email="sender@example.com",
        subject=f"Subject {msg_id}",
        body_preview_source="",
        received_at="",
    )


class _FakeScrollBar:
    def __init__(self, value=0, maximum=0):
        self._value = value
        self._maximum = maximum

    def value(self):
        return self._value

    def maximum(self):
        return self._maximum


class _FakeList:
    def __init__(self):
        self.items = []
        self.current_row = -1
        self.scroll_bar = _FakeScrollBar()
        self.clears = 0
        self.blocked = []

    def blockSignals(self, blocked):
        self.blocked.append(blocked)

    def clear(self):
        self.items = []
        self.clears += 1

    def addItem(self, item):
        self.items.append(item)

    def currentRow(self):
        return self.current_row

    def setCurrentRow(self, row):
        self.current_row = row

    def row(self, item):
        return self.items.index(item)

    def verticalScrollBar(self):
        return self.scroll_bar

    def setVisible(self, visible):
        self.visible = visible


class _FakeWidget:
    def __init__(self):
        self.text = ""
        self.html = None
        self.visible = True
        self.style = ""

    def setText(self, text):
        self.text = text

    def setHtml(self, html):
        self.html = html

    def setStyleSheet(self, style):
        self.style = style

    def setVisible(self, visible):
        self.visible = visible

    def show(self):
        self.visible = True

    def hide(self):
        self.visible = False


class _FakeInbox:
    def __init__(self):
        self.selected_id = None
        self.list_state = ListState()
        self.selections = []
        self.more_requests = 0
        self.searches = []

    def select(self, message_id):
        self.selected_id = message_id
        self.selections.append(message_id)

    def near_end_of_list(self):
        self.more_requests += 1

    def search(self, text):
        self.searches.append(text)


class _Probe(InboxListMixin):
    def __init__(self):
        self.inbox = _FakeInbox()
        self.message_list = _FakeList()
        self.list_status_lbl = _FakeWidget()
        self.search_input = _FakeWidget()
        self.message_header = _FakeWidget()
        self.sender_lbl = _FakeWidget()
        self.sender_avatar = _FakeWidget()
        self.recipients_lbl = _FakeWidget()
        self.message_body = _FakeWidget()
        self.attachments_lbl = _FakeWidget()
        self.attachment_list = _FakeList()
        self.fit_checks = 0

    def _build_list_item(self, summary):
        return summary.id

    def _schedule_fit_check(self):
        self.fit_checks += 1


def test_render_list_items_appends_only_new_rows():
    probe = _Probe()

    probe._render_list_items((_summary(1), _summary(2)))
    probe._render_list_items((_summary(1), _summary(2), _summary(3)))

    assert probe.message_list.items == [1, 2, 3]
    assert probe.message_list.clears == 0


def test_render_list_items_rebuilds_when_list_is_replaced():
    probe = _Probe()
    probe._render_list_items((_summary(1), _summary(2)))

    probe._render_list_items((_summary(5),))

    assert probe.message_list.items == [5]
    assert probe.message_list.clears == 1
    assert probe.message_list.blocked == [True, False]


def test_render_list_items_restores_selected_row():
    probe = _Probe()
    probe.inbox.selected_id = 2

    probe._render_list_items((_summary(1), _summary(2)))

    assert probe.message_list.current_row == 1
    assert probe.inbox.selections == []


def test_row_change_selects_message():
    probe = _Probe()
    probe._render_list_items((_summary(1), _summary(2)))

    probe._on_message_row_changed(1)
    probe._on_message_row_changed(-1)
    probe._on_message_clicked(2)

    assert probe.inbox.selections == [2, 2]


def test_list_status_text():
    probe = _Probe()

    probe._render_list_status(ListState(is_loading=True))
    assert probe.list_status_lbl.text == LIST_LOADING_TEXT

    probe._render_list_status(ListState(last_error=ErrorInfo(ERROR_TRANSIENT, "Failed to load emails.")))
    assert probe.list_status_lbl.text == "Failed to load emails."

    probe._render_list_status(ListState())
    assert probe.list_status_lbl.text == LIST_EMPTY_TEXT

    probe._render_list_status(ListState(items=(_summary(1),)))
    assert probe.list_status_lbl.text == "1 email"

    probe._render_list_status(ListState(items=(_summary(1), _summary(2)), active_query="plan"))
    assert probe.list_status_lbl.text == '2 emails matching "plan"'


def test_scrolling_near_end_requests_more():
    probe = _Probe()
    probe.message_list.scroll_bar = _FakeScrollBar(maximum=1000)

    probe._on_list_scrolled(100)
    assert probe.inbox.more_requests == 0

    probe._on_list_scrolled(900)
    assert probe.inbox.more_requests == 1


def test_short_list_requests_more_until_scrollable():
    probe = _Probe()
    probe.inbox.list_state = ListState(items=(_summary(1),), has_more=True)

    probe._request_more_if_list_fits()
    assert probe.inbox.more_requests == 1

    probe.message_list.scroll_bar = _FakeScrollBar(maximum=300)
    probe._request_more_if_list_fits()
    assert probe.inbox.more_requests == 1


def test_short_list_does_not_retry_after_error():
    probe = _Probe()
    probe.inbox.list_state = ListState(has_more=True, last_error=ErrorInfo(ERROR_TRANSIENT, "x"))

    probe._request_more_if_list_fits()

    assert probe.inbox.more_requests == 0


def test_list_state_change_schedules_fit_check_when_idle():
    probe = _Probe()

    probe._on_list_state_changed(ListState(is_loading=True))
    probe._on_list_state_changed(ListState(items=(_summary(1),)))

    assert probe.fit_checks == 1
    assert probe.message_list.items == [1]


def test_search_submitted_forwards_text():
    probe = _Probe()
    probe.search_input.text = lambda: " invoice "

    probe._on_search_submitted()

    assert probe.inbox.searches == [" invoice "]


def test_detail_states_render_placeholders():
    probe = _Probe()

    probe._on_detail_state_changed(DetailState())
    assert probe.message_header.text == DETAIL_EMPTY_TEXT

    probe._on_detail_state_changed(DetailState(selected_id=1, is_loading=True))
    assert probe.message_header.text == DETAIL_LOADING_TEXT
    assert probe.sender_avatar.visible is False

    probe._on_detail_state_changed(
        DetailState(selected_id=1, last_error=ErrorInfo("not_found", "This message is no longer available."))
    )
    assert probe.message_header.text == "This message is no longer available."
    assert probe.message_body.html == ""


def test_detail_state_renders_loaded_message():
    probe = _Probe()
    message = FullMessage(
        id=1,
        sender_name="Jordan Lee",
        sender_email="jordan@example.com",
        subject="Planning",
        body_preview_source="",
        received_at="2026-03-02T09:15:00Z",
        body="Plain body",
        recipients=(Recipient(id=1, email="me@example.com", name="", kind="To"),),
        attachments=(Attachment(id=1, filename="notes.pdf", size=2048, mime_type="application/pdf"),),
    )

    probe._on_detail_state_changed(DetailState(selected_id=1, loaded_message=message))

    assert probe.message_header.text == "Planning"
    assert probe.sender_lbl.text.startswith("Jordan Lee <jordan@example.com> · Monday")
    assert probe.sender_avatar.text == "J"
    assert probe.sender_avatar.visible is True
    assert "background-color" in probe.sender_avatar.style
    assert probe.recipients_lbl.text == "To: me@example.com"
    assert "Plain body" in probe.message_body.html
    assert probe.attachment_list.items == ["notes.pdf  (2.0 KB)"]
    assert probe.attachments_lbl.visible is True
