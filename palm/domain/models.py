import logging
from dataclasses import dataclass, field, replace

from palm.constants import IMPORTANCE_NORMAL, PREVIEW_MAX_CHARS
from palm.domain.helpers import summarize_preview

logger = logging.getLogger(__name__)

ERROR_TRANSIENT = "transient"
ERROR_NOT_FOUND = "not_found"
ERROR_INVALID_ARGUMENT = "invalid_argument"
ERROR_UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class Summary:
    """Lightweight list-row representation of a message."""

    id: int
    sender_name: str
    sender_email: str
    subject: str
    body_preview_source: str
    received_at: str
    is_read: bool = False
    attachment_count: int = 0

    @property
    def display_sender(self) -> str:
        return self.sender_name or self.sender_email

    def preview_text(self, max_chars: int = PREVIEW_MAX_CHARS) -> str:
        return summarize_preview(self.body_preview_source, max_chars=max_chars)


@dataclass(frozen=True)
class Recipient:
    id: int
    email: str
    name: str
    kind: str


@dataclass(frozen=True)
class Attachment:
    id: int
    filename: str
    size: int
    mime_type: str


@dataclass(frozen=True)
class FullMessage:
    id: int
    sender_name: str
    sender_email: str
    subject: str
    body_preview_source: str
    received_at: str
    is_read: bool = False
    attachment_count: int = 0
    body: str = ""
    importance: str = IMPORTANCE_NORMAL
    recipients: tuple[Recipient, ...] = ()
    attachments: tuple[Attachment, ...] = ()

    @property
    def display_sender(self) -> str:
        return self.sender_name or self.sender_email

    def summary(self) -> Summary:
        return Summary(
            id=self.id,
            sender_name=self.sender_name,
            sender_email=self.sender_email,
            subject=self.subject,
            body_preview_source=self.body_preview_source,
            received_at=self.received_at,
            is_read=self.is_read,
            attachment_count=self.attachment_count,
        )


@dataclass(frozen=True)
class ListPage:
    items: tuple[Summary, ...]
    total_count: int
    page: int
    page_size: int
    total_pages: int


@dataclass(frozen=True)
class ErrorInfo:
    kind: str
    message: str


@dataclass(frozen=True)
class ListState:
    items: tuple[Summary, ...] = ()
    current_page: int = 1
    has_more: bool = True
    is_loading: bool = False
    last_error: ErrorInfo | None = None
    active_query: str = ""

    def updated(self, **changes) -> "ListState":
        return replace(self, **changes)


@dataclass(frozen=True)
class DetailState:
    selected_id: int | None = None
    loaded_message: FullMessage | None = None
    is_loading: bool = False
    last_error: ErrorInfo | None = None

    def updated(self, **changes) -> "DetailState":
        return replace(self, **changes)


@dataclass
class ListenerSet:
    """Ordered set of state-change callbacks."""

    callbacks: list = field(default_factory=list)

    def add(self, callback):
        self.callbacks.append(callback)

        def _remove():
            if callback in self.callbacks:
                self.callbacks.remove(callback)

        return _remove

    def notify(self, state):
        for callback in list(self.callbacks):
            try:
                callback(state)
            except Exception:
                logger.exception("State listener %r failed", callback)

    def clear(self):
        self.callbacks.clear()


__all__ = [
    "ERROR_INVALID_ARGUMENT",
    "ERROR_NOT_FOUND",
    "ERROR_TRANSIENT",
    "ERROR_UNEXPECTED",
    "Attachment",
    "DetailState",
    "ErrorInfo",
    "FullMessage",
    "ListPage",
    "ListState",
    "ListenerSet",
    "Recipient",
    "Summary",
]
