import html
import re

from palm.constants import RECIPIENT_KINDS
from palm.domain.helpers import format_date, format_size
from palm_qt.constants import AVATAR_SIZE_PX, UNREAD_MARKER

_HTML_TAG_PATTERN = re.compile(r"<\s*/?\s*[a-zA-Z][^>]*>")


def looks_like_html(content: str) -> bool:
    return bool(_HTML_TAG_PATTERN.search(content or ""))


def wrap_plain_text_as_html(text: str) -> str:
    safe = html.escape(text or "")
    return f"<html><body><pre style='white-space: pre-wrap;'>{safe}</pre></body></html>"


def body_html(content: str) -> str:
    """Return message body markup for the detail view."""
    if looks_like_html(content):
        return content
    return wrap_plain_text_as_html(content)


def format_list_row(summary, now=None) -> str:
    unread_prefix = "" if summary.is_read else UNREAD_MARKER
    lines = [
        f"{unread_prefix}{summary.display_sender} · {format_date(summary.received_at, now=now)}",
        summary.subject or "(No subject)",
        summary.preview_text() or "No preview available",
    ]
    count = summary.attachment_count
    if count:
        lines.append(f"{count} attachment" if count == 1 else f"{count} attachments")
    return "\n".join(lines)


def format_recipients(recipients) -> str:
    grouped = {kind: [] for kind in RECIPIENT_KINDS}
    for recipient in recipients or ():
        label = f"{recipient.name} <{recipient.email}>" if recipient.name else recipient.email
        grouped.setdefault(recipient.kind, []).append(label)
    parts = [f"{kind}: {', '.join(labels)}" for kind, labels in grouped.items() if labels]
    return " · ".join(parts)


def format_attachment(attachment) -> str:
    size_text = format_size(attachment.size)
    return f"{attachment.filename}  ({size_text})" if size_text else attachment.filename


def avatar_style(color: str) -> str:
    radius = AVATAR_SIZE_PX // 2
    return f"background-color: {color}; border-radius: {radius}px; font-weight: 600;"


__all__ = [
    "avatar_style",
    "body_html",
    "format_attachment",
    "format_list_row",
    "format_recipients",
    "looks_like_html",
    "wrap_plain_text_as_html",
]
