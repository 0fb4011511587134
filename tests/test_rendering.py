from datetime import datetime, timezone

from palm.domain.models import Attachment, Recipient, Summary
from palm_qt.rendering import (
    avatar_style,
    body_html,
    format_attachment,
    format_list_row,
    format_recipients,
    looks_like_html,
)


def _summary(**overrides):
    fields = {
        "id": 1,
        "sender_name": "Jordan Lee",
        "sender_email": "jordan@example.com",
        "subject": "Planning",
        "body_preview_source": "<p>Notes attached</p>",
        "received_at": "2026-03-02T09:15:00Z",
    }
    fields.update(overrides)
    return Summary(**fields)


NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


def test_format_list_row_unread_with_attachments():
    row = format_list_row(_summary(attachment_count=2), now=NOW)

    assert row.split("\n") == ["● Jordan Lee · 9:15 AM", "Planning", "Notes attached", "2 attachments"]


def test_format_list_row_read_without_subject_or_preview():
    row = format_list_row(
        _summary(is_read=True, sender_name="", subject="", body_preview_source="", attachment_count=1), now=NOW
    )

    assert row.split("\n") == ["jordan@example.com · 9:15 AM", "(No subject)", "No preview available", "1 attachment"]


def test_body_html_wraps_plain_text():
    assert looks_like_html("<p>Hi</p>") is True
    assert looks_like_html("1 < 2 and 3 > 2") is False
    assert body_html("<p>Hi</p>") == "<p>Hi</p>"
    wrapped = body_html("a < b & c")
    assert "a &lt; b &amp; c" in wrapped
    assert wrapped.startswith("<html>")


def test_format_recipients_groups_by_kind():
    recipients = (
        Recipient(id=1, email="a@example.com", name="Alex", kind="To"),
        Recipient(id=2, email="b@example.com", name="", kind="Cc"),
        Recipient(id=3, email="c@example.com", name="", kind="To"),
    )

    assert format_recipients(recipients) == "To: Alex <a@example.com>, c@example.com · Cc: b@example.com"
    assert format_recipients(()) == ""


def test_format_attachment():
    assert format_attachment(Attachment(id=1, filename="a.pdf", size=2048, mime_type="application/pdf")) == "a.pdf  (2.0 KB)"
    assert format_attachment(Attachment(id=2, filename="empty.txt", size=0, mime_type="text/plain")) == "empty.txt"


def test_avatar_style_uses_color():
    assert "background-color: #2F7F74" in avatar_style("#2F7F74")
