from datetime import datetime, timezone

from palm.domain.helpers import (
    format_date,
    format_long_date,
    format_size,
    initial_for,
    strip_html,
    summarize_preview,
)


def test_strip_html_drops_markup_and_entities():
    html = "<html><head><title>x</title></head><body><style>p{}</style><p>Hi&nbsp;there</p><br>Bye</body></html>"
    assert strip_html(html) == "Hi there\n\nBye"


def test_strip_html_removes_invisible_characters():
    assert strip_html("a\u200bb\ufeffc") == "abc"


def test_summarize_preview_collapses_whitespace():
    assert summarize_preview("<p>Hello</p>\n\n<p>  <b>world</b> </p>") == "Hello world"
    assert summarize_preview("") == ""
    assert summarize_preview(None) == ""


def test_summarize_preview_truncates_long_text():
    preview = summarize_preview("a" * 150, max_chars=100)
    assert preview == "a" * 100 + "..."
    assert summarize_preview("short", max_chars=5) == "short"


def test_format_date_relative_to_now():
    now = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)
    assert format_date("2026-03-02T09:15:00Z", now=now) == "9:15 AM"
    assert format_date("2026-03-01T17:42:00Z", now=now) == "Mar 01"
    assert format_date("2025-02-28T08:00:00Z", now=now) == "Feb 28, 2025"


def test_format_date_invalid_input():
    assert format_date("") == ""
    assert format_date("yesterday-ish") == "yesterday-"


def test_format_long_date():
    assert format_long_date("2026-03-02T09:15:00Z") == "Monday, March 02, 2026 09:15 AM"
    assert format_long_date("not a date") == "not a date"


def test_format_size():
    assert format_size(0) == ""
    assert format_size(512) == "512 B"
    assert format_size(2048) == "2.0 KB"
    assert format_size(5 * 1024 * 1024) == "5.0 MB"


def test_initial_for():
    assert initial_for("jordan lee") == "J"
    assert initial_for("  ") == "?"
    assert initial_for(None) == "?"
