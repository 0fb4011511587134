import html
import re
from datetime import datetime

from palm.constants import BYTES_PER_KB, BYTES_PER_MB, PREVIEW_MAX_CHARS

_INVISIBLE_CHARS = "\u200b\u200c\u200d\ufeff\u00ad\u034f\u2060\u2061\u2062\u2063\u2064\u2800"


def strip_html(text):
    """Strip HTML tags, CSS, scripts and decode entities to plain text."""
    if not text:
        return ""
    text = re.sub(r"<style[^>]*>.*?</style>", "", text, flags=re.IGNORECASE | re.DOTALL)
    text = re.sub(r"<script[^>]*>.*?</script>", "", text, flags=re.IGNORECASE | re.DOTALL)
    text = re.sub(r"<head[^>]*>.*?</head>", "", text, flags=re.IGNORECASE | re.DOTALL)
    text = re.sub(r"<!--.*?-->", "", text, flags=re.DOTALL)
    text = re.sub(r"<br\s*/?>", "\n", text, flags=re.IGNORECASE)
    text = re.sub(r"</?(p|div|tr)[^>]*>", "\n", text, flags=re.IGNORECASE)
    text = re.sub(r"<li[^>]*>", "\n• ", text, flags=re.IGNORECASE)
    text = re.sub(r"<t[dh][^>]*>", " ", text, flags=re.IGNORECASE)
    text = re.sub(r"<[^>]+>", "", text)
    text = html.unescape(text)
    for char in _INVISIBLE_CHARS:
        text = text.replace(char, "")
    lines = text.split("\n")
    cleaned = []
    prev_blank = False
    for line in lines:
        stripped = " ".join(line.split())
        if not stripped:
            if not prev_blank:
                cleaned.append("")
                prev_blank = True
        else:
            cleaned.append(stripped)
            prev_blank = False
    return "\n".join(cleaned).strip()


def summarize_preview(text, max_chars=PREVIEW_MAX_CHARS):
    """Collapse a body (HTML or plain text) into a single-line preview."""
    compact = " ".join(strip_html(text).split())
    if not compact:
        return ""
    if len(compact) <= max_chars:
        return compact
    return compact[:max_chars].rstrip() + "..."


def _parse_iso(iso_str):
    return datetime.fromisoformat((iso_str or "").replace("Z", "+00:00"))


def format_date(iso_str, now=None):
    """Format ISO date string for a list row."""
    try:
        dt = _parse_iso(iso_str)
    except ValueError:
        return iso_str[:10] if iso_str else ""
    now = now or (datetime.now(dt.tzinfo) if dt.tzinfo else datetime.now())
    if dt.date() == now.date():
        return dt.strftime("%I:%M %p").lstrip("0")
    if dt.year == now.year:
        return dt.strftime("%b %d")
    return dt.strftime("%b %d, %Y")


def format_long_date(iso_str):
    """Format ISO date string for the detail header."""
    try:
        dt = _parse_iso(iso_str)
    except ValueError:
        return iso_str or ""
    return dt.strftime("%A, %B %d, %Y %I:%M %p")


def format_size(size_bytes):
    """Format file size for display."""
    if not size_bytes:
        return ""
    if size_bytes < BYTES_PER_KB:
        return f"{size_bytes} B"
    if size_bytes < BYTES_PER_MB:
        return f"{size_bytes / BYTES_PER_KB:.1f} KB"
    return f"{size_bytes / BYTES_PER_MB:.1f} MB"


def initial_for(display_name):
    text = (display_name or "").strip()
    return text[0].upper() if text else "?"


__all__ = [
    "format_date",
    "format_long_date",
    "format_size",
    "initial_for",
    "strip_html",
    "summarize_preview",
]
