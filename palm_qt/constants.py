SCROLL_PROXIMITY_PX = 120

AVATAR_SIZE_PX = 40

LIST_LOADING_TEXT = "Loading emails..."
LIST_EMPTY_TEXT = "No emails found"
DETAIL_EMPTY_TEXT = "Select an email to view its content"
DETAIL_LOADING_TEXT = "Loading message..."

UNREAD_MARKER = "● "

ROOT_LAYOUT_MARGINS = (8, 8, 8, 8)
ROOT_LAYOUT_SPACING = 8

__all__ = [
    "AVATAR_SIZE_PX",
    "DETAIL_EMPTY_TEXT",
    "DETAIL_LOADING_TEXT",
    "LIST_EMPTY_TEXT",
    "LIST_LOADING_TEXT",
    "ROOT_LAYOUT_MARGINS",
    "ROOT_LAYOUT_SPACING",
    "SCROLL_PROXIMITY_PX",
    "UNREAD_MARKER",
]
