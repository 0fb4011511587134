from palm_qt.mixins.inbox_list import InboxListMixin
from palm_qt.mixins.inbox_ui import InboxUiMixin
from palm_qt.mixins.window_state import WindowStateMixin

__all__ = [
    "InboxListMixin",
    "InboxUiMixin",
    "WindowStateMixin",
]
