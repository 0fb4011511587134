from palm.constants import ACCOUNT_ID, PAGE_SIZE
from palm.services.detail_loader import SelectionDetailLoader
from palm.services.list_sync import ListSynchronizer


class InboxController:
    """Page-level owner of the search text and the selected message id.

    Forwards user intent to the list and detail components; each component
    remains the only writer of its own state.
    """

    def __init__(self, store, submit, account_id=ACCOUNT_ID, page_size=PAGE_SIZE):
        self.list_sync = ListSynchronizer(store, submit, account_id=account_id, page_size=page_size)
        self.detail_loader = SelectionDetailLoader(store, submit)
        self.search_text = ""
        self.selected_id = None
        self._mounted = False

    @property
    def list_state(self):
        return self.list_sync.state

    @property
    def detail_state(self):
        return self.detail_loader.state

    def mount(self):
        if self._mounted:
            return
        self._mounted = True
        self.list_sync.set_query(self.search_text)

    def search(self, text):
        self.search_text = (text or "").strip()
        self.list_sync.set_query(self.search_text)

    def refresh(self):
        self.list_sync.set_query(self.search_text)

    def near_end_of_list(self):
        return self.list_sync.request_next_page()

    def select(self, message_id):
        self.selected_id = message_id
        return self.detail_loader.select(message_id)

    def close(self):
        self.list_sync.close()
        self.detail_loader.close()
        self._mounted = False


__all__ = ["InboxController"]
