import logging

from palm.constants import ACCOUNT_ID, PAGE_SIZE
from palm.domain.models import ListenerSet, ListState
from palm.errors import ProjectError
from palm.services.fetch_errors import (
    LIST_LOAD_FAILED,
    error_info_from_exception,
    log_fetch_failure,
    unexpected_error,
)

logger = logging.getLogger(__name__)


class ListSynchronizer:
    """Owns the paginated, deduplicated, search-scoped list of summaries.

    Store calls go through ``submit(fn, on_result, on_error)``: ``fn`` runs off
    the event loop, the callbacks run back on it. Every fetch is tagged with the
    query epoch it was issued under. Changing the query bumps the epoch, so
    completions from an abandoned search are dropped instead of applied.

    Only one page fetch is outstanding per epoch. ``request_next_page`` is safe
    to call on every scroll event.
    """

    def __init__(self, store, submit, account_id=ACCOUNT_ID, page_size=PAGE_SIZE):
        self.store = store
        self.account_id = account_id
        self.page_size = page_size
        self._submit = submit
        self._state = ListState()
        self._listeners = ListenerSet()
        self._epoch = 0
        self._known_ids = set()
        self._pending_page = None
        self._retry_page = None
        self._closed = False

    @property
    def state(self) -> ListState:
        return self._state

    @property
    def epoch(self) -> int:
        return self._epoch

    def subscribe(self, callback):
        """Register ``callback(state)``; returns a callable that unsubscribes it."""
        return self._listeners.add(callback)

    def _apply(self, **changes):
        self._state = self._state.updated(**changes)
        self._listeners.notify(self._state)

    def set_query(self, query):
        """Start a new query epoch and fetch its first page."""
        if self._closed:
            return
        self._epoch += 1
        self._known_ids = set()
        self._retry_page = None
        self._apply(
            items=(),
            current_page=1,
            has_more=True,
            is_loading=True,
            last_error=None,
            active_query=(query or "").strip(),
        )
        self._fetch_page(1)

    def request_next_page(self) -> bool:
        """Advance to the next page, or retry the page that last failed.

        Returns True when a fetch was issued.
        """
        state = self._state
        if self._closed or self._epoch == 0:
            return False
        if state.is_loading or not state.has_more:
            return False
        page = self._retry_page if self._retry_page is not None else state.current_page + 1
        self._apply(current_page=page, is_loading=True)
        self._fetch_page(page)
        return True

    def close(self):
        """Drop listeners and make every in-flight completion stale."""
        self._closed = True
        self._epoch += 1
        self._pending_page = None
        self._listeners.clear()

    def _fetch_page(self, page):
        epoch = self._epoch
        query = self._state.active_query
        self._pending_page = page
        logger.debug("Fetching page %s for query %r (epoch %s)", page, query, epoch)
        self._submit(
            lambda e=epoch, p=page, q=query: self._page_worker(e, p, q),
            self._on_page_loaded,
            lambda trace_text, e=epoch, p=page: self._on_page_error(e, p, trace_text),
        )

    def _page_worker(self, epoch, page, query):
        try:
            result = self.store.list_messages(self.account_id, page, self.page_size, search=query or None)
        except ProjectError as exc:
            return {"epoch": epoch, "page": page, "error": exc}
        return {"epoch": epoch, "page": page, "result": result}

    def _is_current(self, epoch, page):
        if epoch != self._epoch:
            logger.debug("Discarding page %s from stale epoch %s (current %s)", page, epoch, self._epoch)
            return False
        return True

    def _on_page_loaded(self, payload):
        epoch = payload.get("epoch")
        page = payload.get("page")
        if not self._is_current(epoch, page):
            return

        error = payload.get("error")
        if error is not None:
            info = error_info_from_exception(error, LIST_LOAD_FAILED)
            log_fetch_failure(logger, info, error, f"Loading page {page}")
            self._record_failure(page, info)
            return

        result = payload.get("result")
        fresh = []
        for item in result.items:
            if item.id in self._known_ids:
                continue
            self._known_ids.add(item.id)
            fresh.append(item)

        changes = {
            "items": self._state.items + tuple(fresh),
            "has_more": self._state.current_page < result.total_pages,
        }
        if page == self._pending_page:
            self._pending_page = None
            self._retry_page = None
            changes["is_loading"] = False
            changes["last_error"] = None
        logger.debug(
            "Applied page %s (epoch %s): %s new, %s duplicate, %s total page(s)",
            page,
            epoch,
            len(fresh),
            len(result.items) - len(fresh),
            result.total_pages,
        )
        self._apply(**changes)

    def _on_page_error(self, epoch, page, trace_text):
        if not self._is_current(epoch, page):
            return
        info = unexpected_error(LIST_LOAD_FAILED)
        log_fetch_failure(logger, info, trace_text, f"Loading page {page}")
        self._record_failure(page, info)

    def _record_failure(self, page, info):
        if page != self._pending_page:
            return
        self._pending_page = None
        self._retry_page = page
        self._apply(is_loading=False, last_error=info)


__all__ = ["ListSynchronizer"]
