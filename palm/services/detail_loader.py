import logging

from palm.domain.models import DetailState, ListenerSet
from palm.errors import ProjectError
from palm.services.fetch_errors import (
    DETAIL_LOAD_FAILED,
    error_info_from_exception,
    log_fetch_failure,
    unexpected_error,
)

logger = logging.getLogger(__name__)


class SelectionDetailLoader:
    """Owns the fetch lifecycle of the currently open message.

    A completion is applied only while the message it was fetched for is
    still the selected one, and only if it is the newest request issued.
    Slower responses for earlier selections are dropped.
    """

    def __init__(self, store, submit):
        self.store = store
        self._submit = submit
        self._state = DetailState()
        self._listeners = ListenerSet()
        self._request_token = 0
        self._closed = False

    @property
    def state(self) -> DetailState:
        return self._state

    def subscribe(self, callback):
        return self._listeners.add(callback)

    def _apply(self, **changes):
        self._state = self._state.updated(**changes)
        self._listeners.notify(self._state)

    def select(self, message_id) -> bool:
        """Open ``message_id`` (or clear the detail when it is None).

        Reselecting the open message is a no-op unless its last load failed.
        Returns True when a fetch was issued.
        """
        if self._closed:
            return False
        if message_id is None:
            self._request_token += 1
            self._apply(selected_id=None, loaded_message=None, is_loading=False, last_error=None)
            return False
        if message_id == self._state.selected_id and (
            self._state.is_loading or self._state.loaded_message is not None
        ):
            return False

        self._request_token += 1
        token = self._request_token
        self._apply(selected_id=message_id, loaded_message=None, is_loading=True, last_error=None)
        logger.debug("Fetching message %s (request %s)", message_id, token)
        self._submit(
            lambda mid=message_id, t=token: self._detail_worker(mid, t),
            self._on_detail_loaded,
            lambda trace_text, mid=message_id, t=token: self._on_detail_error(mid, t, trace_text),
        )
        return True

    def close(self):
        self._closed = True
        self._request_token += 1
        self._listeners.clear()

    def _detail_worker(self, message_id, token):
        try:
            message = self.store.get_message(message_id)
        except ProjectError as exc:
            return {"id": message_id, "token": token, "error": exc}
        return {"id": message_id, "token": token, "message": message}

    def _is_relevant(self, message_id, token):
        if message_id != self._state.selected_id or token != self._request_token:
            logger.debug(
                "Discarding message %s (request %s); selected %s (request %s)",
                message_id,
                token,
                self._state.selected_id,
                self._request_token,
            )
            return False
        return True

    def _on_detail_loaded(self, payload):
        message_id = payload.get("id")
        if not self._is_relevant(message_id, payload.get("token")):
            return
        error = payload.get("error")
        if error is not None:
            info = error_info_from_exception(error, DETAIL_LOAD_FAILED)
            log_fetch_failure(logger, info, error, f"Loading message {message_id}")
            self._apply(loaded_message=None, is_loading=False, last_error=info)
            return
        self._apply(loaded_message=payload.get("message"), is_loading=False, last_error=None)

    def _on_detail_error(self, message_id, token, trace_text):
        if not self._is_relevant(message_id, token):
            return
        info = unexpected_error(DETAIL_LOAD_FAILED)
        log_fetch_failure(logger, info, trace_text, f"Loading message {message_id}")
        self._apply(loaded_message=None, is_loading=False, last_error=info)


__all__ = ["SelectionDetailLoader"]
