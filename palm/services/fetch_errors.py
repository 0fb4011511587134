from palm.domain.models import (
    ERROR_INVALID_ARGUMENT,
    ERROR_NOT_FOUND,
    ERROR_TRANSIENT,
    ERROR_UNEXPECTED,
    ErrorInfo,
)
from palm.errors import ExternalServiceError, NotFoundError, ValidationError

LIST_LOAD_FAILED = "Failed to load emails. Please try again."
DETAIL_LOAD_FAILED = "Failed to load email. Please try again."
ITEM_UNAVAILABLE = "This message is no longer available."
REQUEST_REJECTED = "The request was rejected. Please report this problem."


def error_info_from_exception(exc, retry_message):
    """Map a store failure to the user-facing error shown by a view."""
    if isinstance(exc, NotFoundError):
        return ErrorInfo(ERROR_NOT_FOUND, ITEM_UNAVAILABLE)
    if isinstance(exc, ValidationError):
        return ErrorInfo(ERROR_INVALID_ARGUMENT, REQUEST_REJECTED)
    if isinstance(exc, ExternalServiceError):
        return ErrorInfo(ERROR_TRANSIENT, retry_message)
    return ErrorInfo(ERROR_UNEXPECTED, retry_message)


def log_fetch_failure(logger, info, detail, what):
    if info.kind == ERROR_TRANSIENT:
        logger.warning("%s failed (transient): %s", what, detail)
    elif info.kind == ERROR_NOT_FOUND:
        logger.info("%s: item not found: %s", what, detail)
    else:
        logger.error("%s failed (%s): %s", what, info.kind, detail)


def unexpected_error(retry_message):
    return ErrorInfo(ERROR_UNEXPECTED, retry_message)


__all__ = [
    "DETAIL_LOAD_FAILED",
    "ITEM_UNAVAILABLE",
    "LIST_LOAD_FAILED",
    "REQUEST_REJECTED",
    "error_info_from_exception",
    "log_fetch_failure",
    "unexpected_error",
]
