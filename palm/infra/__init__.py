"""Infrastructure modules for Palm."""

from . import config_store, fixtures, message_store

__all__ = ["config_store", "fixtures", "message_store"]
