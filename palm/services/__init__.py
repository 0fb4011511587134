"""Synchronization services for the inbox views."""

from . import detail_loader, fetch_errors, inbox, list_sync

__all__ = ["detail_loader", "fetch_errors", "inbox", "list_sync"]
