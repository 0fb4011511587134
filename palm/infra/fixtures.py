import json
import logging

from palm.constants import ACCOUNT_TYPE_MICROSOFT
from palm.errors import ProjectError, ValidationError
from palm.paths import FIXTURES_FILE

logger = logging.getLogger(__name__)


def load_fixtures(path=None):
    """Read account fixtures (accounts with nested emails) from JSON."""
    fixture_path = path or FIXTURES_FILE
    try:
        with open(fixture_path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise ValidationError(f"Unable to read fixtures from {fixture_path}: {exc}") from exc
    if not isinstance(payload, list):
        raise ValidationError("Fixture payload must be a JSON list of accounts.")
    return payload


def _message_kwargs(email_fixture):
    message = email_fixture.get("message") or {}
    return {
        "subject": message.get("subject") or "",
        "body": message.get("body") or "",
        "body_preview": message.get("body_preview") or None,
        "sender_email": message.get("sender_email") or "",
        "sender_name": message.get("sender_name") or None,
        "received_at": message.get("received_datetime") or None,
        "sent_at": message.get("sent_datetime") or None,
        "is_draft": bool(message.get("is_draft")),
        "is_read": bool(message.get("is_read")),
        "importance": message.get("importance") or None,
        "conversation_id": message.get("conversation_id") or None,
        "recipients": list(email_fixture.get("recipients") or []),
        "attachments": list(email_fixture.get("attachments") or []),
    }


def populate_store(store, accounts):
    """Create accounts and their emails, skipping entries that fail.

    Returns a report with created counts per account and per-entry errors.
    """
    created = {}
    errors = []
    for account_index, account in enumerate(accounts or []):
        email = (account.get("email") or "").strip()
        account_id = store.get_account_id(email) if email else None
        if account_id is None:
            try:
                account_id = store.add_account(
                    email,
                    account_type=account.get("provider") or ACCOUNT_TYPE_MICROSOFT,
                    account_id=account.get("id"),
                )
            except ProjectError as exc:
                errors.append(f"account {account_index}: {exc}")
                logger.error("Failed to create account from fixture %s: %s", account_index, exc)
                continue
            logger.info("Created account %s (%s)", account_id, email)
        else:
            logger.info("Account %s (%s) already exists", account_id, email)

        count = 0
        for email_index, email_fixture in enumerate(account.get("emails") or []):
            try:
                store.add_message(account_id, **_message_kwargs(email_fixture))
            except ProjectError as exc:
                errors.append(f"account {account_index} email {email_index}: {exc}")
                logger.error("Failed to create email %s for account %s: %s", email_index, account_id, exc)
                continue
            count += 1
        created[account_id] = count
        logger.info("Created %s email(s) for account %s", count, account_id)
    return {"created": created, "errors": errors}


def check_store(store):
    """Return the names of required tables missing from the store."""
    required = ("accounts", "messages", "recipients", "attachments")
    existing = store.table_names()
    return [table for table in required if table not in existing]


__all__ = ["check_store", "load_fixtures", "populate_store"]
