import json

import pytest

from palm.errors import ValidationError
from palm.infra.fixtures import check_store, load_fixtures, populate_store
from palm.infra.message_store import SqliteMessageStore


def _store(tmp_path):
    return SqliteMessageStore(db_path=str(tmp_path / "palm.sqlite"))


def test_bundled_fixtures_populate_store(tmp_path):
    store = _store(tmp_path)

    report = populate_store(store, load_fixtures())

    assert report["errors"] == []
    assert report["created"] == {1: 4, 2: 1}
    page = store.list_messages(1, 1, 20)
    assert page.total_count == 4
    assert page.items[0].subject == "Quarterly planning notes"
    assert page.items[0].attachment_count == 1
    assert store.list_messages(1, 1, 20, search="invoice").total_count == 1


def test_populate_reuses_existing_account(tmp_path):
    store = _store(tmp_path)
    accounts = [
        {
            "email": "me@example.com",
            "emails": [
                {
                    "message": {"subject": "Hi", "sender_email": "a@example.com"},
                    "recipients": [{"email": "me@example.com", "recipient_type": "To"}],
                }
            ],
        }
    ]

    first = populate_store(store, accounts)
    second = populate_store(store, accounts)

    account_id = store.get_account_id("me@example.com")
    assert first["created"] == {account_id: 1}
    assert second["created"] == {account_id: 1}
    assert store.count_messages(account_id) == 2


def test_populate_skips_invalid_entries(tmp_path):
    store = _store(tmp_path)
    accounts = [
        {"email": "", "emails": []},
        {
            "email": "me@example.com",
            "emails": [
                {"message": {"subject": "No sender"}, "recipients": [{"email": "me@example.com"}]},
                {"message": {"subject": "Ok", "sender_email": "a@example.com"}, "recipients": [{"email": "me@example.com"}]},
            ],
        },
    ]

    report = populate_store(store, accounts)

    account_id = store.get_account_id("me@example.com")
    assert report["created"] == {account_id: 1}
    assert len(report["errors"]) == 2
    assert report["errors"][0].startswith("account 0")
    assert report["errors"][1].startswith("account 1 email 0")


def test_load_fixtures_rejects_non_list(tmp_path):
    path = tmp_path / "emails.json"
    path.write_text(json.dumps({"email": "me@example.com"}), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_fixtures(str(path))


def test_load_fixtures_rejects_invalid_json(tmp_path):
    path = tmp_path / "emails.json"
    path.write_text("[{", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_fixtures(str(path))


def test_load_fixtures_missing_file(tmp_path):
    with pytest.raises(ValidationError):
        load_fixtures(str(tmp_path / "missing.json"))


def test_check_store_reports_no_missing_tables(tmp_path):
    assert check_store(_store(tmp_path)) == []
