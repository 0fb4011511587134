"""Create the local message database and load account/email fixtures into it.

Usage:
    python scripts/populate_emails.py
    python scripts/populate_emails.py --db palm_config/palm.sqlite --fixtures scripts/fixtures/emails.json
    python scripts/populate_emails.py --check
"""

import argparse
import logging

from palm.errors import ProjectError
from palm.infra.fixtures import check_store, load_fixtures, populate_store
from palm.infra.message_store import SqliteMessageStore
from palm.paths import DATABASE_FILE, FIXTURES_FILE

logger = logging.getLogger("populate_emails")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Populate the Palm message database from JSON fixtures.")
    parser.add_argument("--db", default=DATABASE_FILE, help="SQLite database path")
    parser.add_argument("--fixtures", default=FIXTURES_FILE, help="Fixture JSON path")
    parser.add_argument("--check", action="store_true", help="Only verify the schema exists")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    store = SqliteMessageStore(args.db)
    try:
        missing = check_store(store)
        if missing:
            logger.error("Missing tables: %s", ", ".join(missing))
            return 1
        logger.info("Database schema ok at %s", args.db)
        if args.check:
            return 0
        try:
            report = populate_store(store, load_fixtures(args.fixtures))
        except ProjectError as exc:
            logger.error("%s", exc)
            return 1
        for account_id, count in report["created"].items():
            logger.info("Account %s: %s email(s) created", account_id, count)
        for line in report["errors"]:
            logger.warning("%s", line)
        return 0
    finally:
        store.close()


if __name__ == "__main__":
    raise SystemExit(main())
