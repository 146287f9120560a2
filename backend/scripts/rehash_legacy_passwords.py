#!/usr/bin/env python3
"""
Convert passwords carried over from the legacy tracker into Argon2id hashes.

The legacy store kept passwords as plain values. Users keep logging in with
the password they already have.
"""

import argparse

from freshgrad.apps.accounts import services as account_services
from freshgrad.database import SessionLocal


def main() -> None:
    parser = argparse.ArgumentParser(description="Hash legacy plain-value passwords.")
    parser.add_argument("--email", help="Restrict to a single user email.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show which users would be updated without writing changes.",
    )
    args = parser.parse_args()

    session = SessionLocal()
    try:
        updated = account_services.rehash_legacy_passwords(session, email=args.email)

        if args.dry_run:
            session.rollback()
            print("Dry run complete.")
            print(f"Would update {len(updated)} user(s).")
            for user in updated:
                print(f"- {user.email} ({user.id})")
            return

        session.commit()
        print(f"Updated {len(updated)} user(s).")
    finally:
        session.close()


if __name__ == "__main__":
    main()
