# backend/create_initial_admin.py

import os
import sys

from freshgrad.apps.accounts import services as account_services
from freshgrad.database import SessionLocal


def main() -> int:
    email = os.getenv("DEFAULT_ADMIN_EMAIL")
    password = os.getenv("DEFAULT_ADMIN_PASSWORD")
    name = os.getenv("DEFAULT_ADMIN_NAME", "Administrator")

    if not (email and password):
        print("[ERROR] Set DEFAULT_ADMIN_EMAIL and DEFAULT_ADMIN_PASSWORD first.")
        return 1

    db = SessionLocal()
    try:
        user, created = account_services.ensure_default_admin(
            db,
            email=email,
            password=password,
            name=name,
        )
        if not created:
            print(f"[INFO] User already exists: id={user.id}, email={user.email}")
            return 0

        db.commit()
        db.refresh(user)

        print("[OK] Created admin user:")
        print(f"  id:      {user.id}")
        print(f"  email:   {user.email}")
        print(f"  role:    {user.role.value}")
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
