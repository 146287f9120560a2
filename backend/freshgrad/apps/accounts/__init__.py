# backend/freshgrad/apps/accounts/__init__.py
"""
Accounts app

Responsible for:
- Portal user accounts and roles
- Registration and login (Argon2id hashes, JWT access tokens)
- User profile maintenance (verified flag, applicant status, documents)
"""

from . import models  # noqa: F401
