# backend/freshgrad/apps/reference/__init__.py

"""
Static lookup tables (tracks, candidate status metadata) and their seeding.
"""

from . import models  # noqa: F401
