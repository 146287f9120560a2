# backend/freshgrad/apps/courses/__init__.py

"""
Courses app. Courses are soft-deleted only.
"""

from . import models  # noqa: F401
