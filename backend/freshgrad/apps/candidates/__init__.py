# backend/freshgrad/apps/candidates/__init__.py
"""
Candidates app: candidate records, their enrollments, course results and
notes thread, plus the status lifecycle in `lifecycle.py`.
"""

from . import models  # noqa: F401
