# backend/freshgrad/apps/corrections/__init__.py

"""
Corrections app: request / respond / resolve / reject workflow for disputed
candidate data.
"""

from . import models  # noqa: F401
