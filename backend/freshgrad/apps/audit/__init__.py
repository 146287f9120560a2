# backend/freshgrad/apps/audit/__init__.py

"""
Append-only audit log. Other apps write through `services.log_event`.
"""

from . import models  # noqa: F401
