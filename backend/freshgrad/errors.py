"""
Domain exceptions raised by the service layer.

Routers translate these into HTTP status codes; services never import
FastAPI.
"""

from __future__ import annotations


class NotFoundError(Exception):
    """No record matches the requested id / email."""


class ConflictError(Exception):
    """Duplicate unique key or an action on a closed workflow item."""


class ValidationError(Exception):
    """Input that parses but breaks a domain rule."""


class AuthenticationError(Exception):
    """Bad credentials. The message never says which part was wrong."""
