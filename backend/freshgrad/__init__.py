# backend/freshgrad/__init__.py
"""
FreshGrad tracker backend.

Each entity family lives in freshgrad/apps/<app>/ with models, schemas,
services and a router. `freshgrad.database.import_models()` registers every
table on the shared metadata for Alembic and `init_schema()`.
"""

__version__ = "1.0.0"
