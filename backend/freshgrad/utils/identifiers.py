from __future__ import annotations

import os
import time
import uuid


def generate_uuid7() -> str:
    """
    Generate a UUIDv7 string (time-ordered).

    UUIDv7 layout per draft:
    - 48-bit Unix timestamp in milliseconds
    - 4-bit version (0b0111)
    - 74-bit randomness
    """
    ts_ms = int(time.time() * 1000)
    ts_bytes = ts_ms.to_bytes(6, "big", signed=False)
    rand_bytes = os.urandom(10)
    raw = bytearray(ts_bytes + rand_bytes)
    raw[6] = (raw[6] & 0x0F) | 0x70
    raw[8] = (raw[8] & 0x3F) | 0x80
    return str(uuid.UUID(bytes=bytes(raw)))


def generate_prefixed_id(prefix: str) -> str:
    """
    Typed string id like 'C-01920c4e-...'.

    The prefix tells clients which entity an id belongs to; the UUIDv7 part
    keeps ids unique under concurrent creation and sortable by time.
    """
    return f"{prefix}-{generate_uuid7()}"


def id_factory(prefix: str):
    """Zero-argument callable for use as a SQLAlchemy column default."""

    def _factory() -> str:
        return generate_prefixed_id(prefix)

    return _factory
