# backend/freshgrad/schemas.py
"""
Shared Pydantic building blocks.

Storage columns are snake_case; the JSON contract is camelCase. Every wire
model derives from `CamelModel`, which renders camelCase and accepts either
spelling on input.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
        from_attributes=True,
    )


class SuccessResponse(BaseModel):
    success: bool = True


def coerce_number(value: Any, default: float = 0.0) -> float:
    """
    Numeric read coercion: None, blanks and unparseable values become `default`.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default
