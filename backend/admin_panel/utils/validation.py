from __future__ import annotations
"""Reusable validation helpers for panel forms.

Helpers return the value (to enable inline usage) or raise ValidationError
scoped to the offending field.
"""
from typing import Any, Iterable
from admin_panel.errors import ValidationError


def is_blank(value: Any) -> bool:
    """True for None, empty and whitespace-only strings."""
    if value is None:
        return True
    return not str(value).strip()


def validate_status(new_status: str, allowed: Iterable[str], field_name: str = 'status') -> str:
    """Validate that new_status is inside allowed."""
    if new_status not in allowed:
        raise ValidationError({field_name: f"{field_name} invalid"})
    return new_status


def require_text(value: Any, field_name: str, message: str) -> str:
    if is_blank(value):
        raise ValidationError({field_name: message})
    return str(value).strip()

__all__ = ['is_blank', 'validate_status', 'require_text']
