"""Rule-based validation of decoded JSON request bodies."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Optional

DEFAULT_MESSAGE = "Erro de validação"

_EMAIL = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")


class ValidationFailed(ValueError):
    """The data broke one or more rules; ``errors`` maps field to messages."""

    def __init__(self, errors: dict[str, list[str]], message: str = DEFAULT_MESSAGE) -> None:
        super().__init__(message)
        self.errors = errors
        self.message = message


def parse_rules(spec: str) -> list[str]:
    """Split a ``rule|rule:arg`` specification into trimmed rules."""
    return [part.strip() for part in spec.split("|")]


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    if isinstance(value, (int, float)):
        return value == 0
    return False


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _size(value: Any) -> float:
    if _is_number(value):
        return float(value)
    if isinstance(value, (str, list, tuple, dict)):
        return float(len(value))
    raise ValueError(f"cannot measure a value of type {type(value).__name__}")


def _bounds(arg: str, count: int) -> list[float]:
    parts = [part.strip() for part in arg.split(",")]
    if len(parts) != count:
        raise ValueError(f"rule argument {arg!r} needs {count} value(s)")
    return [float(part) for part in parts]


def _numeric(field: str, value: Any, arg: str) -> Optional[str]:
    if _is_number(value):
        return None
    if isinstance(value, str):
        try:
            float(value)
            return None
        except ValueError:
            pass
    return f"The {field} field must be numeric"


def _email(field: str, value: Any, arg: str) -> Optional[str]:
    if isinstance(value, str) and _EMAIL.fullmatch(value):
        return None
    return f"The {field} field must be a valid email address"


def _in(field: str, value: Any, arg: str) -> Optional[str]:
    options = [option.strip() for option in arg.split(",")]
    if str(value) in options:
        return None
    return f"The {field} field must be one of {arg}"


def _min(field: str, value: Any, arg: str) -> Optional[str]:
    (low,) = _bounds(arg, 1)
    if _size(value) >= low:
        return None
    return f"The {field} field must be minimum {arg}"


def _max(field: str, value: Any, arg: str) -> Optional[str]:
    (high,) = _bounds(arg, 1)
    if _size(value) <= high:
        return None
    return f"The {field} field must be maximum {arg}"


def _between(field: str, value: Any, arg: str) -> Optional[str]:
    low, high = _bounds(arg, 2)
    if low <= _size(value) <= high:
        return None
    low_text, high_text = (part.strip() for part in arg.split(","))
    return f"The {field} field must be between {low_text} and {high_text}"


_CHECKS: dict[str, Callable[[str, Any, str], Optional[str]]] = {
    "numeric": _numeric,
    "email": _email,
    "in": _in,
    "min": _min,
    "max": _max,
    "between": _between,
}


def validate(data: Any, rules: Mapping[str, str | Sequence[str]]) -> Any:
    """Check ``data`` against ``rules``; return it unchanged or raise ValidationFailed.

    Rules other than ``required`` apply only to fields that carry a value.
    An unknown rule name raises ValueError.
    """
    if not isinstance(data, Mapping):
        raise ValidationFailed({"_error": ["request body must be a JSON object"]})
    errors: dict[str, list[str]] = {}
    for field, field_rules in rules.items():
        if isinstance(field_rules, str):
            field_rules = parse_rules(field_rules)
        value = data.get(field)
        present = not _is_empty(value)
        messages: list[str] = []
        for rule in field_rules:
            name, _, arg = rule.partition(":")
            if name == "required":
                if not present:
                    messages.append(f"The {field} field is required")
                continue
            check = _CHECKS.get(name)
            if check is None:
                raise ValueError(f"{rule} is not a valid rule")
            if present:
                message = check(field, value, arg)
                if message:
                    messages.append(message)
        if messages:
            errors[field] = messages
    if errors:
        raise ValidationFailed(errors)
    return data