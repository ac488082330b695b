"""JSON response envelope used by every endpoint."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from http import HTTPStatus
from typing import Any


def _jsonable(value: Any) -> Any:
    """Convert a payload to plain JSON values; plain mappings get sorted keys."""
    if hasattr(value, "to_dict"):
        return {key: _jsonable(item) for key, item in value.to_dict().items()}
    if isinstance(value, Enum):
        return _jsonable(value.value)
    if isinstance(value, dict):
        return {str(key): _jsonable(value[key]) for key in sorted(value, key=str)}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


@dataclass
class Response:
    """Status, optional payload and optional message."""

    status: int = HTTPStatus.OK
    payload: Any = None
    message: str = ""

    @classmethod
    def bad_request(cls, message: str) -> Response:
        return cls(status=HTTPStatus.BAD_REQUEST, message=message)

    @classmethod
    def not_found(cls, message: str) -> Response:
        return cls(status=HTTPStatus.NOT_FOUND, message=message)

    @classmethod
    def validation_error(cls, message: str, errors: Any) -> Response:
        return cls(status=HTTPStatus.UNPROCESSABLE_ENTITY, message=message, payload=errors)

    def to_dict(self) -> dict[str, Any]:
        """Envelope as a mapping, leaving out empty fields."""
        result: dict[str, Any] = {}
        if self.status:
            result["status"] = int(self.status)
        if self.payload is not None:
            result["payload"] = self.payload
        if self.message:
            result["message"] = self.message
        return result

    def to_json(self) -> str:
        """Compact UTF-8 JSON text of the envelope."""
        return json.dumps(
            _jsonable(self), separators=(",", ":"), ensure_ascii=False
        )