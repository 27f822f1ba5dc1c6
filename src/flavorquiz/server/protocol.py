"""JSON-lines wire format for grading clients.

Each stdin line is one request object::

    {"id": 7, "method": "compare", "params": {"userAnswer": "...", "correctAnswer": "..."}}

and each stdout line is either ``{"id": 7, "result": {...}}`` or
``{"id": 7, "error": "..."}``. Notifications carry no id.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ProtocolError(ValueError):
    """A line that is not a well-formed grading request."""

    def __init__(self, message: str, request_id: int = 0):
        super().__init__(message)
        self.request_id = request_id


class Method(str, Enum):
    COMPARE = "compare"
    COMPARE_REVERSE = "compareReverse"
    DETECT_LEVEL = "detectLevel"
    LOAD_TAXONOMY = "loadTaxonomy"
    GET_FLAVORS = "getFlavors"
    GET_VARIATIONS = "getVariations"


# params each method cannot do without
REQUIRED_PARAMS: dict[Method, tuple[str, ...]] = {
    Method.COMPARE: ("correctAnswer",),
    Method.COMPARE_REVERSE: ("expectedAnswer",),
    Method.LOAD_TAXONOMY: ("path",),
}


@dataclass(frozen=True)
class Request:
    id: int
    method: Method
    params: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Request:
        if not isinstance(data, dict):
            raise ProtocolError("Request must be a JSON object")

        request_id = data.get("id", 0)
        if not isinstance(request_id, int) or isinstance(request_id, bool):
            raise ProtocolError(f"Request id must be an integer, got {request_id!r}")

        if "method" not in data:
            raise ProtocolError("Request is missing 'method'", request_id)
        try:
            method = Method(data["method"])
        except ValueError:
            raise ProtocolError(f"Unknown method: {data['method']}", request_id) from None

        params = data.get("params") or {}
        if not isinstance(params, dict):
            raise ProtocolError("Request params must be a JSON object", request_id)
        missing = [p for p in REQUIRED_PARAMS.get(method, ()) if p not in params]
        if missing:
            raise ProtocolError(f"Missing parameter: {', '.join(missing)}", request_id)

        return cls(id=request_id, method=method, params=params)

    @classmethod
    def from_line(cls, line: str) -> Request:
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            raise ProtocolError(f"Invalid JSON: {e}") from None
        return cls.from_dict(data)


@dataclass(frozen=True)
class Response:
    id: int
    result: Optional[dict] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, request_id: int, exc: Exception) -> Response:
        return cls(id=request_id, error=str(exc))

    def to_json_line(self) -> str:
        d: dict[str, Any] = {"id": self.id}
        if self.error is not None:
            d["error"] = self.error
        else:
            d["result"] = self.result
        return json.dumps(d, ensure_ascii=False) + "\n"


@dataclass(frozen=True)
class Notification:
    method: str
    params: dict = field(default_factory=dict)

    def to_json_line(self) -> str:
        return json.dumps({"method": self.method, "params": self.params}, ensure_ascii=False) + "\n"
