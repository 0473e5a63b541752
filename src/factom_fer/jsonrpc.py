from __future__ import annotations

import json
from typing import Any

INVALID_REQUEST = -32600
INTERNAL_ERROR = -32603

_MESSAGES = {
    INVALID_REQUEST: "Invalid Request",
    INTERNAL_ERROR: "Internal error",
}


class RequestCounter:
    """Monotonic JSON-RPC id source. Create one per session; nothing is global."""

    def __init__(self, start: int = 0) -> None:
        self._next = start

    def next(self) -> int:
        value = self._next
        self._next += 1
        return value


def encode_json(obj: Any) -> str:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


def json_rpc_request(method: str, params: dict[str, Any], request_id: Any) -> dict[str, Any]:
    # Key order matches factomd's JSON2Request.
    return {"jsonrpc": "2.0", "id": request_id, "params": params, "method": method}


def json_rpc_result(request_id: Any, result: Any) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def json_rpc_error(
    request_id: Any, code: int, message: str | None = None, data: Any = None
) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message or _MESSAGES.get(code, "Error")}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": request_id, "error": error}


def invalid_request(request_id: Any = None) -> dict[str, Any]:
    return json_rpc_error(request_id, INVALID_REQUEST)


def internal_error(request_id: Any, data: Any) -> dict[str, Any]:
    return json_rpc_error(request_id, INTERNAL_ERROR, data=data)
