"""
Response envelopes: {"success": true, "data": ...} on success and
{"success": false, "error": ..., "code": ...} on failure.
"""

from typing import Any, Optional

from pydantic import BaseModel


def to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude={"operation"})
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    return value


def success_response(data: Any, message: Optional[str] = None) -> dict:
    body = {"success": True, "data": to_jsonable(data)}
    if message:
        body["message"] = message
    return body


def error_body(message: str, code: str) -> dict:
    return {"success": False, "error": message, "code": code}
