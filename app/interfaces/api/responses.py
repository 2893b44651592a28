"""Success envelope shared by every route: {success, message?, data?}."""

from typing import Any, Optional


def success(data: Optional[dict] = None, message: Optional[str] = None) -> dict:
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body
