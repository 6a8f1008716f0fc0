from typing import Any


def success_response(data: Any = None, message: str | None = None) -> dict:
    return {"success": True, "message": message, "data": data}


def error_response(error: str, message: str | None = None) -> dict:
    body = {"error": error}
    if message is not None:
        body["message"] = message
    return body
