from typing import Any

API_VERSION = "v5"


def wrap_response(request_id: str | None, content: Any, total_count: int | None = None, status: int = 200) -> dict:
    return {
        "id": request_id,
        "version": API_VERSION,
        "result": {
            "success": status < 400,
            "status": status,
            "content": content,
            "metadata": {"totalCount": total_count} if total_count is not None else None,
        },
    }


def wrap_error(request_id: str | None, message: str, status: int, details: Any = None) -> dict:
    content: dict[str, Any] = {"message": message}
    if details is not None:
        content["details"] = details
    return wrap_response(request_id, content, status=status)
