from pydantic import BaseModel
from typing import Optional, Any, Dict


class ErrorBody(BaseModel):
    """
    Error section of the standard envelope {success, data?, message?, error?}.
    """
    message: str
    code: Optional[str] = None
    errors: Optional[Dict[str, str]] = None


def success_response(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True, "data": data}
    if message:
        body["message"] = message
    return body


def error_response(
    message: str,
    code: Optional[str] = None,
    errors: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    error = ErrorBody(message=message, code=code, errors=errors)
    return {"success": False, "error": error.model_dump(exclude_none=True)}
