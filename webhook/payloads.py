"""
Backend Request Bodies

JSON body parsing and error responses shared by the backend-facing
routes (/resume-ready, /admin/resend).
"""

from typing import Any, Dict

from fastapi import Request
from fastapi.responses import JSONResponse


class InvalidBody(Exception):
    """Request body is not a JSON object."""
    pass


async def read_json_object(request: Request) -> Dict[str, Any]:
    """
    Parse the request body as a JSON object.

    Raises:
        InvalidBody: body is not valid JSON, or not an object
    """
    try:
        body = await request.json()
    except ValueError as e:
        raise InvalidBody(str(e)) from e

    if not isinstance(body, dict):
        raise InvalidBody(f"expected a JSON object, got {type(body).__name__}")
    return body


def error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse({"error": error}, status_code=status_code)
