from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse


def error_response(
    status_code: int,
    error: str,
    details: Optional[str] = None,
    code: Optional[str] = None,
    **extra: Any,
) -> JSONResponse:
    """Build the `{error, details?}` failure body used by the form endpoints."""
    content: Dict[str, Any] = {"error": error}
    if details is not None:
        content["details"] = details
    if code is not None:
        content["code"] = code
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def missing_fields_response(missing, message: str) -> JSONResponse:
    return error_response(
        400,
        message,
        code="missing_required_fields",
        missing=list(missing),
    )


def find_missing_fields(payload: Dict[str, Any], required) -> list:
    """Required fields that are absent, null or blank."""
    missing = []
    for field in required:
        value = payload.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    return missing
