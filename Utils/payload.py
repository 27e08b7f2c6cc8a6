"""
Request body parsing for the public form endpoints.
Website forms post either JSON or classic URL-encoded/multipart bodies.
"""
import json
import logging
from typing import Any, Dict

from fastapi import HTTPException, Request, status

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_payload(request: Request) -> Dict[str, Any]:
    """
    Parse the request body into a flat mapping.
    Non-object JSON and empty bodies yield an empty mapping so the
    required-field check reports what is missing.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    body = await request.body()
    if not body.strip():
        return {}

    try:
        data = await request.json()
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Rejected malformed request body on {request.url.path}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid request body",
        )

    if not isinstance(data, dict):
        return {}
    return data
