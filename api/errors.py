"""
Mapping of use case error types to HTTP errors.

Use cases report expected failures as ``error_type`` strings on their result
dataclasses; routers turn them into HTTPException with the status below.
"""

from typing import Optional

from fastapi import HTTPException

ERROR_STATUS_CODES = {
    "not_found": 404,
    "invalid_index": 404,
    "conflict": 409,
    "workflow_order": 409,
    "malformed": 422,
    "store_error": 500,
}


def http_error(error_type: Optional[str], detail: Optional[str]) -> HTTPException:
    """
    Build the HTTPException for a failed use case result.

    Args:
        error_type: ``error_type`` of the result; unknown types map to 500
        detail: Human readable error message

    Returns:
        HTTPException to raise
    """
    status_code = ERROR_STATUS_CODES.get(error_type or "", 500)
    return HTTPException(status_code=status_code, detail=detail or "Request failed")
