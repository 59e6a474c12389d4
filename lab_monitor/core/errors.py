"""
Translation of backend failures into HTTP errors.

Every table call goes straight to Supabase; when one fails the caller gets the
action that failed ("Failed to fetch labs") followed by the backend's own
message.
"""

import logging
from fastapi import HTTPException, status
from postgrest.exceptions import APIError

logger = logging.getLogger(__name__)

# Postgres insufficient_privilege, raised when a row-level security policy rejects a write
RLS_VIOLATION = "42501"
# PostgREST: a single-row read matched no rows
NO_ROWS = "PGRST116"


def backend_error(action: str, exc: Exception) -> HTTPException:
    """Build the HTTPException surfaced for a failed backend call."""
    if isinstance(exc, HTTPException):
        return exc
    if isinstance(exc, APIError):
        message = exc.message or str(exc)
        if exc.code == RLS_VIOLATION:
            status_code = status.HTTP_403_FORBIDDEN
        elif exc.code == NO_ROWS:
            status_code = status.HTTP_404_NOT_FOUND
        else:
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    else:
        message = str(exc)
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    logger.error(f"{action}: {message}")
    return HTTPException(status_code=status_code, detail=f"{action}: {message}")
