from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_default_handler

from .exceptions import (
    AllocationConflict,
    AllocationExhausted,
    DomainError,
    InvalidInput,
    NotFound,
    PermissionDenied,
    StoreUnavailable,
)

logger = logging.getLogger(__name__)

# Most specific first; DomainError is the catch-all.
_STATUS_MAP: dict[type, int] = {
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    PermissionDenied: status.HTTP_403_FORBIDDEN,
    NotFound: status.HTTP_404_NOT_FOUND,
    AllocationConflict: status.HTTP_409_CONFLICT,
    AllocationExhausted: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StoreUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
    DomainError: status.HTTP_400_BAD_REQUEST,
}


def domain_exception_handler(exc: Exception, context: dict) -> Response | None:
    response = drf_default_handler(exc, context)
    if response is not None:
        return response

    for exc_class, status_code in _STATUS_MAP.items():
        if not isinstance(exc, exc_class):
            continue
        view = context.get("view")
        view_name = type(view).__name__ if view is not None else "unknown"
        if status_code >= 500:
            logger.error("%s in %s: %s", exc_class.__name__, view_name, exc)
        elif status_code != status.HTTP_400_BAD_REQUEST:
            logger.warning("%s in %s: %s", exc_class.__name__, view_name, exc)

        if isinstance(exc, InvalidInput):
            return Response({exc.field: [exc.message]}, status=status_code)
        return Response({"detail": exc.message}, status=status_code)

    return None
