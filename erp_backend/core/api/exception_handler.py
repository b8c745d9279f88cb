# core/api/exception_handler.py

"""
DRF EXCEPTION HANDLER

Maps ERP service errors to HTTP responses so views can call services directly.

Response body:
    {"detail": "<message>", "code": "<error code>"}

Model-level django ValidationError (full_clean in Model.save) is returned as a
regular DRF 400.
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import (
    ERPError,
    InsufficientStockError,
    InvalidStateTransition,
    NotFoundError,
    RemoteStoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidStateTransition, status.HTTP_409_CONFLICT),
    (InsufficientStockError, status.HTTP_409_CONFLICT),
    (RemoteStoreError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
)


def status_for(exc: ERPError) -> int:
    for error_cls, http_status in STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            return http_status
    return status.HTTP_400_BAD_REQUEST


def erp_exception_handler(exc, context):
    if isinstance(exc, ERPError):
        http_status = status_for(exc)
        view = context.get("view")
        log = logger.error if http_status >= 500 else logger.warning
        log(
            "Service error",
            extra={
                "error_code": exc.code,
                "view": view.__class__.__name__ if view is not None else None,
                "detail": str(exc),
            },
        )
        return Response({"detail": str(exc), "code": exc.code}, status=http_status)

    if isinstance(exc, DjangoValidationError):
        detail = exc.message_dict if hasattr(exc, "error_dict") else exc.messages
        exc = DRFValidationError(detail=detail)

    return exception_handler(exc, context)
