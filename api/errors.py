"""
Error-to-response mapping shared by the FastAPI app and the Lambda handler.

- DomainSoftError -> 200 {"message": <uniform Portuguese message>}
- ValidationError -> 400 {"message": "Validation failed", "details": {...}}
- anything else   -> 500 {"message": "Internal server error"}

Internal reasons are logged, never returned.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.errors import CheckoutPageError, DomainSoftError, InternalError, ValidationError

logger = logging.getLogger(__name__)


def error_body(exc: Exception) -> Tuple[int, Dict[str, Any]]:
    """Return (status code, JSON body) for an exception raised by the pipeline."""

    if isinstance(exc, DomainSoftError):
        logger.info("Checkout page soft rejection", extra={"reason": exc.internal_reason})
        return exc.http_status, {"message": exc.message}

    if isinstance(exc, ValidationError):
        logger.info("Checkout page request rejected", extra={"details": exc.details})
        return exc.http_status, {"message": exc.message, "details": exc.details}

    if isinstance(exc, CheckoutPageError):
        logger.error("Checkout page failed", extra={"code": exc.code, "reason": exc.internal_reason})
        return exc.http_status, {"message": exc.message}

    logger.exception("Unhandled error while building checkout page", exc_info=exc)
    return InternalError.http_status, {"message": InternalError.message}


def _handle(request: Request, exc: Exception) -> JSONResponse:
    status_code, body = error_body(exc)
    return JSONResponse(status_code=status_code, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CheckoutPageError, _handle)
    app.add_exception_handler(Exception, _handle)


__all__ = ["error_body", "register_exception_handlers"]
