"""
AWS Lambda entrypoint (API Gateway proxy integration).

Shares the normalizer, the ShowCheckoutService and the error mapping with
the FastAPI app; only event parsing and response framing differ.

The offer UUID is read from pathParameters["offerUuid"], then recovered from
the greedy "proxy" path parameter or the raw path.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Optional

from api.dependencies import get_settings, get_show_checkout_service
from api.errors import error_body
from config import configure_logging
from services.request_normalizer import extract_offer_uuid_from_path, normalize_checkout_request
from services.show_checkout_service import ShowCheckoutService

logger = logging.getLogger(__name__)

_RESPONSE_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token",
    "Access-Control-Allow-Methods": "OPTIONS,GET",
}


def _proxy_response(status_code: int, body: str) -> Dict[str, Any]:
    return {"statusCode": status_code, "headers": dict(_RESPONSE_HEADERS), "body": body}


def offer_uuid_from_event(event: Mapping[str, Any]) -> str:
    path_parameters = event.get("pathParameters") or {}

    offer_uuid = path_parameters.get("offerUuid") or ""
    if not offer_uuid:
        offer_uuid = extract_offer_uuid_from_path(path_parameters.get("proxy"))
    if not offer_uuid:
        offer_uuid = extract_offer_uuid_from_path(event.get("path"))
    return offer_uuid


def handle_event(event: Mapping[str, Any], service: ShowCheckoutService) -> Dict[str, Any]:
    """Run one API Gateway proxy event through the checkout page pipeline."""

    offer_uuid = offer_uuid_from_event(event)
    if not offer_uuid:
        logger.info("Missing offer UUID in event", extra={"path": event.get("path")})

    try:
        request = normalize_checkout_request(
            offer_uuid,
            event.get("queryStringParameters") or {},
            event.get("headers") or {},
        )
        result = service.execute(request)
    except Exception as exc:
        status_code, body = error_body(exc)
        return _proxy_response(status_code, json.dumps(body, ensure_ascii=False))

    return _proxy_response(200, result.model_dump_json(exclude_none=True))


def handler(event: Mapping[str, Any], context: Optional[Any] = None) -> Dict[str, Any]:
    configure_logging(get_settings().log_level)
    try:
        service = get_show_checkout_service()
    except Exception as exc:
        status_code, body = error_body(exc)
        return _proxy_response(status_code, json.dumps(body, ensure_ascii=False))
    return handle_event(event, service)


__all__ = ["offer_uuid_from_event", "handle_event", "handler"]
