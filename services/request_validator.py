"""
Structural validation of the checkout page request.

Runs before any repository call and has no side effects. Every problem found
is reported at once in the ValidationError details map (field -> reason).
"""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import AnyUrl, IPvAnyAddress, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from domain.errors import ValidationError
from domain.offer import is_valid_uuid_text
from services.show_checkout_models import ShowCheckoutRequest

_URL_ADAPTER = TypeAdapter(AnyUrl)
_IP_ADAPTER = TypeAdapter(IPvAnyAddress)

# field name in the details map -> minimum length
_MIN_LENGTHS = {
    "client_info.browser": 1,
    "client_info.browser_version": 1,
    "client_info.os": 1,
    "client_info.os_version": 1,
    "client_info.country": 2,
    "client_info.state": 2,
    "client_info.city": 1,
    "utm.src": 1,
    "utm.source": 1,
    "utm.medium": 1,
    "utm.campaign": 1,
    "utm.term": 1,
    "utm.content": 1,
}


def _is_url(value: str) -> bool:
    try:
        _URL_ADAPTER.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def _is_ip(value: str) -> bool:
    try:
        _IP_ADAPTER.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def _optional_value(request: ShowCheckoutRequest, dotted: str) -> Optional[str]:
    group, name = dotted.split(".", 1)
    return getattr(getattr(request, group), name)


def validate_show_checkout_request(request: ShowCheckoutRequest) -> None:
    """
    Raise ValidationError if the request is structurally invalid.

    Checks:
    - offer_uuid present and in 8-4-4-4-12 hexadecimal form (any case)
    - original_url, when present, is an absolute URL
    - client_info.ip, when present, is an IPv4 or IPv6 literal
    - optional strings, when present, meet their minimum length
    """

    details: Dict[str, str] = {}

    if not request.offer_uuid:
        details["offer_uuid"] = "required"
    elif not is_valid_uuid_text(request.offer_uuid):
        details["offer_uuid"] = "must be a valid UUID"

    if request.original_url is not None and not _is_url(request.original_url):
        details["original_url"] = "must be a valid URL"

    if request.client_info.ip is not None and not _is_ip(request.client_info.ip):
        details["client_info.ip"] = "must be a valid IP address"

    for dotted, minimum in _MIN_LENGTHS.items():
        value = _optional_value(request, dotted)
        if value is not None and len(value) < minimum:
            details[dotted] = f"must be at least {minimum} characters"

    if details:
        raise ValidationError(details)


__all__ = ["validate_show_checkout_request"]
