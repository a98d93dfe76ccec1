"""
Input normalizer.

Turns raw request parameters from any entrypoint (FastAPI route, API Gateway
proxy event) into a canonical ShowCheckoutRequest. Query keys follow the
storefront's naming (camelCase for client fields, snake_case for UTM).

Rules:
- Empty query values are treated as absent.
- isMobile is true only for the literal string "true".
- Header names are matched case-insensitively.
- The User-Agent header wins over the userAgent query parameter.
"""

from __future__ import annotations

import string
from typing import Mapping, Optional

from services.show_checkout_models import ClientInfo, ShowCheckoutRequest, UTMInfo

_HEX_DIGITS = frozenset(string.hexdigits)


def _param(query: Mapping[str, str], key: str) -> Optional[str]:
    value = query.get(key)
    if value is None or value == "":
        return None
    return value


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted and value:
            return value
    return None


def normalize_checkout_request(
    offer_uuid: str,
    query: Optional[Mapping[str, str]] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> ShowCheckoutRequest:
    """
    Build the canonical request from a path UUID, query parameters and headers.

    Example:
        request = normalize_checkout_request(
            "5f0c3a52-7d1e-4c1b-9a57-0b6f1f3d2e10",
            {"aff": "...", "isMobile": "true", "utm_source": "facebook"},
            {"Cookie": "_fbc=fb.1.123; _fbp=fb.1.456"},
        )
    """

    query = query or {}
    headers = headers or {}

    client_info = ClientInfo(
        ip=_param(query, "ip"),
        user_agent=_header(headers, "User-Agent") or _param(query, "userAgent"),
        is_mobile=query.get("isMobile") == "true",
        browser=_param(query, "browser"),
        browser_version=_param(query, "browserVersion"),
        os=_param(query, "os"),
        os_version=_param(query, "osVersion"),
        country=_param(query, "country"),
        state=_param(query, "state"),
        city=_param(query, "city"),
        lat=_param(query, "lat"),
        lon=_param(query, "lon"),
    )

    utm = UTMInfo(
        src=_param(query, "src"),
        source=_param(query, "utm_source"),
        medium=_param(query, "utm_medium"),
        campaign=_param(query, "utm_campaign"),
        term=_param(query, "utm_term"),
        content=_param(query, "utm_content"),
    )

    return ShowCheckoutRequest(
        offer_uuid=offer_uuid or "",
        aff=_param(query, "aff"),
        cookie=_header(headers, "Cookie"),
        client_info=client_info,
        utm=utm,
        original_url=_param(query, "originalUrl"),
        fbclid=_param(query, "fbclid"),
        gclid=_param(query, "gclid"),
        ttclid=_param(query, "ttclid"),
        click_id=_param(query, "clickId"),
    )


def _is_hyphenated_uuid(part: str) -> bool:
    if len(part) != 36:
        return False
    for index, char in enumerate(part):
        if index in (8, 13, 18, 23):
            if char != "-":
                return False
        elif char not in _HEX_DIGITS:
            return False
    return True


def extract_offer_uuid_from_path(path: Optional[str]) -> str:
    """
    Recover an offer UUID from a proxy path such as "/checkout/<uuid>".

    The first segment in hyphenated 8-4-4-4-12 form wins; a 32-character hex
    segment is re-hyphenated. Returns "" when no segment matches.
    """

    if not path:
        return ""

    for part in path.strip("/").split("/"):
        if _is_hyphenated_uuid(part):
            return part
        if len(part) == 32 and all(char in _HEX_DIGITS for char in part):
            return f"{part[:8]}-{part[8:12]}-{part[12:16]}-{part[16:20]}-{part[20:]}"
    return ""


__all__ = ["normalize_checkout_request", "extract_offer_uuid_from_path"]
