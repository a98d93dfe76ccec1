"""
Tracking data extraction.

Ad-click identifiers come from the request first and fall back to the
cookies the ad platforms set on the storefront domain:

    key        request field   cookie
    fbclid     fbclid          _fbc
    gclid      gclid           _gcl_au
    ttclid     ttclid          ttclid
    fbp        -               _fbp
    ttp        -               _ttp
    click_id   click_id        -

No populated key means "no pixel data" (None), never an empty dict.
"""

from __future__ import annotations

from typing import Dict, Optional

from services.show_checkout_models import ShowCheckoutRequest

# (pixel key, request attribute or None, cookie name or None)
_PIXEL_SOURCES = (
    ("fbclid", "fbclid", "_fbc"),
    ("gclid", "gclid", "_gcl_au"),
    ("ttclid", "ttclid", "ttclid"),
    ("fbp", None, "_fbp"),
    ("ttp", None, "_ttp"),
    ("click_id", "click_id", None),
)


def get_cookie(name: str, header: Optional[str]) -> Optional[str]:
    """
    Return the value of cookie `name` from a raw Cookie header.

    Segments are split on ';' and trimmed; the first segment starting with
    exactly "name=" and carrying a non-empty value wins.
    """

    if not header:
        return None

    prefix = f"{name}="
    for segment in header.split(";"):
        segment = segment.strip()
        if segment.startswith(prefix):
            value = segment[len(prefix):]
            if value:
                return value
    return None


def extract_pixel_data(request: ShowCheckoutRequest) -> Optional[Dict[str, str]]:
    pixel_data: Dict[str, str] = {}

    for key, attribute, cookie_name in _PIXEL_SOURCES:
        value = getattr(request, attribute) if attribute else None
        if not value and cookie_name:
            value = get_cookie(cookie_name, request.cookie)
        if value:
            pixel_data[key] = value

    return pixel_data or None


__all__ = ["get_cookie", "extract_pixel_data"]
