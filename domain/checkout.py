"""
Domain: Checkout access records.

A Checkout is created every time a visitor reaches the checkout page for an
offer. This service only creates records in the ACCESSED state; the other
lifecycle states are set by downstream processes.

Invariants:
- created_at and updated_at are UTC timestamps, passed explicitly.
- pixel_data is either None or a non-empty mapping. "No tracking data" is
  stored as an absent attribute, never as an empty map.
- A new record starts with zeroed engagement counters.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional
from uuid import uuid4

from .time import require_utc_timestamp


class CheckoutStatus(str, Enum):
    ACCESSED = "ACCESSED"
    ABANDONED_CART = "ABANDONED_CART"
    RECOVERED = "RECOVERED"
    SALE_FINALIZED = "SALE_FINALIZED"


@dataclass(frozen=True, slots=True)
class Checkout:
    """
    Immutable snapshot of a checkout-page visit.

    Captures:
    - What was viewed (offer_id, product_id, currency)
    - Who referred the visitor (affiliate_id)
    - Client device and geo data, UTM parameters, original URL
    - Ad-click identifiers (pixel_data)
    """

    uuid: str
    product_id: int
    status: CheckoutStatus
    currency: str
    created_at: datetime
    updated_at: datetime

    offer_id: Optional[int] = None
    affiliate_id: Optional[int] = None
    code: Optional[str] = None

    # Client
    user_agent: Optional[str] = None
    is_mobile: bool = False
    browser: Optional[str] = None
    browser_version: Optional[str] = None
    os: Optional[str] = None
    os_version: Optional[str] = None
    ip: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    lat: Optional[str] = None
    lon: Optional[str] = None

    # UTM
    src: Optional[str] = None
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    utm_term: Optional[str] = None
    utm_content: Optional[str] = None

    original_url: Optional[str] = None
    pixel_data: Optional[Mapping[str, Any]] = None

    email_sent_amount: int = 0
    sms_sent_amount: int = 0

    def __post_init__(self) -> None:
        require_utc_timestamp("created_at", self.created_at)
        require_utc_timestamp("updated_at", self.updated_at)
        if self.pixel_data is not None and len(self.pixel_data) == 0:
            raise ValueError("pixel_data must be None or a non-empty mapping")

    def is_accessed(self) -> bool:
        return self.status == CheckoutStatus.ACCESSED

    def is_abandoned_cart(self) -> bool:
        return self.status == CheckoutStatus.ABANDONED_CART

    def is_recovered(self) -> bool:
        return self.status == CheckoutStatus.RECOVERED

    def is_sale_finalized(self) -> bool:
        return self.status == CheckoutStatus.SALE_FINALIZED

    def has_pixel_data(self) -> bool:
        return bool(self.pixel_data)

    def pixel_value(self, key: str) -> Optional[Any]:
        if not self.pixel_data:
            return None
        return self.pixel_data.get(key)

    def touched(self, now: datetime) -> "Checkout":
        """Return a copy with updated_at moved to now."""

        require_utc_timestamp("now", now)
        return replace(self, updated_at=now)


def new_checkout(*, product_id: int, currency: str, now: datetime, **attributes: Any) -> Checkout:
    """
    Build a fresh ACCESSED checkout with a random UUID.

    attributes carries the optional denormalized fields (offer_id,
    affiliate_id, client/UTM fields, original_url, pixel_data).
    """

    return Checkout(
        uuid=str(uuid4()),
        product_id=product_id,
        status=CheckoutStatus.ACCESSED,
        currency=currency,
        created_at=now,
        updated_at=now,
        email_sent_amount=0,
        sms_sent_amount=0,
        **attributes,
    )


__all__ = ["CheckoutStatus", "Checkout", "new_checkout"]
