"""
Domain: Offers and the read-only data scoped to an offer.

An Offer is a purchasable configuration (price, billing type) of a Product.
Money is always stored as integer minor units (cents).

Rules implemented here:
- Only ACTIVE, non-temporary offers are checkout-eligible.
- The back-redirect URL is exposed only when enabled and non-empty.
- A plan tag equal to the "Nenhum" sentinel means "no tag".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from uuid import UUID


class OfferStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class BillingType(str, Enum):
    ONE_TIME = "ONE_TIME"
    RECURRING = "RECURRING"


NO_TAG_SENTINEL = "Nenhum"


@dataclass(frozen=True, slots=True)
class Offer:
    """
    Purchasable configuration of a Product.

    price is in minor currency units; checkout_count is maintained by the
    repository (atomic increment), never by the pipeline.
    """

    id: int
    uuid: str
    product_id: int
    checkout_config_id: int
    status: str
    price: int
    billing_type: str
    is_temporary: bool = False
    is_free: bool = False
    back_redirect_url: str = ""
    back_redirect_url_enabled: bool = False
    order_bumps_enabled: bool = False
    checkout_count: int = 0

    def is_checkout_eligible(self) -> bool:
        """Only active, non-temporary offers may be shown on a checkout page."""
        return self.status == OfferStatus.ACTIVE and not self.is_temporary

    def is_one_time(self) -> bool:
        return self.billing_type == BillingType.ONE_TIME

    def back_redirect(self) -> Optional[str]:
        if self.back_redirect_url_enabled and self.back_redirect_url:
            return self.back_redirect_url
        return None


@dataclass(frozen=True, slots=True)
class OrderBump:
    """Upsell presented alongside an offer; points at another offer."""

    id: int
    offer_id: int
    offered_offer_id: int
    name: str
    tag: str = ""
    description: str = ""
    order: int = 0


@dataclass(frozen=True, slots=True)
class Plan:
    """Subscription plan attached to an offer. Money fields are minor units."""

    id: int
    uuid: str
    title: str
    price: int
    tag: str = ""
    promotional_price: int = 0
    first_charge_price_enabled: bool = False
    first_charge_price: int = 0
    charge_frequency: str = ""
    is_default: bool = False

    def display_tag(self) -> Optional[str]:
        if self.tag and self.tag != NO_TAG_SENTINEL:
            return self.tag
        return None


def is_valid_uuid_text(value: str) -> bool:
    """
    True if value is an 8-4-4-4-12 hexadecimal UUID (case-insensitive).

    uuid.UUID also accepts braces, urn prefixes and unhyphenated forms, so the
    canonical hyphenated spelling is checked explicitly.
    """

    if not isinstance(value, str) or len(value) != 36:
        return False
    try:
        parsed = UUID(value)
    except ValueError:
        return False
    return str(parsed) == value.lower()


__all__ = [
    "OfferStatus",
    "BillingType",
    "NO_TAG_SENTINEL",
    "Offer",
    "OrderBump",
    "Plan",
    "is_valid_uuid_text",
]
