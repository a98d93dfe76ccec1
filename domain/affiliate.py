"""
Domain: Affiliates and per-product affiliate terms.

An affiliate attribution is valid only if the requested offer's UUID appears
in the product's LastOffers allow-list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Affiliate:
    id: int
    uuid: str
    user_id: int


@dataclass(frozen=True, slots=True)
class ProductAffiliateSettings:
    """
    Affiliate terms for a product.

    cookie_lifetime is expressed in days. last_offers holds the offer UUIDs
    affiliates are authorized to promote.
    """

    id: int
    product_id: int
    commission_preference: str = ""
    cookie_lifetime: int = 0
    last_offers: Tuple[str, ...] = field(default_factory=tuple)

    def authorizes(self, offer_uuid: str) -> bool:
        return offer_uuid in self.last_offers


__all__ = ["Affiliate", "ProductAffiliateSettings"]
