"""
Domain: Products and their display format.

A REFUSED evaluation makes a product ineligible regardless of its status.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ProductStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class EvaluationStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REFUSED = "REFUSED"


@dataclass(frozen=True, slots=True)
class Product:
    """
    Product sold by a seller (User) through a Company.

    photo_url is a relative media path; seller_name is the display name used
    for the company block on the checkout page.
    """

    id: int
    uuid: str
    name: str
    user_id: int
    company_id: int
    format_id: int
    status: str
    evaluation_status: str = ""
    currency: str = "BRL"
    photo_url: str = ""
    seller_name: str = ""

    def is_checkout_eligible(self) -> bool:
        return self.status == ProductStatus.ACTIVE and self.evaluation_status != EvaluationStatus.REFUSED

    def affiliate_cookie_name(self) -> str:
        """Name of the cookie that remembers an affiliate for this product."""
        return f"aff.{self.uuid}"


@dataclass(frozen=True, slots=True)
class Format:
    id: int
    slug: str


__all__ = ["ProductStatus", "EvaluationStatus", "Product", "Format"]
