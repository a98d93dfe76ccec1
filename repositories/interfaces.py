"""
Repository contracts consumed by the checkout page service.

One Protocol per entity type. Each find operation returns the entity, or
None when it does not exist; storage failures raise. The service never
depends on a concrete backend: production wires the Supabase
implementations, tests wire in-memory fakes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol

from domain.affiliate import Affiliate, ProductAffiliateSettings
from domain.checkout import Checkout
from domain.checkout_config import CheckoutConfig, Review
from domain.offer import Offer, OrderBump, Plan
from domain.pixel import Pixel
from domain.product import Format, Product
from domain.seller import Company, User


class OffersRepository(Protocol):
    def find_by_uuid(self, uuid: str) -> Optional[Offer]: ...

    def find_by_id(self, offer_id: int) -> Optional[Offer]: ...

    def increment_checkout_count(self, uuid: str) -> None: ...


class ProductsRepository(Protocol):
    def find_by_id(self, product_id: int) -> Optional[Product]: ...


class UsersRepository(Protocol):
    def find_by_id(self, user_id: int) -> Optional[User]: ...


class CompaniesRepository(Protocol):
    def find_by_id(self, company_id: int) -> Optional[Company]: ...


class FormatsRepository(Protocol):
    def find_by_id(self, format_id: int) -> Optional[Format]: ...


class CheckoutConfigsRepository(Protocol):
    def find_by_id(self, checkout_config_id: int) -> Optional[CheckoutConfig]: ...


class AffiliatesRepository(Protocol):
    def find_by_uuid(self, uuid: str) -> Optional[Affiliate]: ...


class ProductAffiliateSettingsRepository(Protocol):
    def find_by_product_id(self, product_id: int) -> Optional[ProductAffiliateSettings]: ...


class CheckoutsRepository(Protocol):
    def create(self, checkout: Checkout) -> None: ...

    def find_by_uuid(self, uuid: str) -> Optional[Checkout]: ...

    def update(self, checkout: Checkout) -> None: ...


class OrderBumpsRepository(Protocol):
    def find_all_by_offer_id(self, offer_id: int) -> List[OrderBump]: ...


class ReviewsRepository(Protocol):
    def find_by_checkout_config_id(self, checkout_config_id: int) -> List[Review]: ...


class PixelsRepository(Protocol):
    def find_all_by_user_id_and_product_id(self, user_id: int, product_id: int) -> List[Pixel]: ...


class PlansRepository(Protocol):
    def find_by_offer_id(self, offer_id: int) -> List[Plan]: ...


class DiscountsRepository(Protocol):
    def has_any_for_product_id(self, product_id: int) -> bool: ...


class FileStorage(Protocol):
    def resolve(self, relative_path: str) -> str: ...


@dataclass(frozen=True, slots=True)
class CheckoutRepositories:
    """The full set of collaborators the checkout page service reads and writes."""

    offers: OffersRepository
    products: ProductsRepository
    users: UsersRepository
    companies: CompaniesRepository
    formats: FormatsRepository
    checkout_configs: CheckoutConfigsRepository
    affiliates: AffiliatesRepository
    product_affiliate_settings: ProductAffiliateSettingsRepository
    checkouts: CheckoutsRepository
    order_bumps: OrderBumpsRepository
    reviews: ReviewsRepository
    pixels: PixelsRepository
    plans: PlansRepository
    discounts: DiscountsRepository


__all__ = [
    "OffersRepository",
    "ProductsRepository",
    "UsersRepository",
    "CompaniesRepository",
    "FormatsRepository",
    "CheckoutConfigsRepository",
    "AffiliatesRepository",
    "ProductAffiliateSettingsRepository",
    "CheckoutsRepository",
    "OrderBumpsRepository",
    "ReviewsRepository",
    "PixelsRepository",
    "PlansRepository",
    "DiscountsRepository",
    "FileStorage",
    "CheckoutRepositories",
]
