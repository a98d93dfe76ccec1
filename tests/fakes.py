"""
In-memory fakes of the repository Protocols.

Every fake records its calls in a shared log, can be told to fail with
`fail_with` and can be slowed down with `delay_seconds`, which makes storage
failures and slow storage easy to simulate per repository.
"""

from __future__ import annotations

import time
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from domain.affiliate import Affiliate, ProductAffiliateSettings
from domain.checkout import Checkout
from domain.checkout_config import CheckoutConfig, Review
from domain.offer import Offer, OrderBump, Plan
from domain.pixel import Pixel
from domain.product import Format, Product
from domain.seller import Company, User
from repositories.interfaces import CheckoutRepositories

FIXED_NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

OFFER_UUID = "5f0c3a52-7d1e-4c1b-9a57-0b6f1f3d2e10"
PRODUCT_UUID = "0e7c1c7a-3b2f-4a55-8d7e-9f5b2d6c4a11"
AFFILIATE_UUID = "a1a1a1a1-0000-4000-8000-000000000001"
OTHER_AFFILIATE_UUID = "b2b2b2b2-0000-4000-8000-000000000002"

CallLog = List[Tuple[str, str, Tuple[Any, ...]]]


class _FakeRepository:
    def __init__(self, calls: CallLog) -> None:
        self.calls = calls
        self.fail_with: Optional[Exception] = None
        self.delay_seconds: float = 0.0

    def _record(self, operation: str, *args: Any) -> None:
        self.calls.append((type(self).__name__, operation, args))
        if self.delay_seconds:
            time.sleep(self.delay_seconds)
        if self.fail_with is not None:
            raise self.fail_with


class _FakeById(_FakeRepository):
    def __init__(self, calls: CallLog) -> None:
        super().__init__(calls)
        self.rows: Dict[int, Any] = {}

    def add(self, entity: Any) -> Any:
        self.rows[entity.id] = entity
        return entity

    def find_by_id(self, entity_id: int) -> Optional[Any]:
        self._record("find_by_id", entity_id)
        return self.rows.get(entity_id)


class FakeOffers(_FakeById):
    def __init__(self, calls: CallLog) -> None:
        super().__init__(calls)
        self.increment_fail_with: Optional[Exception] = None

    def find_by_uuid(self, uuid: str) -> Optional[Offer]:
        self._record("find_by_uuid", uuid)
        for offer in self.rows.values():
            if offer.uuid == uuid:
                return offer
        return None

    def increment_checkout_count(self, uuid: str) -> None:
        self.calls.append((type(self).__name__, "increment_checkout_count", (uuid,)))
        if self.increment_fail_with is not None:
            raise self.increment_fail_with
        for offer_id, offer in self.rows.items():
            if offer.uuid == uuid:
                self.rows[offer_id] = replace(offer, checkout_count=offer.checkout_count + 1)


class FakeProducts(_FakeById):
    pass


class FakeUsers(_FakeById):
    pass


class FakeCompanies(_FakeById):
    pass


class FakeFormats(_FakeById):
    pass


class FakeCheckoutConfigs(_FakeById):
    pass


class FakeAffiliates(_FakeRepository):
    def __init__(self, calls: CallLog) -> None:
        super().__init__(calls)
        self.rows: Dict[str, Affiliate] = {}

    def add(self, affiliate: Affiliate) -> Affiliate:
        self.rows[affiliate.uuid] = affiliate
        return affiliate

    def find_by_uuid(self, uuid: str) -> Optional[Affiliate]:
        self._record("find_by_uuid", uuid)
        return self.rows.get(uuid)


class FakeProductAffiliateSettings(_FakeRepository):
    def __init__(self, calls: CallLog) -> None:
        super().__init__(calls)
        self.rows: Dict[int, ProductAffiliateSettings] = {}

    def add(self, settings: ProductAffiliateSettings) -> ProductAffiliateSettings:
        self.rows[settings.product_id] = settings
        return settings

    def find_by_product_id(self, product_id: int) -> Optional[ProductAffiliateSettings]:
        self._record("find_by_product_id", product_id)
        return self.rows.get(product_id)


class FakeCheckouts(_FakeRepository):
    def __init__(self, calls: CallLog) -> None:
        super().__init__(calls)
        self.rows: Dict[str, Checkout] = {}

    def create(self, checkout: Checkout) -> None:
        self._record("create", checkout.uuid)
        self.rows[checkout.uuid] = checkout

    def find_by_uuid(self, uuid: str) -> Optional[Checkout]:
        self._record("find_by_uuid", uuid)
        return self.rows.get(uuid)

    def update(self, checkout: Checkout) -> None:
        self._record("update", checkout.uuid)
        self.rows[checkout.uuid] = checkout

    def only(self) -> Checkout:
        assert len(self.rows) == 1, f"expected one checkout, found {len(self.rows)}"
        return next(iter(self.rows.values()))


class FakeOrderBumps(_FakeRepository):
    def __init__(self, calls: CallLog) -> None:
        super().__init__(calls)
        self.rows: List[OrderBump] = []

    def find_all_by_offer_id(self, offer_id: int) -> List[OrderBump]:
        self._record("find_all_by_offer_id", offer_id)
        return [bump for bump in self.rows if bump.offer_id == offer_id]


class FakeReviews(_FakeRepository):
    def __init__(self, calls: CallLog) -> None:
        super().__init__(calls)
        self.rows: List[Review] = []

    def find_by_checkout_config_id(self, checkout_config_id: int) -> List[Review]:
        self._record("find_by_checkout_config_id", checkout_config_id)
        return [review for review in self.rows if review.checkout_config_id == checkout_config_id]


class FakePixels(_FakeRepository):
    def __init__(self, calls: CallLog) -> None:
        super().__init__(calls)
        self.rows: Dict[Tuple[int, int], List[Pixel]] = {}

    def add(self, user_id: int, product_id: int, pixel: Pixel) -> Pixel:
        self.rows.setdefault((user_id, product_id), []).append(pixel)
        return pixel

    def find_all_by_user_id_and_product_id(self, user_id: int, product_id: int) -> List[Pixel]:
        self._record("find_all_by_user_id_and_product_id", user_id, product_id)
        return list(self.rows.get((user_id, product_id), []))


class FakePlans(_FakeRepository):
    def __init__(self, calls: CallLog) -> None:
        super().__init__(calls)
        self.rows: Dict[int, List[Plan]] = {}

    def find_by_offer_id(self, offer_id: int) -> List[Plan]:
        self._record("find_by_offer_id", offer_id)
        return list(self.rows.get(offer_id, []))


class FakeDiscounts(_FakeRepository):
    def __init__(self, calls: CallLog) -> None:
        super().__init__(calls)
        self.product_ids: set = set()

    def has_any_for_product_id(self, product_id: int) -> bool:
        self._record("has_any_for_product_id", product_id)
        return product_id in self.product_ids


class Catalog:
    """All fakes sharing one call log."""

    def __init__(self) -> None:
        self.calls: CallLog = []
        self.offers = FakeOffers(self.calls)
        self.products = FakeProducts(self.calls)
        self.users = FakeUsers(self.calls)
        self.companies = FakeCompanies(self.calls)
        self.formats = FakeFormats(self.calls)
        self.checkout_configs = FakeCheckoutConfigs(self.calls)
        self.affiliates = FakeAffiliates(self.calls)
        self.product_affiliate_settings = FakeProductAffiliateSettings(self.calls)
        self.checkouts = FakeCheckouts(self.calls)
        self.order_bumps = FakeOrderBumps(self.calls)
        self.reviews = FakeReviews(self.calls)
        self.pixels = FakePixels(self.calls)
        self.plans = FakePlans(self.calls)
        self.discounts = FakeDiscounts(self.calls)

    def repositories(self) -> CheckoutRepositories:
        return CheckoutRepositories(
            offers=self.offers,
            products=self.products,
            users=self.users,
            companies=self.companies,
            formats=self.formats,
            checkout_configs=self.checkout_configs,
            affiliates=self.affiliates,
            product_affiliate_settings=self.product_affiliate_settings,
            checkouts=self.checkouts,
            order_bumps=self.order_bumps,
            reviews=self.reviews,
            pixels=self.pixels,
            plans=self.plans,
            discounts=self.discounts,
        )

    # Shortcuts for the seeded chain
    @property
    def offer(self) -> Offer:
        return self.offers.rows[1]

    @property
    def product(self) -> Product:
        return self.products.rows[10]

    def update_offer(self, **changes: Any) -> Offer:
        return self.offers.add(replace(self.offer, **changes))

    def update_product(self, **changes: Any) -> Product:
        return self.products.add(replace(self.product, **changes))

    def update_seller(self, **changes: Any) -> User:
        return self.users.add(replace(self.users.rows[20], **changes))

    def update_company(self, **changes: Any) -> Company:
        return self.companies.add(replace(self.companies.rows[30], **changes))

    def update_config(self, **changes: Any) -> CheckoutConfig:
        return self.checkout_configs.add(replace(self.checkout_configs.rows[100], **changes))

    def add_affiliate(
        self,
        affiliate_id: int,
        uuid: str,
        user_id: int,
        *,
        user_status: str = "ACTIVE",
        block_checkout: str = "ACTIVE",
    ) -> Affiliate:
        self.users.add(User(id=user_id, uuid=f"user-{user_id}", status=user_status, block_checkout=block_checkout))
        return self.affiliates.add(Affiliate(id=affiliate_id, uuid=uuid, user_id=user_id))

    def authorize_affiliates(self, *offer_uuids: str, commission_preference: str = "LAST_CLICK", cookie_lifetime: int = 30) -> None:
        self.product_affiliate_settings.add(
            ProductAffiliateSettings(
                id=1,
                product_id=10,
                commission_preference=commission_preference,
                cookie_lifetime=cookie_lifetime,
                last_offers=tuple(offer_uuids),
            )
        )

    def add_bump_target(
        self,
        offer_id: int,
        product_id: int,
        *,
        offer_status: str = "ACTIVE",
        product_status: str = "ACTIVE",
        evaluation_status: str = "APPROVED",
        price: int = 1990,
        format_id: int = 40,
    ) -> Offer:
        self.products.add(
            Product(
                id=product_id,
                uuid=f"00000000-0000-4000-8000-{product_id:012d}",
                name=f"Bump product {product_id}",
                user_id=20,
                company_id=30,
                format_id=format_id,
                status=product_status,
                evaluation_status=evaluation_status,
                photo_url=f"products/{product_id}.png",
            )
        )
        return self.offers.add(
            Offer(
                id=offer_id,
                uuid=f"00000000-0000-4000-9000-{offer_id:012d}",
                product_id=product_id,
                checkout_config_id=100,
                status=offer_status,
                price=price,
                billing_type="ONE_TIME",
            )
        )

    @classmethod
    def seeded(cls) -> "Catalog":
        catalog = cls()
        catalog.offers.add(
            Offer(
                id=1,
                uuid=OFFER_UUID,
                product_id=10,
                checkout_config_id=100,
                status="ACTIVE",
                price=5000,
                billing_type="ONE_TIME",
            )
        )
        catalog.products.add(
            Product(
                id=10,
                uuid=PRODUCT_UUID,
                name="Curso de Fotografia",
                user_id=20,
                company_id=30,
                format_id=40,
                status="ACTIVE",
                evaluation_status="APPROVED",
                currency="BRL",
                photo_url="products/photo.png",
                seller_name="Foto Cursos Ltda",
            )
        )
        catalog.users.add(User(id=20, uuid="seller-20", status="ACTIVE", block_checkout=""))
        catalog.companies.add(Company(id=30, type="LEGAL_PERSON", payment_merchant_id=""))
        catalog.formats.add(Format(id=40, slug="course"))
        catalog.checkout_configs.add(
            CheckoutConfig(id=100, uuid="config-100", pix_enabled=True, credit_card_enabled=True)
        )
        return catalog

    def operations(self) -> List[str]:
        return [operation for _, operation, _ in self.calls]


__all__ = [
    "FIXED_NOW",
    "OFFER_UUID",
    "PRODUCT_UUID",
    "AFFILIATE_UUID",
    "OTHER_AFFILIATE_UUID",
    "Catalog",
]
