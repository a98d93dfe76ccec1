"""
ShowCheckout service: builds the checkout page for an offer.

Pipeline:
1. Structural validation of the request (no repository calls before it passes)
2. Eligibility chain: offer -> product -> seller -> company -> format -> config
3. Affiliate attribution (query parameter over cookie, allow-list checked)
4. Tracking data extraction
5. Checkout recording (fatal on failure) + best-effort counter increment
6. Enrichment fan-out: order bumps, reviews, pixels, plans, discount flag
7. Response assembly

Every rejection in steps 2-3 raises DomainSoftError with the same public
message; only the internal reason (logged server-side) tells them apart.
Storage failures in steps 2-3 and checkout creation raise InternalError.
Enrichment failures are logged and downgraded to []/False.
Every storage call runs on a per-request worker pool and is bounded by the
request deadline (REQUEST_TIMEOUT_SECONDS).
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, List, Optional, TypeVar

from config import Settings
from domain.affiliate import ProductAffiliateSettings
from domain.checkout import Checkout, new_checkout
from domain.checkout_config import CheckoutConfig, Review
from domain.errors import CheckoutPageError, DomainSoftError, InternalError
from domain.offer import Offer, Plan
from domain.pixel import Pixel
from domain.product import Product
from domain.time import utc_now
from repositories.interfaces import CheckoutRepositories, FileStorage
from services.request_validator import validate_show_checkout_request
from services.response_assembler import (
    CheckoutSnapshot,
    assemble_show_checkout_response,
    build_order_bump,
)
from services.show_checkout_models import (
    ResponseOrderBump,
    ShowCheckoutRequest,
    ShowCheckoutResponse,
)
from services.tracking import extract_pixel_data, get_cookie

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Deadline:
    """Monotonic per-request time budget."""

    def __init__(self, seconds: float, monotonic: Callable[[], float] = time.monotonic) -> None:
        self._monotonic = monotonic
        self._expires_at = monotonic() + seconds

    def remaining(self) -> float:
        return max(self._expires_at - self._monotonic(), 0.0)

    def expired(self) -> bool:
        return self.remaining() <= 0.0


@dataclass(frozen=True, slots=True)
class RequestScope:
    """Deadline and worker pool shared by every storage call of one request."""
    deadline: Deadline
    executor: ThreadPoolExecutor


@dataclass(frozen=True, slots=True)
class AffiliateAttribution:
    """Result of a successful affiliate resolution."""
    affiliate_id: int
    user_id: int
    settings: ProductAffiliateSettings


@dataclass(frozen=True, slots=True)
class Enrichment:
    order_bumps: List[ResponseOrderBump]
    reviews: List[Review]
    pixels: List[Pixel]
    plans: List[Plan]
    has_discount: bool


class ShowCheckoutService:
    """
    Orchestrates the checkout page pipeline.

    Holds no per-request state; one instance serves concurrent requests.
    """

    def __init__(
        self,
        repositories: CheckoutRepositories,
        file_storage: FileStorage,
        settings: Settings,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repos = repositories
        self._file_storage = file_storage
        self._settings = settings
        self._clock = clock

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def execute(self, request: ShowCheckoutRequest) -> ShowCheckoutResponse:
        """
        Build the checkout page for request.offer_uuid and record the visit.

        Raises:
            ValidationError: the request is structurally invalid
            DomainSoftError: an entity is missing, inactive or unauthorized
            InternalError: storage failed or the request deadline expired
        """

        validate_show_checkout_request(request)

        scope = RequestScope(
            deadline=Deadline(self._settings.request_timeout_seconds),
            executor=ThreadPoolExecutor(
                max_workers=self._settings.enrichment_workers,
                thread_name_prefix="checkout-request",
            ),
        )
        try:
            return self._build(request, scope)
        finally:
            # Calls still running past the deadline are abandoned, not awaited.
            scope.executor.shutdown(wait=False, cancel_futures=True)

    def _build(self, request: ShowCheckoutRequest, scope: RequestScope) -> ShowCheckoutResponse:
        repos = self._repos

        offer = self._call(scope, "find offer", repos.offers.find_by_uuid, request.offer_uuid)
        if offer is None or not offer.is_checkout_eligible():
            raise DomainSoftError("offer not found or not eligible")

        product = self._call(scope, "find product", repos.products.find_by_id, offer.product_id)
        if product is None or not product.is_checkout_eligible():
            raise DomainSoftError("product not found or not eligible")

        seller = self._call(scope, "find seller", repos.users.find_by_id, product.user_id)
        if seller is None or not seller.can_sell():
            raise DomainSoftError("seller not found or blocked")

        company = self._call(scope, "find company", repos.companies.find_by_id, product.company_id)
        if company is None:
            raise DomainSoftError("company not found")

        product_format = self._call(scope, "find format", repos.formats.find_by_id, product.format_id)
        if product_format is None:
            raise DomainSoftError("product format not found")

        checkout_config = self._call(
            scope, "find checkout config", repos.checkout_configs.find_by_id, offer.checkout_config_id
        )
        if checkout_config is None:
            raise DomainSoftError("checkout config not found")

        attribution = self._resolve_affiliate(scope, request, offer, product)
        pixel_owner_id = attribution.user_id if attribution else product.user_id

        checkout = self._record_checkout(scope, request, offer, product, attribution)

        enrichment = self._gather_enrichment(scope, offer, product, checkout_config, pixel_owner_id)

        snapshot = CheckoutSnapshot(
            offer=offer,
            product=product,
            format=product_format,
            company=company,
            checkout_config=checkout_config,
            checkout=checkout,
            affiliate_settings=attribution.settings if attribution else None,
            order_bumps=enrichment.order_bumps,
            reviews=enrichment.reviews,
            pixels=enrichment.pixels,
            plans=enrichment.plans,
            has_discount=enrichment.has_discount,
        )
        return assemble_show_checkout_response(
            snapshot, self._file_storage, is_production=self._settings.is_production
        )

    # ------------------------------------------------------------------
    # Mandatory steps
    # ------------------------------------------------------------------

    def _call(self, scope: RequestScope, action: str, fn: Callable[..., T], *args: Any) -> T:
        """
        Run a mandatory repository call bounded by the request deadline.

        Storage failures and calls still running when the deadline expires
        become InternalError.
        """

        if scope.deadline.expired():
            raise InternalError(f"deadline expired before: {action}")

        future = scope.executor.submit(fn, *args)
        try:
            return future.result(timeout=scope.deadline.remaining())
        except CheckoutPageError:
            raise
        except FuturesTimeoutError as exc:
            future.cancel()
            raise InternalError(f"deadline expired during: {action}") from exc
        except Exception as exc:
            raise InternalError(f"failed to {action}: {exc}") from exc

    def _resolve_affiliate(
        self,
        scope: RequestScope,
        request: ShowCheckoutRequest,
        offer: Offer,
        product: Product,
    ) -> Optional[AffiliateAttribution]:
        """
        Resolve affiliate attribution.

        The aff query parameter wins over the aff.<product uuid> cookie. An
        unknown affiliate UUID (or a failing lookup) is skipped; a known
        affiliate that is blocked or not authorized for this offer rejects
        the whole request.
        """

        candidate = request.aff or get_cookie(product.affiliate_cookie_name(), request.cookie)
        if not candidate:
            return None

        try:
            affiliate = self._call(scope, "find affiliate", self._repos.affiliates.find_by_uuid, candidate)
        except InternalError as exc:
            logger.warning(
                "Affiliate lookup failed; continuing without attribution",
                extra={"affiliate_uuid": candidate, "offer_uuid": offer.uuid, "error": str(exc)},
            )
            return None

        if affiliate is None:
            return None

        affiliate_user = self._call(scope, "find affiliate user", self._repos.users.find_by_id, affiliate.user_id)
        if affiliate_user is None or not affiliate_user.can_promote():
            raise DomainSoftError("affiliate not found")

        settings = self._call(
            scope,
            "find product affiliate settings",
            self._repos.product_affiliate_settings.find_by_product_id,
            product.id,
        )
        if settings is None:
            raise DomainSoftError("affiliate settings not found")

        if not settings.authorizes(offer.uuid):
            raise DomainSoftError("affiliate not authorized")

        return AffiliateAttribution(affiliate_id=affiliate.id, user_id=affiliate.user_id, settings=settings)

    def _record_checkout(
        self,
        scope: RequestScope,
        request: ShowCheckoutRequest,
        offer: Offer,
        product: Product,
        attribution: Optional[AffiliateAttribution],
    ) -> Checkout:
        client = request.client_info
        utm = request.utm

        checkout = new_checkout(
            product_id=product.id,
            currency=product.currency,
            now=self._clock(),
            offer_id=offer.id,
            affiliate_id=attribution.affiliate_id if attribution else None,
            user_agent=client.user_agent,
            is_mobile=client.is_mobile,
            browser=client.browser,
            browser_version=client.browser_version,
            os=client.os,
            os_version=client.os_version,
            ip=client.ip,
            country=client.country,
            state=client.state,
            city=client.city,
            lat=client.lat,
            lon=client.lon,
            src=utm.src,
            utm_source=utm.source,
            utm_medium=utm.medium,
            utm_campaign=utm.campaign,
            utm_term=utm.term,
            utm_content=utm.content,
            original_url=request.original_url,
            pixel_data=extract_pixel_data(request),
        )

        self._call(scope, "create checkout", self._repos.checkouts.create, checkout)

        try:
            increment = scope.executor.submit(self._repos.offers.increment_checkout_count, offer.uuid)
            increment.result(timeout=scope.deadline.remaining())
        except Exception as exc:
            logger.warning(
                "Failed to increment checkout count",
                extra={"offer_uuid": offer.uuid, "checkout_uuid": checkout.uuid, "error": str(exc)},
            )

        return checkout

    # ------------------------------------------------------------------
    # Enrichment
    # ------------------------------------------------------------------

    def _gather_enrichment(
        self,
        scope: RequestScope,
        offer: Offer,
        product: Product,
        checkout_config: CheckoutConfig,
        pixel_owner_id: int,
    ) -> Enrichment:
        """
        Fetch the independent enrichment data concurrently.

        Each branch is isolated: an exception or the request deadline turns
        that branch into its empty value. Results are joined in a fixed order.
        """

        repos = self._repos
        order_bumps = scope.executor.submit(self._build_order_bumps, offer)
        reviews = scope.executor.submit(repos.reviews.find_by_checkout_config_id, checkout_config.id)
        pixels = scope.executor.submit(repos.pixels.find_all_by_user_id_and_product_id, pixel_owner_id, product.id)
        plans = scope.executor.submit(repos.plans.find_by_offer_id, offer.id)
        has_discount = scope.executor.submit(repos.discounts.has_any_for_product_id, product.id)

        return Enrichment(
            order_bumps=list(self._join("order_bumps", order_bumps, scope.deadline, offer, [])),
            reviews=list(self._join("reviews", reviews, scope.deadline, offer, [])),
            pixels=list(self._join("pixels", pixels, scope.deadline, offer, [])),
            plans=list(self._join("plans", plans, scope.deadline, offer, [])),
            has_discount=bool(self._join("discounts", has_discount, scope.deadline, offer, False)),
        )

    def _join(self, branch: str, future: "Future[Any]", deadline: Deadline, offer: Offer, fallback: Any) -> Any:
        try:
            return future.result(timeout=deadline.remaining())
        except Exception as exc:
            logger.warning(
                f"Checkout enrichment '{branch}' failed; using empty result",
                extra={"branch": branch, "offer_uuid": offer.uuid, "error": repr(exc)},
            )
            return fallback

    def _build_order_bumps(self, offer: Offer) -> List[ResponseOrderBump]:
        """
        Build the order bumps of an offer in repository order.

        A bump whose target offer or product is missing or ineligible, or
        whose format does not resolve, is dropped.
        """

        if not offer.order_bumps_enabled:
            return []

        repos = self._repos
        result: List[ResponseOrderBump] = []

        for bump in repos.order_bumps.find_all_by_offer_id(offer.id):
            try:
                offered_offer = repos.offers.find_by_id(bump.offered_offer_id)
                if offered_offer is None or not offered_offer.is_checkout_eligible():
                    continue

                bump_product = repos.products.find_by_id(offered_offer.product_id)
                if bump_product is None or not bump_product.is_checkout_eligible():
                    continue

                bump_format = repos.formats.find_by_id(bump_product.format_id)
                if bump_format is None:
                    continue
            except Exception as exc:
                logger.warning(
                    "Skipping order bump after lookup failure",
                    extra={"order_bump_id": bump.id, "offer_uuid": offer.uuid, "error": str(exc)},
                )
                continue

            result.append(build_order_bump(bump, offered_offer, bump_product, bump_format, self._file_storage))

        return result


__all__ = ["Deadline", "RequestScope", "AffiliateAttribution", "ShowCheckoutService"]
