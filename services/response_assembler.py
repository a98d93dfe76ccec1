"""
Response assembler for the checkout page.

Pure mapping from the data resolved by ShowCheckoutService to the
ShowCheckoutResponse view-model. No repository calls happen here; media paths
are resolved through the injected FileStorage.

Presentation rules:
- Money is stored in minor units and exposed in major units (cents / 100).
- Credit card requires a company merchant id in production.
- Bank slip, Picpay, Apple Pay and Google Pay require a one-time offer.
- Nupay is not offered by the payment processor yet and is always disabled.
- Empty optional strings are omitted from the response.
- The company block needs show_company_info, a legal-person company and a
  seller display name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from domain.affiliate import ProductAffiliateSettings
from domain.checkout import Checkout
from domain.checkout_config import CheckoutConfig, Review
from domain.offer import Offer, OrderBump, Plan
from domain.pixel import Pixel
from domain.product import Format, Product
from domain.seller import Company
from domain.time import to_rfc3339
from repositories.interfaces import FileStorage
from services.show_checkout_models import (
    CheckoutPageConfig,
    ResponseAffiliateSettings,
    ResponseCompany,
    ResponseOrderBump,
    ResponsePixel,
    ResponsePlan,
    ResponseProduct,
    ResponseReview,
    ShowCheckoutResponse,
)


@dataclass(frozen=True, slots=True)
class CheckoutSnapshot:
    """
    Everything the pipeline resolved for one request.

    order_bumps are already built (their targets need repository lookups);
    reviews, pixels and plans are raw domain records.
    """
    offer: Offer
    product: Product
    format: Format
    company: Company
    checkout_config: CheckoutConfig
    checkout: Checkout
    affiliate_settings: Optional[ProductAffiliateSettings] = None
    order_bumps: Sequence[ResponseOrderBump] = field(default_factory=tuple)
    reviews: Sequence[Review] = field(default_factory=tuple)
    pixels: Sequence[Pixel] = field(default_factory=tuple)
    plans: Sequence[Plan] = field(default_factory=tuple)
    has_discount: bool = False


def to_major_units(minor: int) -> float:
    return minor / 100


def _non_empty(value: str) -> Optional[str]:
    return value or None


def _resolve_media(file_storage: FileStorage, relative_path: str) -> Optional[str]:
    if not relative_path:
        return None
    return file_storage.resolve(relative_path)


def filter_active_reviews(reviews: Iterable[Review]) -> List[Review]:
    return [review for review in reviews if review.is_active()]


def filter_enabled_pixels(pixels: Iterable[Pixel]) -> List[Pixel]:
    return [pixel for pixel in pixels if pixel.status]


def build_order_bump(
    bump: OrderBump,
    offered_offer: Offer,
    product: Product,
    product_format: Format,
    file_storage: FileStorage,
) -> ResponseOrderBump:
    return ResponseOrderBump(
        uuid=offered_offer.uuid,
        product_name=product.name,
        name=bump.name,
        tag=bump.tag,
        description=bump.description,
        price=to_major_units(offered_offer.price),
        photo=_resolve_media(file_storage, product.photo_url),
        format=product_format.slug,
        order=bump.order,
    )


def build_review(review: Review, file_storage: FileStorage) -> ResponseReview:
    return ResponseReview(
        name=review.name,
        description=_non_empty(review.description),
        photo=_resolve_media(file_storage, review.photo_url),
        stars=review.stars,
    )


def build_pixel(pixel: Pixel) -> ResponsePixel:
    return ResponsePixel(
        uuid=pixel.uuid,
        events=pixel.events,
        platform=pixel.platform,
        code=pixel.code,
        is_api=pixel.is_api,
        enable_bankslip_purchase_percentage=pixel.enable_bankslip_purchase_percentage,
        enable_pix_purchase_percentage=pixel.enable_pix_purchase_percentage,
        bank_slip_purchase_percentage=pixel.bank_slip_purchase_percentage,
        pix_purchase_percentage=pixel.pix_purchase_percentage,
        google_ads_conversion_label=_non_empty(pixel.google_ads_conversion_label),
    )


def build_plan(plan: Plan) -> ResponsePlan:
    return ResponsePlan(
        uuid=plan.uuid,
        title=plan.title,
        tag=plan.display_tag(),
        price=to_major_units(plan.price),
        promotional_price=to_major_units(plan.promotional_price),
        first_charge_price_enabled=plan.first_charge_price_enabled,
        first_charge_price=to_major_units(plan.first_charge_price),
        charge_frequency=plan.charge_frequency,
        is_default=plan.is_default,
    )


def _build_company(snapshot: CheckoutSnapshot) -> Optional[ResponseCompany]:
    if (
        snapshot.checkout_config.show_company_info
        and snapshot.company.is_legal_person()
        and snapshot.product.seller_name
    ):
        return ResponseCompany(fantasy_name=snapshot.product.seller_name)
    return None


def _build_affiliate_settings(
    settings: Optional[ProductAffiliateSettings],
) -> Optional[ResponseAffiliateSettings]:
    if settings is None:
        return None
    return ResponseAffiliateSettings(
        commission_preference=settings.commission_preference,
        cookie_lifetime=settings.cookie_lifetime,
    )


def _resolve_favicon(config: CheckoutConfig, logo: Optional[str], file_storage: FileStorage) -> Optional[str]:
    """
    FILE favicons resolve their own path; any other favicon type reuses the
    logo when the logo is enabled and present.
    """

    if not config.favicon_enabled:
        return None
    if config.favicon_is_file():
        return _resolve_media(file_storage, config.favicon_url)
    if config.logo_enabled and logo is not None:
        return logo
    return None


def build_page_config(
    snapshot: CheckoutSnapshot,
    file_storage: FileStorage,
    *,
    is_production: bool,
) -> CheckoutPageConfig:
    config = snapshot.checkout_config
    one_time = snapshot.offer.is_one_time()

    logo = _resolve_media(file_storage, config.logo_url)
    banner = _resolve_media(file_storage, config.banner_url)

    credit_card_enabled = config.credit_card_enabled and (
        not is_production or snapshot.company.payment_merchant_id != ""
    )

    return CheckoutPageConfig(
        checkout_uuid=snapshot.checkout.uuid,
        checkout_date=to_rfc3339(snapshot.checkout.created_at),
        has_discount=snapshot.has_discount,
        favicon=_resolve_favicon(config, logo, file_storage),
        logo_enabled=config.logo_enabled,
        logo=logo,
        logo_position=config.logo_position,
        banner_enabled=config.banner_enabled,
        banner=banner,
        background_type=config.background_type,
        background_color=config.background_color,
        color_primary=config.color_primary,
        color_secondary=config.color_secondary,
        color_buy_button=config.color_buy_button,
        ads_text_enabled=config.ads_text_enabled,
        ads_text=_non_empty(config.ads_text),
        cpf_enabled=config.cpf_enabled,
        cnpj_enabled=config.cnpj_enabled,
        bank_slip_enabled=config.bank_slip_enabled and one_time,
        credit_card_enabled=credit_card_enabled,
        pix_enabled=config.pix_enabled,
        nupay_enabled=False,
        picpay_enabled=config.picpay_enabled and one_time,
        apple_pay_enabled=config.apple_pay_enabled and one_time,
        google_pay_enabled=config.google_pay_enabled and one_time,
        automatic_discount_bank_slip=config.automatic_discount_bank_slip,
        automatic_discount_credit_card=config.automatic_discount_credit_card,
        automatic_discount_pix=config.automatic_discount_pix,
        automatic_discount_nupay=config.automatic_discount_nupay,
        automatic_discount_picpay=config.automatic_discount_picpay,
        automatic_discount_apple_pay=config.automatic_discount_apple_pay,
        automatic_discount_google_pay=config.automatic_discount_google_pay,
        installments_limit=config.installments_limit,
        preselected_installment=config.preselected_installment,
        interest_free_installments=config.interest_free_installments,
        show_website_address=config.show_website_address,
        show_company_info=config.show_company_info,
        address_required=config.address_required,
        whatsapp_enabled=config.whatsapp_enabled,
        support_phone=_non_empty(config.support_phone),
        support_phone_verified=config.support_phone_verified,
        countdown_enabled=config.countdown_enabled,
        countdown_time=config.countdown_time,
        countdown_finish_message=_non_empty(config.countdown_finish_message),
        notifications_enabled=config.notifications_enabled,
        social_proof_enabled=config.social_proof_enabled,
        reviews_enabled=config.reviews_enabled,
    )


def assemble_show_checkout_response(
    snapshot: CheckoutSnapshot,
    file_storage: FileStorage,
    *,
    is_production: bool,
) -> ShowCheckoutResponse:
    """
    Map a resolved snapshot to the response view-model.

    Deterministic: the same snapshot always yields an equal response. The
    only timestamp used is the checkout's captured created_at.
    """

    offer = snapshot.offer
    product = snapshot.product

    plans = [build_plan(plan) for plan in snapshot.plans]

    return ShowCheckoutResponse(
        billing_type=offer.billing_type,
        is_free=offer.is_free,
        back_redirect_url=offer.back_redirect(),
        config=build_page_config(snapshot, file_storage, is_production=is_production),
        order_bumps=list(snapshot.order_bumps),
        product=ResponseProduct(
            uuid=product.uuid,
            name=product.name,
            price=to_major_units(offer.price),
            photo=_resolve_media(file_storage, product.photo_url),
            format=snapshot.format.slug,
        ),
        reviews=[build_review(review, file_storage) for review in filter_active_reviews(snapshot.reviews)],
        pixels=[build_pixel(pixel) for pixel in filter_enabled_pixels(snapshot.pixels)],
        company=_build_company(snapshot),
        affiliate_settings=_build_affiliate_settings(snapshot.affiliate_settings),
        plans=plans or None,
        google_pay_merchant_id=_non_empty(snapshot.checkout_config.google_pay_merchant_id),
    )


__all__ = [
    "CheckoutSnapshot",
    "to_major_units",
    "filter_active_reviews",
    "filter_enabled_pixels",
    "build_order_bump",
    "build_review",
    "build_pixel",
    "build_plan",
    "build_page_config",
    "assemble_show_checkout_response",
]
