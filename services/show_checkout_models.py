"""
Request and response shapes for the checkout page.

The request is a plain frozen dataclass built by the normalizer from any
entrypoint. The response is a tree of pydantic models; absent optional fields
are None and are dropped on serialization (exclude_none).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import BaseModel, Field


# ============================================================================
# Request
# ============================================================================

@dataclass(frozen=True, slots=True)
class ClientInfo:
    """Device, network and geo data reported by the storefront."""
    ip: Optional[str] = None
    user_agent: Optional[str] = None
    is_mobile: bool = False
    browser: Optional[str] = None
    browser_version: Optional[str] = None
    os: Optional[str] = None
    os_version: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    lat: Optional[str] = None
    lon: Optional[str] = None


@dataclass(frozen=True, slots=True)
class UTMInfo:
    src: Optional[str] = None
    source: Optional[str] = None
    medium: Optional[str] = None
    campaign: Optional[str] = None
    term: Optional[str] = None
    content: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ShowCheckoutRequest:
    """
    Canonical checkout page request.

    offer_uuid is required; everything else is optional. cookie holds the raw
    Cookie header and is only parsed for affiliate and pixel lookups.
    """
    offer_uuid: str
    aff: Optional[str] = None
    cookie: Optional[str] = None
    client_info: ClientInfo = field(default_factory=ClientInfo)
    utm: UTMInfo = field(default_factory=UTMInfo)
    original_url: Optional[str] = None
    fbclid: Optional[str] = None
    gclid: Optional[str] = None
    ttclid: Optional[str] = None
    click_id: Optional[str] = None


# ============================================================================
# Response
# ============================================================================

class CheckoutPageConfig(BaseModel):
    """Presentation and payment configuration of the checkout page."""
    checkout_uuid: str = Field(..., description="UUID of the checkout recorded for this visit")
    checkout_date: str = Field(..., description="Checkout creation time, RFC 3339 UTC")
    has_discount: bool = Field(..., description="Whether the product has any discount coupon")
    favicon: Optional[str] = Field(None, description="Absolute favicon URL (falls back to the logo)")
    logo_enabled: bool
    logo: Optional[str] = Field(None, description="Absolute logo URL")
    logo_position: str
    banner_enabled: bool
    banner: Optional[str] = Field(None, description="Absolute banner URL")
    background_type: str
    background_color: str
    color_primary: str
    color_secondary: str
    color_buy_button: str
    ads_text_enabled: bool
    ads_text: Optional[str] = None
    cpf_enabled: bool
    cnpj_enabled: bool
    bank_slip_enabled: bool = Field(..., description="Bank slip payment; one-time offers only")
    credit_card_enabled: bool = Field(
        ...,
        description="Credit card payment; in production requires a company payment merchant"
    )
    pix_enabled: bool
    nupay_enabled: bool = Field(..., description="Always false; NuPay is not offered yet")
    picpay_enabled: bool = Field(..., description="PicPay payment; one-time offers only")
    apple_pay_enabled: bool = Field(..., description="Apple Pay; one-time offers only")
    google_pay_enabled: bool = Field(..., description="Google Pay; one-time offers only")
    automatic_discount_bank_slip: float  # percent
    automatic_discount_credit_card: float
    automatic_discount_pix: float
    automatic_discount_nupay: float
    automatic_discount_picpay: float
    automatic_discount_apple_pay: float
    automatic_discount_google_pay: float
    installments_limit: int
    preselected_installment: int
    interest_free_installments: int
    show_website_address: bool
    show_company_info: bool
    address_required: bool
    whatsapp_enabled: bool
    support_phone: Optional[str] = None
    support_phone_verified: bool
    countdown_enabled: bool
    countdown_time: int = Field(..., description="Countdown length configured by the seller")
    countdown_finish_message: Optional[str] = None
    notifications_enabled: bool
    social_proof_enabled: bool
    reviews_enabled: bool


class ResponseOrderBump(BaseModel):
    """Upsell offer shown next to the main product."""
    uuid: str = Field(..., description="UUID of the offered offer")
    product_name: str
    name: str
    tag: str
    description: str
    price: float = Field(..., description="Offered offer price in major units")
    photo: Optional[str] = Field(None, description="Absolute product photo URL")
    format: str = Field(..., description="Product format slug")
    order: int = Field(..., description="Display position")


class ResponseProduct(BaseModel):
    uuid: str
    name: str
    price: float = Field(..., description="Offer price in major units")
    photo: Optional[str] = Field(None, description="Absolute product photo URL")
    format: str = Field(..., description="Product format slug")


class ResponseReview(BaseModel):
    name: str
    description: Optional[str] = None
    photo: Optional[str] = Field(None, description="Absolute reviewer photo URL")
    stars: int = Field(..., description="Star rating")


class ResponsePixel(BaseModel):
    uuid: str
    events: str
    platform: str = Field(..., description="Ad platform, e.g. FACEBOOK or TIKTOK")
    code: str = Field(..., description="Platform pixel or tag id")
    is_api: bool = Field(..., description="Whether the pixel reports through the platform conversion API")
    enable_bankslip_purchase_percentage: bool
    enable_pix_purchase_percentage: bool
    bank_slip_purchase_percentage: float
    pix_purchase_percentage: float
    google_ads_conversion_label: Optional[str] = None


class ResponseCompany(BaseModel):
    fantasy_name: str = Field(..., description="Seller trade name shown on the page")


class ResponseAffiliateSettings(BaseModel):
    commission_preference: str = Field(..., description="Commission attribution rule of the product")
    cookie_lifetime: int = Field(..., description="Affiliate cookie lifetime in days")


class ResponsePlan(BaseModel):
    """Subscription plan; money fields in major units."""
    uuid: str
    title: str
    tag: Optional[str] = None
    price: float
    promotional_price: float
    first_charge_price_enabled: bool
    first_charge_price: float
    charge_frequency: str = Field(..., description="Billing period of the plan")
    is_default: bool


class ShowCheckoutResponse(BaseModel):
    """Denormalized view-model rendered by the storefront."""
    billing_type: str = Field(..., description="ONE_TIME or a recurring billing type")
    is_free: bool
    back_redirect_url: Optional[str] = Field(
        None,
        description="Where to send a buyer leaving the page, when enabled on the offer"
    )
    config: CheckoutPageConfig
    order_bumps: List[ResponseOrderBump] = Field(..., description="Eligible upsells in display order")
    product: ResponseProduct
    reviews: List[ResponseReview] = Field(..., description="Active reviews of the checkout config")
    pixels: List[ResponsePixel] = Field(..., description="Enabled tracking pixels of the seller or affiliate")
    company: Optional[ResponseCompany] = Field(
        None,
        description="Present only for legal-person companies with show_company_info"
    )
    affiliate_settings: Optional[ResponseAffiliateSettings] = Field(
        None,
        description="Present when the visit is attributed to an affiliate"
    )
    plans: Optional[List[ResponsePlan]] = Field(None, description="Subscription plans; absent when empty")
    google_pay_merchant_id: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "billing_type": "ONE_TIME",
                "is_free": False,
                "config": {
                    "checkout_uuid": "5f0c3a52-7d1e-4c1b-9a57-0b6f1f3d2e10",
                    "checkout_date": "2026-01-15T12:00:00Z",
                    "has_discount": False,
                    "logo_enabled": False,
                    "logo_position": "center",
                    "banner_enabled": False,
                    "pix_enabled": True,
                    "credit_card_enabled": True,
                },
                "order_bumps": [],
                "product": {
                    "uuid": "0e7c1c7a-3b2f-4a55-8d7e-9f5b2d6c4a11",
                    "name": "Curso de Fotografia",
                    "price": 50.0,
                    "format": "course",
                },
                "reviews": [],
                "pixels": [],
            }
        }

    def to_payload(self) -> dict:
        """JSON-ready dict with absent optional fields omitted."""
        return self.model_dump(mode="json", exclude_none=True)


__all__ = [
    "ClientInfo",
    "UTMInfo",
    "ShowCheckoutRequest",
    "CheckoutPageConfig",
    "ResponseOrderBump",
    "ResponseProduct",
    "ResponseReview",
    "ResponsePixel",
    "ResponseCompany",
    "ResponseAffiliateSettings",
    "ResponsePlan",
    "ShowCheckoutResponse",
]
