"""
Domain: Checkout configuration and reviews.

A CheckoutConfig is the per-offer presentation and payment configuration.
Media fields (logo, banner, favicon) hold relative storage paths; they are
resolved to absolute URLs by the response assembler.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FaviconType(str, Enum):
    FILE = "FILE"
    LOGO = "LOGO"


class ReviewStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


@dataclass(frozen=True, slots=True)
class CheckoutConfig:
    id: int
    uuid: str = ""

    # Branding
    logo_enabled: bool = False
    logo_url: str = ""
    logo_position: str = "center"
    banner_enabled: bool = False
    banner_url: str = ""
    favicon_enabled: bool = False
    favicon_type: str = ""
    favicon_url: str = ""
    background_type: str = ""
    background_color: str = ""
    color_primary: str = ""
    color_secondary: str = ""
    color_buy_button: str = ""
    ads_text_enabled: bool = False
    ads_text: str = ""

    # Payment methods
    cpf_enabled: bool = False
    cnpj_enabled: bool = False
    bank_slip_enabled: bool = False
    credit_card_enabled: bool = False
    pix_enabled: bool = False
    nupay_enabled: bool = False
    picpay_enabled: bool = False
    apple_pay_enabled: bool = False
    google_pay_enabled: bool = False
    google_pay_merchant_id: str = ""

    # Automatic discounts (percentages)
    automatic_discount_bank_slip: float = 0.0
    automatic_discount_credit_card: float = 0.0
    automatic_discount_pix: float = 0.0
    automatic_discount_nupay: float = 0.0
    automatic_discount_picpay: float = 0.0
    automatic_discount_apple_pay: float = 0.0
    automatic_discount_google_pay: float = 0.0

    # Installments
    installments_limit: int = 1
    preselected_installment: int = 1
    interest_free_installments: int = 0

    # Page features
    show_website_address: bool = False
    show_company_info: bool = False
    address_required: bool = False
    whatsapp_enabled: bool = False
    support_phone: str = ""
    support_phone_verified: bool = False
    countdown_enabled: bool = False
    countdown_time: int = 0
    countdown_finish_message: str = ""
    notifications_enabled: bool = False
    social_proof_enabled: bool = False
    reviews_enabled: bool = False

    def favicon_is_file(self) -> bool:
        return self.favicon_type == FaviconType.FILE


@dataclass(frozen=True, slots=True)
class Review:
    """Customer testimonial shown on the checkout page."""

    id: int
    checkout_config_id: int
    name: str
    stars: int
    description: str = ""
    photo_url: str = ""
    status: str = ReviewStatus.ACTIVE.value

    def is_active(self) -> bool:
        return self.status == ReviewStatus.ACTIVE


__all__ = ["FaviconType", "ReviewStatus", "CheckoutConfig", "Review"]
