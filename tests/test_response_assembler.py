"""
Tests for `services/response_assembler.py`.

Covers presentation rules:
- Assembling the same snapshot twice yields identical output.
- Favicon: FILE favicons resolve their own path; other types reuse the logo.
- Credit card requires a merchant id only in production.
- Bank slip, Picpay, Apple Pay and Google Pay require a one-time offer.
- Company block gating; empty optional strings omitted; plan tag sentinel.
"""

from __future__ import annotations

from dataclasses import replace

import pytest

from domain.checkout import new_checkout
from domain.checkout_config import CheckoutConfig, Review
from domain.offer import Offer, Plan
from domain.pixel import Pixel
from domain.product import Format, Product
from domain.seller import Company
from fakes import FIXED_NOW
from repositories.file_storage import StorageFileResolver
from services.response_assembler import (
    CheckoutSnapshot,
    assemble_show_checkout_response,
    build_pixel,
    build_plan,
    build_review,
    filter_active_reviews,
    filter_enabled_pixels,
)

STORAGE = StorageFileResolver("https://cdn.example.com/media")


def _snapshot(**overrides) -> CheckoutSnapshot:
    snapshot = CheckoutSnapshot(
        offer=Offer(
            id=1,
            uuid="5f0c3a52-7d1e-4c1b-9a57-0b6f1f3d2e10",
            product_id=10,
            checkout_config_id=100,
            status="ACTIVE",
            price=5000,
            billing_type="ONE_TIME",
        ),
        product=Product(
            id=10,
            uuid="0e7c1c7a-3b2f-4a55-8d7e-9f5b2d6c4a11",
            name="Curso de Fotografia",
            user_id=20,
            company_id=30,
            format_id=40,
            status="ACTIVE",
            seller_name="Foto Cursos Ltda",
        ),
        format=Format(id=40, slug="course"),
        company=Company(id=30, type="LEGAL_PERSON"),
        checkout_config=CheckoutConfig(id=100),
        checkout=new_checkout(product_id=10, currency="BRL", now=FIXED_NOW, offer_id=1),
    )
    return replace(snapshot, **overrides)


def _with_config(**changes) -> CheckoutSnapshot:
    return _snapshot(checkout_config=CheckoutConfig(id=100, **changes))


def test_assembling_twice_is_identical() -> None:
    """Verify the assembler is deterministic for a fixed snapshot."""

    snapshot = _snapshot(
        plans=(Plan(id=1, uuid="plan-1", title="Anual", price=29900),),
        reviews=(Review(id=1, checkout_config_id=100, name="Ana", stars=5),),
    )

    first = assemble_show_checkout_response(snapshot, STORAGE, is_production=False)
    second = assemble_show_checkout_response(snapshot, STORAGE, is_production=False)

    assert first.model_dump_json(exclude_none=True) == second.model_dump_json(exclude_none=True)
    assert first.config.checkout_date == "2026-01-15T12:00:00Z"


def test_absent_optional_fields_are_omitted_from_payload() -> None:
    payload = assemble_show_checkout_response(_snapshot(), STORAGE, is_production=False).to_payload()

    assert "back_redirect_url" not in payload
    assert "plans" not in payload
    assert "company" not in payload
    assert "affiliate_settings" not in payload
    assert "google_pay_merchant_id" not in payload
    assert "favicon" not in payload["config"]
    assert "ads_text" not in payload["config"]
    assert payload["order_bumps"] == []
    assert payload["reviews"] == []
    assert payload["pixels"] == []


def test_favicon_file_is_resolved() -> None:
    snapshot = _with_config(favicon_enabled=True, favicon_type="FILE", favicon_url="favicons/f.ico")

    config = assemble_show_checkout_response(snapshot, STORAGE, is_production=False).config

    assert config.favicon == "https://cdn.example.com/media/favicons/f.ico"


def test_favicon_falls_back_to_logo() -> None:
    snapshot = _with_config(favicon_enabled=True, favicon_type="LOGO", logo_enabled=True, logo_url="logos/l.png")

    config = assemble_show_checkout_response(snapshot, STORAGE, is_production=False).config

    assert config.logo == "https://cdn.example.com/media/logos/l.png"
    assert config.favicon == config.logo


@pytest.mark.parametrize(
    "changes",
    [
        {"favicon_enabled": False, "logo_enabled": True, "logo_url": "logos/l.png"},
        {"favicon_enabled": True, "favicon_type": "LOGO", "logo_enabled": False, "logo_url": "logos/l.png"},
        {"favicon_enabled": True, "favicon_type": "LOGO", "logo_enabled": True, "logo_url": ""},
        {"favicon_enabled": True, "favicon_type": "FILE", "favicon_url": "", "logo_enabled": True, "logo_url": "l.png"},
    ],
)
def test_favicon_absent(changes: dict) -> None:
    config = assemble_show_checkout_response(_with_config(**changes), STORAGE, is_production=False).config

    assert config.favicon is None


def test_logo_and_banner_resolved_only_when_present() -> None:
    snapshot = _with_config(logo_enabled=True, banner_enabled=True, banner_url="banners/b.jpg")

    config = assemble_show_checkout_response(snapshot, STORAGE, is_production=False).config

    assert config.logo is None
    assert config.banner == "https://cdn.example.com/media/banners/b.jpg"


@pytest.mark.parametrize(
    "is_production, merchant_id, expected",
    [
        (False, "", True),
        (True, "", False),
        (True, "merchant-123", True),
    ],
)
def test_credit_card_requires_merchant_id_in_production(is_production: bool, merchant_id: str, expected: bool) -> None:
    snapshot = replace(
        _with_config(credit_card_enabled=True),
        company=Company(id=30, type="LEGAL_PERSON", payment_merchant_id=merchant_id),
    )

    config = assemble_show_checkout_response(snapshot, STORAGE, is_production=is_production).config

    assert config.credit_card_enabled is expected


@pytest.mark.parametrize("billing_type, expected", [("ONE_TIME", True), ("RECURRING", False)])
def test_one_time_only_payment_methods(billing_type: str, expected: bool) -> None:
    snapshot = _with_config(
        bank_slip_enabled=True,
        picpay_enabled=True,
        apple_pay_enabled=True,
        google_pay_enabled=True,
        pix_enabled=True,
        nupay_enabled=True,
    )
    snapshot = replace(snapshot, offer=replace(snapshot.offer, billing_type=billing_type))

    config = assemble_show_checkout_response(snapshot, STORAGE, is_production=False).config

    assert config.bank_slip_enabled is expected
    assert config.picpay_enabled is expected
    assert config.apple_pay_enabled is expected
    assert config.google_pay_enabled is expected
    assert config.pix_enabled is True
    assert config.nupay_enabled is False


@pytest.mark.parametrize(
    "show_company_info, company_type, seller_name, shown",
    [
        (True, "LEGAL_PERSON", "Foto Cursos Ltda", True),
        (False, "LEGAL_PERSON", "Foto Cursos Ltda", False),
        (True, "NATURAL_PERSON", "Foto Cursos Ltda", False),
        (True, "LEGAL_PERSON", "", False),
    ],
)
def test_company_block_gating(show_company_info: bool, company_type: str, seller_name: str, shown: bool) -> None:
    snapshot = _with_config(show_company_info=show_company_info)
    snapshot = replace(
        snapshot,
        company=Company(id=30, type=company_type),
        product=replace(snapshot.product, seller_name=seller_name),
    )

    response = assemble_show_checkout_response(snapshot, STORAGE, is_production=False)

    if shown:
        assert response.company is not None
        assert response.company.fantasy_name == "Foto Cursos Ltda"
    else:
        assert response.company is None


def test_empty_optional_strings_are_absent() -> None:
    snapshot = _with_config(ads_text="", support_phone="", countdown_finish_message="", google_pay_merchant_id="")

    response = assemble_show_checkout_response(snapshot, STORAGE, is_production=False)

    assert response.config.ads_text is None
    assert response.config.support_phone is None
    assert response.config.countdown_finish_message is None
    assert response.google_pay_merchant_id is None


def test_optional_strings_are_kept_when_set() -> None:
    snapshot = _with_config(
        ads_text="Só hoje!",
        support_phone="+5511999999999",
        countdown_finish_message="Acabou",
        google_pay_merchant_id="BCR2DN4T",
    )

    response = assemble_show_checkout_response(snapshot, STORAGE, is_production=False)

    assert response.config.ads_text == "Só hoje!"
    assert response.config.support_phone == "+5511999999999"
    assert response.config.countdown_finish_message == "Acabou"
    assert response.google_pay_merchant_id == "BCR2DN4T"


def test_back_redirect_url_requires_flag() -> None:
    snapshot = _snapshot()
    disabled = replace(snapshot, offer=replace(snapshot.offer, back_redirect_url="https://x.example.com"))
    enabled = replace(disabled, offer=replace(disabled.offer, back_redirect_url_enabled=True))

    assert assemble_show_checkout_response(disabled, STORAGE, is_production=False).back_redirect_url is None
    assert (
        assemble_show_checkout_response(enabled, STORAGE, is_production=False).back_redirect_url
        == "https://x.example.com"
    )


@pytest.mark.parametrize("tag, expected", [("", None), ("Nenhum", None), ("Mais vendido", "Mais vendido")])
def test_plan_tag_sentinel(tag: str, expected) -> None:
    plan = Plan(
        id=1,
        uuid="plan-1",
        title="Anual",
        price=29900,
        tag=tag,
        promotional_price=19900,
        first_charge_price_enabled=True,
        first_charge_price=990,
        charge_frequency="YEARLY",
    )

    built = build_plan(plan)

    assert built.tag == expected
    assert built.price == 299.0
    assert built.promotional_price == 199.0
    assert built.first_charge_price == 9.9


def test_review_builder_omits_empty_fields() -> None:
    built = build_review(Review(id=1, checkout_config_id=100, name="Ana", stars=4), STORAGE)

    assert built.description is None
    assert built.photo is None
    assert built.stars == 4


def test_pixel_builder_omits_empty_conversion_label() -> None:
    assert build_pixel(Pixel(id=1, uuid="p1", platform="GOOGLE", code="AW-1")).google_ads_conversion_label is None
    assert (
        build_pixel(
            Pixel(id=1, uuid="p1", platform="GOOGLE", code="AW-1", google_ads_conversion_label="label")
        ).google_ads_conversion_label
        == "label"
    )


def test_filters() -> None:
    reviews = [
        Review(id=1, checkout_config_id=100, name="A", stars=5),
        Review(id=2, checkout_config_id=100, name="B", stars=5, status="INACTIVE"),
    ]
    pixels = [
        Pixel(id=1, uuid="on", platform="FACEBOOK", code="1", status=True),
        Pixel(id=2, uuid="off", platform="FACEBOOK", code="2", status=False),
    ]

    assert [review.name for review in filter_active_reviews(reviews)] == ["A"]
    assert [pixel.uuid for pixel in filter_enabled_pixels(pixels)] == ["on"]
