"""
Tests for `services/request_normalizer.py`.

Covers normalization rules:
- Storefront query keys map onto the canonical request.
- Empty values are absent; isMobile is true only for "true".
- Headers are case-insensitive; User-Agent header beats the query key.
- Offer UUIDs are recovered from proxy paths (hyphenated or 32-hex).
"""

from __future__ import annotations

import pytest

from services.request_normalizer import extract_offer_uuid_from_path, normalize_checkout_request

OFFER_UUID = "5f0c3a52-7d1e-4c1b-9a57-0b6f1f3d2e10"


def test_query_keys_are_mapped() -> None:
    query = {
        "aff": "aff-1",
        "ip": "203.0.113.7",
        "isMobile": "true",
        "browser": "Chrome",
        "browserVersion": "120",
        "os": "Android",
        "osVersion": "14",
        "country": "BR",
        "state": "SP",
        "city": "Campinas",
        "lat": "-22.9",
        "lon": "-47.06",
        "src": "bio",
        "utm_source": "instagram",
        "utm_medium": "social",
        "utm_campaign": "launch",
        "utm_term": "foto",
        "utm_content": "story",
        "fbclid": "fb",
        "gclid": "g",
        "ttclid": "tt",
        "clickId": "c",
        "originalUrl": "https://loja.example.com/curso",
        "userAgent": "query-agent",
    }

    request = normalize_checkout_request(OFFER_UUID, query, {})

    assert request.offer_uuid == OFFER_UUID
    assert request.aff == "aff-1"
    assert request.client_info.ip == "203.0.113.7"
    assert request.client_info.is_mobile is True
    assert request.client_info.browser_version == "120"
    assert request.client_info.os_version == "14"
    assert request.client_info.lat == "-22.9"
    assert request.client_info.user_agent == "query-agent"
    assert request.utm.src == "bio"
    assert request.utm.source == "instagram"
    assert request.utm.content == "story"
    assert request.fbclid == "fb"
    assert request.click_id == "c"
    assert request.original_url == "https://loja.example.com/curso"
    assert request.cookie is None


def test_empty_values_are_absent() -> None:
    request = normalize_checkout_request(OFFER_UUID, {"aff": "", "country": "", "utm_source": ""}, {})

    assert request.aff is None
    assert request.client_info.country is None
    assert request.utm.source is None


@pytest.mark.parametrize("value, expected", [("true", True), ("True", False), ("1", False), ("", False)])
def test_is_mobile_only_for_literal_true(value: str, expected: bool) -> None:
    assert normalize_checkout_request(OFFER_UUID, {"isMobile": value}, {}).client_info.is_mobile is expected


def test_headers_are_case_insensitive() -> None:
    request = normalize_checkout_request(
        OFFER_UUID,
        {"userAgent": "query-agent"},
        {"user-agent": "header-agent", "cookie": "_fbc=abc"},
    )

    assert request.client_info.user_agent == "header-agent"
    assert request.cookie == "_fbc=abc"


def test_missing_inputs_are_tolerated() -> None:
    request = normalize_checkout_request(OFFER_UUID, None, None)

    assert request.offer_uuid == OFFER_UUID
    assert request.client_info.is_mobile is False


@pytest.mark.parametrize(
    "path, expected",
    [
        (f"/checkout/{OFFER_UUID}", OFFER_UUID),
        (f"{OFFER_UUID}/", OFFER_UUID),
        ("/checkout/5f0c3a527d1e4c1b9a570b6f1f3d2e10", OFFER_UUID),
        ("/checkout/not-a-uuid", ""),
        ("/checkout/5f0c3a52_7d1e_4c1b_9a57_0b6f1f3d2e10", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_extract_offer_uuid_from_path(path, expected: str) -> None:
    assert extract_offer_uuid_from_path(path) == expected
