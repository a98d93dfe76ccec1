"""
Affiliate repository (persistence).

Lookups for Affiliates and the per-product affiliate settings.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from supabase import Client  # type: ignore[import-not-found]

from domain.affiliate import Affiliate, ProductAffiliateSettings
from repositories.client import fetch_one

_AFFILIATES_TABLE: str = "affiliates"
_PRODUCT_AFFILIATE_SETTINGS_TABLE: str = "product_affiliate_settings"


def _row_to_settings(row: Mapping[str, Any]) -> ProductAffiliateSettings:
    """
    Convert a Supabase row into ProductAffiliateSettings.

    last_offers is a text[] column; NULL means "no offer authorized".
    """

    last_offers = row.get("last_offers") or []
    return ProductAffiliateSettings(
        id=int(row["id"]),
        product_id=int(row["product_id"]),
        commission_preference=str(row.get("commission_preference") or ""),
        cookie_lifetime=int(row.get("cookie_lifetime") or 0),
        last_offers=tuple(str(offer_uuid) for offer_uuid in last_offers),
    )


class SupabaseAffiliatesRepository:
    def __init__(self, client: Client) -> None:
        self._client = client

    def find_by_uuid(self, uuid: str) -> Optional[Affiliate]:
        row = fetch_one(self._client, _AFFILIATES_TABLE, "uuid", uuid, "fetch affiliate")
        if row is None:
            return None
        return Affiliate(id=int(row["id"]), uuid=str(row["uuid"]), user_id=int(row["user_id"]))


class SupabaseProductAffiliateSettingsRepository:
    def __init__(self, client: Client) -> None:
        self._client = client

    def find_by_product_id(self, product_id: int) -> Optional[ProductAffiliateSettings]:
        row = fetch_one(
            self._client,
            _PRODUCT_AFFILIATE_SETTINGS_TABLE,
            "product_id",
            product_id,
            "fetch product affiliate settings",
        )
        return _row_to_settings(row) if row else None


__all__ = ["SupabaseAffiliatesRepository", "SupabaseProductAffiliateSettingsRepository"]
