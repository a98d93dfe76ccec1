"""
Pixel repository (persistence).

Tracking pixels are scoped to a (user, product) pair. Disabled pixels are
returned as stored; filtering happens when the response is built.
"""

from __future__ import annotations

from typing import Any, List, Mapping

from supabase import Client  # type: ignore[import-not-found]

from domain.pixel import Pixel
from repositories.client import response_rows

_PIXELS_TABLE: str = "pixels"


def _row_to_pixel(row: Mapping[str, Any]) -> Pixel:
    return Pixel(
        id=int(row["id"]),
        uuid=str(row["uuid"]),
        platform=str(row.get("platform") or ""),
        code=str(row.get("code") or ""),
        events=str(row.get("events") or ""),
        status=bool(row.get("status", False)),
        is_api=bool(row.get("is_api", False)),
        enable_bankslip_purchase_percentage=bool(row.get("enable_bankslip_purchase_percentage", False)),
        enable_pix_purchase_percentage=bool(row.get("enable_pix_purchase_percentage", False)),
        bank_slip_purchase_percentage=float(row.get("bank_slip_purchase_percentage") or 0),
        pix_purchase_percentage=float(row.get("pix_purchase_percentage") or 0),
        google_ads_conversion_label=str(row.get("google_ads_conversion_label") or ""),
    )


class SupabasePixelsRepository:
    def __init__(self, client: Client) -> None:
        self._client = client

    def find_all_by_user_id_and_product_id(self, user_id: int, product_id: int) -> List[Pixel]:
        response = (
            self._client.table(_PIXELS_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("product_id", product_id)
            .execute()
        )
        return [_row_to_pixel(row) for row in response_rows(response, "list pixels")]


__all__ = ["SupabasePixelsRepository"]
