"""
Discount repository.

Only answers whether a product has any discount configured; the checkout
page uses it to decide whether to show the coupon field.
"""

from __future__ import annotations

from supabase import Client  # type: ignore[import-not-found]

from repositories.client import response_rows

_DISCOUNTS_TABLE: str = "discounts"


class SupabaseDiscountsRepository:
    def __init__(self, client: Client) -> None:
        self._client = client

    def has_any_for_product_id(self, product_id: int) -> bool:
        response = (
            self._client.table(_DISCOUNTS_TABLE)
            .select("id")
            .eq("product_id", product_id)
            .limit(1)
            .execute()
        )
        return len(response_rows(response, "check discounts")) > 0


__all__ = ["SupabaseDiscountsRepository"]
