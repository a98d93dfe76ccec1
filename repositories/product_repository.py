"""
Product repository (persistence).

Lookups for Products and product Formats.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from supabase import Client  # type: ignore[import-not-found]

from domain.product import Format, Product
from repositories.client import fetch_one

_PRODUCTS_TABLE: str = "products"
_FORMATS_TABLE: str = "formats"


def _row_to_product(row: Mapping[str, Any]) -> Product:
    """Convert a Supabase row into a Product."""

    return Product(
        id=int(row["id"]),
        uuid=str(row["uuid"]),
        name=str(row.get("name") or ""),
        user_id=int(row["user_id"]),
        company_id=int(row["company_id"]),
        format_id=int(row["format_id"]),
        status=str(row["status"]),
        evaluation_status=str(row.get("evaluation_status") or ""),
        currency=str(row.get("currency") or "BRL"),
        photo_url=str(row.get("photo_url") or ""),
        seller_name=str(row.get("seller_name") or ""),
    )


class SupabaseProductsRepository:
    def __init__(self, client: Client) -> None:
        self._client = client

    def find_by_id(self, product_id: int) -> Optional[Product]:
        row = fetch_one(self._client, _PRODUCTS_TABLE, "id", product_id, "fetch product")
        return _row_to_product(row) if row else None


class SupabaseFormatsRepository:
    def __init__(self, client: Client) -> None:
        self._client = client

    def find_by_id(self, format_id: int) -> Optional[Format]:
        row = fetch_one(self._client, _FORMATS_TABLE, "id", format_id, "fetch product format")
        if row is None:
            return None
        return Format(id=int(row["id"]), slug=str(row.get("slug") or ""))


__all__ = ["SupabaseProductsRepository", "SupabaseFormatsRepository"]
