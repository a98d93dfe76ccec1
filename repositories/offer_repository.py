"""
Offer repository (persistence).

Persistence operations for Offers and the read-only data scoped to an offer
(order bumps and plans). No eligibility rules live here.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from supabase import Client  # type: ignore[import-not-found]

from domain.offer import Offer, OrderBump, Plan
from repositories.client import fetch_one, response_rows

# Supabase table names.
# Keep these aligned with your database schema.
_OFFERS_TABLE: str = "offers"
_ORDER_BUMPS_TABLE: str = "order_bumps"
_PLANS_TABLE: str = "plans"

# Postgres function performing `checkout_count = checkout_count + 1` in one statement.
_INCREMENT_CHECKOUT_COUNT_RPC: str = "increment_offer_checkout_count"


def _row_to_offer(row: Mapping[str, Any]) -> Offer:
    """Convert a Supabase row into an Offer."""

    return Offer(
        id=int(row["id"]),
        uuid=str(row["uuid"]),
        product_id=int(row["product_id"]),
        checkout_config_id=int(row["checkout_config_id"]),
        status=str(row["status"]),
        price=int(row.get("price") or 0),
        billing_type=str(row.get("billing_type") or ""),
        is_temporary=bool(row.get("is_temporary", False)),
        is_free=bool(row.get("is_free", False)),
        back_redirect_url=str(row.get("back_redirect_url") or ""),
        back_redirect_url_enabled=bool(row.get("back_redirect_url_enabled", False)),
        order_bumps_enabled=bool(row.get("order_bumps_enabled", False)),
        checkout_count=int(row.get("checkout_count") or 0),
    )


def _row_to_order_bump(row: Mapping[str, Any]) -> OrderBump:
    return OrderBump(
        id=int(row["id"]),
        offer_id=int(row["offer_id"]),
        offered_offer_id=int(row["offered_offer_id"]),
        name=str(row.get("name") or ""),
        tag=str(row.get("tag") or ""),
        description=str(row.get("description") or ""),
        order=int(row.get("order") or 0),
    )


def _row_to_plan(row: Mapping[str, Any]) -> Plan:
    return Plan(
        id=int(row["id"]),
        uuid=str(row["uuid"]),
        title=str(row.get("title") or ""),
        tag=str(row.get("tag") or ""),
        price=int(row.get("price") or 0),
        promotional_price=int(row.get("promotional_price") or 0),
        first_charge_price_enabled=bool(row.get("first_charge_price_enabled", False)),
        first_charge_price=int(row.get("first_charge_price") or 0),
        charge_frequency=str(row.get("charge_frequency") or ""),
        is_default=bool(row.get("is_default", False)),
    )


class SupabaseOffersRepository:
    def __init__(self, client: Client) -> None:
        self._client = client

    def find_by_uuid(self, uuid: str) -> Optional[Offer]:
        row = fetch_one(self._client, _OFFERS_TABLE, "uuid", uuid, "fetch offer by UUID")
        return _row_to_offer(row) if row else None

    def find_by_id(self, offer_id: int) -> Optional[Offer]:
        row = fetch_one(self._client, _OFFERS_TABLE, "id", offer_id, "fetch offer by ID")
        return _row_to_offer(row) if row else None

    def increment_checkout_count(self, uuid: str) -> None:
        """
        Atomically add one to the offer's checkout_count.

        The increment runs inside Postgres so concurrent visits never lose
        updates.
        """

        response = self._client.rpc(_INCREMENT_CHECKOUT_COUNT_RPC, {"p_offer_uuid": uuid}).execute()
        error = getattr(response, "error", None)
        if error:
            raise RuntimeError(f"Failed to increment checkout count: {error}")


class SupabaseOrderBumpsRepository:
    def __init__(self, client: Client) -> None:
        self._client = client

    def find_all_by_offer_id(self, offer_id: int) -> List[OrderBump]:
        """
        Retrieve the order bumps of an offer, in display order.

        Returns:
            List[OrderBump] (possibly empty)
        """

        response = (
            self._client.table(_ORDER_BUMPS_TABLE)
            .select("*")
            .eq("offer_id", offer_id)
            .order("order")
            .execute()
        )
        return [_row_to_order_bump(row) for row in response_rows(response, "list order bumps")]


class SupabasePlansRepository:
    def __init__(self, client: Client) -> None:
        self._client = client

    def find_by_offer_id(self, offer_id: int) -> List[Plan]:
        response = self._client.table(_PLANS_TABLE).select("*").eq("offer_id", offer_id).execute()
        return [_row_to_plan(row) for row in response_rows(response, "list plans")]


__all__ = [
    "SupabaseOffersRepository",
    "SupabaseOrderBumpsRepository",
    "SupabasePlansRepository",
]
