"""
Checkout config repository (persistence).

Lookups for CheckoutConfig rows and the reviews attached to a config.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Dict, List, Mapping, Optional

from supabase import Client  # type: ignore[import-not-found]

from domain.checkout_config import CheckoutConfig, Review, ReviewStatus
from repositories.client import fetch_one, response_rows

_CHECKOUT_CONFIGS_TABLE: str = "checkout_configs"
_REVIEWS_TABLE: str = "reviews"

_CONFIG_FIELDS = {f.name: f for f in fields(CheckoutConfig)}


def _row_to_checkout_config(row: Mapping[str, Any]) -> CheckoutConfig:
    """
    Convert a Supabase row into a CheckoutConfig.

    Columns share the dataclass field names. NULL columns and columns unknown
    to the domain model are ignored so the defaults apply.
    """

    values: Dict[str, Any] = {}
    for name, value in row.items():
        if name not in _CONFIG_FIELDS or value is None:
            continue
        default = _CONFIG_FIELDS[name].default
        if isinstance(default, bool):
            values[name] = bool(value)
        elif isinstance(default, float):
            values[name] = float(value)
        elif isinstance(default, int):
            values[name] = int(value)
        else:
            values[name] = str(value)
    values["id"] = int(row["id"])
    return CheckoutConfig(**values)


def _row_to_review(row: Mapping[str, Any]) -> Review:
    return Review(
        id=int(row["id"]),
        checkout_config_id=int(row["checkout_config_id"]),
        name=str(row.get("name") or ""),
        stars=int(row.get("stars") or 0),
        description=str(row.get("description") or ""),
        photo_url=str(row.get("photo_url") or ""),
        status=str(row.get("status") or ReviewStatus.ACTIVE.value),
    )


class SupabaseCheckoutConfigsRepository:
    def __init__(self, client: Client) -> None:
        self._client = client

    def find_by_id(self, checkout_config_id: int) -> Optional[CheckoutConfig]:
        row = fetch_one(
            self._client, _CHECKOUT_CONFIGS_TABLE, "id", checkout_config_id, "fetch checkout config"
        )
        return _row_to_checkout_config(row) if row else None


class SupabaseReviewsRepository:
    def __init__(self, client: Client) -> None:
        self._client = client

    def find_by_checkout_config_id(self, checkout_config_id: int) -> List[Review]:
        """
        Retrieve the ACTIVE reviews of a checkout config.

        Returns:
            List[Review] (possibly empty)
        """

        response = (
            self._client.table(_REVIEWS_TABLE)
            .select("*")
            .eq("checkout_config_id", checkout_config_id)
            .eq("status", ReviewStatus.ACTIVE.value)
            .execute()
        )
        return [_row_to_review(row) for row in response_rows(response, "list reviews")]


__all__ = ["SupabaseCheckoutConfigsRepository", "SupabaseReviewsRepository"]
