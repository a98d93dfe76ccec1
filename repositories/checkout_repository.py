"""
Checkout repository (persistence).

This module provides *only* persistence operations for the Checkout domain
entity. It inserts, fetches and updates checkout rows; status transitions are
decided elsewhere.
"""

from __future__ import annotations

from dataclasses import fields
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from supabase import Client  # type: ignore[import-not-found]

from domain.checkout import Checkout, CheckoutStatus
from domain.time import parse_utc_datetime, require_utc_timestamp
from repositories.client import fetch_one, response_rows

# Supabase table name for checkout records.
# Keep this aligned with your database schema.
_CHECKOUTS_TABLE: str = "checkouts"

_TIMESTAMP_FIELDS = ("created_at", "updated_at")


def _to_iso_utc(dt: datetime, *, name: str) -> str:
    """Serialize a UTC datetime to ISO-8601 (timezone-aware, offset 0)."""

    require_utc_timestamp(name, dt)
    return dt.astimezone(timezone.utc).isoformat()


def _checkout_to_payload(checkout: Checkout) -> Dict[str, Any]:
    """
    Serialize a Checkout into an insert/update payload.

    pixel_data is left out entirely when absent so the column stays NULL
    rather than holding an empty JSON object.
    """

    payload: Dict[str, Any] = {}
    for f in fields(Checkout):
        value = getattr(checkout, f.name)
        if f.name in _TIMESTAMP_FIELDS:
            payload[f.name] = _to_iso_utc(value, name=f.name)
        elif f.name == "status":
            payload[f.name] = CheckoutStatus(value).value
        elif f.name == "pixel_data":
            if value is not None:
                payload[f.name] = dict(value)
        else:
            payload[f.name] = value
    return payload


def _row_to_checkout(row: Mapping[str, Any]) -> Checkout:
    """Convert a Supabase row into a Checkout."""

    values: Dict[str, Any] = {}
    for f in fields(Checkout):
        if f.name not in row:
            continue
        values[f.name] = row[f.name]

    values["status"] = CheckoutStatus(str(row["status"]))
    values["created_at"] = parse_utc_datetime(row["created_at"])
    values["updated_at"] = parse_utc_datetime(row["updated_at"])
    values["is_mobile"] = bool(row.get("is_mobile", False))
    values["email_sent_amount"] = int(row.get("email_sent_amount") or 0)
    values["sms_sent_amount"] = int(row.get("sms_sent_amount") or 0)
    # Rows written by older clients may hold {} instead of NULL.
    values["pixel_data"] = row.get("pixel_data") or None
    return Checkout(**values)


class SupabaseCheckoutsRepository:
    def __init__(self, client: Client) -> None:
        self._client = client

    def create(self, checkout: Checkout) -> None:
        """
        Insert a new checkout row.

        Raises:
            RuntimeError: If Supabase reports an error
        """

        response = self._client.table(_CHECKOUTS_TABLE).insert(_checkout_to_payload(checkout)).execute()
        response_rows(response, "create checkout")

    def find_by_uuid(self, uuid: str) -> Optional[Checkout]:
        row = fetch_one(self._client, _CHECKOUTS_TABLE, "uuid", uuid, "fetch checkout")
        return _row_to_checkout(row) if row else None

    def update(self, checkout: Checkout) -> None:
        payload = _checkout_to_payload(checkout)
        payload.pop("uuid")
        payload.pop("created_at")
        response = (
            self._client.table(_CHECKOUTS_TABLE)
            .update(payload)
            .eq("uuid", checkout.uuid)
            .execute()
        )
        response_rows(response, "update checkout")


__all__ = ["SupabaseCheckoutsRepository"]
