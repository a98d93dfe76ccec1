"""
Seller repository for user accounts and companies.

Provides lookups only; checkout eligibility is decided by the domain
predicates on User.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from supabase import Client  # type: ignore[import-not-found]

from domain.seller import Company, User
from repositories.client import fetch_one

_USERS_TABLE: str = "users"
_COMPANIES_TABLE: str = "companies"


def _row_to_user(row: Mapping[str, Any]) -> User:
    return User(
        id=int(row["id"]),
        uuid=str(row.get("uuid") or ""),
        status=str(row["status"]),
        block_checkout=str(row.get("block_checkout") or ""),
    )


def _row_to_company(row: Mapping[str, Any]) -> Company:
    return Company(
        id=int(row["id"]),
        type=str(row.get("type") or ""),
        payment_merchant_id=str(row.get("payment_merchant_id") or ""),
    )


class SupabaseUsersRepository:
    def __init__(self, client: Client) -> None:
        self._client = client

    def find_by_id(self, user_id: int) -> Optional[User]:
        """
        Get a user by their ID.

        Returns:
            User domain model or None if not found

        Example:
            user = users.find_by_id(42)
            if user and user.can_sell():
                # Seller's products may be checked out
        """

        row = fetch_one(self._client, _USERS_TABLE, "id", user_id, "fetch user")
        return _row_to_user(row) if row else None


class SupabaseCompaniesRepository:
    def __init__(self, client: Client) -> None:
        self._client = client

    def find_by_id(self, company_id: int) -> Optional[Company]:
        row = fetch_one(self._client, _COMPANIES_TABLE, "id", company_id, "fetch company")
        return _row_to_company(row) if row else None


__all__ = ["SupabaseUsersRepository", "SupabaseCompaniesRepository"]
