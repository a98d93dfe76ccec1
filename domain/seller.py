"""
Domain: Users (sellers and affiliates) and Companies.

A User is either the seller that owns a product or the user behind an
affiliate. The two roles are gated differently:
- a seller may sell when block_checkout is empty or ACTIVE;
- an affiliate may promote only when block_checkout is exactly ACTIVE.

The asymmetry is intentional and must not be unified.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UserStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    BLOCKED = "BLOCKED"


# Value of block_checkout meaning "checkout allowed"
BLOCK_CHECKOUT_ACTIVE = "ACTIVE"


class CompanyType(str, Enum):
    LEGAL_PERSON = "LEGAL_PERSON"
    NATURAL_PERSON = "NATURAL_PERSON"


@dataclass(frozen=True, slots=True)
class User:
    """
    Platform account with status tracking.

    block_checkout: "" (never set), "ACTIVE" (allowed) or any other value (blocked).
    """

    id: int
    uuid: str
    status: str
    block_checkout: str = ""

    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    def can_sell(self) -> bool:
        """Check if the user's products may be checked out."""
        return self.is_active() and self.block_checkout in ("", BLOCK_CHECKOUT_ACTIVE)

    def can_promote(self) -> bool:
        """Check if the user may be credited as an affiliate."""
        return self.is_active() and self.block_checkout == BLOCK_CHECKOUT_ACTIVE


@dataclass(frozen=True, slots=True)
class Company:
    """
    Legal entity a product is sold through.

    payment_merchant_id is the payment processor's merchant id; an empty id
    disables credit cards in production.
    """

    id: int
    type: str
    payment_merchant_id: str = ""

    def is_legal_person(self) -> bool:
        return self.type == CompanyType.LEGAL_PERSON


__all__ = [
    "UserStatus",
    "BLOCK_CHECKOUT_ACTIVE",
    "CompanyType",
    "User",
    "Company",
]
