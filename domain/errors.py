"""
Domain: error taxonomy for the checkout page.

Three kinds of failure leave the pipeline:
- DomainSoftError: an expected rejection (inactive offer, blocked seller,
  unauthorized affiliate...). Always carries the same public message so a
  caller probing offer UUIDs cannot tell which entity was rejected.
- ValidationError: structural problems with the inbound request.
- InternalError: storage failures. Never exposes detail to the caller.

The internal reason is for server-side logs only.
"""

from __future__ import annotations

from typing import Mapping, Optional


NO_ACTION_REQUIRED_MESSAGE = "Não se preocupe, nenhuma ação é necessária!"


class CheckoutPageError(Exception):
    """Base class for errors mapped to an HTTP status at the API boundary."""

    code: str = "CHECKOUT_PAGE_ERROR"
    message: str = "Internal server error"
    http_status: int = 500

    def __init__(self, internal_reason: Optional[str] = None) -> None:
        self.internal_reason = internal_reason
        super().__init__(self.__str__())

    def __str__(self) -> str:
        if self.internal_reason:
            return f"{self.message}: {self.internal_reason}"
        return self.message


class DomainSoftError(CheckoutPageError):
    """Expected, user-safe rejection ("don't worry, no action required")."""

    code = "NO_ACTION_REQUIRED"
    message = NO_ACTION_REQUIRED_MESSAGE
    http_status = 200


class ValidationError(CheckoutPageError):
    """Structural input problem, with a field -> reason map."""

    code = "VALIDATION_ERROR"
    message = "Validation failed"
    http_status = 400

    def __init__(self, details: Mapping[str, str]) -> None:
        self.details = dict(details)
        super().__init__(", ".join(f"{field}: {reason}" for field, reason in self.details.items()))


class InternalError(CheckoutPageError):
    """Storage or unclassified failure; logged server-side only."""

    code = "INTERNAL_ERROR"
    message = "Internal server error"
    http_status = 500


__all__ = [
    "NO_ACTION_REQUIRED_MESSAGE",
    "CheckoutPageError",
    "DomainSoftError",
    "ValidationError",
    "InternalError",
]
