"""
Domain: Tracking pixels.

A Pixel is a third-party ad-platform integration attached to a
(user, product) pair. Only enabled pixels (status True) are rendered.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Pixel:
    id: int
    uuid: str
    platform: str
    code: str
    events: str = ""
    status: bool = True
    is_api: bool = False
    enable_bankslip_purchase_percentage: bool = False
    enable_pix_purchase_percentage: bool = False
    bank_slip_purchase_percentage: float = 0.0
    pix_purchase_percentage: float = 0.0
    google_ads_conversion_label: str = ""


__all__ = ["Pixel"]
