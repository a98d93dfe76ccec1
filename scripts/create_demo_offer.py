"""
Create a demo offer chain for testing and demos.

This script seeds the rows the checkout page needs to render one offer:
- Seller user, company and product format
- Product and checkout config
- Offer: 5f0c3a52-7d1e-4c1b-9a57-0b6f1f3d2e10 (R$ 50,00, one-time)

Open /api/v1/checkout/5f0c3a52-7d1e-4c1b-9a57-0b6f1f3d2e10 afterwards.
"""

import sys
from pathlib import Path

# Add parent directory to path so we can import from repositories
sys.path.insert(0, str(Path(__file__).parent.parent))

from typing import Any, Dict

from config import load_settings
from repositories.client import create_supabase_client, response_rows


DEMO_OFFER_UUID = "5f0c3a52-7d1e-4c1b-9a57-0b6f1f3d2e10"
DEMO_PRODUCT_UUID = "0e7c1c7a-3b2f-4a55-8d7e-9f5b2d6c4a11"

DEMO_ROWS = [
    ("users", {"id": 9001, "uuid": "7d6c0f4e-1b5a-4f7e-8c2d-3e4f5a6b7c8d", "status": "ACTIVE", "block_checkout": ""}),
    ("companies", {"id": 9001, "type": "LEGAL_PERSON", "payment_merchant_id": ""}),
    ("formats", {"id": 9001, "slug": "course"}),
    (
        "products",
        {
            "id": 9001,
            "uuid": DEMO_PRODUCT_UUID,
            "name": "Curso de Fotografia",
            "user_id": 9001,
            "company_id": 9001,
            "format_id": 9001,
            "status": "ACTIVE",
            "evaluation_status": "APPROVED",
            "currency": "BRL",
            "seller_name": "Demo Cursos Ltda",
        },
    ),
    (
        "checkout_configs",
        {
            "id": 9001,
            "uuid": "c0f1e2d3-0000-4000-8000-000000009001",
            "pix_enabled": True,
            "credit_card_enabled": True,
            "bank_slip_enabled": True,
            "installments_limit": 12,
            "preselected_installment": 1,
            "color_primary": "#1E88E5",
            "show_company_info": True,
        },
    ),
    (
        "offers",
        {
            "id": 9001,
            "uuid": DEMO_OFFER_UUID,
            "product_id": 9001,
            "checkout_config_id": 9001,
            "status": "ACTIVE",
            "is_temporary": False,
            "price": 5000,
            "billing_type": "ONE_TIME",
            "is_free": False,
            "order_bumps_enabled": False,
            "checkout_count": 0,
        },
    ),
]


def _upsert(client, table: str, row: Dict[str, Any]) -> None:
    existing = client.table(table).select("id").eq("id", row["id"]).execute()
    if response_rows(existing, f"check {table}"):
        print(f"  {table}: id {row['id']} already exists")
        return

    result = client.table(table).insert(row).execute()
    response_rows(result, f"insert into {table}")
    print(f"  {table}: id {row['id']} created")


def create_demo_offer():
    """Create the demo offer chain, skipping rows that already exist."""

    client = create_supabase_client(load_settings())

    for table, row in DEMO_ROWS:
        _upsert(client, table, row)

    print(f"[SUCCESS] Demo offer ready!")
    print(f"  Offer UUID: {DEMO_OFFER_UUID}")
    print(f"  Checkout URL: /api/v1/checkout/{DEMO_OFFER_UUID}")


if __name__ == "__main__":
    create_demo_offer()
