"""
Process wiring.

Settings, the Supabase client, repositories and the ShowCheckoutService are
built once per process. Tests replace get_show_checkout_service through
app.dependency_overrides.
"""

from __future__ import annotations

from functools import lru_cache

from supabase import Client  # type: ignore[import-not-found]

from config import Settings, load_settings
from repositories.affiliate_repository import (
    SupabaseAffiliatesRepository,
    SupabaseProductAffiliateSettingsRepository,
)
from repositories.checkout_config_repository import (
    SupabaseCheckoutConfigsRepository,
    SupabaseReviewsRepository,
)
from repositories.checkout_repository import SupabaseCheckoutsRepository
from repositories.client import create_supabase_client
from repositories.discount_repository import SupabaseDiscountsRepository
from repositories.file_storage import StorageFileResolver
from repositories.interfaces import CheckoutRepositories
from repositories.offer_repository import (
    SupabaseOffersRepository,
    SupabaseOrderBumpsRepository,
    SupabasePlansRepository,
)
from repositories.pixel_repository import SupabasePixelsRepository
from repositories.product_repository import SupabaseFormatsRepository, SupabaseProductsRepository
from repositories.seller_repository import SupabaseCompaniesRepository, SupabaseUsersRepository
from services.show_checkout_service import ShowCheckoutService


def build_supabase_repositories(client: Client) -> CheckoutRepositories:
    return CheckoutRepositories(
        offers=SupabaseOffersRepository(client),
        products=SupabaseProductsRepository(client),
        users=SupabaseUsersRepository(client),
        companies=SupabaseCompaniesRepository(client),
        formats=SupabaseFormatsRepository(client),
        checkout_configs=SupabaseCheckoutConfigsRepository(client),
        affiliates=SupabaseAffiliatesRepository(client),
        product_affiliate_settings=SupabaseProductAffiliateSettingsRepository(client),
        checkouts=SupabaseCheckoutsRepository(client),
        order_bumps=SupabaseOrderBumpsRepository(client),
        reviews=SupabaseReviewsRepository(client),
        pixels=SupabasePixelsRepository(client),
        plans=SupabasePlansRepository(client),
        discounts=SupabaseDiscountsRepository(client),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def get_show_checkout_service() -> ShowCheckoutService:
    settings = get_settings()
    client = create_supabase_client(settings)
    return ShowCheckoutService(
        repositories=build_supabase_repositories(client),
        file_storage=StorageFileResolver.from_settings(settings),
        settings=settings,
    )


__all__ = ["build_supabase_repositories", "get_settings", "get_show_checkout_service"]
