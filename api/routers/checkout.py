"""
Checkout Page API Endpoints.

Endpoint that assembles the checkout page for an offer and records the visit.
"""

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_show_checkout_service
from api.models import ErrorResponse, ValidationErrorResponse
from services.request_normalizer import normalize_checkout_request
from services.show_checkout_models import ShowCheckoutResponse
from services.show_checkout_service import ShowCheckoutService

router = APIRouter()


@router.get(
    "/checkout/{offer_uuid}",
    response_model=ShowCheckoutResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Malformed request"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Show Checkout Page",
    description="Assemble the checkout page for an offer and record a checkout access."
)
def show_checkout(
    offer_uuid: str,
    request: Request,
    service: ShowCheckoutService = Depends(get_show_checkout_service),
):
    """
    Build the checkout page view-model for an offer.

    **How it works:**
    1. Validates the offer UUID and the optional client/tracking parameters
    2. Checks the offer, product, seller, company, format and checkout config
    3. Resolves the affiliate from `aff` or the `aff.<product uuid>` cookie
    4. Records a checkout in the ACCESSED state
    5. Returns configuration, product, order bumps, reviews, pixels and plans

    Ineligible offers answer **200** with
    `{"message": "Não se preocupe, nenhuma ação é necessária!"}`.

    **Example request:**
    ```
    GET /api/v1/checkout/5f0c3a52-7d1e-4c1b-9a57-0b6f1f3d2e10?utm_source=facebook&isMobile=true
    ```
    """
    checkout_request = normalize_checkout_request(
        offer_uuid,
        dict(request.query_params),
        dict(request.headers),
    )
    return service.execute(checkout_request)
