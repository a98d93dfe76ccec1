"""
API error and status models.

The checkout page payload itself is services.show_checkout_models.ShowCheckoutResponse.
"""

from typing import Dict

from pydantic import BaseModel

from domain.errors import NO_ACTION_REQUIRED_MESSAGE


class ErrorResponse(BaseModel):
    """Body of soft-error (200) and internal-error (500) responses."""
    message: str

    class Config:
        json_schema_extra = {
            "example": {
                "message": NO_ACTION_REQUIRED_MESSAGE
            }
        }


class ValidationErrorResponse(BaseModel):
    """Body of 400 responses: field -> reason."""
    message: str
    details: Dict[str, str]

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Validation failed",
                "details": {
                    "offer_uuid": "must be a valid UUID",
                    "client_info.country": "must be at least 2 characters"
                }
            }
        }


class HealthResponse(BaseModel):
    status: str
    version: str
    service: str
