from fastapi import APIRouter

from app.schemas.checkout import CheckoutValidationRequest, CheckoutValidationResponse
from app.services.business.checkout import validate_checkout

router = APIRouter(prefix="/checkout", tags=["checkout"])


@router.post("/validate", response_model=CheckoutValidationResponse)
def validate(payload: CheckoutValidationRequest):
    """validate a checkout against the shop's open hours config.

    always answers 200, an empty userErrors list allows the checkout.
    """
    result = validate_checkout(payload.config, payload.cart)
    return result.to_output()
