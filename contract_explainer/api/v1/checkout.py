"""
Checkout session endpoint
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from contract_explainer.core.dependencies import get_payment_service
from contract_explainer.core.exceptions import PaymentServiceError
from contract_explainer.schemas.contract_analysis import CheckoutSessionResponse, ErrorResponse
from contract_explainer.services.payment_service import PaymentService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/create-checkout-session",
    response_model=CheckoutSessionResponse,
    responses={500: {"model": ErrorResponse}},
)
async def create_checkout_session(
    payment_service: PaymentService = Depends(get_payment_service)
):
    """
    Create a Stripe hosted checkout session for the full contract analysis.
    """
    try:
        url = await payment_service.create_checkout_session()
    except PaymentServiceError as e:
        logger.error(f"Checkout session failed: {e.message}")
        return JSONResponse(status_code=500, content={"error": "Erro ao criar sessão de pagamento."})
    except Exception as e:
        logger.error(f"Checkout session failed: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Erro ao criar sessão de pagamento."})

    return CheckoutSessionResponse(url=url)
