"""
Health check endpoint
"""

from fastapi import APIRouter, Depends

from contract_explainer.core.config import Settings
from contract_explainer.core.dependencies import get_payment_service, get_settings
from contract_explainer.services.payment_service import PaymentService

router = APIRouter()


@router.get("")
async def health(
    settings: Settings = Depends(get_settings),
    payment_service: PaymentService = Depends(get_payment_service)
):
    """
    Health check endpoint.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "openai_model": settings.OPENAI_MODEL,
        "ocr_engine": settings.OCR_ENGINE,
        "payment_service_configured": payment_service.is_configured(),
    }
