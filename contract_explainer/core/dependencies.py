"""
Service container and FastAPI dependencies
"""

from dataclasses import dataclass

from fastapi import Request

from contract_explainer.core.config import Settings
from contract_explainer.services.contract_analysis_pipeline import ContractAnalysisPipeline
from contract_explainer.services.ocr_service import OCREngineFactory
from contract_explainer.services.openai_service import OpenAIService
from contract_explainer.services.payment_service import PaymentService
from contract_explainer.services.text_extraction_service import TextExtractionService


@dataclass
class ServiceContainer:
    """Services built once per process and shared by all requests"""
    pipeline: ContractAnalysisPipeline
    payment_service: PaymentService


def build_services(settings: Settings) -> ServiceContainer:
    """Wire the production services from settings."""
    extractor = TextExtractionService(ocr_engine=OCREngineFactory.create(settings))
    openai_service = OpenAIService(
        api_key=settings.OPENAI_API_KEY,
        model=settings.OPENAI_MODEL,
        timeout=settings.OPENAI_TIMEOUT_SECONDS
    )
    return ServiceContainer(
        pipeline=ContractAnalysisPipeline(extractor=extractor, openai_service=openai_service),
        payment_service=PaymentService.from_settings(settings),
    )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_pipeline(request: Request) -> ContractAnalysisPipeline:
    return request.app.state.services.pipeline


def get_payment_service(request: Request) -> PaymentService:
    return request.app.state.services.payment_service
