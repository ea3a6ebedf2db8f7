"""
Contract Analysis endpoints
Plain-language risk analysis of an uploaded contract, and classification of
the resulting clauses into safe and risky groups.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from contract_explainer.core.config import Settings
from contract_explainer.core.dependencies import get_pipeline, get_settings
from contract_explainer.core.exceptions import (
    AnalysisServiceError,
    ExtractionError,
    PayloadTooLargeError,
    ReconciliationError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from contract_explainer.schemas.contract_analysis import (
    AnalyzeContractResponse,
    ClassifiedSummary,
    ErrorResponse,
    SummarizeClausesRequest,
)
from contract_explainer.services.contract_analysis_pipeline import ContractAnalysisPipeline
from contract_explainer.utils.uploads import save_upload

logger = logging.getLogger(__name__)
router = APIRouter()


def error_response(status_code: int, message: str, resposta: Optional[str] = None) -> JSONResponse:
    payload = ErrorResponse(error=message, resposta=resposta)
    return JSONResponse(status_code=status_code, content=payload.model_dump(exclude_none=True))


def _too_large_message(limit_bytes: int) -> str:
    if limit_bytes < 1024 * 1024:
        return f"Tamanho máximo excedido ({limit_bytes} bytes)."
    return f"Tamanho máximo excedido ({limit_bytes // (1024 * 1024)}MB)."


@router.post(
    "/analisar-contrato",
    response_model=AnalyzeContractResponse,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze_contract(
    file: Optional[UploadFile] = File(None, description="Contract as PDF or image"),
    pipeline: ContractAnalysisPipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_settings)
):
    """
    Analyze an uploaded contract and explain its risky clauses in plain language.
    """
    logger.info("Received contract analysis request")

    if file is None:
        logger.info("No file received")
        return error_response(400, "Arquivo não enviado.")

    try:
        document = await save_upload(file, settings.UPLOAD_DIR, settings.MAX_UPLOAD_SIZE_BYTES)
    except PayloadTooLargeError as e:
        logger.info(f"Upload rejected: {e.message}")
        return error_response(413, _too_large_message(e.limit_bytes))
    except OSError as e:
        logger.error(f"Error storing upload: {e}", exc_info=True)
        return error_response(500, f"Erro ao processar o contrato: {e}")

    logger.info(
        f"File received: filename={document.original_name}, "
        f"mimetype={document.declared_media_type}, size={document.size_bytes}"
    )

    try:
        clausulas = await pipeline.analyze_document(document)
    except UnsupportedMediaTypeError:
        return error_response(400, "Tipo de arquivo não suportado.")
    except ExtractionError as e:
        logger.error(f"Error extracting text: {e.message}")
        return error_response(500, "Erro ao extrair texto do arquivo.")
    except AnalysisServiceError as e:
        logger.error(f"Error analyzing contract: {e.message}")
        return error_response(500, f"Erro ao processar o contrato: {e.message}")
    except Exception as e:
        logger.error(f"Error processing contract: {e}", exc_info=True)
        return error_response(500, f"Erro ao processar o contrato: {e}")

    return AnalyzeContractResponse(clausulas=clausulas)


@router.post(
    "/resumir-clausulas",
    response_model=ClassifiedSummary,
    response_model_by_alias=True,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def summarize_clauses(
    request: Request,
    pipeline: ContractAnalysisPipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_settings)
):
    """
    Summarize clauses and classify them as safe or risky.

    Expects a JSON body ``{"clausulas": "..."}``.
    """
    declared_length = request.headers.get("content-length", "")
    if declared_length.isdigit() and int(declared_length) > settings.MAX_JSON_BODY_BYTES:
        return error_response(413, _too_large_message(settings.MAX_JSON_BODY_BYTES))

    # Chunked requests carry no Content-Length; stop reading once over the limit.
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > settings.MAX_JSON_BODY_BYTES:
            return error_response(413, _too_large_message(settings.MAX_JSON_BODY_BYTES))

    try:
        data = SummarizeClausesRequest.model_validate_json(bytes(body) or b"{}")
    except PydanticValidationError as e:
        logger.info(f"Invalid request body: {e}")
        return error_response(400, "Corpo da requisição inválido.")

    try:
        return await pipeline.classify_clauses(data.clausulas)
    except ValidationError:
        return error_response(400, "Cláusulas não enviadas.")
    except ReconciliationError as e:
        logger.error(f"Error interpreting AI response: {e.message}")
        return error_response(500, "Erro ao interpretar resposta da IA.", resposta=e.raw_text)
    except AnalysisServiceError as e:
        logger.error(f"Error summarizing clauses: {e.message}")
        return error_response(500, "Erro ao resumir cláusulas.")
    except Exception as e:
        logger.error(f"Error summarizing clauses: {e}", exc_info=True)
        return error_response(500, "Erro ao resumir cláusulas.")
