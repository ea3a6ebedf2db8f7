"""
Contract Analysis Pipeline
Analyze flow:  upload → text extraction → analysis prompt → OpenAI → plain-language report
Classify flow: clause text → classification prompt → OpenAI → reconciled summary
"""

import logging
from pathlib import Path

from contract_explainer.core.exceptions import UnsupportedMediaTypeError, ValidationError
from contract_explainer.schemas.contract_analysis import ClassifiedSummary, UploadedDocument
from contract_explainer.services.openai_service import (
    ANALYSIS_MAX_TOKENS,
    ANALYSIS_TEMPERATURE,
    OpenAIService,
)
from contract_explainer.services.prompt_builder import (
    build_analysis_prompt,
    build_classification_prompt,
)
from contract_explainer.services.response_reconciler import parse_classification
from contract_explainer.services.text_extraction_service import (
    TextExtractionService,
    is_supported_media_type,
)

logger = logging.getLogger(__name__)


class ContractAnalysisPipeline:
    """
    Sequences the analysis stages for a single request.

    Every stage failure ends the request; nothing is retried and no partial
    result is returned. The uploaded file is removed on every exit path of
    the analyze flow.
    """

    def __init__(
        self,
        extractor: TextExtractionService,
        openai_service: OpenAIService
    ):
        """
        Initialize pipeline.

        Args:
            extractor: Turns PDFs and images into text
            openai_service: Client for the generative-text service
        """
        self.extractor = extractor
        self.openai_service = openai_service

    async def analyze_document(self, document: UploadedDocument) -> str:
        """
        Produce a plain-language risk analysis of an uploaded contract.

        Args:
            document: Upload owned by this request; removed before returning

        Returns:
            Raw analysis text from the model

        Raises:
            UnsupportedMediaTypeError: If the upload is neither a PDF nor an image
            ExtractionError: If no text could be read from the file
            AnalysisServiceError: If the model call fails
        """
        try:
            if not is_supported_media_type(document.declared_media_type):
                logger.info(f"Unsupported file type: {document.declared_media_type}")
                raise UnsupportedMediaTypeError(document.declared_media_type)

            text = await self.extractor.extract(
                document.temporary_path,
                document.declared_media_type
            )
            logger.info(f"Text extracted successfully, length: {len(text)}")

            logger.info("Sending contract for AI analysis")
            analysis = await self.openai_service.complete(
                build_analysis_prompt(text),
                max_tokens=ANALYSIS_MAX_TOKENS,
                temperature=ANALYSIS_TEMPERATURE
            )
            logger.info("Contract analysis completed")
            return analysis
        finally:
            self._discard(document.temporary_path)

    async def classify_clauses(self, clause_text: str) -> ClassifiedSummary:
        """
        Split previously analysed clauses into safe and risky groups.

        Args:
            clause_text: Clause text supplied by the caller

        Returns:
            Classified summary

        Raises:
            ValidationError: If clause_text is missing or blank
            AnalysisServiceError: If the model call fails
            ReconciliationError: If the reply cannot be interpreted
        """
        if not clause_text or not clause_text.strip():
            raise ValidationError("Clause text is required")

        raw_reply = await self.openai_service.complete(
            build_classification_prompt(clause_text),
            max_tokens=ANALYSIS_MAX_TOKENS,
            temperature=ANALYSIS_TEMPERATURE
        )
        summary = parse_classification(raw_reply)
        logger.info(
            f"Classified {len(summary.safe_clauses)} safe and "
            f"{len(summary.risky_clauses)} risky clause(s)"
        )
        return summary

    def _discard(self, path: Path) -> None:
        """Remove the temporary upload; failures are logged, never raised."""
        try:
            Path(path).unlink(missing_ok=True)
            logger.info("Temporary file removed")
        except OSError as e:
            logger.error(f"Error removing temporary file {path}: {e}")
