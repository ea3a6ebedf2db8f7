"""
Text Extraction Service
Turns an uploaded contract into plain text: PDFs through their embedded
text layer (pdfplumber), images through OCR.
"""

import asyncio
import io
import logging
from pathlib import Path
from typing import Optional

import pdfplumber

from contract_explainer.core.exceptions import ExtractionError, UnsupportedMediaTypeError
from contract_explainer.services.ocr_service import BaseOCREngine, TesseractOCREngine

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
IMAGE_MEDIA_TYPE_PREFIX = "image/"


def is_supported_media_type(media_type: Optional[str]) -> bool:
    """Only PDFs and images can be turned into text."""
    if not media_type:
        return False
    return media_type == PDF_MEDIA_TYPE or media_type.startswith(IMAGE_MEDIA_TYPE_PREFIX)


class TextExtractionService:
    """
    Extracts plain text from a PDF or image file.

    Image-only PDFs yield an empty string; they are not sent to OCR.
    """

    def __init__(self, ocr_engine: Optional[BaseOCREngine] = None):
        self.ocr_engine = ocr_engine or TesseractOCREngine()

    async def extract(self, path: Path, media_type: str) -> str:
        """
        Extract text from the file at ``path``.

        Args:
            path: Location of the uploaded file
            media_type: Declared media type of the upload

        Returns:
            Extracted text

        Raises:
            UnsupportedMediaTypeError: If media_type is neither a PDF nor an image
            ExtractionError: If the file cannot be read or recognized
        """
        if not is_supported_media_type(media_type):
            raise UnsupportedMediaTypeError(media_type)

        if media_type == PDF_MEDIA_TYPE:
            logger.info("Extracting text from PDF")
            text = await asyncio.to_thread(self._extract_pdf, Path(path))
            if not text:
                logger.warning("PDF has no text layer; image-only PDFs are not OCRed")
            return text

        logger.info(f"Extracting text from image ({media_type})")
        return await asyncio.to_thread(self._extract_image, Path(path), media_type)

    def _extract_pdf(self, path: Path) -> str:
        try:
            pdf_bytes = path.read_bytes()
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
            return "\n".join(pages).strip()
        except Exception as exc:
            raise ExtractionError(f"PDF text extraction failed: {exc}") from exc

    def _extract_image(self, path: Path, media_type: str) -> str:
        try:
            return self.ocr_engine.recognize(path, media_type).strip()
        except Exception as exc:
            raise ExtractionError(f"OCR failed: {exc}") from exc
