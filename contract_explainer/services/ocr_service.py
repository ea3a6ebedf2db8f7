"""
OCR Service
Recognizes text in scanned contract images. Tesseract runs locally and is
the default; Mistral OCR is available as a hosted alternative.
"""

import base64
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

import pytesseract
from mistralai import Mistral
from PIL import Image

from contract_explainer.core.config import Settings

logger = logging.getLogger(__name__)


class BaseOCREngine(ABC):
    """Contract for OCR engines used by the text extractor."""

    @abstractmethod
    def recognize(self, path: Path, media_type: str) -> str:
        """Return the text recognized in the image at ``path``.

        Blocking; callers run it in a worker thread.
        """


class TesseractOCREngine(BaseOCREngine):
    """OCR through the local Tesseract binary."""

    def __init__(self, language: str = "por"):
        self.language = language

    def recognize(self, path: Path, media_type: str) -> str:
        with Image.open(path) as image:
            return pytesseract.image_to_string(image, lang=self.language)


class MistralOCREngine(BaseOCREngine):
    """OCR through the Mistral OCR API, sending the image inline as a data URI."""

    def __init__(self, api_key: Optional[str] = None, model: str = "mistral-ocr-latest"):
        """
        Initialize Mistral OCR engine.

        Args:
            api_key: Mistral API key
            model: OCR model identifier
        """
        self.api_key = api_key
        if not self.api_key:
            raise ValueError("Mistral API key is required. Set MISTRAL_API_KEY in environment variables.")

        self.model = model
        self.client = Mistral(api_key=self.api_key)

    def recognize(self, path: Path, media_type: str) -> str:
        content = base64.b64encode(Path(path).read_bytes()).decode("ascii")
        document = {
            "type": "image_url",
            "image_url": f"data:{media_type};base64,{content}"
        }

        response = self.client.ocr.process(model=self.model, document=document)
        return self._extract_text_from_ocr(response)

    def _extract_text_from_ocr(self, ocr_result: Any) -> str:
        """
        Join the markdown of every page in a Mistral OCR response.

        Mistral OCR response structure:
        - ocr_result.pages: List of OCRPageObject
        - Each OCRPageObject has .markdown attribute with the extracted text
        """
        pages = getattr(ocr_result, "pages", None)
        if pages is None and isinstance(ocr_result, dict):
            pages = ocr_result.get("pages")

        text_parts = []
        for page in pages or []:
            if isinstance(page, dict):
                page_text = page.get("markdown") or page.get("text")
            else:
                page_text = getattr(page, "markdown", None) or getattr(page, "text", None)
            if page_text:
                text_parts.append(str(page_text))

        return "\n\n".join(text_parts).strip()


class OCREngineFactory:
    """Creates the OCR engine selected in settings."""

    ENGINES = ("tesseract", "mistral")

    @classmethod
    def create(cls, settings: Settings) -> BaseOCREngine:
        engine = settings.OCR_ENGINE.lower()
        if engine == "tesseract":
            return TesseractOCREngine(language=settings.OCR_LANGUAGE)
        if engine == "mistral":
            return MistralOCREngine(api_key=settings.MISTRAL_API_KEY, model=settings.MISTRAL_OCR_MODEL)
        raise ValueError(
            f"Unknown OCR engine '{engine}'. Choose from: {list(cls.ENGINES)}"
        )
