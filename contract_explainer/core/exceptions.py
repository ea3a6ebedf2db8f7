"""
Error taxonomy for the contract analysis service.

Every error carries an HTTP status code so the routers can map it to a
``{"error": ...}`` payload at the request boundary.
"""

from typing import Optional

from contract_explainer.schemas.openai import OpenAIErrorType


class ContractServiceError(Exception):
    """Base error for all contract service failures"""
    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationError(ContractServiceError):
    """Missing or invalid input; correctable by the caller"""
    status_code = 400


class UnsupportedMediaTypeError(ValidationError):
    """Declared media type is neither a PDF nor an image"""

    def __init__(self, media_type: Optional[str]):
        self.media_type = media_type
        super().__init__(f"Unsupported media type: {media_type!r}")


class PayloadTooLargeError(ValidationError):
    """Upload or request body exceeds the configured limit"""
    status_code = 413

    def __init__(self, message: str, limit_bytes: int):
        self.limit_bytes = limit_bytes
        super().__init__(message)


class ExtractionError(ContractServiceError):
    """Text could not be extracted from the document"""


class AnalysisServiceError(ContractServiceError):
    """The generative-text service call failed"""

    def __init__(self, message: str, error_type: OpenAIErrorType = OpenAIErrorType.UNKNOWN):
        self.error_type = error_type
        super().__init__(message)


class ReconciliationError(ContractServiceError):
    """Model output could not be interpreted as a classified summary"""

    def __init__(self, message: str, raw_text: str):
        self.raw_text = raw_text
        super().__init__(message)


class PaymentServiceError(ContractServiceError):
    """Checkout session creation failed"""
