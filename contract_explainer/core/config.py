"""
Application configuration settings
"""

from pydantic_settings import BaseSettings
from typing import Optional, List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "Contract Explainer"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # CORS (open to any origin, as the public frontend is served elsewhere)
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    CORS_ALLOW_HEADERS: List[str] = ["Content-Type", "Authorization", "Accept"]

    # Uploads
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_SIZE_BYTES: int = 10 * 1024 * 1024  # 10MB
    MAX_JSON_BODY_BYTES: int = 2 * 1024 * 1024  # 2MB

    # OpenAI Configuration
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_TIMEOUT_SECONDS: float = 60.0

    # OCR Configuration ("tesseract" or "mistral")
    OCR_ENGINE: str = "tesseract"
    OCR_LANGUAGE: str = "por"

    # Mistral Configuration (only used when OCR_ENGINE=mistral)
    MISTRAL_API_KEY: Optional[str] = None
    MISTRAL_OCR_MODEL: str = "mistral-ocr-latest"

    # Stripe Checkout Configuration
    STRIPE_SECRET_KEY: Optional[str] = None
    STRIPE_API_VERSION: str = "2023-08-16"
    CHECKOUT_CURRENCY: str = "brl"
    CHECKOUT_UNIT_AMOUNT: int = 499  # in cents
    CHECKOUT_PRODUCT_NAME: str = "Análise Contratual Completa"
    CHECKOUT_PRODUCT_DESCRIPTION: str = (
        "Explicação simples cláusula por cláusula, identificação de cláusulas abusivas, "
        "resumo de riscos e PDF com marcações."
    )
    CHECKOUT_SUCCESS_URL: str = "https://app.naosefoda.com.br/?session_id={CHECKOUT_SESSION_ID}"
    CHECKOUT_CANCEL_URL: str = "https://app.naosefoda.com.br/cancel"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
