import io
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from contract_explainer.core.config import Settings
from contract_explainer.services.openai_service import OpenAIService
from contract_explainer.services.payment_service import PaymentService
from contract_explainer.services.text_extraction_service import TextExtractionService


@pytest.fixture()
def contract_pdf_bytes() -> bytes:
    """Single-page PDF with a known contract clause."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.drawString(72, 760, "Cláusula 1: Rescisão do contrato a qualquer tempo.")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.drawString(72, 760, "Primeira pagina")
    c.showPage()
    c.drawString(72, 760, "Segunda pagina")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def blank_pdf_bytes() -> bytes:
    """Valid PDF without a text layer."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    """Small valid PNG image."""
    buf = io.BytesIO()
    Image.new("RGB", (64, 32), color="white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def write_file(tmp_path: Path):
    """Write bytes to a file under tmp_path and return its path."""
    def _write(name: str, content: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(content)
        return path
    return _write


@pytest.fixture()
def upload_dir(tmp_path: Path) -> Path:
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture()
def test_settings(upload_dir: Path) -> Settings:
    return Settings(
        UPLOAD_DIR=str(upload_dir),
        OPENAI_API_KEY="test-key",
        STRIPE_SECRET_KEY="sk_test_123",
    )


@pytest.fixture()
def openai_stub() -> MagicMock:
    """OpenAIService double whose reply is set per test via complete.return_value."""
    stub = MagicMock(spec=OpenAIService)
    stub.complete = AsyncMock(return_value="1. Cláusula de rescisão: pode ser cancelada sem aviso.")
    return stub


@pytest.fixture()
def extractor_stub() -> MagicMock:
    stub = MagicMock(spec=TextExtractionService)
    stub.extract = AsyncMock(return_value="Cláusula 1: Rescisão do contrato.")
    return stub


@pytest.fixture()
def payment_stub() -> MagicMock:
    stub = MagicMock(spec=PaymentService)
    stub.is_configured.return_value = True
    stub.create_checkout_session = AsyncMock(return_value="https://checkout.stripe.com/c/pay/cs_test_1")
    return stub
