import asyncio
import io
from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from contract_explainer.core.exceptions import PayloadTooLargeError
from contract_explainer.utils.uploads import save_upload


def _upload(content: bytes, content_type: str = "application/pdf") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename="contrato.pdf",
        headers=Headers({"content-type": content_type}),
    )


class TestSaveUpload:
    @pytest.mark.asyncio
    async def test_stores_file_and_describes_it(self, upload_dir: Path) -> None:
        document = await save_upload(_upload(b"%PDF-1.4 conteudo"), upload_dir, max_size_bytes=1024)

        assert document.temporary_path.parent == upload_dir
        assert document.temporary_path.read_bytes() == b"%PDF-1.4 conteudo"
        assert document.declared_media_type == "application/pdf"
        assert document.size_bytes == 17
        assert document.original_name == "contrato.pdf"

    @pytest.mark.asyncio
    async def test_unique_names(self, upload_dir: Path) -> None:
        first = await save_upload(_upload(b"a"), upload_dir, max_size_bytes=1024)
        second = await save_upload(_upload(b"a"), upload_dir, max_size_bytes=1024)
        assert first.temporary_path != second.temporary_path

    @pytest.mark.asyncio
    async def test_creates_missing_directory(self, tmp_path: Path) -> None:
        document = await save_upload(_upload(b"a"), tmp_path / "new" / "dir", max_size_bytes=1024)
        assert document.temporary_path.exists()

    @pytest.mark.asyncio
    async def test_too_large_leaves_nothing_behind(self, upload_dir: Path) -> None:
        with pytest.raises(PayloadTooLargeError) as exc_info:
            await save_upload(_upload(b"x" * 2048), upload_dir, max_size_bytes=1024)

        assert exc_info.value.limit_bytes == 1024
        assert exc_info.value.status_code == 413
        assert list(upload_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_disk_writes_run_off_the_event_loop(self, upload_dir: Path) -> None:
        with patch(
            "contract_explainer.utils.uploads.asyncio.to_thread", wraps=asyncio.to_thread
        ) as to_thread:
            document = await save_upload(_upload(b"conteudo"), upload_dir, max_size_bytes=1024)

        written = [c.args[1] for c in to_thread.call_args_list if getattr(c.args[0], "__name__", "") == "write"]
        assert written == [b"conteudo"]
        assert document.temporary_path.read_bytes() == b"conteudo"

    @pytest.mark.asyncio
    async def test_unusable_directory_raises_os_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "arquivo"
        blocker.write_bytes(b"")
        with pytest.raises(OSError):
            await save_upload(_upload(b"a"), blocker / "uploads", max_size_bytes=1024)
