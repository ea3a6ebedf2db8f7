"""
Upload storage helpers
"""

import asyncio
import logging
import uuid
from pathlib import Path
from typing import Union

from fastapi import UploadFile

from contract_explainer.core.exceptions import PayloadTooLargeError
from contract_explainer.schemas.contract_analysis import UploadedDocument

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


async def save_upload(
    file: UploadFile,
    upload_dir: Union[str, Path],
    max_size_bytes: int
) -> UploadedDocument:
    """
    Stream an uploaded file to a uniquely named file under ``upload_dir``.

    Args:
        file: Multipart file from the request
        upload_dir: Directory for temporary uploads (created if missing)
        max_size_bytes: Largest accepted upload

    Returns:
        UploadedDocument pointing at the stored file

    Raises:
        PayloadTooLargeError: If the upload exceeds max_size_bytes; nothing is left on disk
    """
    directory = Path(upload_dir)
    await asyncio.to_thread(directory.mkdir, parents=True, exist_ok=True)
    path = directory / uuid.uuid4().hex

    size = 0
    try:
        with path.open("wb") as out:
            while True:
                chunk = await file.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > max_size_bytes:
                    raise PayloadTooLargeError(
                        f"Upload exceeds {max_size_bytes} bytes",
                        limit_bytes=max_size_bytes
                    )
                await asyncio.to_thread(out.write, chunk)
    except BaseException:
        path.unlink(missing_ok=True)
        raise

    return UploadedDocument(
        temporary_path=path,
        declared_media_type=file.content_type or "",
        size_bytes=size,
        original_name=file.filename,
    )
