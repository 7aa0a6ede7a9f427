# ================================
# FILE: upload_store/api/routes.py
# ================================

import os
import re
import uuid
import asyncio
import logging
import mimetypes
from typing import Optional

import aiofiles
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from upload_store.api.dependencies import get_dir_manager
from upload_store.core.config import settings
from upload_store.core.exceptions import CleanupWarning, FileSizeTooLarge, ValidationError
from upload_store.models.schemas import HealthResponse, UploadResponse
from upload_store.services.dir_manager import DirManager
from upload_store.services.file_manager import create_file_manager, mime_base_of

logger = logging.getLogger(__name__)
router = APIRouter()

VERSION_PATTERN = re.compile(r"^[A-Za-z0-9_.]+$")


def _upload_extension(filename: Optional[str], content_type: Optional[str]) -> str:
    """Extension of the client filename, else one guessed from the content type"""
    ext = os.path.splitext(filename or "")[1].lower()
    if not ext and content_type:
        ext = mimetypes.guess_extension(content_type.split(";", 1)[0].strip()) or ""
    return ext


async def _save_temp_upload(file: UploadFile) -> tuple:
    """Stream the upload into the temp directory and return (path, size)"""
    os.makedirs(settings.upload_tmp_dir, exist_ok=True)
    tmp_path = os.path.join(settings.upload_tmp_dir, f"up-{uuid.uuid4().hex}")
    size = 0
    try:
        async with aiofiles.open(tmp_path, "wb") as out:
            while True:
                chunk = await file.read(settings.copy_chunk_size)
                if not chunk:
                    break
                size += len(chunk)
                if size > settings.max_upload_size:
                    raise FileSizeTooLarge(
                        f"File too large. Maximum size: {settings.max_upload_size_mb}MB",
                        details={"max_upload_size": settings.max_upload_size},
                    )
                await out.write(chunk)
    except BaseException:
        _discard(tmp_path)
        raise
    return tmp_path, size


def _discard(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Could not remove temporary upload %s: %s", path, exc)


@router.post("/upload", response_model=UploadResponse)
async def upload_file(
    request: Request,
    file: UploadFile = File(...),
    version: str = Form("original"),
    dir_manager: DirManager = Depends(get_dir_manager),
):
    """Store an uploaded file under the given version tag"""
    if not VERSION_PATTERN.match(version):
        raise ValidationError(
            "Version may only contain letters, digits, '_' and '.'",
            details={"version": version},
        )

    request_id = getattr(request.state, "request_id", None)
    tmp_path, size = await _save_temp_upload(file)

    warnings = []
    try:
        manager = create_file_manager(dir_manager, mime_base_of(file.content_type), version)
        manager.set_filename(_upload_extension(file.filename, file.content_type))
        dir_manager.ensure()
        await asyncio.to_thread(manager.convert, tmp_path)
    except CleanupWarning as warning:
        logger.warning(
            f"Upload stored with leftover temp file: {warning.message}",
            extra={"request_id": request_id},
        )
        warnings.append(warning.message)
    except Exception:
        _discard(tmp_path)
        raise

    logger.info(
        f"Stored upload {file.filename!r} as {manager.filename} ({size} bytes)",
        extra={"request_id": request_id},
    )
    return UploadResponse(
        success=True,
        content_type=file.content_type,
        size=size,
        warnings=warnings,
        message="File uploaded successfully",
        **manager.describe(),
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(dir_manager: DirManager = Depends(get_dir_manager)):
    """Health check endpoint"""
    root = dir_manager.abs()
    writable = os.path.isdir(root) and os.access(root, os.W_OK)
    return HealthResponse(
        status="healthy" if writable else "degraded",
        version=settings.version,
        storage_root=root,
        storage_writable=writable,
    )
