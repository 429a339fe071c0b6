import shutil
from pathlib import Path
from uuid import uuid4

from fastapi import UploadFile
from loguru import logger

from gallery_relay.config import settings
from gallery_relay.models.upload import StagedFile

MAX_FILENAME_BYTES = 200
MAX_SUFFIX_LENGTH = 16


class EmptyUploadError(ValueError):
    pass


def _safe_filename(upload: UploadFile, file_id: str) -> str:
    name = Path((upload.filename or "").replace("\\", "/")).name
    usable = name not in {"", ".", ".."} and "\x00" not in name
    if usable and len(name.encode("utf-8")) <= MAX_FILENAME_BYTES:
        return name
    suffix = Path(name.replace("\x00", "")).suffix.lower()
    if not suffix or len(suffix) > MAX_SUFFIX_LENGTH:
        suffix = ".bin"
    return f"{file_id}{suffix}"


async def stage_upload(upload: UploadFile) -> StagedFile:
    data = await upload.read()
    if not data:
        raise EmptyUploadError("No file")

    file_id = str(uuid4())
    filename = _safe_filename(upload, file_id)
    directory = settings.upload_path / file_id
    directory.mkdir(parents=True, exist_ok=False)
    staged = StagedFile(
        id=file_id,
        filename=filename,
        content_type=upload.content_type or "application/octet-stream",
        directory=directory,
        size_bytes=len(data),
    )
    try:
        staged.path.write_bytes(data)
    except OSError:
        shutil.rmtree(directory, ignore_errors=True)
        raise
    logger.debug(
        "File staged file_id={} destination={} size_bytes={}",
        file_id,
        str(staged.path),
        len(data),
    )
    return staged


def discard_staged(staged: StagedFile) -> None:
    try:
        shutil.rmtree(staged.directory)
    except OSError as exc:
        logger.debug("Staged file cleanup failed file_id={} error={}", staged.id, str(exc))
        return
    logger.debug("Staged file removed file_id={}", staged.id)
