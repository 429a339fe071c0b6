from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from loguru import logger
from pydantic import ValidationError

from gallery_relay.config import settings
from gallery_relay.models.image import ErrorResponse, UploadedImage
from gallery_relay.services.cloudinary_client import ProviderError, upload_image
from gallery_relay.services.storage import EmptyUploadError, discard_staged, stage_upload

router = APIRouter(prefix="/upload", tags=["upload"])

STAGING_FAILED_MESSAGE = "Failed to stage upload"


@router.post(
    "",
    response_model=UploadedImage,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload(image: UploadFile | None = File(None)) -> UploadedImage:
    if image is None:
        logger.warning("Upload rejected reason=missing_file")
        raise HTTPException(status_code=400, detail="No file")
    logger.info("Upload request filename={} content_type={}", image.filename, image.content_type)

    try:
        staged = await stage_upload(image)
    except EmptyUploadError as exc:
        logger.warning("Upload rejected filename={} reason=empty_file", image.filename)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except OSError as exc:
        logger.exception("Upload staging failed filename={} error={}", image.filename, str(exc))
        raise HTTPException(status_code=500, detail=STAGING_FAILED_MESSAGE) from exc

    try:
        response = await run_in_threadpool(upload_image, staged.path, settings.folder_name)
    except ProviderError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    finally:
        discard_staged(staged)

    try:
        uploaded = UploadedImage(url=response["secure_url"], public_id=response["public_id"])
    except (KeyError, ValidationError) as exc:
        logger.exception("Upload response incomplete file_id={} error={}", staged.id, str(exc))
        raise HTTPException(status_code=500, detail="Unexpected provider response for upload") from exc
    logger.info(
        "Upload stored file_id={} public_id={} size_bytes={}",
        staged.id,
        uploaded.public_id,
        staged.size_bytes,
    )
    return uploaded
