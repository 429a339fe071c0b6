from fastapi import APIRouter, HTTPException
from fastapi.concurrency import run_in_threadpool
from loguru import logger
from pydantic import ValidationError

from gallery_relay.config import settings
from gallery_relay.models.image import DeleteResult, ErrorResponse, ImageSummary
from gallery_relay.services.cloudinary_client import ProviderError, destroy_image, list_images

router = APIRouter(tags=["images"], responses={500: {"model": ErrorResponse}})


# Cloudinary ids include the folder, so the identifier may contain slashes.
@router.delete("/delete/{public_id:path}", response_model=DeleteResult)
async def delete_image(public_id: str) -> DeleteResult:
    logger.info("Delete request public_id={}", public_id)
    try:
        result = await run_in_threadpool(destroy_image, public_id)
    except ProviderError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return DeleteResult(result=result)


@router.get("/images", response_model=list[ImageSummary])
async def get_images() -> list[ImageSummary]:
    try:
        resources = await run_in_threadpool(
            list_images,
            settings.folder_prefix,
            settings.list_max_results,
        )
    except ProviderError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    try:
        images = [ImageSummary.model_validate(resource) for resource in resources]
    except ValidationError as exc:
        logger.exception("Images projection failed folder={} error={}", settings.folder_name, str(exc))
        raise HTTPException(status_code=500, detail="Unexpected provider response for image listing") from exc
    logger.info("Images listed folder={} count={}", settings.folder_name, len(images))
    return images
