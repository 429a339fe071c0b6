from pathlib import Path
from typing import Any

import cloudinary
import cloudinary.api
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from loguru import logger

from gallery_relay.config import Settings


class ProviderError(Exception):
    pass


def configure_provider(app_settings: Settings) -> None:
    missing = [
        name
        for name in ("cloud_name", "api_key", "api_secret")
        if not getattr(app_settings, name)
    ]
    if missing:
        logger.warning("Cloudinary credentials missing fields={}; provider calls will fail", missing)
    cloudinary.config(
        cloud_name=app_settings.cloud_name,
        api_key=app_settings.api_key,
        api_secret=app_settings.api_secret,
        secure=True,
    )
    logger.info(
        "Cloudinary configured cloud_name={} folder={}",
        app_settings.cloud_name,
        app_settings.folder_name,
    )


def _message(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


def upload_image(path: Path, folder: str) -> dict[str, Any]:
    logger.info("Calling Cloudinary upload folder={} filename={}", folder, path.name)
    try:
        response = cloudinary.uploader.upload(
            str(path),
            folder=folder,
            use_filename=True,
            unique_filename=True,
            overwrite=False,
        )
    except CloudinaryError as exc:
        logger.exception("Cloudinary API error during upload folder={} error={}", folder, str(exc))
        raise ProviderError(_message(exc)) from exc
    except Exception as exc:
        logger.exception("Cloudinary upload failed folder={} error={}", folder, str(exc))
        raise ProviderError(_message(exc)) from exc
    logger.info("Cloudinary upload success public_id={}", response.get("public_id"))
    return response


def destroy_image(public_id: str) -> str:
    logger.info("Calling Cloudinary destroy public_id={}", public_id)
    try:
        response = cloudinary.uploader.destroy(public_id)
        result = response["result"]
    except CloudinaryError as exc:
        logger.exception("Cloudinary API error during destroy public_id={} error={}", public_id, str(exc))
        raise ProviderError(_message(exc)) from exc
    except Exception as exc:
        logger.exception("Cloudinary destroy failed public_id={} error={}", public_id, str(exc))
        raise ProviderError(_message(exc)) from exc
    logger.info("Cloudinary destroy finished public_id={} result={}", public_id, result)
    return result


def list_images(prefix: str, max_results: int) -> list[dict[str, Any]]:
    logger.info("Calling Cloudinary resources prefix={} max_results={}", prefix, max_results)
    try:
        response = cloudinary.api.resources(type="upload", prefix=prefix, max_results=max_results)
    except CloudinaryError as exc:
        logger.exception("Cloudinary API error during listing prefix={} error={}", prefix, str(exc))
        raise ProviderError(_message(exc)) from exc
    except Exception as exc:
        logger.exception("Cloudinary listing failed prefix={} error={}", prefix, str(exc))
        raise ProviderError(_message(exc)) from exc

    resources = list(response.get("resources") or [])[:max_results]
    if response.get("next_cursor"):
        logger.warning(
            "Cloudinary listing truncated prefix={} max_results={}; later pages are not fetched",
            prefix,
            max_results,
        )
    logger.info("Cloudinary resources returned prefix={} count={}", prefix, len(resources))
    return resources
