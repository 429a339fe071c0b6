from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])

HEALTH_MESSAGE = "Cloudinary admin server running"


@router.get("/", response_class=PlainTextResponse)
async def health() -> str:
    return HEALTH_MESSAGE
