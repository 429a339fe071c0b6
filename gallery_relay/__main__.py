import uvicorn
from loguru import logger

from gallery_relay.config import settings


def main() -> None:
    logger.info("Server running on http://{}:{}", settings.host, settings.port)
    uvicorn.run(
        "gallery_relay.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
