import time
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from gallery_relay.config import settings
from gallery_relay.logging_config import setup_logging
from gallery_relay.routes.health import router as health_router
from gallery_relay.routes.images import router as images_router
from gallery_relay.routes.upload import router as upload_router
from gallery_relay.services.cloudinary_client import configure_provider


@asynccontextmanager
async def lifespan(app: FastAPI):
    app_settings = settings
    setup_logging(app_settings)
    configure_provider(app_settings)
    app.state.settings = app_settings
    logger.bind(request_id="-").info(
        "Starting app app_name={} folder={} debug={} log_level={}",
        app_settings.app_name,
        app_settings.folder_name,
        app_settings.debug,
        app_settings.log_level,
    )
    yield
    logger.bind(request_id="-").info("Shutting down app app_name={}", app_settings.app_name)


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(upload_router)
app.include_router(images_router)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()]
    logger.warning("Request validation failed path={} errors={}", request.url.path, messages)
    return JSONResponse(status_code=400, content={"error": "; ".join(messages)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


@app.middleware("http")
async def add_request_context(request: Request, call_next) -> Response:
    request_id = request.headers.get("x-request-id", str(uuid4()))
    client_host = request.client.host if request.client else "-"
    bound_logger = logger.bind(request_id=request_id)
    start = time.perf_counter()
    bound_logger.info(
        "Relay request start method={} path={} client={}",
        request.method,
        request.url.path,
        client_host,
    )
    with logger.contextualize(request_id=request_id):
        try:
            response = await call_next(request)
        except Exception:
            bound_logger.exception("Relay request failed method={} path={}", request.method, request.url.path)
            raise
    duration_ms = (time.perf_counter() - start) * 1000
    bound_logger.info(
        "Relay request finish method={} path={} status={} duration_ms={:.2f}",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    response.headers["X-Request-ID"] = request_id
    return response
