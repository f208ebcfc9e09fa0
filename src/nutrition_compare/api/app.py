"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, File, Request, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from nutrition_compare.api.models import (
    AnalyzeRequest,
    AnalyzeResponse,
    RecognitionResponse,
)
from nutrition_compare.app_logging import configure_logging
from nutrition_compare.config import parse_origins
from nutrition_compare.containers import AppContainer
from nutrition_compare.domain.errors import (
    ClientInputError,
    ProviderError,
    RecognitionError,
)
from nutrition_compare.services.image_codec import ImagePayload


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_origins(container.settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ClientInputError)
    async def client_input_error(
        request: Request, exc: ClientInputError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Malformed request"},
        )

    @app.exception_handler(RecognitionError)
    async def recognition_error(
        request: Request, exc: RecognitionError
    ) -> JSONResponse:
        logger.warning("Recognition failed on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY, content={"error": str(exc)}
        )

    @app.exception_handler(ProviderError)
    async def provider_error(request: Request, exc: ProviderError) -> JSONResponse:
        logger.warning(
            "Provider %s failed on %s: %s", exc.provider, request.url.path, exc.message
        )
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY, content={"error": exc.summary}
        )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/openai/vision")
    async def recognize_upload(
        request: Request, image: UploadFile | None = File(default=None)
    ) -> RecognitionResponse:
        """Recognize the dish in an uploaded image file."""
        if image is None:
            raise ClientInputError("Missing file")
        state_container: AppContainer = request.app.state.container
        data = await image.read()
        if not data:
            raise ClientInputError("Missing file")
        payload = ImagePayload.from_bytes(data, image.content_type)
        food_name = await state_container.analysis_service.recognize(payload)
        return RecognitionResponse(food_name=food_name)

    @app.get("/api/nutrition/{tab}", response_model_exclude_none=True)
    async def nutrition_by_name(
        tab: str, request: Request, q: str | None = None
    ) -> AnalyzeResponse:
        """Look up nutrition for a dish name with the provider for ``tab``."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.analysis_service.lookup_by_name(q, tab)
        return AnalyzeResponse.from_result(result)

    @app.post("/api/analyze-image", response_model_exclude_none=True)
    async def analyze_image(body: AnalyzeRequest, request: Request) -> AnalyzeResponse:
        """Recognize the dish in an inline image and look up its nutrition."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.analysis_service.analyze(body.image, body.tab)
        return AnalyzeResponse.from_result(result)

    static_dir = container.settings.static_dir
    if static_dir and Path(static_dir).is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app
