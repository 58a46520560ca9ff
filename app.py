import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from api.generate.router import router as generate_router
from config import Settings, get_settings
from errors import PromptMissingError
from gemini_client import GeminiClient, TEXT_ACTION, mask_key

logger = logging.getLogger(__name__)


class PublicStaticFiles(StaticFiles):
    """Static files that never expose dotfiles such as ``.env``."""

    async def get_response(self, path: str, scope: Scope):
        parts = path.replace("\\", "/").split("/")
        if any(part.startswith(".") for part in parts if part):
            raise StarletteHTTPException(status_code=404)
        return await super().get_response(path, scope)


class BodySizeLimitMiddleware:
    """Rejects request bodies larger than ``max_body_bytes`` with 413.

    Bodies without a numeric Content-Length (chunked uploads) are buffered
    up to the limit and replayed to the app.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int) -> None:
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit():
            if int(content_length) > self.max_body_bytes:
                await self._reject(scope, receive, send, content_length)
                return
            await self.app(scope, receive, send)
            return

        body = bytearray()
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body.extend(message.get("body", b""))
            more_body = message.get("more_body", False)
            if len(body) > self.max_body_bytes:
                await self._reject(scope, receive, send, f">{self.max_body_bytes}")
                return

        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": bytes(body), "more_body": False}
            return await receive()

        await self.app(scope, replay, send)

    async def _reject(self, scope: Scope, receive: Receive, send: Send, size: str) -> None:
        logger.warning("Rejected request body of %s bytes on %s", size, scope.get("path"))
        response = JSONResponse(status_code=413, content={"error": "Request body too large."})
        await response(scope, receive, send)


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not settings.has_api_key:
            logger.warning("GOOGLE_API_KEY not set in environment or .env file!")
        api_url = f"{settings.model_url(TEXT_ACTION)}?key={settings.google_api_key}"
        logger.info("Using API URL: %s", mask_key(api_url, settings.google_api_key))

        app.state.gemini_client = GeminiClient(settings, transport=transport)
        yield
        await app.state.gemini_client.aclose()

    app = FastAPI(title="Gemini Relay", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)

    @app.exception_handler(RequestValidationError)
    async def invalid_body_handler(request: Request, exc: RequestValidationError):
        # malformed JSON or a non-string prompt counts as no prompt
        logger.info("Invalid request body on %s: %s", request.url.path, exc.errors())
        error = PromptMissingError()
        return JSONResponse(status_code=error.status_code, content=error.to_payload())

    @app.get("/health")
    def health() -> dict:
        return {
            "status": "ok",
            "model": settings.model,
            "apiKeyConfigured": settings.has_api_key,
        }

    app.include_router(generate_router)

    # registered last so API routes take precedence
    app.mount("/", PublicStaticFiles(directory=settings.static_dir, html=True), name="static")
    return app


app = create_app()


def main() -> None:
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Server running on http://localhost:%d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
