import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.generate.schemas import ErrorResponse, GenerateRequest, ImageResponse, TextResponse
from config import Settings
from errors import RelayError
from gemini_client import GeminiClient
from .service import generate_image, generate_text

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_gemini_client(request: Request) -> GeminiClient:
    return request.app.state.gemini_client


def error_response(exc: RelayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@router.post("/generate", response_model=TextResponse, responses=ERROR_RESPONSES)
async def generate_route(
    request: GenerateRequest | None = None,
    settings: Settings = Depends(get_app_settings),
    client: GeminiClient = Depends(get_gemini_client),
):
    try:
        return await generate_text(request, settings, client)
    except RelayError as exc:
        return error_response(exc)
    except Exception as exc:
        logger.exception("Error in /generate")
        return JSONResponse(status_code=500, content={"error": str(exc)})


@router.post("/generateImage", response_model=ImageResponse, responses=ERROR_RESPONSES)
async def generate_image_route(
    request: GenerateRequest | None = None,
    settings: Settings = Depends(get_app_settings),
    client: GeminiClient = Depends(get_gemini_client),
):
    try:
        return await generate_image(request, settings, client)
    except RelayError as exc:
        return error_response(exc)
    except Exception as exc:
        logger.exception("Error in /generateImage")
        return JSONResponse(status_code=500, content={"error": str(exc)})
