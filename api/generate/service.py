import logging

from api.generate.schemas import GenerateRequest, ImageResponse, TextResponse
from config import Settings
from errors import ApiKeyMissingError, PromptMissingError
from gemini_client import GeminiClient
from utils import extract_image, extract_text

logger = logging.getLogger(__name__)


def _require_prompt(request: GenerateRequest | None, settings: Settings) -> str:
    prompt = request.prompt if request is not None else None
    if not prompt:
        raise PromptMissingError()
    if not settings.has_api_key:
        raise ApiKeyMissingError()
    return prompt


async def generate_text(request: GenerateRequest | None, settings: Settings, client: GeminiClient) -> TextResponse:
    prompt = _require_prompt(request, settings)
    result = await client.generate_text(prompt)
    text = extract_text(result.data)
    logger.info(
        "generate_text upstream_status=%d upstream_len=%d resp_len=%d",
        result.status_code,
        len(result.text),
        len(str(text)),
    )
    return TextResponse(response=str(text))


async def generate_image(request: GenerateRequest | None, settings: Settings, client: GeminiClient) -> ImageResponse:
    prompt = _require_prompt(request, settings)
    result = await client.generate_image(prompt)
    image = extract_image(result.data)
    logger.info(
        "generate_image upstream_status=%d upstream_len=%d image_present=%s",
        result.status_code,
        len(result.text),
        image is not None,
    )
    return ImageResponse(imageUrl=None if image is None else str(image))
