import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from config import Settings
from errors import ApiKeyMissingError, TransportError, UpstreamError, UpstreamParseError

logger = logging.getLogger(__name__)


TEXT_ACTION = "generateContent"
IMAGE_ACTION = "generateImage"
LOG_PREVIEW_CHARS = 1000


@dataclass
class UpstreamResult:
    status_code: int
    text: str
    data: Any


def build_text_payload(prompt: str) -> dict:
    return {
        "contents": [
            {
                "role": "user",
                "parts": [{"text": prompt}],
            }
        ]
    }


def build_image_payload(prompt: str) -> dict:
    return {"prompt": prompt}


def mask_key(url: str, api_key: str) -> str:
    if not api_key:
        return url
    return url.replace(api_key, "***")


class GeminiClient:
    """Posts prompts to the Generative Language REST API and returns the raw reply."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self._client = httpx.AsyncClient(
            timeout=settings.request_timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def generate_text(self, prompt: str) -> UpstreamResult:
        return await self._post(TEXT_ACTION, build_text_payload(prompt), prompt)

    async def generate_image(self, prompt: str) -> UpstreamResult:
        return await self._post(IMAGE_ACTION, build_image_payload(prompt), prompt)

    async def _post(self, action: str, payload: dict, prompt: str) -> UpstreamResult:
        api_key = self.settings.google_api_key
        if not api_key:
            raise ApiKeyMissingError()

        url = self.settings.model_url(action)
        logger.info(
            "Calling Gemini action=%s model=%s prompt_len=%d",
            action,
            self.settings.model,
            len(prompt),
        )
        logger.debug("Request body: %s", json.dumps(payload))

        try:
            resp = await self._client.post(url, params={"key": api_key}, json=payload)
        except httpx.HTTPError as exc:
            logger.exception("Gemini request failed action=%s url=%s", action, url)
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

        raw_text = resp.text
        logger.info("Raw API response action=%s status=%d body=%s", action, resp.status_code, raw_text[:LOG_PREVIEW_CHARS])

        if not resp.is_success:
            logger.warning("Gemini returned error status=%d action=%s", resp.status_code, action)
            raise UpstreamError(resp.status_code, raw_text)

        try:
            data = json.loads(raw_text)
        except ValueError as exc:
            raise UpstreamParseError(f"Invalid JSON from Gemini API: {exc}") from exc

        return UpstreamResult(status_code=resp.status_code, text=raw_text, data=data)
