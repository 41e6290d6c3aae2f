from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Union

import requests

from .config import OpenAISettings

logger = logging.getLogger(__name__)


class ModelCallError(RuntimeError):
    pass


class ConfigurationError(ModelCallError):
    pass


class ProviderError(ModelCallError):
    def __init__(self, status_code: int, body: str):
        super().__init__(f"OpenAI API error (HTTP {status_code}): {body}")
        self.status_code = status_code
        self.body = body


@dataclass(frozen=True)
class TextOnly:
    prompt: str


@dataclass(frozen=True)
class TextWithImage:
    prompt: str
    image_base64: str


ChatRequest = Union[TextOnly, TextWithImage]


def build_messages(request: ChatRequest) -> list[dict[str, Any]]:
    if isinstance(request, TextWithImage):
        return [
            {
                "role": "user",
                "content": [
                    {
                        "type": "image_url",
                        "image_url": {
                            "url": f"data:image/jpeg;base64,{request.image_base64}",
                            "detail": "high",
                        },
                    },
                    {"type": "text", "text": request.prompt},
                ],
            }
        ]
    if isinstance(request, TextOnly):
        return [{"role": "user", "content": request.prompt}]
    raise TypeError(f"Unsupported chat request: {type(request).__name__}")


class OpenAIChatClient:
    """Single-shot JSON-mode client for an OpenAI-compatible chat completions endpoint.

    No retries: configuration and HTTP failures raise ``ModelCallError``
    subclasses, transport failures propagate as ``requests.RequestException``.
    """

    def __init__(self, settings: OpenAISettings):
        self._settings = settings

    @property
    def model(self) -> str:
        return self._settings.model

    def complete(self, request: ChatRequest) -> str:
        if not self._settings.api_key:
            raise ConfigurationError("OPENAI_API_KEY is not configured")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._settings.api_key}",
        }
        payload: dict[str, Any] = {
            "model": self._settings.model,
            "messages": build_messages(request),
            "max_completion_tokens": self._settings.max_completion_tokens,
            "response_format": {"type": "json_object"},
        }

        logger.debug("POST %s (model=%s, image=%s)", self._settings.api_url, self._settings.model, isinstance(request, TextWithImage))
        res = requests.post(
            self._settings.api_url,
            headers=headers,
            json=payload,
            timeout=self._settings.timeout_seconds,
        )
        if not res.ok:
            raise ProviderError(res.status_code, res.text)

        data = res.json()
        choices = data.get("choices") if isinstance(data, dict) else None
        first = (choices or [{}])[0]
        message = first.get("message") if isinstance(first, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str) or not content:
            return "{}"
        return content
