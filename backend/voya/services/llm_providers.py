"""LLM provider strategies — one object per configured chat-completion vendor.

Each provider owns its request shaping and its response normalizer and
exposes a single ``generate(prompt) -> str`` capability. Any failure is
raised as ProviderCallError so the chain can move on.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import anthropic
import httpx
from openai import AsyncOpenAI, OpenAIError

from voya.config import Settings
from voya.errors import ProviderCallError
from voya.services.prompt_builder import SYSTEM_PROMPT
from voya.services.response_normalizer import (
    extract_anthropic,
    extract_bytez,
    extract_chat_completion,
)

logger = logging.getLogger(__name__)

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"
BYTEZ_URL = "https://api.bytez.com/models/v2/{model}"
OPENAI_URL = "https://api.openai.com/v1"
ANTHROPIC_URL = "https://api.anthropic.com"


@dataclass(frozen=True)
class ProviderConfig:
    id: str
    endpoint: str
    api_key: str
    model: str
    build_request: Callable[["ProviderConfig", str], dict]
    extract: Callable[[Any], str]
    auth_scheme: str = "Bearer"
    max_tokens: int = 2000
    temperature: float = 0.7


# ─── Request shaping ───


def _chat_messages(prompt: str) -> list[dict]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]


def shape_chat_completion(config: ProviderConfig, prompt: str) -> dict:
    return {
        "model": config.model,
        "messages": _chat_messages(prompt),
        "max_tokens": config.max_tokens,
        "temperature": config.temperature,
    }


def shape_bytez(config: ProviderConfig, prompt: str) -> dict:
    # Model is part of the URL
    return {
        "messages": _chat_messages(prompt),
        "max_tokens": config.max_tokens,
        "temperature": config.temperature,
    }


def shape_anthropic(config: ProviderConfig, prompt: str) -> dict:
    return {
        "model": config.model,
        "system": SYSTEM_PROMPT,
        "messages": [{"role": "user", "content": prompt}],
        "max_tokens": config.max_tokens,
        "temperature": config.temperature,
    }


# ─── Providers ───


class LLMProvider:
    """Base strategy. Subclasses implement ``_call`` and return the raw payload."""

    def __init__(self, config: ProviderConfig, timeout: float):
        self.config = config
        self.timeout = timeout

    @property
    def id(self) -> str:
        return self.config.id

    async def generate(self, prompt: str) -> str:
        payload = await self._call(self.config.build_request(self.config, prompt))
        return self.config.extract(payload)

    async def _call(self, body: dict) -> Any:
        raise NotImplementedError

    async def aclose(self) -> None:
        pass


class HttpChatProvider(LLMProvider):
    """Plain JSON-over-HTTP vendor (OpenRouter, Bytez)."""

    def __init__(self, config: ProviderConfig, http: httpx.AsyncClient, timeout: float):
        super().__init__(config, timeout)
        self._http = http

    async def _call(self, body: dict) -> Any:
        headers = {
            "Authorization": f"{self.config.auth_scheme} {self.config.api_key}",
            "Content-Type": "application/json",
        }
        try:
            resp = await self._http.post(
                self.config.endpoint, json=body, headers=headers, timeout=self.timeout
            )
        except httpx.HTTPError as e:
            raise ProviderCallError(self.id, f"request failed: {e!r}")

        if not resp.is_success:
            raise ProviderCallError(self.id, f"HTTP {resp.status_code} {resp.reason_phrase}")
        try:
            return resp.json()
        except ValueError:
            raise ProviderCallError(self.id, "malformed response (not JSON)")


class OpenAIProvider(LLMProvider):
    def __init__(self, config: ProviderConfig, timeout: float):
        super().__init__(config, timeout)
        self._client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.endpoint,
            timeout=timeout,
            max_retries=0,
        )

    async def _call(self, body: dict) -> Any:
        try:
            response = await self._client.chat.completions.create(**body)
        except OpenAIError as e:
            raise ProviderCallError(self.id, str(e))
        return response.model_dump()

    async def aclose(self) -> None:
        await self._client.close()


class AnthropicProvider(LLMProvider):
    def __init__(self, config: ProviderConfig, timeout: float):
        super().__init__(config, timeout)
        self._client = anthropic.AsyncAnthropic(
            api_key=config.api_key,
            base_url=config.endpoint,
            timeout=timeout,
            max_retries=0,
        )

    async def _call(self, body: dict) -> Any:
        try:
            response = await self._client.messages.create(**body)
        except anthropic.AnthropicError as e:
            raise ProviderCallError(self.id, str(e))
        return response.model_dump()

    async def aclose(self) -> None:
        await self._client.close()


# ─── Construction from settings ───


def provider_configs(settings: Settings) -> dict[str, ProviderConfig]:
    """All known providers keyed by id; entries without a credential are left out."""
    common = {"max_tokens": settings.llm_max_tokens, "temperature": settings.llm_temperature}
    candidates = [
        ProviderConfig(
            id="openrouter",
            endpoint=OPENROUTER_URL,
            api_key=settings.openrouter_api_key,
            model=settings.openrouter_model,
            build_request=shape_chat_completion,
            extract=extract_chat_completion,
            auth_scheme="Bearer",
            **common,
        ),
        ProviderConfig(
            id="bytez",
            endpoint=BYTEZ_URL.format(model=settings.bytez_model),
            api_key=settings.bytez_api_key,
            model=settings.bytez_model,
            build_request=shape_bytez,
            extract=extract_bytez,
            auth_scheme="Key",
            **common,
        ),
        ProviderConfig(
            id="openai",
            endpoint=OPENAI_URL,
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            build_request=shape_chat_completion,
            extract=extract_chat_completion,
            **common,
        ),
        ProviderConfig(
            id="anthropic",
            endpoint=ANTHROPIC_URL,
            api_key=settings.anthropic_api_key,
            model=settings.anthropic_model,
            build_request=shape_anthropic,
            extract=extract_anthropic,
            **common,
        ),
    ]
    return {c.id: c for c in candidates if c.api_key}


def build_providers(settings: Settings, http: httpx.AsyncClient) -> list[LLMProvider]:
    """Instantiate configured providers in LLM_PROVIDER_ORDER priority."""
    configs = provider_configs(settings)
    timeout = settings.http_timeout_seconds
    providers: list[LLMProvider] = []

    for provider_id in settings.provider_order_list:
        config = configs.get(provider_id)
        if config is None:
            logger.info(f"LLM provider '{provider_id}' has no credential or is unknown, skipping")
            continue
        if provider_id == "openai":
            providers.append(OpenAIProvider(config, timeout))
        elif provider_id == "anthropic":
            providers.append(AnthropicProvider(config, timeout))
        else:
            providers.append(HttpChatProvider(config, http, timeout))

    return providers
