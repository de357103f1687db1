"""Itinerary LLM client — walks the provider chain until one provider answers."""

import logging
from dataclasses import dataclass

from voya.errors import AllProvidersFailedError, ProviderCallError
from voya.schemas.itinerary import ItineraryRequest
from voya.services.llm_providers import LLMProvider
from voya.services.prompt_builder import build_itinerary_prompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItineraryResult:
    itinerary: str
    provider: str


class LLMClient:
    """Sequential fallback over an ordered list of providers.

    Providers are tried strictly one after another, each at most once per
    call. The first success wins; a failure is logged and the next provider
    is attempted.
    """

    def __init__(self, providers: list[LLMProvider]):
        self._providers = list(providers)

    @property
    def provider_ids(self) -> list[str]:
        return [p.id for p in self._providers]

    async def complete(self, prompt: str) -> tuple[str, str]:
        """Return ``(text, provider_id)`` from the first provider that succeeds.

        Raises:
            AllProvidersFailedError if no provider is configured or every one failed.
        """
        if not self._providers:
            raise AllProvidersFailedError("No AI providers configured")

        failures: list[ProviderCallError] = []

        for provider in self._providers:
            try:
                text = await provider.generate(prompt)
            except ProviderCallError as e:
                failures.append(e)
                logger.warning(f"LLM provider {provider.id} failed: {e.message}")
                continue
            except Exception as e:
                failures.append(ProviderCallError(provider.id, str(e) or type(e).__name__))
                logger.warning(f"LLM provider {provider.id} raised unexpectedly: {e!r}")
                continue

            if failures:
                logger.info(f"Itinerary generated by fallback provider {provider.id}")
            return text, provider.id

        raise AllProvidersFailedError(
            f"All AI providers failed: {'; '.join(str(f) for f in failures)}",
            failures,
        )

    async def generate(self, request: ItineraryRequest) -> ItineraryResult:
        prompt = build_itinerary_prompt(request.destination, request.duration, request.preferences)
        text, provider_id = await self.complete(prompt)
        return ItineraryResult(itinerary=text, provider=provider_id)

    async def aclose(self) -> None:
        for provider in self._providers:
            await provider.aclose()
