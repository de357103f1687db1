import pytest

from conftest import FakeProvider
from voya.errors import AllProvidersFailedError, ProviderCallError
from voya.schemas.itinerary import ItineraryRequest
from voya.services.llm_client import ItineraryResult, LLMClient


def _request(**overrides) -> ItineraryRequest:
    data = {"destination": "Paris", "duration": 3}
    data.update(overrides)
    return ItineraryRequest(**data)


class TestProviderChain:
    @pytest.mark.asyncio
    async def test_first_success_short_circuits(self):
        primary = FakeProvider("openrouter", text="primary plan")
        secondary = FakeProvider("bytez", text="secondary plan")
        client = LLMClient([primary, secondary])

        result = await client.generate(_request())

        assert result == ItineraryResult(itinerary="primary plan", provider="openrouter")
        assert primary.calls == 1
        assert secondary.calls == 0

    @pytest.mark.asyncio
    async def test_falls_back_to_second_provider(self):
        primary = FakeProvider("openrouter", error=ProviderCallError("openrouter", "HTTP 500 Internal Server Error"))
        secondary = FakeProvider("bytez", text="secondary plan")
        client = LLMClient([primary, secondary])

        result = await client.generate(_request())

        assert result.provider == "bytez"
        assert result.itinerary == "secondary plan"
        assert primary.calls == 1
        assert secondary.calls == 1

    @pytest.mark.asyncio
    async def test_unexpected_exception_also_falls_back(self):
        primary = FakeProvider("openai", error=RuntimeError("socket closed"))
        secondary = FakeProvider("anthropic", text="ok")

        text, provider_id = await LLMClient([primary, secondary]).complete("prompt")

        assert (text, provider_id) == ("ok", "anthropic")

    @pytest.mark.asyncio
    async def test_all_fail_aggregates_each_failure(self):
        providers = [
            FakeProvider("openrouter", error=ProviderCallError("openrouter", "HTTP 429 Too Many Requests")),
            FakeProvider("bytez", error=ProviderCallError("bytez", "malformed response (not JSON)")),
        ]
        client = LLMClient(providers)

        with pytest.raises(AllProvidersFailedError) as exc:
            await client.generate(_request())

        message = exc.value.message
        assert message.startswith("All AI providers failed")
        assert "openrouter: HTTP 429 Too Many Requests" in message
        assert "bytez: malformed response (not JSON)" in message
        assert [f.provider for f in exc.value.failures] == ["openrouter", "bytez"]
        assert exc.value.status_code == 500

    @pytest.mark.asyncio
    async def test_each_provider_attempted_once(self):
        providers = [
            FakeProvider("openrouter", error=ProviderCallError("openrouter", "timeout")),
            FakeProvider("bytez", error=ProviderCallError("bytez", "timeout")),
            FakeProvider("openai", error=ProviderCallError("openai", "timeout")),
        ]
        with pytest.raises(AllProvidersFailedError):
            await LLMClient(providers).complete("prompt")
        assert [p.calls for p in providers] == [1, 1, 1]

    @pytest.mark.asyncio
    async def test_no_providers_configured(self):
        with pytest.raises(AllProvidersFailedError, match="No AI providers configured"):
            await LLMClient([]).complete("prompt")

    @pytest.mark.asyncio
    async def test_empty_text_is_still_success(self):
        result = await LLMClient([FakeProvider("bytez", text="")]).generate(_request())
        assert result.itinerary == ""
        assert result.provider == "bytez"

    @pytest.mark.asyncio
    async def test_prompt_built_from_request(self):
        provider = FakeProvider("openrouter", text="plan")
        await LLMClient([provider]).generate(_request(destination="Kyoto", duration=5, preferences="temples"))

        prompt = provider.prompts[0]
        assert "5-day" in prompt
        assert "Kyoto" in prompt
        assert "Focus on: temples." in prompt

    def test_provider_ids_preserve_order(self):
        client = LLMClient([FakeProvider("bytez"), FakeProvider("openrouter")])
        assert client.provider_ids == ["bytez", "openrouter"]
