"""
Unit tests for the auto-fill orchestrator
"""

import pytest
from unittest.mock import AsyncMock

from lexis.errors import ConfigurationError
from lexis.models.autofill import AutoFillOptions, ManageOptions
from lexis.services.autofill_service import AutoFillService, auto_fill_translations
from lexis.utils.rate_limiter import RateLimiter


def make_service(store, provider, languages=("en", "fr", "de"), **kwargs) -> AutoFillService:
    return AutoFillService(store, provider, list(languages), "en", **kwargs)


class TestAutoFillService:
    """Test cases for AutoFillService"""

    @pytest.mark.asyncio
    async def test_fills_missing_and_empty(self, store, write_json, read_json, fake_provider):
        write_json("en", "common", {"HELLO": "Hello", "BYE": "Bye"})
        write_json("fr", "common", {"HELLO": ""})

        result = await make_service(store, fake_provider, ("en", "fr")).auto_fill(AutoFillOptions(delay_ms=0))

        assert result.total_processed == 2
        assert result.total_translated == 2
        assert result.errors == []
        assert read_json("fr", "common") == {"BYE": "fr:Bye", "HELLO": "fr:Hello"}

    @pytest.mark.asyncio
    async def test_single_language_option(self, store, write_json, read_json, fake_provider):
        write_json("en", "common", {"HELLO": "Hello"})

        result = await make_service(store, fake_provider).auto_fill(AutoFillOptions(language="de", delay_ms=0))

        assert result.total_processed == 1
        assert read_json("de", "common") == {"HELLO": "de:Hello"}
        assert read_json("fr", "common") == {"HELLO": ""}

    @pytest.mark.asyncio
    async def test_limit_is_global(self, store, write_json, fake_provider):
        write_json("en", "common", {"A": "a", "B": "b", "C": "c"})

        result = await make_service(store, fake_provider).auto_fill(AutoFillOptions(limit=4, delay_ms=0))

        assert result.total_processed == 4
        assert [outcome.item.language for outcome in result.outcomes] == ["fr", "fr", "fr", "de"]

    @pytest.mark.asyncio
    async def test_zero_limit_processes_nothing(self, store, write_json, fake_provider):
        write_json("en", "common", {"A": "a"})

        result = await make_service(store, fake_provider).auto_fill(AutoFillOptions(limit=0, delay_ms=0))

        assert result.total_processed == 0
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_failure_is_recorded_and_batch_continues(self, store, write_json, read_json, provider_factory):
        provider = provider_factory(fail_on=["Bye"])
        write_json("en", "common", {"HELLO": "Hello", "BYE": "Bye"})

        result = await make_service(store, provider, ("en", "fr")).auto_fill(AutoFillOptions(delay_ms=0))

        assert result.total_processed == 2
        assert result.total_translated == 1
        assert len(result.errors) == 1
        assert result.errors[0].item.key == "BYE"
        assert "cannot translate" in result.errors[0].error
        assert read_json("fr", "common") == {"BYE": "", "HELLO": "fr:Hello"}

    @pytest.mark.asyncio
    async def test_dry_run_does_not_write(self, store, write_json, read_json, fake_provider):
        write_json("en", "common", {"HELLO": "Hello"})
        write_json("fr", "common", {"HELLO": ""})

        result = await make_service(store, fake_provider, ("en", "fr")).auto_fill(
            AutoFillOptions(dry_run=True, delay_ms=0)
        )

        assert result.total_translated == 1
        assert result.outcomes[0].translated == "fr:Hello"
        assert read_json("fr", "common") == {"HELLO": ""}

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self, store, write_json, provider_factory):
        provider = provider_factory(latency=0.01)
        write_json("en", "common", {f"KEY_{i}": f"Value {i}" for i in range(10)})

        await make_service(store, provider, ("en", "fr")).auto_fill(AutoFillOptions(concurrency=3, delay_ms=0))

        assert provider.max_in_flight <= 3
        assert len(provider.calls) == 10

    @pytest.mark.asyncio
    async def test_concurrent_writes_to_one_namespace_are_not_lost(self, store, write_json, read_json, provider_factory):
        provider = provider_factory(latency=0.001)
        source = {f"KEY_{i:02d}": f"Value {i}" for i in range(20)}
        write_json("en", "common", source)

        result = await make_service(store, provider, ("en", "fr")).auto_fill(
            AutoFillOptions(concurrency=10, delay_ms=0)
        )

        assert result.total_translated == 20
        assert read_json("fr", "common") == {key: f"fr:{value}" for key, value in sorted(source.items())}

    @pytest.mark.asyncio
    async def test_variables_survive_translation(self, store, write_json, read_json, fake_provider):
        write_json("en", "common", {"GREETING": "Hello {{name}}, you have {{count}} messages"})

        await make_service(store, fake_provider, ("en", "fr")).auto_fill(AutoFillOptions(delay_ms=0))

        assert fake_provider.calls[0][0] == "Hello XXX_0_XXX, you have XXX_1_XXX messages"
        assert read_json("fr", "common")["GREETING"] == "fr:Hello {{name}}, you have {{count}} messages"

    @pytest.mark.asyncio
    async def test_api_key_required(self, store, write_json, provider_factory):
        provider = provider_factory()
        provider.requires_api_key = True
        write_json("en", "common", {"HELLO": "Hello"})

        with pytest.raises(ConfigurationError):
            await make_service(store, provider).auto_fill(AutoFillOptions())

    @pytest.mark.asyncio
    async def test_api_key_is_passed_to_provider(self, store, write_json, provider_factory):
        provider = provider_factory()
        provider.requires_api_key = True
        write_json("en", "common", {"HELLO": "Hello"})

        await make_service(store, provider, ("en", "fr")).auto_fill(AutoFillOptions(api_key="secret", delay_ms=0))

        assert provider.calls[0][3] == "secret"

    @pytest.mark.asyncio
    async def test_rate_limiter_is_used(self, store, write_json, fake_provider):
        limiter = RateLimiter(max_requests=100, time_window=1.0)
        limiter.acquire = AsyncMock()
        write_json("en", "common", {"A": "a", "B": "b"})

        await make_service(store, fake_provider, ("en", "fr"), rate_limiter=limiter).auto_fill(
            AutoFillOptions(delay_ms=0)
        )

        assert limiter.acquire.await_count == 2

    @pytest.mark.asyncio
    async def test_fill_namespace(self, store, write_json, read_json, fake_provider):
        write_json("en", "home", {"TITLE": "Home", "SUB": "Sub"})
        write_json("fr", "home", {"TITLE": "Accueil", "SUB": " "})

        count = await make_service(store, fake_provider, ("en", "fr")).fill_namespace("fr", "home")

        assert count == 1
        assert read_json("fr", "home") == {"SUB": "fr:Sub", "TITLE": "Accueil"}

    @pytest.mark.asyncio
    async def test_auto_fill_wrapper(self, translations_root, write_json, read_json, fake_provider):
        write_json("en", "common", {"HELLO": "Hello"})

        result = await auto_fill_translations(
            translations_root, fake_provider, ["en", "fr"], "en", AutoFillOptions(delay_ms=0)
        )

        assert result.total_translated == 1
        assert read_json("fr", "common") == {"HELLO": "fr:Hello"}

    @pytest.mark.asyncio
    async def test_unexpected_provider_error_does_not_abort_batch(self, store, write_json, read_json, provider_factory):
        class CrashingProvider(provider_factory):
            async def _translate_text(self, text, source_lang, target_lang, api_key):
                if text == "Bye":
                    raise RuntimeError("backend crashed")
                return await super()._translate_text(text, source_lang, target_lang, api_key)

        write_json("en", "common", {"HELLO": "Hello", "BYE": "Bye", "YES": "Yes"})
        write_json("fr", "common", {})

        result = await make_service(store, CrashingProvider(), ("en", "fr")).auto_fill(
            AutoFillOptions(concurrency=1, delay_ms=0)
        )

        assert result.total_processed == 3
        assert result.total_translated == 2
        assert [outcome.item.key for outcome in result.errors] == ["BYE"]
        assert "backend crashed" in result.errors[0].error
        assert read_json("fr", "common") == {"HELLO": "fr:Hello", "YES": "fr:Yes"}


class TestAutoFillOptions:
    def test_none_limit_means_unlimited(self):
        assert AutoFillOptions(limit=None).limit == float("inf")

    def test_invalid_concurrency(self):
        with pytest.raises(ConfigurationError):
            AutoFillOptions(concurrency=0)

    def test_negative_limit(self):
        with pytest.raises(ConfigurationError):
            AutoFillOptions(limit=-1)

    def test_manage_options_are_validated(self):
        with pytest.raises(ConfigurationError):
            ManageOptions(limit=-1)
        with pytest.raises(ConfigurationError):
            ManageOptions(concurrency=0)
