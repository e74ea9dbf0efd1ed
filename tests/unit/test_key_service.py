"""
Unit tests for adding translation keys
"""

import pytest

from lexis.errors import ConfigurationError
from lexis.models.translation import TranslationEntry
from lexis.services import key_service
from lexis.services.key_service import add_translation_key, add_translation_keys

LANGUAGES = ["en", "fr", "de"]


@pytest.fixture(autouse=True)
def no_translate_delay(monkeypatch):
    monkeypatch.setattr(key_service, "TRANSLATE_DELAY_SECONDS", 0)


class TestAddTranslationKey:
    """Test cases for add_translation_key"""

    @pytest.mark.asyncio
    async def test_adds_empty_placeholders_without_provider(self, store, read_json):
        await add_translation_key(store, LANGUAGES, "en", "common", "HELLO", "Hello")

        assert read_json("en", "common") == {"HELLO": "Hello"}
        assert read_json("fr", "common") == {"HELLO": ""}
        assert read_json("de", "common") == {"HELLO": ""}

    @pytest.mark.asyncio
    async def test_existing_target_value_is_kept(self, store, write_json, read_json):
        write_json("fr", "common", {"HELLO": "Bonjour"})

        await add_translation_key(store, LANGUAGES, "en", "common", "HELLO", "Hi")

        assert read_json("en", "common") == {"HELLO": "Hi"}
        assert read_json("fr", "common") == {"HELLO": "Bonjour"}

    @pytest.mark.asyncio
    async def test_translates_with_provider(self, store, write_json, read_json, fake_provider):
        write_json("de", "common", {"HELLO": "Hallo"})

        await add_translation_key(store, LANGUAGES, "en", "common", "HELLO", "Hello {{name}}", provider=fake_provider)

        assert read_json("fr", "common") == {"HELLO": "fr:Hello {{name}}"}
        assert read_json("de", "common") == {"HELLO": "Hallo"}
        assert [call[2] for call in fake_provider.calls] == ["fr"]

    @pytest.mark.asyncio
    async def test_translation_failure_does_not_stop_other_languages(self, store, read_json, provider_factory):
        provider = provider_factory(fail_on=["Bye"])

        await add_translation_key(store, LANGUAGES, "en", "common", "BYE", "Bye", provider=provider)

        assert read_json("en", "common") == {"BYE": "Bye"}
        assert not store.namespace_exists("fr", "common")
        assert len(provider.calls) == 2

    @pytest.mark.asyncio
    async def test_unexpected_error_for_one_language_does_not_stop_others(self, store, read_json, provider_factory):
        class CrashingProvider(provider_factory):
            async def _translate_text(self, text, source_lang, target_lang, api_key):
                if target_lang == "fr":
                    raise RuntimeError("backend crashed")
                return await super()._translate_text(text, source_lang, target_lang, api_key)

        await add_translation_key(store, LANGUAGES, "en", "common", "HELLO", "Hello", provider=CrashingProvider())

        assert not store.namespace_exists("fr", "common")
        assert read_json("de", "common") == {"HELLO": "de:Hello"}

    @pytest.mark.asyncio
    async def test_provider_without_key_adds_empty_values(self, store, read_json, provider_factory):
        provider = provider_factory()
        provider.requires_api_key = True

        await add_translation_key(store, LANGUAGES, "en", "common", "HELLO", "Hello", provider=provider)

        assert read_json("fr", "common") == {"HELLO": ""}
        assert provider.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("namespace, key", [("../common", "HELLO"), ("common", "a..b"), ("common", "")])
    async def test_invalid_names(self, store, namespace, key):
        with pytest.raises(ConfigurationError):
            await add_translation_key(store, LANGUAGES, "en", namespace, key, "value")

    @pytest.mark.asyncio
    async def test_add_translation_keys(self, store, read_json):
        entries = [
            TranslationEntry("common", "SAVE", "Save"),
            TranslationEntry("form", "TITLE", "Title"),
        ]

        added = await add_translation_keys(store, ["en", "fr"], "en", entries)

        assert added == 2
        assert read_json("fr", "common") == {"SAVE": ""}
        assert read_json("en", "form") == {"TITLE": "Title"}
