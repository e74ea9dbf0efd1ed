"""
Adding translation keys to every configured language
"""

import asyncio
import logging
from typing import Iterable, List, Optional

from lexis.errors import ConfigurationError, LexisError
from lexis.models.translation import TranslationEntry
from lexis.services.translation_service import TranslationProvider
from lexis.utils.namespace_store import NamespaceStore
from lexis.utils.validators import InputValidator

logger = logging.getLogger(__name__)

# Pause between per-language translation calls
TRANSLATE_DELAY_SECONDS = 0.1


async def add_translation_key(
    store: NamespaceStore,
    languages: List[str],
    source_language: str,
    namespace: str,
    key: str,
    value: str,
    provider: Optional[TranslationProvider] = None,
    api_key: Optional[str] = None,
    use_fallback_languages: bool = True
) -> None:
    """
    Add or update a key in the source language and propagate it to the targets

    With a provider (and a usable API key) each target whose value is missing
    or blank gets a machine translation; failures for one language are logged
    and do not stop the others. Without a provider, targets get an empty
    placeholder when the key is absent.

    Raises:
        ConfigurationError: invalid namespace or key name
    """
    for is_valid, error in (
        InputValidator.validate_namespace_name(namespace),
        InputValidator.validate_key(key),
    ):
        if not is_valid:
            raise ConfigurationError(error)

    namespace = namespace.strip()
    key = key.strip()

    source_keys = store.read_namespace(source_language, namespace)
    if source_keys.get(key):
        logger.warning(f"Key '{key}' already exists in {namespace}. Updating value.")

    source_keys[key] = value
    store.write_namespace(source_language, namespace, source_keys)
    logger.info(f"Added {key} to {source_language}/{namespace}")

    target_languages = [lang for lang in languages if lang != source_language]
    translate = provider is not None and (bool(api_key or provider.api_key) or not provider.requires_api_key)

    if provider is not None and not translate:
        logger.warning(f"No API key for {provider.name}, adding empty values instead of translating")

    for language in target_languages:
        target_keys = store.read_namespace(language, namespace)

        if translate:
            if target_keys.get(key, '').strip():
                logger.info(f"{language}/{namespace}: {key} already translated, skipping")
                continue

            try:
                translated = await provider.translate(
                    value, source_language, language, api_key=api_key, use_fallback=use_fallback_languages
                )
            except LexisError as e:
                logger.error(f"{language}: translation of {key} failed - {e}")
                continue
            except Exception:
                logger.exception(f"{language}: unexpected error translating {key}")
                continue

            target_keys[key] = translated
            store.write_namespace(language, namespace, target_keys)
            logger.info(f"{language}: {translated!r}")
            await asyncio.sleep(TRANSLATE_DELAY_SECONDS)

        elif key not in target_keys:
            target_keys[key] = ''
            store.write_namespace(language, namespace, target_keys)
            logger.info(f"Added empty {key} to {language}/{namespace}")
        else:
            logger.info(f"{language}/{namespace}: {key} already exists")


async def add_translation_keys(
    store: NamespaceStore,
    languages: List[str],
    source_language: str,
    entries: Iterable[TranslationEntry],
    provider: Optional[TranslationProvider] = None,
    api_key: Optional[str] = None,
    use_fallback_languages: bool = True
) -> int:
    """Add several entries one after another; returns how many were added"""
    entries = list(entries)
    logger.info(f"Adding {len(entries)} translation keys")

    for entry in entries:
        await add_translation_key(
            store,
            languages,
            source_language,
            entry.namespace,
            entry.key,
            entry.value,
            provider=provider,
            api_key=api_key,
            use_fallback_languages=use_fallback_languages
        )
    return len(entries)
