"""
Auto-fill of missing and empty translations through a translation provider
"""

import asyncio
import logging
import math
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from lexis.errors import ConfigurationError, LexisError
from lexis.models.autofill import AutoFillOptions, AutoFillResult, TranslationOutcome
from lexis.models.translation import MissingTranslation
from lexis.services.sync_service import SyncService
from lexis.services.translation_service import TranslationProvider
from lexis.services.validation_service import ValidationService
from lexis.utils.interpolation import validate_variables
from lexis.utils.namespace_store import NamespaceStore, as_store
from lexis.utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class AutoFillService:
    """Translates missing and empty target values and writes them back"""

    def __init__(
        self,
        store: NamespaceStore,
        provider: TranslationProvider,
        languages: List[str],
        source_language: str,
        use_fallback_languages: bool = True,
        rate_limiter: Optional[RateLimiter] = None
    ):
        """
        Initialize AutoFillService

        Args:
            store: Namespace store of the translations directory
            provider: Translation backend used for every call
            languages: Configured languages (the source may be included)
            source_language: Language the texts are translated from
            use_fallback_languages: Let the provider map regional variants
            rate_limiter: Optional limiter shared by all workers
        """
        self.store = store
        self.provider = provider
        self.languages = list(languages)
        self.source_language = source_language
        self.use_fallback_languages = use_fallback_languages
        self.rate_limiter = rate_limiter
        self.validator = ValidationService(store, languages, source_language)
        self._namespace_locks: Dict[Tuple[str, str], asyncio.Lock] = {}

    def _namespace_lock(self, language: str, namespace: str) -> asyncio.Lock:
        key = (language, namespace)
        if key not in self._namespace_locks:
            self._namespace_locks[key] = asyncio.Lock()
        return self._namespace_locks[key]

    def _require_api_key(self, api_key: Optional[str]) -> Optional[str]:
        api_key = api_key or self.provider.api_key
        if self.provider.requires_api_key and not api_key:
            raise ConfigurationError(
                f"Translation API key is required for {self.provider.name}. Set it in the environment or pass --api-key"
            )
        return api_key

    async def _translate(self, text: str, language: str, api_key: Optional[str]) -> str:
        if self.rate_limiter:
            await self.rate_limiter.acquire()

        translated = await self.provider.translate(
            text,
            self.source_language,
            language,
            api_key=api_key,
            use_fallback=self.use_fallback_languages
        )

        if not validate_variables(text, translated):
            logger.warning(f"Interpolation variables changed in translation to {language}: {text!r} -> {translated!r}")
        return translated

    async def _save_translation(self, item: MissingTranslation, translated: str) -> None:
        """Merge one value into the current on-disk namespace"""
        async with self._namespace_lock(item.language, item.namespace):
            current = self.store.read_namespace(item.language, item.namespace)
            current[item.key] = translated
            await self.store.write_namespace_async(item.language, item.namespace, current)

    async def _process_item(
        self,
        item: MissingTranslation,
        options: AutoFillOptions,
        api_key: Optional[str],
        semaphore: asyncio.Semaphore
    ) -> TranslationOutcome:
        async with semaphore:
            try:
                logger.info(f"Translating {item.language}/{item.namespace}.{item.key}: {item.source_value!r}")
                translated = await self._translate(item.source_value, item.language, api_key)

                if options.dry_run:
                    logger.info(f"Dry run, not saving {item.language}/{item.namespace}.{item.key}: {translated!r}")
                else:
                    await self._save_translation(item, translated)
                    logger.info(f"Saved {item.language}/{item.namespace}.{item.key}: {translated!r}")

                outcome = TranslationOutcome(item=item, success=True, translated=translated)

            except (LexisError, OSError) as e:
                logger.error(f"Failed to translate {item.language}/{item.namespace}.{item.key}: {e}")
                outcome = TranslationOutcome(item=item, success=False, error=str(e))
            except Exception as e:
                logger.exception(f"Unexpected error translating {item.language}/{item.namespace}.{item.key}")
                outcome = TranslationOutcome(item=item, success=False, error=str(e))

            if options.delay_ms > 0:
                await asyncio.sleep(options.delay_ms / 1000)

            return outcome

    async def auto_fill(self, options: Optional[AutoFillOptions] = None) -> AutoFillResult:
        """
        Fill missing and empty translations

        Languages are processed one after another; the items of one language
        are translated concurrently, at most ``options.concurrency`` at a time.
        The global ``limit`` is checked between languages.

        Returns:
            AutoFillResult with counts and one outcome per processed item

        Raises:
            ConfigurationError: the provider needs an API key and none is available
        """
        options = options or AutoFillOptions()
        api_key = self._require_api_key(options.api_key)

        if options.language:
            languages = [options.language]
        else:
            languages = [lang for lang in self.languages if lang != self.source_language]

        sync_result = SyncService(self.store).sync(self.languages, self.source_language)
        if sync_result.created_files:
            logger.info(f"Created {len(sync_result.created_files)} namespace files before auto-fill")

        limit_display = 'unlimited' if math.isinf(options.limit) else int(options.limit)
        logger.info(
            f"Auto-filling translations: languages={', '.join(languages) or '-'}, limit={limit_display}, "
            f"concurrency={options.concurrency}, dry_run={options.dry_run}"
        )

        result = AutoFillResult()
        semaphore = asyncio.Semaphore(options.concurrency)

        for language in languages:
            if result.total_processed >= options.limit:
                logger.info(f"Reached limit of {limit_display} translations")
                break

            missing = self.validator.get_missing_for_language(language)
            if not missing:
                logger.info(f"No missing or empty translations for {language}")
                continue

            remaining = options.limit - result.total_processed
            items = missing if math.isinf(remaining) else missing[:int(remaining)]
            logger.info(f"Found {len(missing)} translations to fill for {language}, processing {len(items)}")

            outcomes = await asyncio.gather(*(
                self._process_item(item, options, api_key, semaphore) for item in items
            ))

            result.outcomes.extend(outcomes)
            result.total_processed += len(items)
            result.total_translated += sum(1 for outcome in outcomes if outcome.success)

        logger.info(f"Total processed: {result.total_processed}, total translated: {result.total_translated}")
        if options.dry_run:
            logger.warning("Dry run - no changes were saved")
        return result

    async def fill_namespace(self, language: str, namespace: str, api_key: Optional[str] = None) -> int:
        """
        Translate every missing or empty key of one namespace and write it once

        Returns:
            Number of keys filled
        """
        api_key = self._require_api_key(api_key)

        source_keys = self.store.read_namespace(self.source_language, namespace)
        target_keys = self.store.read_namespace(language, namespace)

        count = 0
        for key, source_value in source_keys.items():
            if target_keys.get(key, '').strip():
                continue

            logger.info(f"Translating {language}/{namespace}.{key}")
            target_keys[key] = await self._translate(source_value, language, api_key)
            count += 1

        if count:
            async with self._namespace_lock(language, namespace):
                await self.store.write_namespace_async(language, namespace, target_keys)
            logger.info(f"Filled {count} translations in {language}/{namespace}")
        else:
            logger.info(f"No translations to fill in {language}/{namespace}")
        return count


async def auto_fill_translations(
    root: Union[str, Path, NamespaceStore],
    provider: TranslationProvider,
    languages: List[str],
    source_language: str,
    options: Optional[AutoFillOptions] = None,
    use_fallback_languages: bool = True
) -> AutoFillResult:
    """Convenience wrapper around AutoFillService.auto_fill"""
    service = AutoFillService(
        as_store(root),
        provider,
        languages,
        source_language,
        use_fallback_languages=use_fallback_languages
    )
    return await service.auto_fill(options)
