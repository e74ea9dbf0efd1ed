"""
Translation provider interface and factory
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import aiohttp

from lexis.config.settings import PROVIDERS, Settings
from lexis.errors import ConfigurationError, TranslationError
from lexis.utils.interpolation import preserve_variables, restore_variables
from lexis.utils.language_fallback import log_language_fallback, resolve_language_with_fallback
from lexis.utils.retry import TRANSIENT_ERRORS

logger = logging.getLogger(__name__)


class TranslationProvider(ABC):
    """
    Base class for machine translation backends

    Subclasses implement ``_translate_text``; ``translate`` takes care of
    language fallback and of keeping ``{{variable}}`` tokens intact.
    """

    name = 'base'
    requires_api_key = True

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key

    def resolve_language(self, language: str, use_fallback: bool = True) -> str:
        """Map a configured language code to one the provider accepts"""
        result = resolve_language_with_fallback(language, self.name, use_fallback)
        log_language_fallback(result, self.name)
        return result.resolved_language

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
        api_key: Optional[str] = None,
        use_fallback: bool = True
    ) -> str:
        """
        Translate a single text

        Args:
            text: Source text, may contain {{variable}} tokens
            source_lang: Source language code
            target_lang: Target language code
            api_key: Credentials; the provider's own key is used when omitted
            use_fallback: Resolve unsupported regional variants to a base language

        Returns:
            Translated text with the original tokens restored

        Raises:
            ConfigurationError: the provider needs an API key and none is available
            TranslationError: the backend failed or returned no translation
        """
        api_key = api_key or self.api_key
        if self.requires_api_key and not api_key:
            raise ConfigurationError(f"{self.name} API key is required")

        if not text.strip():
            return text

        resolved_target = self.resolve_language(target_lang, use_fallback)
        resolved_source = self.resolve_language(source_lang, use_fallback) if source_lang else None

        protected_text, variable_map = preserve_variables(text)
        translated = await self._translate_text(protected_text, resolved_source, resolved_target, api_key)
        return restore_variables(translated, variable_map)

    @abstractmethod
    async def _translate_text(
        self,
        text: str,
        source_lang: Optional[str],
        target_lang: str,
        api_key: Optional[str]
    ) -> str:
        """Send already protected text to the backend"""

    async def translate_batch(
        self,
        texts: List[str],
        source_lang: str,
        target_lang: str,
        api_key: Optional[str] = None,
        delay_ms: int = 100
    ) -> List[str]:
        """Translate texts one after another, pausing between requests"""
        results = []
        for text in texts:
            results.append(await self.translate(text, source_lang, target_lang, api_key))
            if delay_ms > 0:
                await asyncio.sleep(delay_ms / 1000)
        return results

    def validate_config(self) -> bool:
        """Whether the provider is usable without a per-call API key"""
        return not self.requires_api_key or bool(self.api_key)

    async def close(self):
        """Release network resources"""


class HttpTranslationProvider(TranslationProvider):
    """Provider talking to a REST API through a shared aiohttp session"""

    def __init__(self, api_key: Optional[str] = None):
        super().__init__(api_key)
        self._session: Optional[aiohttp.ClientSession] = None
        self._session_lock = asyncio.Lock()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session"""
        async with self._session_lock:
            if self._session is None or self._session.closed:
                connector = aiohttp.TCPConnector(limit=100, limit_per_host=30)
                timeout = aiohttp.ClientTimeout(total=30, connect=10)
                self._session = aiohttp.ClientSession(
                    connector=connector,
                    timeout=timeout
                )
            return self._session

    async def close(self):
        """Close HTTP session"""
        async with self._session_lock:
            if self._session and not self._session.closed:
                await self._session.close()
                self._session = None

    async def _translate_text(self, text, source_lang, target_lang, api_key) -> str:
        try:
            return await self._request_translation(text, source_lang, target_lang, api_key)
        except TRANSIENT_ERRORS as e:
            raise TranslationError(f"{self.name} request failed: {e}") from e

    @abstractmethod
    async def _request_translation(
        self,
        text: str,
        source_lang: Optional[str],
        target_lang: str,
        api_key: str
    ) -> str:
        """Perform the HTTP request"""


def create_provider(name: str, settings: Settings) -> TranslationProvider:
    """
    Build the provider configured for a project

    Args:
        name: One of ``deepl``, ``google`` or ``openai``
        settings: Loaded settings supplying credentials

    Raises:
        ConfigurationError: unknown provider name
    """
    # Imported here so the provider modules can subclass the base classes above
    from lexis.services.deepl_service import DeepLTranslateProvider
    from lexis.services.google_service import GoogleTranslateProvider
    from lexis.services.llm_service import LLMTranslateProvider

    if name == 'deepl':
        provider = DeepLTranslateProvider(
            api_key=settings.provider.deepl_api_key,
            free_api=settings.provider.deepl_free_api
        )
    elif name == 'google':
        provider = GoogleTranslateProvider(api_key=settings.provider.google_api_key)
    elif name == 'openai':
        provider = LLMTranslateProvider(settings.provider)
    else:
        raise ConfigurationError(f"Unknown translation provider '{name}'. Use one of: {', '.join(PROVIDERS)}")

    logger.info(f"Using translation provider: {provider.name}")
    return provider
