"""
DeepL translation provider (API v2)
"""

import asyncio
import logging
from typing import Optional

import aiohttp

from lexis.errors import TranslationError
from lexis.services.translation_service import HttpTranslationProvider
from lexis.utils.retry import retry_async

logger = logging.getLogger(__name__)

DEEPL_API_URL = 'https://api.deepl.com/v2/translate'
DEEPL_FREE_API_URL = 'https://api-free.deepl.com/v2/translate'


def normalize_language_code(language: str) -> str:
    """DeepL expects upper-case codes with a hyphen, e.g. pt_br -> PT-BR"""
    return language.replace('_', '-').upper()


class DeepLTranslateProvider(HttpTranslationProvider):
    """Translations through the DeepL REST API"""

    name = 'deepl'

    def __init__(self, api_key: Optional[str] = None, free_api: bool = False):
        super().__init__(api_key)
        self.free_api = free_api

    @property
    def endpoint(self) -> str:
        return DEEPL_FREE_API_URL if self.free_api else DEEPL_API_URL

    @retry_async(max_attempts=3, delay=2.0, exceptions=(aiohttp.ClientError, asyncio.TimeoutError))
    async def _request_translation(self, text, source_lang, target_lang, api_key) -> str:
        session = await self._get_session()

        payload = {
            'text': [text],
            'target_lang': normalize_language_code(target_lang)
        }
        if source_lang:
            payload['source_lang'] = normalize_language_code(source_lang)

        headers = {
            'Authorization': f'DeepL-Auth-Key {api_key}',
            'Content-Type': 'application/json'
        }

        async with session.post(self.endpoint, json=payload, headers=headers) as response:
            if response.status != 200:
                try:
                    body = await response.text()
                except aiohttp.ClientError:
                    body = ''
                raise TranslationError(f"DeepL API error HTTP {response.status}; body: {body[:500]}")

            data = await response.json()

        translations = data.get('translations') if isinstance(data, dict) else None
        if not translations:
            raise TranslationError("DeepL API returned no translations")

        try:
            text = translations[0]['text']
        except (KeyError, IndexError, TypeError) as e:
            raise TranslationError(f"Unexpected DeepL response: {str(data)[:500]}") from e

        logger.debug(f"DeepL translated text to {payload['target_lang']}")
        return text
