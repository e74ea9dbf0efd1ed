"""
Google Cloud Translation provider (API v2)
"""

import asyncio
import logging
from typing import Optional

import aiohttp

from lexis.errors import TranslationError
from lexis.services.translation_service import HttpTranslationProvider
from lexis.utils.retry import retry_async

logger = logging.getLogger(__name__)

GOOGLE_TRANSLATE_URL = 'https://translation.googleapis.com/language/translate/v2'

# Chinese variants keep their region, everything else is sent as the base language
REGIONAL_CODES = {
    'zh_cn': 'zh-CN',
    'zh_tw': 'zh-TW',
}


def to_google_language(language: Optional[str]) -> Optional[str]:
    if language is None:
        return None
    if language in REGIONAL_CODES:
        return REGIONAL_CODES[language]
    return language.split('_')[0]


class GoogleTranslateProvider(HttpTranslationProvider):
    """Translations through Google Cloud Translation"""

    name = 'google'

    @retry_async(max_attempts=3, delay=2.0, exceptions=(aiohttp.ClientError, asyncio.TimeoutError))
    async def _request_translation(self, text, source_lang, target_lang, api_key) -> str:
        session = await self._get_session()

        payload = {
            'q': text,
            'target': to_google_language(target_lang),
            'format': 'text'
        }
        source = to_google_language(source_lang)
        if source:
            payload['source'] = source

        async with session.post(GOOGLE_TRANSLATE_URL, params={'key': api_key}, json=payload) as response:
            try:
                data = await response.json()
            except aiohttp.ContentTypeError as e:
                raise TranslationError(f"Google Translate response not JSON (HTTP {response.status}): {e}") from e

        if not isinstance(data, dict):
            raise TranslationError(f"Unexpected Google Translate response: {str(data)[:500]}")

        error = data.get('error')
        if error:
            message = error.get('message', 'unknown error') if isinstance(error, dict) else error
            raise TranslationError(f"Google Translate API error: {message}")

        try:
            translations = data['data']['translations']
            return translations[0]['translatedText']
        except (KeyError, IndexError, TypeError) as e:
            raise TranslationError(f"Google Translate returned no translations: {str(data)[:500]}") from e
