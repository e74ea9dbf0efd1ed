"""
LLM translation provider using an OpenAI-compatible chat completion API
"""

import asyncio
import json
import logging
from typing import Optional

import openai
from openai import AsyncOpenAI

from lexis.config.settings import ProviderSettings
from lexis.errors import TranslationError
from lexis.services.translation_service import TranslationProvider

logger = logging.getLogger(__name__)


class LLMTranslateProvider(TranslationProvider):
    """Service for LLM-powered translation"""

    name = 'openai'

    def __init__(self, settings: ProviderSettings):
        super().__init__(settings.openai_api_key)
        self.settings = settings
        self.model = settings.openai_model
        self._client: Optional[AsyncOpenAI] = None

    def _get_client(self, api_key: str) -> AsyncOpenAI:
        """Client for the given key; rebuilt when a different key is passed"""
        if self._client is None or self._client.api_key != api_key:
            self._client = AsyncOpenAI(
                api_key=api_key,
                base_url=self.settings.openai_base_url
            )
        return self._client

    def _build_prompt(self, text: str, source_lang: Optional[str], target_lang: str) -> str:
        """Build the translation prompt"""
        source_info = f" from '{source_lang}'" if source_lang else ""
        return f"""You are a professional software localization translator. Translate the UI string below{source_info} into the language with code '{target_lang}'.

**Rules:**
- Keep placeholders such as XXX_0_XXX exactly as they are
- Keep punctuation, capitalization style and surrounding whitespace
- Do not add explanations or quotes

**Text:**
{text}

**Important:** Respond ONLY with valid JSON in this exact format:
{{
    "translation": "translated text"
}}"""

    async def _translate_text(self, text, source_lang, target_lang, api_key) -> str:
        start_time = asyncio.get_running_loop().time()
        client = self._get_client(api_key)

        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": self._build_prompt(text, source_lang, target_lang)}],
                max_tokens=1000,
                response_format={"type": "json_object"}
            )
            result = json.loads(response.choices[0].message.content or '')

        except json.JSONDecodeError as e:
            logger.error(f"JSON parsing error in translation response: {e}")
            raise TranslationError(f"Failed to parse LLM response: {e}") from e
        except openai.OpenAIError as e:
            logger.error(f"LLM translation failed: {e}")
            raise TranslationError(f"LLM request failed: {e}") from e

        translation = result.get('translation') if isinstance(result, dict) else None
        if not isinstance(translation, str) or not translation:
            raise TranslationError("LLM response did not contain a translation")

        processing_time = asyncio.get_running_loop().time() - start_time
        logger.debug(f"Translated to {target_lang} with {self.model} in {processing_time:.2f}s")
        return translation

    async def close(self):
        if self._client is not None:
            await self._client.close()
            self._client = None
