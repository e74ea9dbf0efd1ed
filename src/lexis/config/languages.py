"""
Supported language codes
"""

from typing import List, Tuple

# Codes accepted in configuration (Google Cloud Translation set plus regional variants)
SUPPORTED_LANGUAGES = (
    'af', 'sq', 'am', 'ar', 'hy', 'as', 'ay', 'az', 'bm', 'eu', 'be', 'bn', 'bho', 'bs', 'bg',
    'ca', 'ceb', 'ny', 'zh', 'zh_cn', 'zh_tw', 'co', 'hr', 'cs', 'da', 'dv', 'doi', 'nl', 'en',
    'eo', 'et', 'ee', 'tl', 'fi', 'fr', 'gl', 'ka', 'de', 'el', 'gn', 'gu', 'ht', 'ha', 'haw',
    'iw', 'he', 'hi', 'hmn', 'hu', 'is', 'ig', 'ilo', 'id', 'ga', 'it', 'ja', 'jw', 'kn', 'kk',
    'km', 'rw', 'gom', 'ko', 'kri', 'ku', 'ckb', 'ky', 'lo', 'la', 'lv', 'ln', 'lt', 'lg', 'lb',
    'mk', 'mai', 'mg', 'ms', 'ml', 'mt', 'mi', 'mr', 'mni', 'lus', 'mn', 'my', 'ne', 'no', 'or',
    'om', 'ps', 'fa', 'pl', 'pt', 'pt_br', 'pa', 'qu', 'ro', 'ru', 'sm', 'sa', 'gd', 'sr', 'st',
    'sn', 'sd', 'si', 'sk', 'sl', 'so', 'es', 'su', 'sw', 'sv', 'tg', 'ta', 'tt', 'te', 'th',
    'ti', 'ts', 'tr', 'tk', 'ak', 'uk', 'ur', 'ug', 'uz', 'vi', 'cy', 'xh', 'yi', 'yo', 'zu',
)

DEFAULT_LANGUAGES = ('en', 'fr', 'it', 'pl', 'es', 'pt', 'de', 'nl', 'sv', 'hu', 'cs', 'ja')

# Target languages accepted by the DeepL API, lower-case with underscores
DEEPL_LANGUAGES = (
    'ar', 'bg', 'cs', 'da', 'de', 'el', 'en', 'en_gb', 'en_us', 'es', 'es_419', 'et', 'fi', 'fr',
    'he', 'hu', 'id', 'it', 'ja', 'ko', 'lt', 'lv', 'nb', 'nl', 'pl', 'pt', 'pt_br', 'pt_pt',
    'ro', 'ru', 'sk', 'sl', 'sv', 'th', 'tr', 'uk', 'vi', 'zh', 'zh_hans', 'zh_hant',
)

GOOGLE_LANGUAGES = SUPPORTED_LANGUAGES


def is_valid_language(language: str) -> bool:
    """Check if a language code is supported"""
    return language in SUPPORTED_LANGUAGES


def validate_languages(languages: List[str]) -> Tuple[bool, List[str]]:
    """
    Validate a list of language codes

    Returns:
        (all_valid, invalid_codes)
    """
    invalid = [language for language in languages if not is_valid_language(language)]
    return not invalid, invalid


def get_supported_languages_for_provider(provider: str) -> Tuple[str, ...]:
    """Languages a translation provider accepts; LLM providers accept anything"""
    if provider == 'deepl':
        return DEEPL_LANGUAGES
    if provider == 'google':
        return GOOGLE_LANGUAGES
    return ()
