"""
Language fallback resolution for translation providers

Regional variants that a provider does not accept are mapped to the closest
language it does accept, e.g. ``de_at`` -> ``de`` or ``es_mx`` -> ``es_419``.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from lexis.config.languages import get_supported_languages_for_provider

logger = logging.getLogger(__name__)

# unsupported code -> candidates, tried in order
LANGUAGE_FALLBACK_MAP: Dict[str, List[str]] = {
    'de_at': ['de'],
    'de_ch': ['de'],
    'de_de': ['de'],
    'en_gb': ['en'],
    'en_us': ['en'],
    'en_au': ['en'],
    'en_ca': ['en'],
    'en_nz': ['en'],
    'zh_hk': ['zh_hant', 'zh'],
    'zh_tw': ['zh_hant', 'zh'],
    'zh_mo': ['zh_hant', 'zh'],
    'zh_cn': ['zh_hans', 'zh'],
    'zh_sg': ['zh_hans', 'zh'],
    'pt_pt': ['pt'],
    'pt_ao': ['pt'],
    'pt_mz': ['pt'],
    'es_es': ['es'],
    'fr_ca': ['fr'],
    'fr_ch': ['fr'],
    'fr_be': ['fr'],
    'fr_fr': ['fr'],
    'no': ['nb'],
    'nn': ['nb'],
    'it_ch': ['it'],
    'nl_be': ['nl'],
    'sv_fi': ['sv'],
    'ar_ae': ['ar'],
    'ar_sa': ['ar'],
    'ar_eg': ['ar'],
}

# Latin American Spanish variants all go through es_419 first
for _region in ('mx', 'ar', 'co', 'cl', 'pe', 've', 'ec', 'gt', 'cu', 'do', 'hn', 'ni', 'sv', 'cr', 'pa', 'uy',
                'py', 'bo'):
    LANGUAGE_FALLBACK_MAP[f'es_{_region}'] = ['es_419', 'es']


@dataclass
class LanguageFallbackResult:
    """Outcome of resolving a language code for one provider"""
    resolved_language: str
    used_fallback: bool
    original_language: str
    fallback_chain: List[str] = field(default_factory=list)


def resolve_language_with_fallback(
    language: str,
    provider: str,
    enable_fallback: bool = True
) -> LanguageFallbackResult:
    """
    Find a language code the provider supports

    Tries the code itself, then its fallback chain, then its base language
    (the part before ``_``). When nothing matches, the lower-cased original is
    returned and the provider is left to reject it.
    """
    normalized = language.lower()
    supported = get_supported_languages_for_provider(provider)

    if normalized in supported or not enable_fallback:
        return LanguageFallbackResult(normalized, False, language)

    chain = LANGUAGE_FALLBACK_MAP.get(normalized, [])
    for candidate in chain:
        if candidate in supported:
            return LanguageFallbackResult(candidate, True, language, [normalized] + chain)

    base_language = normalized.split('_')[0]
    if base_language != normalized and base_language in supported:
        return LanguageFallbackResult(base_language, True, language, [normalized, base_language])

    return LanguageFallbackResult(normalized, False, language)


def log_language_fallback(result: LanguageFallbackResult, provider: str) -> None:
    """Warn when a fallback language is used instead of the requested one"""
    if not result.used_fallback:
        return

    logger.warning(
        f"Language fallback: '{result.original_language}' is not supported by {provider}, "
        f"using '{result.resolved_language}' instead"
    )
    if len(result.fallback_chain) > 2:
        logger.warning(f"Fallback chain: {' -> '.join(result.fallback_chain)}")


def get_fallback_mappings() -> Dict[str, List[str]]:
    """Copy of the fallback table"""
    return {code: list(chain) for code, chain in LANGUAGE_FALLBACK_MAP.items()}
