"""
Generation of TypeScript key types from the source language
"""

import json
import logging
from pathlib import Path
from typing import List, Tuple, Union

from lexis.errors import ConfigurationError
from lexis.utils.namespace_store import NamespaceStore, as_store
from lexis.utils.plural import extract_plural_base_keys

logger = logging.getLogger(__name__)


def _quote_all(values: List[str]) -> str:
    return ', '.join(json.dumps(value, ensure_ascii=False) for value in values)


def render_types(translation_keys: List[str], namespace_keys: List[str]) -> str:
    """Render the TypeScript module text for a key and namespace list"""
    return (
        f"export const translationKeys = [{_quote_all(translation_keys)}] as const;\n"
        f"export const namespaceKeys = [{_quote_all(namespace_keys)}] as const;\n"
        "\n"
        "export type TranslationKey = typeof translationKeys[number];\n"
        "export type TranslationNamespace = typeof namespaceKeys[number];\n"
    )


def generate_translation_types(
    root: Union[str, Path, NamespaceStore],
    source_language: str,
    output_path: Union[str, Path]
) -> Tuple[List[str], List[str]]:
    """
    Write key and namespace types for the source language

    Plural base keys (``items`` for ``items_one``/``items_other``) are added
    after the regular keys so ``t('items', {count})`` type-checks.

    Returns:
        (translation keys, namespaces) that were written

    Raises:
        ConfigurationError: the source language directory is missing or empty
    """
    store = as_store(root)
    source_dir = store.language_path(source_language)

    if not source_dir.is_dir():
        raise ConfigurationError(f"Source language directory not found: {source_dir}")

    namespaces = store.list_namespaces(source_language)
    if not namespaces:
        raise ConfigurationError(f"No translation files found in {source_dir}")

    translations = store.read_language(source_language)
    all_keys: List[str] = []
    for namespace in namespaces:
        all_keys.extend(translations.get(namespace, {}))

    all_keys.extend(extract_plural_base_keys(all_keys))

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_types(all_keys, namespaces), encoding='utf-8')

    logger.info(f"Generated types with {len(all_keys)} keys and {len(namespaces)} namespaces: {output_path}")
    return all_keys, namespaces
