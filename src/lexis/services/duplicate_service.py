"""
Detection of namespace values that duplicate the common namespace
"""

import logging
from pathlib import Path
from typing import Dict, Union

from lexis.models.translation import DuplicateKeysResult, DuplicateTranslation
from lexis.utils.namespace_store import NamespaceStore, as_store

logger = logging.getLogger(__name__)

COMMON_NAMESPACE = 'common'


def find_duplicates(
    root: Union[str, Path, NamespaceStore],
    source_language: str = 'en',
    common_namespace: str = COMMON_NAMESPACE
) -> DuplicateKeysResult:
    """
    Find source values in other namespaces that exactly match a common value

    Matching is byte-for-byte string equality. When several common keys share
    a value, the first one wins.

    Args:
        root: Translations directory or store
        source_language: Language whose values are compared
        common_namespace: Namespace holding shared strings

    Returns:
        DuplicateKeysResult; empty with zero keys checked if the common
        namespace is missing or empty
    """
    store = as_store(root)
    namespaces = store.list_namespaces(source_language)
    source_translations = store.read_language(source_language)

    common_values = source_translations.get(common_namespace, {})
    if not common_values:
        logger.info(f"No '{common_namespace}' namespace found or it is empty")
        return DuplicateKeysResult()

    value_to_common_key: Dict[str, str] = {}
    for key, value in common_values.items():
        value_to_common_key.setdefault(value, key)

    result = DuplicateKeysResult()
    for namespace in namespaces:
        if namespace == common_namespace:
            continue

        for key, value in source_translations.get(namespace, {}).items():
            result.total_keys_checked += 1
            common_key = value_to_common_key.get(value)
            if common_key is not None:
                result.duplicates.append(DuplicateTranslation(namespace, key, common_key, value))

    logger.info(
        f"Checked {result.total_keys_checked} keys, "
        f"found {len(result.duplicates)} values duplicated from {common_namespace}"
    )
    return result
