"""
Structure synchronisation between the source language and target languages
"""

import logging
from pathlib import Path
from typing import List, Union

from lexis.models.sync import CleanedKey, CreatedFile, RemovedNamespace, SkippedFile, SyncResult
from lexis.utils.namespace_store import NamespaceStore, as_store

logger = logging.getLogger(__name__)


class SyncService:
    """Brings every target language's namespace files in line with the source language"""

    def __init__(self, store: NamespaceStore):
        self.store = store

    def sync(self, languages: List[str], source_language: str) -> SyncResult:
        """
        Reconcile target languages against the source language

        Nothing happens when the source language has no namespace files.
        Otherwise the pass:

        - creates missing language folders
        - removes namespace files that no longer exist in the source
        - creates missing namespace files with empty values for every source key
        - strips keys that no longer exist in the source; the file is rewritten
          (with missing keys filled as empty strings) only when something was stripped

        Every source key is therefore present in the target files this pass
        creates or cleans. An existing file that only lacks keys is left as it
        is; validation reports those keys as missing.

        Args:
            languages: Configured languages (the source may be included)
            source_language: Language acting as the source of truth

        Returns:
            SyncResult describing what changed
        """
        result = SyncResult()

        source_namespaces = self.store.list_namespaces(source_language)
        if not source_namespaces:
            logger.info(f"No namespaces found for source language '{source_language}', nothing to sync")
            return result

        result.created_folders.extend(self.store.ensure_structure(languages))

        source_translations = self.store.read_language(source_language)
        target_languages = [lang for lang in languages if lang != source_language]

        for language in target_languages:
            self._sync_language(language, source_namespaces, source_translations, result)

        if result.has_changes:
            logger.info(
                f"Sync: {len(result.created_files)} files created, "
                f"{len(result.removed_namespaces)} namespaces removed, "
                f"{len(result.cleaned_keys)} orphaned keys cleaned"
            )
        return result

    def _sync_language(self, language, source_namespaces, source_translations, result: SyncResult) -> None:
        for namespace in self.store.list_namespaces(language):
            if namespace not in source_namespaces:
                path = self.store.remove_namespace(language, namespace)
                logger.info(f"Removed orphaned namespace {language}/{namespace}")
                result.removed_namespaces.append(RemovedNamespace(language, namespace, str(path)))

        for namespace in source_namespaces:
            source_file = source_translations.get(namespace, {})

            if not self.store.namespace_exists(language, namespace):
                empty_structure = {key: '' for key in source_file}
                path = self.store.write_namespace(language, namespace, empty_structure)
                logger.info(f"Created {language}/{namespace} with {len(empty_structure)} empty keys")
                result.created_files.append(CreatedFile(language, namespace, str(path)))
                continue

            target_file = self.store.read_namespace(language, namespace)
            cleaned = {}
            has_orphaned_keys = False

            for key, value in target_file.items():
                if key in source_file:
                    cleaned[key] = value
                else:
                    has_orphaned_keys = True
                    result.cleaned_keys.append(CleanedKey(language, namespace, key))

            for key in source_file:
                if key not in cleaned:
                    cleaned[key] = ''

            if has_orphaned_keys:
                self.store.write_namespace(language, namespace, cleaned)
                logger.info(f"Cleaned orphaned keys from {language}/{namespace}")

            result.skipped_files.append(SkippedFile(
                language,
                namespace,
                'cleaned orphaned keys' if has_orphaned_keys else 'already exists'
            ))


def sync_translation_structure(
    root: Union[str, Path, NamespaceStore],
    languages: List[str],
    source_language: str
) -> SyncResult:
    """Convenience wrapper around SyncService.sync"""
    return SyncService(as_store(root)).sync(languages, source_language)
