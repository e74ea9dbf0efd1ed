"""
Translation validation against the source language
"""

import logging
from pathlib import Path
from typing import List, Union

from lexis.models.translation import MissingTranslation, OrphanedTranslation, ValidationResult
from lexis.services.sync_service import SyncService
from lexis.utils.namespace_store import NamespaceStore, as_store

logger = logging.getLogger(__name__)


class ValidationService:
    """Reports missing, empty and orphaned keys for every configured target language"""

    def __init__(self, store: NamespaceStore, languages: List[str], source_language: str):
        self.store = store
        self.languages = list(languages)
        self.source_language = source_language
        self.sync_service = SyncService(store)

    @property
    def target_languages(self) -> List[str]:
        return [lang for lang in self.languages if lang != self.source_language]

    def validate(self) -> ValidationResult:
        """
        Sync the structure, then diff every target language against the source

        The configured language list drives the iteration, so a language that
        does not exist on disk yet is still validated.

        Returns:
            ValidationResult; ``valid`` is True only if all three lists are empty
        """
        sync_result = self.sync_service.sync(self.languages, self.source_language)

        if sync_result.created_files:
            logger.info(f"Created {len(sync_result.created_files)} missing namespace files during sync")

        if sync_result.cleaned_keys:
            logger.info(f"Cleaned {len(sync_result.cleaned_keys)} orphaned keys during sync")

        source_translations = self.store.read_language(self.source_language)
        source_namespaces = self.store.list_namespaces(self.source_language)

        logger.info(
            f"Validating translations: source={self.source_language}, "
            f"targets={', '.join(self.target_languages) or '-'}, "
            f"namespaces={', '.join(source_namespaces) or '-'}"
        )

        missing: List[MissingTranslation] = []
        empty: List[MissingTranslation] = []
        orphaned: List[OrphanedTranslation] = []

        for language in self.target_languages:
            target_translations = self.store.read_language(language)

            for namespace in source_namespaces:
                source_keys = source_translations.get(namespace, {})
                target_keys = target_translations.get(namespace, {})

                for key, source_value in source_keys.items():
                    if key not in target_keys:
                        missing.append(MissingTranslation(namespace, key, language, source_value, 'missing'))
                    elif target_keys[key].strip() == '':
                        empty.append(MissingTranslation(namespace, key, language, source_value, 'empty'))

                for key, target_value in target_keys.items():
                    if key not in source_keys:
                        orphaned.append(OrphanedTranslation(namespace, key, language, target_value))

        valid = not missing and not empty and not orphaned
        if valid:
            logger.info("All translations are valid")
        else:
            logger.warning(
                f"Validation found {len(missing)} missing, {len(empty)} empty "
                f"and {len(orphaned)} orphaned translations"
            )

        return ValidationResult(valid=valid, missing=missing, empty=empty, orphaned=orphaned)

    def get_missing_for_language(self, language: str) -> List[MissingTranslation]:
        """Missing and empty translations for a single language (missing first)"""
        return self.validate().for_language(language)


def validate_translations(
    root: Union[str, Path, NamespaceStore],
    languages: List[str],
    source_language: str
) -> ValidationResult:
    """Convenience wrapper around ValidationService.validate"""
    return ValidationService(as_store(root), languages, source_language).validate()
