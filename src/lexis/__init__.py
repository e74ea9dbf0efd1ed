"""
poly-lexis: translation file synchronisation, validation and auto-fill
"""

from lexis.errors import (
    LexisError, ConfigurationError, TranslationFileError, TreeCollisionError, TranslationError,
)
from lexis.models import AutoFillOptions, AutoFillResult, DuplicateKeysResult, SyncResult, ValidationResult
from lexis.services.autofill_service import auto_fill_translations as auto_fill
from lexis.services.duplicate_service import find_duplicates
from lexis.services.sync_service import sync_translation_structure as sync
from lexis.services.validation_service import validate_translations as validate
from lexis.utils.namespace_store import NamespaceStore
from lexis.utils.plural import extract_plural_base_keys
from lexis.utils.tree_codec import flatten, unflatten

__version__ = '0.1.0'

__all__ = [
    'sync', 'validate', 'find_duplicates', 'extract_plural_base_keys', 'auto_fill',
    'flatten', 'unflatten', 'NamespaceStore',
    'SyncResult', 'ValidationResult', 'DuplicateKeysResult', 'AutoFillOptions', 'AutoFillResult',
    'LexisError', 'ConfigurationError', 'TranslationFileError', 'TreeCollisionError', 'TranslationError',
]
