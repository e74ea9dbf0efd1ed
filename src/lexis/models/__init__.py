"""
Data models for poly-lexis
"""

from .translation import (
    TranslationEntry, MissingTranslation, OrphanedTranslation, ValidationResult,
    DuplicateTranslation, DuplicateKeysResult, UnusedTranslation, UnusedKeysResult,
)
from .sync import SyncResult, CreatedFile, SkippedFile, CleanedKey, RemovedNamespace
from .autofill import AutoFillOptions, AutoFillResult, TranslationOutcome, ManageOptions

__all__ = [
    'TranslationEntry', 'MissingTranslation', 'OrphanedTranslation', 'ValidationResult',
    'DuplicateTranslation', 'DuplicateKeysResult', 'UnusedTranslation', 'UnusedKeysResult',
    'SyncResult', 'CreatedFile', 'SkippedFile', 'CleanedKey', 'RemovedNamespace',
    'AutoFillOptions', 'AutoFillResult', 'TranslationOutcome', 'ManageOptions',
]
