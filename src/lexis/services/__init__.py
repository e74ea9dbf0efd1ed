"""
Services for poly-lexis
"""

from .sync_service import SyncService, sync_translation_structure
from .validation_service import ValidationService, validate_translations
from .duplicate_service import find_duplicates
from .translation_service import TranslationProvider, create_provider
from .autofill_service import AutoFillService, auto_fill_translations

__all__ = [
    'SyncService', 'sync_translation_structure', 'ValidationService', 'validate_translations',
    'find_duplicates', 'TranslationProvider', 'create_provider', 'AutoFillService', 'auto_fill_translations',
]
