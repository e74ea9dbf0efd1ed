"""
Auto-fill options and results
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from lexis.errors import ConfigurationError

from .translation import MissingTranslation


@dataclass
class AutoFillOptions:
    """Options for one auto-fill run"""
    language: Optional[str] = None
    api_key: Optional[str] = None
    limit: float = math.inf
    concurrency: int = 5
    delay_ms: int = 50
    dry_run: bool = False

    def __post_init__(self):
        if self.limit is None:
            self.limit = math.inf

        if self.limit < 0:
            raise ConfigurationError("Limit must not be negative")

        if self.concurrency < 1:
            raise ConfigurationError("Concurrency must be at least 1")

        if self.delay_ms < 0:
            raise ConfigurationError("Delay must not be negative")


@dataclass
class TranslationOutcome:
    """Result of translating one missing or empty entry"""
    item: MissingTranslation
    success: bool
    translated: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.item.to_dict(),
            'success': self.success,
            'translated': self.translated,
            'error': self.error
        }


@dataclass
class AutoFillResult:
    total_processed: int = 0
    total_translated: int = 0
    outcomes: List[TranslationOutcome] = field(default_factory=list)

    @property
    def errors(self) -> List[TranslationOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalProcessed': self.total_processed,
            'totalTranslated': self.total_translated,
            'errors': [outcome.to_dict() for outcome in self.errors]
        }


@dataclass
class ManageOptions:
    """Options for the combined init / sync / validate / auto-fill / types flow"""
    auto_fill: bool = False
    api_key: Optional[str] = None
    limit: float = 1000
    language: Optional[str] = None
    concurrency: int = 5
    skip_types: bool = False
    dry_run: bool = False

    def __post_init__(self):
        if self.limit is None:
            self.limit = math.inf

        if self.limit < 0:
            raise ConfigurationError("Limit must not be negative")

        if self.concurrency < 1:
            raise ConfigurationError("Concurrency must be at least 1")

    def to_autofill_options(self, api_key: Optional[str], delay_ms: int = 100) -> AutoFillOptions:
        return AutoFillOptions(
            language=self.language,
            api_key=api_key,
            limit=self.limit,
            concurrency=self.concurrency,
            delay_ms=delay_ms,
            dry_run=self.dry_run
        )
