"""
Translation-related data models
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class TranslationEntry:
    """A single key/value pair inside a namespace"""
    namespace: str
    key: str
    value: str

    def __post_init__(self):
        self.namespace = self.namespace.strip()
        self.key = self.key.strip()

        if not self.namespace:
            raise ValueError("Namespace cannot be empty")

        if not self.key:
            raise ValueError("Key cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        return {'namespace': self.namespace, 'key': self.key, 'value': self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TranslationEntry':
        return cls(namespace=data['namespace'], key=data['key'], value=data.get('value', ''))


@dataclass
class MissingTranslation:
    """A source key whose target value is absent ("missing") or blank ("empty")"""
    namespace: str
    key: str
    language: str
    source_value: str
    kind: str = 'missing'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'namespace': self.namespace,
            'key': self.key,
            'language': self.language,
            'sourceValue': self.source_value,
            'type': self.kind
        }


@dataclass
class OrphanedTranslation:
    """A target key that no longer exists in the source language"""
    namespace: str
    key: str
    language: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'namespace': self.namespace,
            'key': self.key,
            'language': self.language,
            'value': self.value
        }


@dataclass
class ValidationResult:
    """Three-way diff of every target language against the source"""
    valid: bool
    missing: List[MissingTranslation] = field(default_factory=list)
    empty: List[MissingTranslation] = field(default_factory=list)
    orphaned: List[OrphanedTranslation] = field(default_factory=list)

    @property
    def total_issues(self) -> int:
        return len(self.missing) + len(self.empty) + len(self.orphaned)

    def for_language(self, language: str) -> List[MissingTranslation]:
        """Missing and empty items of one language, missing first"""
        return (
            [item for item in self.missing if item.language == language]
            + [item for item in self.empty if item.language == language]
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'valid': self.valid,
            'missing': [item.to_dict() for item in self.missing],
            'empty': [item.to_dict() for item in self.empty],
            'orphaned': [item.to_dict() for item in self.orphaned]
        }


@dataclass
class DuplicateTranslation:
    """A namespace value that already exists in the common namespace"""
    namespace: str
    key: str
    common_key: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'namespace': self.namespace,
            'key': self.key,
            'commonKey': self.common_key,
            'value': self.value
        }


@dataclass
class DuplicateKeysResult:
    duplicates: List[DuplicateTranslation] = field(default_factory=list)
    total_keys_checked: int = 0

    def by_namespace(self) -> Dict[str, List[DuplicateTranslation]]:
        grouped: Dict[str, List[DuplicateTranslation]] = {}
        for item in self.duplicates:
            grouped.setdefault(item.namespace, []).append(item)
        return grouped

    def to_dict(self) -> Dict[str, Any]:
        return {
            'duplicates': [item.to_dict() for item in self.duplicates],
            'totalKeysChecked': self.total_keys_checked
        }


@dataclass
class UnusedTranslation:
    """A source key with no exact reference in the scanned code"""
    namespace: str
    key: str
    usage_type: str = 'unused'
    partial_matches: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'namespace': self.namespace,
            'key': self.key,
            'usageType': self.usage_type,
            'partialMatches': list(self.partial_matches)
        }


@dataclass
class UnusedKeysResult:
    unused: List[UnusedTranslation] = field(default_factory=list)
    total_keys: int = 0
    # -1 when ripgrep did the search and no file count is known
    searched_files: int = 0

    @property
    def definitely_unused(self) -> List[UnusedTranslation]:
        return [item for item in self.unused if item.usage_type == 'unused']

    @property
    def possibly_unused(self) -> List[UnusedTranslation]:
        return [item for item in self.unused if item.usage_type == 'partial']

    def to_dict(self) -> Dict[str, Any]:
        return {
            'unused': [item.to_dict() for item in self.unused],
            'totalKeys': self.total_keys,
            'searchedFiles': self.searched_files
        }
