"""
Records describing one structure synchronisation pass
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


@dataclass
class CreatedFile:
    language: str
    namespace: str
    path: str


@dataclass
class SkippedFile:
    language: str
    namespace: str
    reason: str


@dataclass
class CleanedKey:
    language: str
    namespace: str
    key: str


@dataclass
class RemovedNamespace:
    language: str
    namespace: str
    path: str


@dataclass
class SyncResult:
    """Append-only log of what a sync pass changed on disk"""
    created_folders: List[str] = field(default_factory=list)
    created_files: List[CreatedFile] = field(default_factory=list)
    skipped_files: List[SkippedFile] = field(default_factory=list)
    cleaned_keys: List[CleanedKey] = field(default_factory=list)
    removed_namespaces: List[RemovedNamespace] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        """True if the pass created, removed or rewrote anything (skips are not changes)"""
        return bool(
            self.created_folders or self.created_files
            or self.cleaned_keys or self.removed_namespaces
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'createdFolders': list(self.created_folders),
            'createdFiles': [asdict(item) for item in self.created_files],
            'skippedFiles': [asdict(item) for item in self.skipped_files],
            'cleanedKeys': [asdict(item) for item in self.cleaned_keys],
            'removedNamespaces': [asdict(item) for item in self.removed_namespaces]
        }
