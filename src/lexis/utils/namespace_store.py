"""
Namespace file storage: one JSON document per (language, namespace)
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Union

import aiofiles

from lexis.errors import TranslationFileError
from lexis.utils.tree_codec import FlatMap, flatten, is_nested, unflatten

logger = logging.getLogger(__name__)


def sort_keys(flat: FlatMap) -> FlatMap:
    """Return a copy of the map with keys in lexicographic order"""
    return {key: flat[key] for key in sorted(flat)}


def as_store(root_or_store: Union[str, Path, 'NamespaceStore']) -> 'NamespaceStore':
    """Accept either a translations directory or an existing store"""
    if isinstance(root_or_store, NamespaceStore):
        return root_or_store
    return NamespaceStore(root_or_store)


class NamespaceStore:
    """Reads and writes namespace files under ``<root>/<language>/<namespace><ext>``"""

    def __init__(self, root: Union[str, Path], extension: str = '.json', nested: bool = False):
        """
        Initialize NamespaceStore

        Args:
            root: Translations directory (contains one folder per language)
            extension: Namespace file extension
            nested: Write documents as nested trees instead of flat dot keys
        """
        self.root = Path(root)
        self.extension = extension
        self.nested = nested

    def language_path(self, language: str) -> Path:
        """Directory holding one language's namespace files"""
        return self.root / language

    def namespace_path(self, language: str, namespace: str) -> Path:
        """Path of a single namespace file"""
        return self.language_path(language) / f"{namespace}{self.extension}"

    def namespace_exists(self, language: str, namespace: str) -> bool:
        return self.namespace_path(language, namespace).is_file()

    def list_languages(self) -> List[str]:
        """Languages physically present on disk"""
        if not self.root.is_dir():
            return []
        return sorted(entry.name for entry in self.root.iterdir() if entry.is_dir())

    def list_namespaces(self, language: str) -> List[str]:
        """Namespace ids of a language, derived from its file listing"""
        lang_path = self.language_path(language)
        if not lang_path.is_dir():
            return []
        return sorted(
            entry.stem for entry in lang_path.iterdir()
            if entry.is_file() and entry.suffix == self.extension
        )

    def _load_document(self, path: Path) -> Dict:
        try:
            with path.open('r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise TranslationFileError(path, f"invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise TranslationFileError(path, "document is not a JSON object")
        return data

    def read_namespace(self, language: str, namespace: str) -> FlatMap:
        """Read one namespace as a flat key map; absent file yields an empty map"""
        path = self.namespace_path(language, namespace)
        if not path.is_file():
            return {}
        data = self._load_document(path)
        if is_nested(data):
            return flatten(data)
        return {key: value for key, value in data.items() if isinstance(value, str)}

    def read_language(self, language: str) -> Dict[str, FlatMap]:
        """Read every namespace of a language, keyed by namespace id"""
        return {
            namespace: self.read_namespace(language, namespace)
            for namespace in self.list_namespaces(language)
        }

    def _serialize(self, flat: FlatMap) -> str:
        data = sort_keys(flat)
        if self.nested:
            data = unflatten(data)
        return json.dumps(data, ensure_ascii=False, indent=2) + '\n'

    def write_namespace(self, language: str, namespace: str, flat: FlatMap) -> Path:
        """Write a namespace file, creating the language directory if needed"""
        path = self.namespace_path(language, namespace)
        content = self._serialize(flat)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open('w', encoding='utf-8') as f:
            f.write(content)
        logger.debug(f"Wrote {len(flat)} keys to {path}")
        return path

    async def write_namespace_async(self, language: str, namespace: str, flat: FlatMap) -> Path:
        """Async variant of write_namespace for use inside the event loop"""
        path = self.namespace_path(language, namespace)
        content = self._serialize(flat)
        path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(path, 'w', encoding='utf-8') as f:
            await f.write(content)
        logger.debug(f"Wrote {len(flat)} keys to {path}")
        return path

    def remove_namespace(self, language: str, namespace: str) -> Path:
        """Delete a namespace file"""
        path = self.namespace_path(language, namespace)
        os.remove(path)
        logger.debug(f"Removed namespace file {path}")
        return path

    def ensure_structure(self, languages: List[str]) -> List[str]:
        """
        Ensure the root and one directory per language exist

        Returns:
            Languages whose directory had to be created
        """
        self.root.mkdir(parents=True, exist_ok=True)
        created = []
        for language in languages:
            lang_path = self.language_path(language)
            if not lang_path.is_dir():
                lang_path.mkdir(parents=True, exist_ok=True)
                created.append(language)
        return created
