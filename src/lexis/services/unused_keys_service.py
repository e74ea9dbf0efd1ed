"""
Scanning a code base for translation keys that are never referenced
"""

import logging
import re
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional, Union

from lexis.models.translation import UnusedKeysResult, UnusedTranslation
from lexis.utils.namespace_store import NamespaceStore, as_store

logger = logging.getLogger(__name__)

EXCLUDED_DIRS = frozenset({
    'node_modules', 'dist', 'build', '.next', '.nuxt', 'out', 'coverage', '.git',
    '.svelte-kit', '.vercel', '.turbo', 'public', 'static',
})

PARTIAL_MATCH_THRESHOLD = 2
PARTIAL_MATCH_FILE_SAMPLE = 100
MIN_PART_LENGTH = 3


def key_patterns(key: str) -> List[str]:
    """Regexes matching a quoted key or the key as a whole word"""
    escaped = re.escape(key)
    return [f"['\"`]{escaped}['\"`]", fr"\b{escaped}\b"]


class KeySearchStrategy(ABC):
    """Answers whether a key is referenced anywhere in the searched code"""

    #: number of files searched, -1 when unknown
    searched_files = -1

    @abstractmethod
    def contains(self, key: str) -> bool:
        pass

    def partial_matches(self, key: str) -> List[str]:
        """Significant key parts found in the code (dynamic key usage hints)"""
        return []


class RipgrepSearch(KeySearchStrategy):
    """Search through the ``rg`` binary, one process per pattern"""

    def __init__(self, project_root: Union[str, Path], search_paths: Iterable[str], extensions: Iterable[str],
                 executable: str = 'rg'):
        self.project_root = Path(project_root)
        self.search_paths = [path for path in search_paths if (self.project_root / path).exists()]
        self.extensions = list(extensions)
        self.executable = executable

    def _glob_args(self) -> List[str]:
        args = []
        for extension in self.extensions:
            args.extend(['--glob', f"*{extension}"])
        return args

    def contains(self, key: str) -> bool:
        if not self.search_paths:
            return False

        for pattern in key_patterns(key):
            completed = subprocess.run(
                [self.executable, '--quiet', *self._glob_args(), '-e', pattern, *self.search_paths],
                cwd=self.project_root,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False
            )
            # rg exits 0 on a match, 1 on no match, 2 on errors
            if completed.returncode == 0:
                return True
            if completed.returncode > 1:
                logger.warning(f"ripgrep failed with exit code {completed.returncode} while searching for {key}")
        return False


class FileWalkSearch(KeySearchStrategy):
    """Pure Python search over files collected once at construction"""

    def __init__(self, project_root: Union[str, Path], search_paths: Iterable[str], extensions: Iterable[str]):
        self.project_root = Path(project_root)
        self.extensions = set(extensions)
        self.files = self._find_files(search_paths)
        self.searched_files = len(self.files)
        self._contents = {}

    def _find_files(self, search_paths: Iterable[str]) -> List[Path]:
        files: List[Path] = []
        for search_path in search_paths:
            full_path = self.project_root / search_path
            if full_path.is_dir():
                self._scan_directory(full_path, files)
        return files

    def _scan_directory(self, directory: Path, files: List[Path]) -> None:
        try:
            entries = sorted(directory.iterdir())
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {directory}: {e}")
            return

        for entry in entries:
            if entry.is_dir():
                if entry.name not in EXCLUDED_DIRS:
                    self._scan_directory(entry, files)
            elif entry.is_file() and entry.suffix in self.extensions:
                files.append(entry)

    def _read(self, path: Path) -> str:
        if path not in self._contents:
            try:
                self._contents[path] = path.read_text(encoding='utf-8', errors='replace')
            except OSError as e:
                logger.debug(f"Skipping unreadable file {path}: {e}")
                self._contents[path] = ''
        return self._contents[path]

    def contains(self, key: str) -> bool:
        patterns = [re.compile(pattern) for pattern in key_patterns(key)]
        for path in self.files:
            content = self._read(path)
            if any(pattern.search(content) for pattern in patterns):
                return True
        return False

    def partial_matches(self, key: str) -> List[str]:
        parts = [part for part in re.split(r'[._]|(?=[A-Z])', key) if len(part) >= MIN_PART_LENGTH]
        if not parts:
            return []

        threshold = 1 if len(parts) == 1 else PARTIAL_MATCH_THRESHOLD
        found: List[str] = []
        for path in self.files[:PARTIAL_MATCH_FILE_SAMPLE]:
            content = self._read(path)
            for part in parts:
                if part not in found and re.search(fr"\b{re.escape(part)}\b", content, re.IGNORECASE):
                    found.append(part)
            if len(found) >= threshold:
                break
        return found


def select_search_strategy(
    project_root: Union[str, Path],
    search_paths: Iterable[str],
    extensions: Iterable[str],
    use_ripgrep: Optional[bool] = None
) -> KeySearchStrategy:
    """
    Pick the search strategy once for a whole scan

    ripgrep is used when available on PATH unless ``use_ripgrep`` says otherwise.
    """
    search_paths = list(search_paths)
    extensions = list(extensions)

    executable = shutil.which('rg') if use_ripgrep is not False else None
    if executable:
        logger.info("Search method: ripgrep")
        return RipgrepSearch(project_root, search_paths, extensions, executable=executable)

    logger.info("Search method: file walk")
    return FileWalkSearch(project_root, search_paths, extensions)


def find_unused_keys(
    root: Union[str, Path, NamespaceStore],
    source_language: str,
    strategy: KeySearchStrategy
) -> UnusedKeysResult:
    """
    Report source keys with no exact reference in the searched code

    Keys whose significant parts appear at least twice are reported as
    ``partial`` (probably built dynamically); everything else is ``unused``.
    """
    store = as_store(root)
    translations = store.read_language(source_language)

    all_keys = [
        (namespace, key)
        for namespace in store.list_namespaces(source_language)
        for key in translations.get(namespace, {})
    ]
    logger.info(f"Scanning code for {len(all_keys)} translation keys")

    result = UnusedKeysResult(total_keys=len(all_keys), searched_files=strategy.searched_files)

    for index, (namespace, key) in enumerate(all_keys, start=1):
        if len(all_keys) > 100 and index % 50 == 0:
            logger.info(f"Progress: {index}/{len(all_keys)} keys checked")

        if strategy.contains(key):
            continue

        partial = strategy.partial_matches(key)
        if len(partial) >= PARTIAL_MATCH_THRESHOLD:
            result.unused.append(UnusedTranslation(namespace, key, 'partial', partial))
        else:
            result.unused.append(UnusedTranslation(namespace, key, 'unused'))

    logger.info(f"Found {len(result.unused)} unused keys out of {len(all_keys)}")
    return result
