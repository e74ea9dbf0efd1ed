"""
Pytest configuration and fixtures
"""

import asyncio
import json
import pytest
from pathlib import Path
from typing import Callable, Dict, List, Optional

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from lexis.config.settings import AutoFillSettings, ProjectSettings, ProviderSettings, Settings
from lexis.errors import TranslationError
from lexis.services.translation_service import TranslationProvider
from lexis.utils.namespace_store import NamespaceStore


class FakeProvider(TranslationProvider):
    """In-memory provider: prefixes the text with the target language"""

    name = 'fake'
    requires_api_key = False

    def __init__(self, fail_on: Optional[List[str]] = None, latency: float = 0.0):
        super().__init__()
        self.fail_on = set(fail_on or [])
        self.latency = latency
        self.calls: List[tuple] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def _translate_text(self, text, source_lang, target_lang, api_key) -> str:
        self.calls.append((text, source_lang, target_lang, api_key))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.latency:
                await asyncio.sleep(self.latency)
            if text in self.fail_on:
                raise TranslationError(f"cannot translate {text!r}")
            return f"{target_lang}:{text}"
        finally:
            self.in_flight -= 1

    async def close(self):
        self.closed = True


@pytest.fixture
def translations_root(tmp_path: Path) -> Path:
    """Empty translations directory inside a temporary project."""
    root = tmp_path / "locales"
    root.mkdir()
    return root


@pytest.fixture
def store(translations_root: Path) -> NamespaceStore:
    """Namespace store over the temporary translations directory."""
    return NamespaceStore(translations_root)


@pytest.fixture
def write_json(translations_root: Path) -> Callable[[str, str, Dict], Path]:
    """Write a raw JSON document as <root>/<language>/<namespace>.json."""
    def _write(language: str, namespace: str, data: Dict) -> Path:
        path = translations_root / language / f"{namespace}.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def read_json(translations_root: Path) -> Callable[[str, str], Dict]:
    """Read <root>/<language>/<namespace>.json back as a dict."""
    def _read(language: str, namespace: str) -> Dict:
        path = translations_root / language / f"{namespace}.json"
        return json.loads(path.read_text(encoding="utf-8"))
    return _read


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Translation provider that never touches the network."""
    return FakeProvider()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Create test settings."""
    return Settings(
        project=ProjectSettings(
            translations_path="locales",
            languages=["en", "fr", "de"],
            source_language="en",
            types_output_path="src/types/i18nTypes.ts",
            provider="deepl"
        ),
        provider=ProviderSettings(
            deepl_api_key="test_deepl_key",
            google_api_key="test_google_key",
            openai_api_key="test_openai_key",
            openai_base_url="https://api.openai.com/v1"
        ),
        autofill=AutoFillSettings(concurrency=2, delay_ms=0),
        project_root=tmp_path
    )


@pytest.fixture
def provider_factory() -> Callable[..., FakeProvider]:
    """Build fake providers with custom failures or latency."""
    return FakeProvider
