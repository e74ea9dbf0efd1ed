"""
Configuration settings with validation
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from dotenv import load_dotenv

from lexis.config.languages import is_valid_language, validate_languages
from lexis.errors import ConfigurationError

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = '.translationsrc.json'
PROVIDERS = ('deepl', 'google', 'openai')
DETECTION_PATHS = ('public/static/locales', 'public/locales', 'src/locales', 'locales', 'i18n', 'translations')
API_KEY_ENV_VARS = {
    'deepl': 'DEEPL_API_KEY',
    'google': 'GOOGLE_TRANSLATE_API_KEY',
    'openai': 'OPENAI_API_KEY',
}


@dataclass
class ProjectSettings:
    """Contents of .translationsrc.json"""
    translations_path: str = 'public/static/locales'
    languages: List[str] = None
    source_language: str = 'en'
    types_output_path: str = 'src/types/i18nTypes.ts'
    provider: str = 'deepl'
    use_fallback_languages: bool = True
    search_paths: List[str] = None
    search_extensions: List[str] = None
    nested_files: bool = False
    common_namespace: str = 'common'

    def __post_init__(self):
        if self.languages is None:
            self.languages = ['en']
        if self.search_paths is None:
            self.search_paths = ['src', 'app', 'pages', 'components']
        if self.search_extensions is None:
            self.search_extensions = ['.ts', '.tsx', '.js', '.jsx', '.vue', '.svelte']

        if not self.languages:
            raise ConfigurationError("At least one language must be configured")

        valid, invalid = validate_languages(self.languages)
        if not valid:
            raise ConfigurationError(f"Invalid language codes: {', '.join(invalid)}")

        valid, invalid = validate_languages([self.source_language])
        if not valid:
            raise ConfigurationError(f"Invalid source language: {self.source_language}")

        if self.source_language not in self.languages:
            logger.warning(
                f"Source language '{self.source_language}' is not listed in languages: {', '.join(self.languages)}"
            )

        if self.provider not in PROVIDERS:
            raise ConfigurationError(f"Provider must be one of: {', '.join(PROVIDERS)}")

    @property
    def target_languages(self) -> List[str]:
        return [lang for lang in self.languages if lang != self.source_language]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectSettings':
        """Create from the camelCase structure of .translationsrc.json"""
        return cls(
            translations_path=data.get('translationsPath', 'public/static/locales'),
            languages=data.get('languages'),
            source_language=data.get('sourceLanguage', 'en'),
            types_output_path=data.get('typesOutputPath', 'src/types/i18nTypes.ts'),
            provider=data.get('provider', 'deepl'),
            use_fallback_languages=data.get('useFallbackLanguages', True),
            search_paths=data.get('searchPaths'),
            search_extensions=data.get('searchExtensions'),
            nested_files=data.get('nestedFiles', False),
            common_namespace=data.get('commonNamespace', 'common')
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase structure of .translationsrc.json"""
        return {
            'translationsPath': self.translations_path,
            'languages': list(self.languages),
            'sourceLanguage': self.source_language,
            'typesOutputPath': self.types_output_path,
            'provider': self.provider,
            'useFallbackLanguages': self.use_fallback_languages,
            'searchPaths': list(self.search_paths),
            'searchExtensions': list(self.search_extensions),
            'nestedFiles': self.nested_files,
            'commonNamespace': self.common_namespace
        }


@dataclass
class ProviderSettings:
    """Translation provider credentials"""
    deepl_api_key: Optional[str] = None
    deepl_free_api: bool = False
    google_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    openai_model: str = 'gpt-4o-mini'

    def api_key_for(self, provider: str) -> Optional[str]:
        """API key configured for a provider, if any"""
        return {
            'deepl': self.deepl_api_key,
            'google': self.google_api_key,
            'openai': self.openai_api_key,
        }.get(provider)


@dataclass
class AutoFillSettings:
    """Auto-fill tuning"""
    concurrency: int = 5
    delay_ms: int = 50
    max_requests_per_second: int = 0
    log_level: str = 'INFO'

    def __post_init__(self):
        if self.concurrency < 1:
            raise ConfigurationError("Concurrency must be at least 1")

        if self.delay_ms < 0:
            raise ConfigurationError("Delay must not be negative")

        # Validate log level
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self.log_level.upper() not in valid_levels:
            raise ConfigurationError(f"Log level must be one of: {', '.join(valid_levels)}")

        self.log_level = self.log_level.upper()


def _read_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"Invalid {name} value: {raw!r}. Use an integer.")


@dataclass
class Settings:
    """Main configuration settings"""
    project: ProjectSettings
    provider: ProviderSettings
    autofill: AutoFillSettings
    project_root: Path = Path('.')

    @property
    def translations_root(self) -> Path:
        return self.project_root / self.project.translations_path

    @property
    def types_output(self) -> Path:
        return self.project_root / self.project.types_output_path

    @property
    def config_path(self) -> Path:
        return self.project_root / CONFIG_FILE_NAME

    def api_key_for_provider(self, provider: Optional[str] = None) -> Optional[str]:
        """API key of the configured (or given) provider"""
        return self.provider.api_key_for(provider or self.project.provider)

    def api_key_env_var(self, provider: Optional[str] = None) -> str:
        """Name of the environment variable holding the provider's API key"""
        return API_KEY_ENV_VARS.get(provider or self.project.provider, 'API_KEY')

    def to_config_dict(self) -> Dict[str, Any]:
        return self.project.to_dict()

    def save_config(self) -> Path:
        """Write the project settings to .translationsrc.json"""
        self.project_root.mkdir(parents=True, exist_ok=True)
        with self.config_path.open('w', encoding='utf-8') as f:
            json.dump(self.to_config_dict(), f, indent=2, ensure_ascii=False)
            f.write('\n')
        return self.config_path

    @classmethod
    def from_env(cls, project: ProjectSettings, project_root: Union[str, Path] = '.') -> 'Settings':
        """Combine project settings with credentials and tuning from environment variables"""
        return cls(
            project=project,
            provider=ProviderSettings(
                deepl_api_key=os.getenv('DEEPL_API_KEY'),
                deepl_free_api=os.getenv('DEEPL_FREE_API', 'false').lower() == 'true',
                google_api_key=os.getenv('GOOGLE_TRANSLATE_API_KEY'),
                openai_api_key=os.getenv('OPENAI_API_KEY'),
                openai_base_url=os.getenv('OPENAI_BASE_URL'),
                openai_model=os.getenv('OPENAI_MODEL') or 'gpt-4o-mini'
            ),
            autofill=AutoFillSettings(
                concurrency=_read_int('LEXIS_CONCURRENCY', 5),
                delay_ms=_read_int('LEXIS_DELAY_MS', 50),
                max_requests_per_second=_read_int('LEXIS_MAX_REQUESTS_PER_SECOND', 0),
                log_level=os.getenv('LOG_LEVEL', 'INFO')
            ),
            project_root=Path(project_root)
        )

    @classmethod
    def load(cls, project_root: Union[str, Path] = '.') -> 'Settings':
        """
        Load settings for a project

        Reads .translationsrc.json from the project root when present, otherwise
        falls back to an existing translations directory or the defaults.
        """
        project_root = Path(project_root)
        config_path = project_root / CONFIG_FILE_NAME

        if config_path.is_file():
            try:
                with config_path.open('r', encoding='utf-8') as f:
                    data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigurationError(f"{config_path} must contain a JSON object")
            project = ProjectSettings.from_dict(data)
        else:
            detected_path, detected_languages = detect_existing_translations(project_root)
            languages = [lang for lang in detected_languages if is_valid_language(lang)]
            if detected_path and languages:
                logger.info(f"No config found, but detected translations at {detected_path}")
                project = ProjectSettings(translations_path=detected_path, languages=languages)
            else:
                project = ProjectSettings()

        return cls.from_env(project, project_root)


def detect_existing_translations(project_root: Union[str, Path]) -> Tuple[Optional[str], List[str]]:
    """
    Look for an existing translations directory in common locations

    Returns:
        (relative path, languages found there) or (None, []) when nothing is found
    """
    project_root = Path(project_root)
    for candidate in DETECTION_PATHS:
        full_path = project_root / candidate
        if full_path.is_dir():
            languages = sorted(entry.name for entry in full_path.iterdir() if entry.is_dir())
            if languages:
                return candidate, languages
    return None, []
