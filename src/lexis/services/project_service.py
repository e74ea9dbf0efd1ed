"""
Project level flows: initialising a translations directory and the
combined sync / validate / auto-fill / type generation run
"""

import logging
from pathlib import Path
from typing import Optional, Union

from lexis.config.languages import validate_languages
from lexis.config.settings import CONFIG_FILE_NAME, ProjectSettings, Settings, detect_existing_translations
from lexis.models.autofill import ManageOptions
from lexis.services.autofill_service import AutoFillService
from lexis.services.sync_service import SyncService
from lexis.services.translation_service import TranslationProvider, create_provider
from lexis.services.types_service import generate_translation_types
from lexis.services.validation_service import ValidationService
from lexis.utils.namespace_store import NamespaceStore
from lexis.utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

SAMPLE_TRANSLATIONS = {
    'LOADING': 'Loading',
    'SAVE': 'Save',
    'CANCEL': 'Cancel',
    'SUBMIT': 'Submit',
    'ERROR': 'Error',
    'SUCCESS': 'Success',
}


def _resolve_project(project_root: Path, project: Optional[ProjectSettings]) -> ProjectSettings:
    if project is not None:
        return project

    detected_path, detected_languages = detect_existing_translations(project_root)
    if not detected_path:
        return ProjectSettings()

    logger.info(f"Detected existing translations at {detected_path}: {', '.join(detected_languages)}")
    _, invalid = validate_languages(detected_languages)
    if invalid:
        logger.warning(f"Invalid language codes found, these languages will be skipped: {', '.join(invalid)}")

    languages = [lang for lang in detected_languages if lang not in invalid]
    return ProjectSettings(translations_path=detected_path, languages=languages or None)


def init_translations(project_root: Union[str, Path], project: Optional[ProjectSettings] = None) -> Path:
    """
    Create the translations directory with a sample source namespace

    Existing translations found in one of the usual locations are adopted when
    no explicit project settings are given. Existing files are never overwritten.

    Returns:
        Path of the translations directory

    Raises:
        ConfigurationError: invalid language codes
    """
    project_root = Path(project_root)
    project = _resolve_project(project_root, project)

    translations_root = project_root / project.translations_path
    logger.info(
        f"Initializing translations at {translations_root}: languages={', '.join(project.languages)}, "
        f"source={project.source_language}"
    )

    store = NamespaceStore(translations_root, nested=project.nested_files)
    store.ensure_structure(project.languages)

    if not store.namespace_exists(project.source_language, project.common_namespace):
        path = store.write_namespace(project.source_language, project.common_namespace, SAMPLE_TRANSLATIONS)
        logger.info(f"Created sample file: {path}")

    for language in project.target_languages:
        if not store.namespace_exists(language, project.common_namespace):
            path = store.write_namespace(language, project.common_namespace, {})
            logger.info(f"Created empty file: {path}")

    config_path = project_root / CONFIG_FILE_NAME
    if not config_path.exists():
        settings = Settings.from_env(project, project_root)
        settings.save_config()
        logger.info(f"Created config file: {config_path}")

    return translations_root


async def manage_translations(
    project_root: Union[str, Path],
    options: Optional[ManageOptions] = None,
    provider: Optional[TranslationProvider] = None
) -> bool:
    """
    Bring a project's translations into shape in one go

    Initialises the project when it has no configuration, syncs, validates,
    optionally auto-fills and re-validates, then regenerates the key types
    (unless skipped or in dry-run mode).

    Args:
        project_root: Project directory holding .translationsrc.json
        options: Flow switches
        provider: Translation provider; built from the configuration when omitted

    Returns:
        True if the translations are valid at the end of the run
    """
    project_root = Path(project_root)
    options = options or ManageOptions()

    if not (project_root / CONFIG_FILE_NAME).exists():
        logger.info("No translation configuration found. Initializing...")
        init_translations(project_root)

    settings = Settings.load(project_root)
    project = settings.project
    store = NamespaceStore(settings.translations_root, nested=project.nested_files)

    source_dir = store.language_path(project.source_language)
    if not source_dir.is_dir():
        logger.warning(f"Source language directory not found: {source_dir}. Add translation files there first.")
        return False

    sync_result = SyncService(store).sync(project.languages, project.source_language)
    if not sync_result.has_changes:
        logger.info("Translation structure is already synchronized")

    validator = ValidationService(store, project.languages, project.source_language)
    validation = validator.validate()
    valid = validation.valid

    if not valid and options.auto_fill:
        valid = await _auto_fill(settings, store, options, provider, default_valid=valid)
    elif not valid:
        logger.info(
            f"{len(validation.missing)} missing and {len(validation.empty)} empty translations. "
            f"Run with --auto-fill to translate them automatically."
        )

    if options.skip_types:
        logger.info("Skipping type generation (--skip-types)")
    elif options.dry_run:
        logger.info("Skipping type generation (--dry-run)")
    else:
        generate_translation_types(store, project.source_language, settings.types_output)

    logger.info(
        f"Translations: {settings.translations_root}, languages: {', '.join(project.languages)}, "
        f"source: {project.source_language}, valid: {valid}"
    )
    return valid


async def _auto_fill(
    settings: Settings,
    store: NamespaceStore,
    options: ManageOptions,
    provider: Optional[TranslationProvider],
    default_valid: bool
) -> bool:
    project = settings.project
    owns_provider = provider is None
    if owns_provider:
        provider = create_provider(project.provider, settings)

    try:
        api_key = options.api_key or settings.api_key_for_provider(provider.name)
        if provider.requires_api_key and not api_key:
            env_var = settings.api_key_env_var(provider.name)
            logger.warning(f"Auto-fill requested but no API key provided. Set {env_var} or pass --api-key.")
            return default_valid

        service = AutoFillService(
            store,
            provider,
            project.languages,
            project.source_language,
            use_fallback_languages=project.use_fallback_languages,
            rate_limiter=RateLimiter.per_second(settings.autofill.max_requests_per_second)
        )
        await service.auto_fill(options.to_autofill_options(api_key, delay_ms=settings.autofill.delay_ms))
    finally:
        if owns_provider:
            await provider.close()

    if options.dry_run:
        return default_valid

    revalidation = ValidationService(store, project.languages, project.source_language).validate()
    if revalidation.valid:
        logger.info("All translations are now complete")
    return revalidation.valid
