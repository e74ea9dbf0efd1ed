"""
Command line entry point
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import List, Optional

from lexis.config import load_settings
from lexis.config.settings import Settings
from lexis.errors import LexisError
from lexis.models.autofill import AutoFillOptions, ManageOptions
from lexis.models.translation import ValidationResult
from lexis.services.autofill_service import AutoFillService
from lexis.services.duplicate_service import find_duplicates
from lexis.services.key_service import add_translation_key
from lexis.services.project_service import init_translations, manage_translations
from lexis.services.sync_service import SyncService
from lexis.services.translation_service import create_provider
from lexis.services.types_service import generate_translation_types
from lexis.services.unused_keys_service import find_unused_keys, select_search_strategy
from lexis.services.validation_service import ValidationService
from lexis.utils.namespace_store import NamespaceStore
from lexis.utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='lexis', description='Manage i18n translation files')
    parser.add_argument('--project-root', default='.', help='Project directory (default: current directory)')
    parser.add_argument('--log-level', default=None, help='Logging level (default: LOG_LEVEL or INFO)')

    subparsers = parser.add_subparsers(dest='command')

    manage = subparsers.add_parser('manage', help='Init, sync, validate, auto-fill and generate types')
    manage.add_argument('--auto-fill', action='store_true', help='Translate missing keys')
    manage.add_argument('--skip-types', action='store_true', help='Do not generate types')
    _add_autofill_arguments(manage, default_limit=1000)

    subparsers.add_parser('sync', help='Synchronise target languages with the source')

    validate = subparsers.add_parser('validate', help='Report missing, empty and orphaned keys')
    validate.add_argument('--json', action='store_true', help='Print the result as JSON')

    auto_fill = subparsers.add_parser('auto-fill', help='Translate missing and empty keys')
    _add_autofill_arguments(auto_fill, default_limit=None)

    add = subparsers.add_parser('add', help='Add a key to every language')
    add.add_argument('--namespace', required=True)
    add.add_argument('--key', required=True)
    add.add_argument('--value', required=True, help='Source language value')
    add.add_argument('--auto-translate', action='store_true', help='Translate into the target languages')
    add.add_argument('--api-key', default=None)

    subparsers.add_parser('find-duplicates', help='Find values duplicated from the common namespace')

    find_unused = subparsers.add_parser('find-unused', help='Find keys not referenced in the code')
    find_unused.add_argument('--no-ripgrep', action='store_true', help='Always use the Python file walk')

    subparsers.add_parser('generate-types', help='Generate TypeScript key types')
    subparsers.add_parser('init', help='Create the translations structure and configuration')

    return parser


def _add_autofill_arguments(parser: argparse.ArgumentParser, default_limit: Optional[int]) -> None:
    parser.add_argument('--api-key', default=None, help='Provider API key (default: from environment)')
    parser.add_argument('--language', default=None, help='Only process this language')
    parser.add_argument('--limit', type=int, default=default_limit, help='Maximum number of translations')
    parser.add_argument('--concurrency', type=int, default=None, help='Parallel translation requests')
    parser.add_argument('--dry-run', action='store_true', help='Translate without saving')


def _store(settings: Settings) -> NamespaceStore:
    return NamespaceStore(settings.translations_root, nested=settings.project.nested_files)


def print_validation_report(result: ValidationResult) -> None:
    if result.valid:
        print("✅ All translations are valid!")
        return

    if result.missing:
        print(f"\n❌ Missing translations ({len(result.missing)}):")
        for item in result.missing:
            print(f"  {item.language}/{item.namespace}.json: {item.key}")

    if result.empty:
        print(f"\n⚠️  Empty translations ({len(result.empty)}):")
        for item in result.empty:
            print(f"  {item.language}/{item.namespace}.json: {item.key}")

    if result.orphaned:
        print(f"\n🧹 Orphaned translations ({len(result.orphaned)}):")
        for item in result.orphaned:
            print(f"  {item.language}/{item.namespace}.json: {item.key}")

    print(f"\nTotal issues: {result.total_issues}")


def cmd_sync(settings: Settings, args) -> int:
    result = SyncService(_store(settings)).sync(settings.project.languages, settings.project.source_language)
    print(f"Created files: {len(result.created_files)}")
    print(f"Removed namespaces: {len(result.removed_namespaces)}")
    print(f"Cleaned keys: {len(result.cleaned_keys)}")
    return 0


def cmd_validate(settings: Settings, args) -> int:
    result = ValidationService(
        _store(settings), settings.project.languages, settings.project.source_language
    ).validate()

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print_validation_report(result)
    return 0 if result.valid else 1


async def cmd_auto_fill(settings: Settings, args) -> int:
    provider = create_provider(settings.project.provider, settings)
    try:
        service = AutoFillService(
            _store(settings),
            provider,
            settings.project.languages,
            settings.project.source_language,
            use_fallback_languages=settings.project.use_fallback_languages,
            rate_limiter=RateLimiter.per_second(settings.autofill.max_requests_per_second)
        )
        result = await service.auto_fill(AutoFillOptions(
            language=args.language,
            api_key=args.api_key or settings.api_key_for_provider(),
            limit=args.limit,
            concurrency=args.concurrency or settings.autofill.concurrency,
            delay_ms=settings.autofill.delay_ms,
            dry_run=args.dry_run
        ))
    finally:
        await provider.close()

    print(f"Total processed: {result.total_processed}")
    print(f"Total translated: {result.total_translated}")
    for outcome in result.errors:
        item = outcome.item
        print(f"  ✗ {item.language}/{item.namespace}.{item.key}: {outcome.error}")
    return 0 if not result.errors else 1


async def cmd_manage(settings_root: str, args) -> int:
    options = ManageOptions(
        auto_fill=args.auto_fill,
        api_key=args.api_key,
        limit=args.limit,
        language=args.language,
        concurrency=args.concurrency or 5,
        skip_types=args.skip_types,
        dry_run=args.dry_run
    )
    valid = await manage_translations(settings_root, options)
    return 0 if valid else 1


async def cmd_add(settings: Settings, args) -> int:
    provider = create_provider(settings.project.provider, settings) if args.auto_translate else None
    try:
        await add_translation_key(
            _store(settings),
            settings.project.languages,
            settings.project.source_language,
            args.namespace,
            args.key,
            args.value,
            provider=provider,
            api_key=args.api_key or settings.api_key_for_provider(),
            use_fallback_languages=settings.project.use_fallback_languages
        )
    finally:
        if provider:
            await provider.close()
    print(f"✓ Added {args.namespace}.{args.key}")
    return 0


def cmd_find_duplicates(settings: Settings, args) -> int:
    result = find_duplicates(_store(settings), settings.project.source_language, settings.project.common_namespace)

    if not result.duplicates:
        print(f"✅ No duplicates found ({result.total_keys_checked} keys checked)")
        return 0

    print(f"Found {len(result.duplicates)} values duplicated from '{settings.project.common_namespace}':")
    for namespace, items in result.by_namespace().items():
        print(f"\n  {namespace}:")
        for item in items:
            print(f"    {item.key} -> {settings.project.common_namespace}.{item.common_key} ({item.value!r})")
    return 0


def cmd_find_unused(settings: Settings, args) -> int:
    strategy = select_search_strategy(
        settings.project_root,
        settings.project.search_paths,
        settings.project.search_extensions,
        use_ripgrep=False if args.no_ripgrep else None
    )
    result = find_unused_keys(_store(settings), settings.project.source_language, strategy)

    if not result.unused:
        print(f"✅ All {result.total_keys} keys are used")
        return 0

    if result.definitely_unused:
        print(f"\n❌ Unused keys ({len(result.definitely_unused)}):")
        for item in result.definitely_unused:
            print(f"  {item.namespace}.{item.key}")

    if result.possibly_unused:
        print(f"\n⚠️  Possibly unused, parts found ({len(result.possibly_unused)}):")
        for item in result.possibly_unused:
            print(f"  {item.namespace}.{item.key} ({', '.join(item.partial_matches)})")

    if result.searched_files >= 0:
        print(f"\nSearched {result.searched_files} files")
    return 0


def cmd_generate_types(settings: Settings, args) -> int:
    keys, namespaces = generate_translation_types(
        _store(settings), settings.project.source_language, settings.types_output
    )
    print(f"✓ Generated {len(keys)} keys and {len(namespaces)} namespaces in {settings.types_output}")
    return 0


def cmd_init(settings_root: str, args) -> int:
    path = init_translations(settings_root)
    print(f"✓ Translations initialized at {path}")
    return 0


SYNC_COMMANDS = {
    'sync': cmd_sync,
    'validate': cmd_validate,
    'find-duplicates': cmd_find_duplicates,
    'find-unused': cmd_find_unused,
    'generate-types': cmd_generate_types,
}

ASYNC_COMMANDS = {
    'auto-fill': cmd_auto_fill,
    'add': cmd_add,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line interface and return the exit code"""
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        # Plain `lexis` behaves like `lexis manage` with defaults
        args = parser.parse_args(argv + ['manage'])
    command = args.command

    setup_logging(args.log_level or os.getenv('LOG_LEVEL', 'INFO'))

    try:
        if command == 'init':
            return cmd_init(args.project_root, args)

        if command == 'manage':
            return asyncio.run(cmd_manage(args.project_root, args))

        settings = load_settings(args.project_root)

        if command in SYNC_COMMANDS:
            return SYNC_COMMANDS[command](settings, args)
        return asyncio.run(ASYNC_COMMANDS[command](settings, args))

    except (LexisError, OSError) as e:
        logger.error(f"{command} failed: {e}")
        return 1


def run() -> None:
    """Console script entry point"""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    run()
