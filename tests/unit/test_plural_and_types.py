"""
Unit tests for plural key grouping and type generation
"""

import pytest

from lexis.errors import ConfigurationError
from lexis.services.types_service import generate_translation_types, render_types
from lexis.utils.plural import extract_plural_base_keys


class TestExtractPluralBaseKeys:
    """Test cases for extract_plural_base_keys"""

    def test_groups_suffixes(self):
        assert extract_plural_base_keys(["items_one", "items_other"]) == ["items"]

    def test_existing_base_is_skipped(self):
        assert extract_plural_base_keys(["items", "items_one", "items_other"]) == []

    def test_suffix_only_key_is_ignored(self):
        assert extract_plural_base_keys(["_one"]) == []

    def test_suffix_must_be_trailing(self):
        assert extract_plural_base_keys(["one_item", "item_ones"]) == []

    def test_first_seen_order(self):
        keys = ["b_few", "a_one", "b_many", "a_zero", "c_two"]
        assert extract_plural_base_keys(keys) == ["b", "a", "c"]


class TestTypeGeneration:
    """Test cases for the TypeScript type generator"""

    def test_render_types(self):
        output = render_types(["HELLO", "items"], ["common"])

        assert 'export const translationKeys = ["HELLO", "items"] as const;' in output
        assert 'export const namespaceKeys = ["common"] as const;' in output
        assert "export type TranslationKey = typeof translationKeys[number];" in output
        assert "export type TranslationNamespace = typeof namespaceKeys[number];" in output

    def test_generate_includes_plural_bases(self, store, write_json, tmp_path):
        write_json("en", "common", {"HELLO": "Hello", "items_one": "{{count}} item", "items_other": "{{count}} items"})
        write_json("en", "home", {"TITLE": "Home"})
        output = tmp_path / "src" / "types" / "i18nTypes.ts"

        keys, namespaces = generate_translation_types(store, "en", output)

        assert keys == ["HELLO", "items_one", "items_other", "TITLE", "items"]
        assert namespaces == ["common", "home"]
        assert '"items"' in output.read_text(encoding="utf-8")

    def test_missing_source_directory(self, store, tmp_path):
        with pytest.raises(ConfigurationError):
            generate_translation_types(store, "en", tmp_path / "out.ts")

    def test_no_namespaces(self, store, translations_root, tmp_path):
        (translations_root / "en").mkdir()

        with pytest.raises(ConfigurationError):
            generate_translation_types(store, "en", tmp_path / "out.ts")
