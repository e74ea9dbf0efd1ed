"""
Unit tests for NamespaceStore
"""

import pytest

from lexis.errors import TranslationFileError
from lexis.utils.namespace_store import NamespaceStore, sort_keys


class TestNamespaceStore:
    """Test cases for NamespaceStore"""

    def test_missing_language_reads_empty(self, store: NamespaceStore):
        assert store.read_language("fr") == {}
        assert store.list_namespaces("fr") == []
        assert store.read_namespace("fr", "common") == {}

    def test_list_languages_and_namespaces(self, store: NamespaceStore, write_json):
        write_json("en", "home", {"A": "a"})
        write_json("en", "common", {"B": "b"})
        write_json("fr", "common", {})
        (store.root / "en" / "notes.txt").write_text("ignored", encoding="utf-8")

        assert store.list_languages() == ["en", "fr"]
        assert store.list_namespaces("en") == ["common", "home"]

    def test_nested_document_is_flattened(self, store: NamespaceStore, write_json):
        write_json("en", "home", {"header": {"title": "Hi"}, "FOOTER": "Bye"})

        assert store.read_language("en") == {"home": {"header.title": "Hi", "FOOTER": "Bye"}}

    def test_malformed_json_raises(self, store: NamespaceStore, translations_root):
        path = translations_root / "en" / "broken.json"
        path.parent.mkdir(parents=True)
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(TranslationFileError) as exc_info:
            store.read_language("en")

        assert exc_info.value.path == path

    def test_non_object_document_raises(self, store: NamespaceStore, write_json):
        write_json("en", "list", ["a", "b"])

        with pytest.raises(TranslationFileError):
            store.read_namespace("en", "list")

    def test_write_is_sorted_pretty_and_newline_terminated(self, store: NamespaceStore, translations_root):
        path = store.write_namespace("fr", "common", {"b": "2", "a": "1", "é": "ü"})

        assert path == translations_root / "fr" / "common.json"
        assert path.read_text(encoding="utf-8") == '{\n  "a": "1",\n  "b": "2",\n  "é": "ü"\n}\n'

    def test_nested_store_writes_tree(self, translations_root, read_json):
        store = NamespaceStore(translations_root, nested=True)
        store.write_namespace("en", "home", {"header.title": "Hi", "SAVE": "Save"})

        assert read_json("en", "home") == {"SAVE": "Save", "header": {"title": "Hi"}}
        assert store.read_namespace("en", "home") == {"SAVE": "Save", "header.title": "Hi"}

    @pytest.mark.asyncio
    async def test_write_namespace_async(self, store: NamespaceStore, read_json):
        await store.write_namespace_async("de", "common", {"Z": "z", "A": "a"})

        assert list(read_json("de", "common")) == ["A", "Z"]

    def test_remove_namespace(self, store: NamespaceStore, write_json):
        path = write_json("fr", "old", {"A": "a"})

        store.remove_namespace("fr", "old")

        assert not path.exists()

    def test_ensure_structure_reports_created(self, store: NamespaceStore, write_json):
        write_json("en", "common", {})

        created = store.ensure_structure(["en", "fr", "de"])

        assert created == ["fr", "de"]
        assert store.ensure_structure(["en", "fr", "de"]) == []


def test_sort_keys():
    result = sort_keys({"b": "1", "a": "2", "C": "3"})
    assert list(result) == ["C", "a", "b"]
