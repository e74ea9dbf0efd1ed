"""
Unit tests for duplicate detection
"""

from lexis.services.duplicate_service import find_duplicates


class TestFindDuplicates:
    """Test cases for find_duplicates"""

    def test_finds_value_from_common(self, store, write_json):
        write_json("en", "common", {"SAVE": "Save"})
        write_json("en", "form", {"SUBMIT_SAVE": "Save", "OTHER": "x"})

        result = find_duplicates(store, "en")

        assert len(result.duplicates) == 1
        duplicate = result.duplicates[0]
        assert (duplicate.namespace, duplicate.key, duplicate.common_key, duplicate.value) == (
            "form", "SUBMIT_SAVE", "SAVE", "Save"
        )
        assert result.total_keys_checked == 2

    def test_first_common_key_wins(self, store, write_json):
        write_json("en", "common", {"OK": "Okay", "CONFIRM": "Okay"})
        write_json("en", "dialog", {"BUTTON": "Okay"})

        result = find_duplicates(store, "en")

        assert result.duplicates[0].common_key == "OK"

    def test_matching_is_exact(self, store, write_json):
        write_json("en", "common", {"SAVE": "Save"})
        write_json("en", "form", {"A": "save", "B": "Save ", "C": "Save"})

        result = find_duplicates(store, "en")

        assert [item.key for item in result.duplicates] == ["C"]

    def test_missing_common_namespace(self, store, write_json):
        write_json("en", "form", {"A": "a"})

        result = find_duplicates(store, "en")

        assert result.duplicates == []
        assert result.total_keys_checked == 0

    def test_custom_common_namespace_and_grouping(self, store, write_json):
        write_json("en", "shared", {"YES": "Yes"})
        write_json("en", "a", {"X": "Yes"})
        write_json("en", "b", {"Y": "Yes"})

        result = find_duplicates(store, "en", common_namespace="shared")

        assert sorted(result.by_namespace()) == ["a", "b"]
