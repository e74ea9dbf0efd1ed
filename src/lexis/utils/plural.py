"""
Plural key helpers (CLDR categories as used by i18next-style libraries)
"""

from typing import Iterable, List

PLURAL_SUFFIXES = ('_zero', '_one', '_two', '_few', '_many', '_other')


def extract_plural_base_keys(keys: Iterable[str]) -> List[str]:
    """
    Infer base keys implied by plural-suffixed keys

    "items_one" and "items_other" imply "items". A base is only returned when
    it is non-empty and not already present among the keys.

    Args:
        keys: Flat translation keys

    Returns:
        Base keys in first-seen order, without duplicates
    """
    keys = list(keys)
    existing = set(keys)
    base_keys: List[str] = []
    seen = set()

    for key in keys:
        for suffix in PLURAL_SUFFIXES:
            if key.endswith(suffix):
                base = key[:-len(suffix)]
                if base and base not in existing and base not in seen:
                    seen.add(base)
                    base_keys.append(base)
                break

    return base_keys
