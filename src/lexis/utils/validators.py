"""
Input validation utilities
"""

import re
from typing import Tuple

from lexis.config.languages import is_valid_language

NAMESPACE_PATTERN = re.compile(r'^[A-Za-z0-9_-]+$')


class InputValidator:
    """Validation of user supplied namespace, key and language names"""

    @staticmethod
    def validate_namespace_name(namespace: str) -> Tuple[bool, str]:
        """Namespace ids become file names, so path characters are rejected"""
        if not namespace or not namespace.strip():
            return False, "Namespace cannot be empty"

        namespace = namespace.strip()
        if len(namespace) > 100:
            return False, "Namespace too long (max 100 characters)"

        if not NAMESPACE_PATTERN.match(namespace):
            return False, "Namespace may only contain letters, digits, '_' and '-'"

        return True, ""

    @staticmethod
    def validate_key(key: str) -> Tuple[bool, str]:
        """Validate a translation key"""
        if not key or not key.strip():
            return False, "Key cannot be empty"

        key = key.strip()
        if any(not segment for segment in key.split('.')):
            return False, "Key contains an empty path segment"

        if re.search(r'\s', key):
            return False, "Key cannot contain whitespace"

        return True, ""

    @staticmethod
    def validate_language_code(lang: str) -> Tuple[bool, str]:
        """Validate language code"""
        if not is_valid_language(lang):
            return False, f"Invalid language code: {lang}"

        return True, ""
