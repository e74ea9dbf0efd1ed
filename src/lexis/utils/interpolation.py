"""
Helpers for {{variable}} interpolation tokens
"""

import re
from typing import Dict, List, Tuple

VARIABLE_PATTERN = re.compile(r'\{\{([^}]+)\}\}')


def has_interpolation(text: str) -> bool:
    """Check if a string contains {{variable}} tokens"""
    return VARIABLE_PATTERN.search(text) is not None


def extract_variables(text: str) -> List[str]:
    """Return variable names used in a string, in order of appearance"""
    return [match.strip() for match in VARIABLE_PATTERN.findall(text)]


def validate_variables(source_text: str, translated_text: str) -> bool:
    """Check that a translation uses exactly the same variables as its source"""
    return sorted(extract_variables(source_text)) == sorted(extract_variables(translated_text))


def preserve_variables(text: str) -> Tuple[str, Dict[str, str]]:
    """
    Replace {{variable}} tokens with opaque placeholders

    Placeholders look like ``XXX_0_XXX`` which translation engines leave
    untouched.

    Returns:
        (text with placeholders, placeholder -> original token)
    """
    variable_map: Dict[str, str] = {}

    def _replace(match) -> str:
        placeholder = f"XXX_{len(variable_map)}_XXX"
        variable_map[placeholder] = match.group(0)
        return placeholder

    return VARIABLE_PATTERN.sub(_replace, text), variable_map


def restore_variables(text: str, variable_map: Dict[str, str]) -> str:
    """Put the original {{variable}} tokens back in place of their placeholders"""
    for placeholder, original in variable_map.items():
        text = text.replace(placeholder, original)
    return text
