"""
Conversion between nested translation trees and flat dot-notation key maps
"""

from typing import Any, Dict

from lexis.errors import TreeCollisionError

# Flat representation used everywhere else: {"home.title": "Hello"}
FlatMap = Dict[str, str]
Tree = Dict[str, Any]


def flatten(tree: Tree, prefix: str = '') -> FlatMap:
    """
    Flatten a nested tree into dot-notation keys

    Example: {"home": {"title": "Hello"}} -> {"home.title": "Hello"}

    Empty nested objects produce no entries. Values that are neither strings
    nor objects are skipped.

    Raises:
        TreeCollisionError: if two paths flatten to the same key
    """
    result: FlatMap = {}
    _flatten_into(tree, prefix, result)
    return result


def _flatten_into(tree: Tree, prefix: str, result: FlatMap) -> None:
    for key, value in tree.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, str):
            if path in result:
                raise TreeCollisionError(path, f"Duplicate key after flattening: '{path}'")
            result[path] = value
        elif isinstance(value, dict):
            _flatten_into(value, path, result)


def unflatten(flat: FlatMap) -> Tree:
    """
    Rebuild a nested tree from dot-notation keys

    Example: {"home.title": "Hello"} -> {"home": {"title": "Hello"}}

    Raises:
        TreeCollisionError: if a string leaf's path is a strict prefix of
            another key (e.g. both "home" and "home.title" are present)
    """
    result: Tree = {}

    for key, value in flat.items():
        parts = key.split('.')
        current = result
        walked = []
        for part in parts[:-1]:
            walked.append(part)
            node = current.get(part)
            if node is None:
                node = current[part] = {}
            elif not isinstance(node, dict):
                prefix = '.'.join(walked)
                raise TreeCollisionError(
                    key, f"Key '{key}' nests under '{prefix}', which already holds a string"
                )
            current = node

        leaf = parts[-1]
        if isinstance(current.get(leaf), dict):
            raise TreeCollisionError(
                key, f"Key '{key}' holds a string but is also the prefix of other keys"
            )
        current[leaf] = value

    return result


def is_nested(tree: Tree) -> bool:
    """Check whether any top-level value is an object"""
    return any(isinstance(value, dict) for value in tree.values())
