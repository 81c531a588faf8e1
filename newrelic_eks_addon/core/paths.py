"""
Helpers for writing into nested chart values by dot-delimited path
"""
import copy
from typing import Any, Dict


def _split(path: str):
    if not path:
        raise ValueError("path must not be empty")
    return path.split(".")


def set_path(root: Dict[str, Any], path: str, value: Any) -> None:
    """
    Set ``root[a][b][c] = value`` for path ``"a.b.c"``.

    Missing intermediate keys are created as dicts, and an intermediate that
    holds a scalar is replaced by a dict.
    """
    *parents, leaf = _split(path)
    node = root
    for key in parents:
        child = node.get(key)
        if not isinstance(child, dict):
            child = {}
            node[key] = child
        node = child
    node[leaf] = value


def unset_path(root: Dict[str, Any], path: str) -> bool:
    """Remove the leaf at ``path``. Returns True if something was removed."""
    *parents, leaf = _split(path)
    node = root
    for key in parents:
        node = node.get(key)
        if not isinstance(node, dict):
            return False
    if leaf in node:
        del node[leaf]
        return True
    return False


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base`` (override wins)."""
    merged = copy.deepcopy(base or {})
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged
