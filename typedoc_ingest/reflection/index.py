"""Reflection index: reflection id → reflection node lookups.

An index covers every descendant reachable through ``children`` of the
given root (the root itself is not indexed). When the same id shows up
twice the first occurrence wins and its second occurrence is not walked
again, so shared or cyclic children cannot loop.
"""

from typing import Any


def build_index(root: dict[str, Any]) -> dict[int, dict[str, Any]]:
    """Build an id → reflection lookup for all descendants of ``root``.

    Args:
        root: Any reflection (project, module or a single declaration).

    Returns:
        Dict keyed by reflection id. The input is not modified.
    """
    index: dict[int, dict[str, Any]] = {}
    _collect(root, index)
    return index


def merge_index(target: dict[int, dict[str, Any]], source: dict[int, dict[str, Any]]) -> None:
    """Insert entries of ``source`` missing from ``target`` (first write wins)."""
    for ref_id, reflection in source.items():
        target.setdefault(ref_id, reflection)


def _collect(reflection: dict[str, Any], index: dict[int, dict[str, Any]]) -> None:
    for child in reflection.get('children') or []:
        ref_id = child.get('id')
        if ref_id is None or ref_id in index:
            continue
        index[ref_id] = child
        _collect(child, index)
