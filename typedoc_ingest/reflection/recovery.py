"""Reference recovery for top-level reflections.

A module reflection exported by TypeDoc refers to types declared in other
modules (an ``Options`` interface, a ``Locale`` alias, ...) by id only. To
publish each module as a self-contained page, the referenced reflections
are pulled in from the document-wide index and appended to the module's
children, following references of the recovered reflections in turn until
no new ids show up.
"""

import logging
from typing import Any, Callable

from typedoc_ingest.reflection.index import build_index, merge_index
from typedoc_ingest.reflection.type_walker import type_parameters, walk_type

logger = logging.getLogger(__name__)


def collect_refs(reflection: dict[str, Any]) -> list[int]:
    """Collect ids referenced by a reflection and all of its children.

    Args:
        reflection: Reflection dict.

    Returns:
        Referenced ids, deduplicated, in first-seen order.

    Raises:
        UnsupportedTypeKindError: A nested type kind is not supported.
    """
    refs: dict[int, None] = {}

    def _add(ref_id: int) -> None:
        refs.setdefault(ref_id, None)

    _collect_refs(reflection, _add)
    return list(refs)


def _collect_refs(reflection: dict[str, Any], add: Callable[[int], None]) -> None:
    # inheritedFrom and extendedTypes are edges themselves and are not walked
    _add_direct_ref(reflection.get('inheritedFrom'), add)
    for extended in reflection.get('extendedTypes') or []:
        _add_direct_ref(extended, add)

    if reflection.get('type'):
        walk_type(reflection['type'], add)

    _walk_type_parameters(reflection, add)

    for signature in reflection.get('signatures') or []:
        _walk_type_parameters(signature, add)
        for param in signature.get('parameters') or []:
            if param.get('type'):
                walk_type(param['type'], add)
        if signature.get('type'):
            walk_type(signature['type'], add)

    for child in reflection.get('children') or []:
        _collect_refs(child, add)


def _add_direct_ref(ref: dict[str, Any] | None, add: Callable[[int], None]) -> None:
    if not ref:
        return
    target = ref.get('target')
    if isinstance(target, int) and not isinstance(target, bool):
        add(target)


def _walk_type_parameters(reflection: dict[str, Any], add: Callable[[int], None]) -> None:
    for param in type_parameters(reflection):
        if param.get('type'):
            walk_type(param['type'], add)
        if param.get('default'):
            walk_type(param['default'], add)


class ReferenceRecovery:
    """Recovers reflections referenced from outside a root's own subtree.

    Holds the growing local index (the root's descendants plus everything
    recovered so far), the recovered reflections in discovery order and
    the ids that could not be found in the global index.

    Args:
        root: The top-level reflection being completed.
        global_index: Document-wide id → reflection lookup. Never modified.
        local_index: Lookup of what the root already contains. Built from
            ``root`` when omitted; modified in place as references are
            recovered.
    """

    def __init__(
        self,
        root: dict[str, Any],
        global_index: dict[int, dict[str, Any]],
        local_index: dict[int, dict[str, Any]] | None = None,
    ) -> None:
        self.root = root
        self.global_index = global_index
        self.local_index = build_index(root) if local_index is None else local_index
        self.recovered: list[dict[str, Any]] = []
        self.unresolved: set[int] = set()

    def run(self) -> list[dict[str, Any]]:
        """Recover references until a fixpoint is reached.

        Returns:
            Every reflection recovered by this instance, in discovery order.
        """
        self._recover_from(self.root)
        return self.recovered

    def _recover_from(self, reflection: dict[str, Any]) -> None:
        for ref_id in collect_refs(reflection):
            if self._is_known(ref_id):
                continue

            missing = self.global_index.get(ref_id)
            if missing is None:
                if ref_id not in self.unresolved:
                    self.unresolved.add(ref_id)
                    logger.debug("Reference %s from %r not found in the document", ref_id, self.root.get('name'))
                continue

            self.recovered.append(missing)
            self.local_index[ref_id] = missing
            merge_index(self.local_index, build_index(missing))

            self._recover_from(missing)

    def _is_known(self, ref_id: int) -> bool:
        return ref_id in self.local_index or ref_id == self.root.get('id')


def recover(
    root: dict[str, Any],
    local_index: dict[int, dict[str, Any]],
    global_index: dict[int, dict[str, Any]],
) -> list[dict[str, Any]]:
    """Recover the reflections ``root`` depends on but does not contain.

    Args:
        root: Top-level reflection.
        local_index: Index of ``root``'s subtree; recovered reflections and
            their descendants are added to it.
        global_index: Document-wide index.

    Returns:
        Recovered reflections, unique by id.
    """
    return ReferenceRecovery(root, global_index, local_index).run()


def complete_reflection(reflection: dict[str, Any], recovered: list[dict[str, Any]]) -> dict[str, Any]:
    """Return a shallow copy of ``reflection`` with ``recovered`` appended to its children."""
    return {
        **reflection,
        'children': [*(reflection.get('children') or []), *recovered],
    }
