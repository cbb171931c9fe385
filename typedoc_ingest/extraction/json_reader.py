"""TypeDoc JSON reading and reflection extraction.

Reads the generator's JSON dump, completes every top-level reflection with
the reflections it references from elsewhere in the document, and picks
out the ones that become pages.
"""

import json
import logging
import os
from typing import Any

from typedoc_ingest.domain.enums import ReflectionPageKind
from typedoc_ingest.domain.models import DocReflection, DocsConfig
from typedoc_ingest.reflection.comments import find_fn
from typedoc_ingest.reflection.index import build_index
from typedoc_ingest.reflection.recovery import ReferenceRecovery, complete_reflection

logger = logging.getLogger(__name__)


def read_docs_json(json_path: str) -> dict[str, Any]:
    """Read and parse a TypeDoc project reflection from a JSON file."""
    with open(json_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def read_refs_from_json(config: DocsConfig, base_dir: str) -> list[DocReflection]:
    """Read TypeDoc JSON and extract the reflections to publish.

    Args:
        config: Docs config.
        base_dir: Directory ``config.json`` is relative to.

    Returns:
        DocReflection list in document order.

    Raises:
        UnsupportedTypeKindError: The JSON contains a type kind this tool
            does not understand.
    """
    docs = read_docs_json(os.path.join(base_dir, config.json))
    return extract_refs(docs, config)


def extract_refs(docs: dict[str, Any], config: DocsConfig) -> list[DocReflection]:
    """Extract page reflections from an already parsed project reflection."""
    global_index = build_index(docs)
    refs: list[DocReflection] = []

    for reflection in docs.get('children') or []:
        recovery = ReferenceRecovery(reflection, global_index)
        recovered = recovery.run()
        if recovery.unresolved:
            logger.debug(
                "%s: %d unresolved reference(s): %s",
                reflection.get('name'), len(recovery.unresolved), sorted(recovery.unresolved),
            )

        completed = complete_reflection(reflection, recovered)
        override = config.kinds_map.get(_source_file(completed) or '')

        if override and override.kind == ReflectionPageKind.CONSTANTS.value:
            refs.append(DocReflection(
                kind=ReflectionPageKind.CONSTANTS.value,
                ref=completed,
                category=override.category,
            ))
            continue

        fn = find_fn(reflection, _fn_name(reflection, config))
        if not fn:
            logger.debug("Skipping %s: no exported function", reflection.get('name'))
            continue

        refs.append(DocReflection(
            kind=ReflectionPageKind.FUNCTION.value,
            ref=completed,
            fn=fn,
            category=override.category if override else None,
        ))

    return refs


def _fn_name(reflection: dict[str, Any], config: DocsConfig) -> str | None:
    if config.export_convention == 'default':
        return 'default'
    return reflection.get('name')


def _source_file(reflection: dict[str, Any]) -> str | None:
    sources = reflection.get('sources') or []
    return sources[0].get('fileName') if sources else None
