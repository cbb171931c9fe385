"""Page record assembly.

Turns extracted reflections and configured static files into page records
in the document store's schema.
"""

import json
import os
from typing import Any

from typedoc_ingest.domain.constants import DEFAULT_CATEGORY, DEFAULT_SUBMODULE, PAGE_PREVIEW_FIELDS
from typedoc_ingest.domain.enums import PageType, ReflectionPageKind
from typedoc_ingest.domain.models import DocReflection, DocsConfig
from typedoc_ingest.reflection.comments import find_category, find_fn_summary, find_fn_tag, find_summary


def build_fn_pages(refs: list[DocReflection], config: DocsConfig, version: str) -> list[dict[str, Any]]:
    """Build a page record for every extracted reflection.

    Args:
        refs: Reflections from ``read_refs_from_json``.
        config: Docs config (package name, page type, submodules).
        version: ``v``-prefixed package version.

    Returns:
        Page records in input order.
    """
    return [build_fn_page(ref, config, version) for ref in refs]


def build_fn_page(ref: DocReflection, config: DocsConfig, version: str) -> dict[str, Any]:
    """Build the page record of a single function or constants reflection."""
    name = ref.ref.get('name')

    if ref.kind == ReflectionPageKind.FUNCTION.value and ref.fn is not None:
        category = ref.category or find_category(ref.ref, ref.fn.get('id')) or DEFAULT_CATEGORY
        summary = find_fn_summary(ref.fn) or ''
        pure_str = find_fn_tag(ref.fn, '@pure')
    else:
        category = ref.category or find_category(ref.ref, ref.ref.get('id')) or DEFAULT_CATEGORY
        summary = find_summary(ref.ref) or ''
        pure_str = None

    pure = (pure_str or '').strip() != 'false'
    submodules = list(config.submodules) if pure else [DEFAULT_SUBMODULE]

    # tsdoc pages store the serialized reflection under their own key
    doc_key = 'tsdoc' if config.page_type == PageType.TSDOC.value else 'doc'

    return {
        'type': config.page_type,
        'kind': ref.kind,
        'package': config.package_name,
        'version': version,
        'slug': name,
        'category': category,
        'title': name,
        'summary': summary,
        'name': name,
        doc_key: serialize_reflection(ref.ref),
        'submodules': submodules,
        'pure': pure,
    }


def build_markdown_pages(config: DocsConfig, base_dir: str, version: str) -> list[dict[str, Any]]:
    """Build a markdown page record for every configured static file."""
    pages = []
    for static_doc in config.files:
        with open(os.path.join(base_dir, static_doc.path), 'r', encoding='utf-8') as f:
            markdown = f.read()
        pages.append({
            'slug': static_doc.slug,
            'category': static_doc.category,
            'title': static_doc.title,
            'summary': static_doc.summary,
            'type': PageType.MARKDOWN.value,
            'version': version,
            'markdown': markdown,
            'package': config.package_name,
            'submodules': list(config.submodules),
        })
    return pages


def page_preview(page: dict[str, Any]) -> dict[str, Any]:
    """Pick the fields a version's page index keeps from a page."""
    return {key: page[key] for key in PAGE_PREVIEW_FIELDS if key in page}


def serialize_reflection(reflection: dict[str, Any]) -> str:
    return json.dumps(reflection, ensure_ascii=False)
