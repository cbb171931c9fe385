"""Publishes generated pages into a document store.

A published version touches three collections:
  - packages: one document per package, listing version previews
  - versions: one document per version with the page index and category order
  - pages:    one document per page, under a generated id
"""

import logging
import time
from typing import Any

from typedoc_ingest.domain.constants import PACKAGES_COLLECTION, PAGES_COLLECTION, VERSIONS_COLLECTION
from typedoc_ingest.output.page_builder import page_preview
from typedoc_ingest.storage.document_store import DocumentStore

logger = logging.getLogger(__name__)


def build_version_record(
    package_name: str,
    version: str,
    pre_release: bool,
    pages: list[dict[str, Any]],
    categories: list[str],
    submodules: list[str],
    created_at: int,
) -> dict[str, Any]:
    """Build the version document: page previews plus category ordering."""
    return {
        'package': package_name,
        'version': version,
        'preRelease': pre_release,
        'pages': [page_preview(page) for page in pages],
        'createdAt': created_at,
        'categories': list(categories),
        'submodules': list(submodules),
    }


def publish_version(
    store: DocumentStore,
    package_name: str,
    version: str,
    pre_release: bool,
    pages: list[dict[str, Any]],
    categories: list[str],
    submodules: list[str],
    created_at: int | None = None,
) -> str:
    """Write a package version and its pages.

    Args:
        store: Target document store.
        package_name: Package document id and name.
        version: ``v``-prefixed version.
        pre_release: Whether the version is a pre-release.
        pages: Page records.
        categories: Category ordering for the version.
        submodules: Submodules the version is published for.
        created_at: Millisecond timestamp; now when omitted.

    Returns:
        Id of the created version document.
    """
    if created_at is None:
        created_at = int(time.time() * 1000)

    preview = {
        'version': version,
        'preRelease': pre_release,
        'submodules': list(submodules),
        'createdAt': created_at,
    }
    upsert_package(store, package_name, preview)

    version_id = store.add(VERSIONS_COLLECTION, build_version_record(
        package_name, version, pre_release, pages, categories, submodules, created_at,
    ))

    batch = store.batch()
    for page in pages:
        batch.set(PAGES_COLLECTION, store.new_id(), page)
    written = batch.commit()

    logger.info("Published %s %s: %d page(s)", package_name, version, written)
    return version_id


def upsert_package(store: DocumentStore, package_name: str, version_preview: dict[str, Any]) -> None:
    """Append a version preview to a package, creating the package if needed."""
    package = store.get(PACKAGES_COLLECTION, package_name)
    if package is None:
        store.set(PACKAGES_COLLECTION, package_name, {
            'name': package_name,
            'versions': [version_preview],
        })
        return

    versions = package.get('versions') or []
    if version_preview not in versions:
        versions.append(version_preview)
    package['versions'] = versions
    store.set(PACKAGES_COLLECTION, package_name, package)


def rollback_version(store: DocumentStore, package_name: str, version: str) -> dict[str, int]:
    """Remove a published version and all of its pages.

    Returns:
        Counts of removed version and page documents.
    """
    package = store.get(PACKAGES_COLLECTION, package_name)
    if package is not None:
        package['versions'] = [v for v in package.get('versions') or [] if v.get('version') != version]
        store.set(PACKAGES_COLLECTION, package_name, package)

    removed = {'versions': 0, 'pages': 0}
    for collection in (VERSIONS_COLLECTION, PAGES_COLLECTION):
        for doc_id, _ in store.query(collection, package=package_name, version=version):
            store.delete(collection, doc_id)
            removed[collection] += 1

    logger.info("Rolled back %s %s: %s", package_name, version, removed)
    return removed
