"""Shared data models used across ingestion modules."""

from dataclasses import dataclass, field
from typing import Any

from typedoc_ingest.domain.constants import ALL_SUBMODULES, DEFAULT_PACKAGE_NAME


@dataclass
class StaticDoc:
    """A static markdown file published as a page."""

    slug: str
    category: str
    title: str
    summary: str
    path: str


@dataclass
class KindOverride:
    """Per-source-file override of the page kind and category."""

    kind: str
    category: str | None = None


@dataclass
class DocsConfig:
    """The docs config.

    Paths (``package``, ``json``, static doc paths) are relative to the
    directory holding the config file.
    """

    package: str
    json: str
    categories: list[str] = field(default_factory=list)
    files: list[StaticDoc] = field(default_factory=list)
    kinds_map: dict[str, KindOverride] = field(default_factory=dict)
    package_name: str = DEFAULT_PACKAGE_NAME
    submodules: list[str] = field(default_factory=lambda: list(ALL_SUBMODULES))
    page_type: str = 'typedoc'
    export_convention: str = 'named'


@dataclass
class DocReflection:
    """A top-level reflection ready to become a page.

    ``ref`` is the completed module reflection (recovered references merged
    into its children). ``fn`` is the exported function for function pages.
    """

    kind: str
    ref: dict[str, Any]
    fn: dict[str, Any] | None = None
    category: str | None = None


@dataclass
class PackageVersion:
    """A validated package version."""

    version: str
    pre_release: bool


@dataclass
class IngestOptions:
    """Options controlling an ingestion run."""

    store_dir: str | None = None
    dry_run: bool = False
    pretty: bool = True


@dataclass
class IngestResult:
    """Result summary of an ingestion run."""

    package_name: str
    version: str
    function_pages: int
    markdown_pages: int
    version_id: str | None = None

    @property
    def total_pages(self) -> int:
        return self.function_pages + self.markdown_pages
