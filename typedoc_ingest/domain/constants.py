"""Shared constants and regex patterns."""

import re

# ── Package ──────────────────────────────────────────────────────────────

DEFAULT_PACKAGE_NAME = 'date-fns'

ALL_SUBMODULES: list[str] = ['default', 'fp']

DEFAULT_SUBMODULE = 'default'

DEFAULT_CATEGORY = 'Misc'

# ── Version Patterns ─────────────────────────────────────────────────────

VERSION_RE = re.compile(r'^\d+\.\d+\.\d+(-(alpha|beta|rc)(\.\d+)?)?$')
PRE_RELEASE_RE = re.compile(r'-(alpha|beta|rc)(\.\d+)?$')

# ── Document Store ───────────────────────────────────────────────────────

PACKAGES_COLLECTION = 'packages'
VERSIONS_COLLECTION = 'versions'
PAGES_COLLECTION = 'pages'

DEFAULT_STORE_DIR = '.docs-store'

# Page fields copied into the version's page index
PAGE_PREVIEW_FIELDS = ('type', 'slug', 'category', 'title', 'summary', 'submodules')

# ── Export Conventions ───────────────────────────────────────────────────

# 'named': the exported function shares its module's name (TypeDoc output)
# 'default': the exported function is the module's default export
EXPORT_CONVENTIONS = ('named', 'default')
