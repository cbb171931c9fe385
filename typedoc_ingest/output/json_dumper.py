"""JSON output generation.

Writes page records and the version index to a directory, for inspecting
an ingestion run without a document store.
"""

import json
import os
import re
from typing import Any


def _sanitize_filename(slug: str) -> str:
    """Create a safe filename from a page slug."""
    sanitized = re.sub(r'[^\w\-]', '_', slug or 'Unknown')[:80]
    return f"{sanitized}.json"


class PageDumper:
    """Writes pages to a structured JSON directory.

    Output structure:
        output_dir/
        ├── version.json
        └── pages/{slug}.json

    Args:
        output_dir: Root directory for output files.
        pretty: Whether to pretty-print JSON (default True).
    """

    def __init__(self, output_dir: str, pretty: bool = True) -> None:
        self._output_dir = output_dir
        self._indent = 2 if pretty else None

    def write_pages(self, pages: list[dict[str, Any]]) -> list[str]:
        """Write each page as an individual JSON file.

        Returns:
            Written file paths.
        """
        dir_path = os.path.join(self._output_dir, 'pages')
        os.makedirs(dir_path, exist_ok=True)

        paths = []
        for page in pages:
            filepath = os.path.join(dir_path, _sanitize_filename(page.get('slug')))
            self._write_json(filepath, page)
            paths.append(filepath)
        return paths

    def write_version(self, version_record: dict[str, Any]) -> str:
        """Write the version record (page index and category order)."""
        os.makedirs(self._output_dir, exist_ok=True)
        path = os.path.join(self._output_dir, 'version.json')
        self._write_json(path, version_record)
        return path

    def _write_json(self, path: str, data: Any) -> None:
        """Write data as JSON to a file."""
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=self._indent, ensure_ascii=False, default=str)
