"""Simple Flask API serving published docs from a local document store."""

import os
from pathlib import Path
from flask import Flask, jsonify

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from typedoc_ingest.domain.constants import (
    DEFAULT_STORE_DIR,
    PACKAGES_COLLECTION,
    PAGES_COLLECTION,
    VERSIONS_COLLECTION,
)
from typedoc_ingest.storage.document_store import DocumentStore, InvalidDocumentIdError, LocalDocumentStore


def create_app(store: DocumentStore) -> Flask:
    app = Flask(__name__)

    @app.errorhandler(InvalidDocumentIdError)
    def invalid_document(error):
        # Names that are not valid document ids cannot exist in the store
        return jsonify({'error': str(error)}), 404

    @app.route('/api/packages/<name>')
    def get_package(name: str):
        """Package with its version previews."""
        package = store.get(PACKAGES_COLLECTION, name)
        if package is None:
            return jsonify({'error': 'Package not found'}), 404
        return jsonify(package)

    @app.route('/api/packages/<name>/versions/<version>')
    def get_version(name: str, version: str):
        """Version record with the page index."""
        matches = store.query(VERSIONS_COLLECTION, package=name, version=version)
        if not matches:
            return jsonify({'error': 'Version not found'}), 404
        # Latest insert wins when a version was published more than once
        _, record = max(matches, key=lambda m: m[1].get('createdAt', 0))
        return jsonify(record)

    @app.route('/api/packages/<name>/versions/<version>/pages/<slug>')
    def get_page(name: str, version: str, slug: str):
        """A single page, including its serialized reflection."""
        matches = store.query(PAGES_COLLECTION, package=name, version=version, slug=slug)
        if not matches:
            return jsonify({'error': 'Page not found'}), 404
        return jsonify(matches[0][1])

    return app


app = create_app(LocalDocumentStore(os.environ.get('DOCS_STORE_DIR', DEFAULT_STORE_DIR)))


if __name__ == '__main__':
    app.run(debug=True, port=5002)
