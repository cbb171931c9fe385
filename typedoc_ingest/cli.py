"""CLI for typedoc-ingest."""

import argparse
import logging
import os
import sys

from typedoc_ingest.config import ConfigReadError, config_dir, load_config
from typedoc_ingest.deno_docs import describe_exports, read_deno_docs
from typedoc_ingest.domain.constants import DEFAULT_STORE_DIR
from typedoc_ingest.domain.models import DocsConfig, IngestOptions, IngestResult, PackageVersion
from typedoc_ingest.extraction.json_reader import read_refs_from_json
from typedoc_ingest.output.json_dumper import PageDumper
from typedoc_ingest.output.page_builder import build_fn_pages, build_markdown_pages
from typedoc_ingest.reflection.type_walker import UnsupportedTypeKindError
from typedoc_ingest.storage.document_store import DocumentStore, InMemoryDocumentStore, LocalDocumentStore
from typedoc_ingest.storage.publisher import build_version_record, publish_version, rollback_version
from typedoc_ingest.version_reader import InvalidVersionError, read_version


def build_pages(config: DocsConfig, base_dir: str, version: str) -> tuple[list[dict], list[dict]]:
    """Build function and markdown pages for a version."""
    refs = read_refs_from_json(config, base_dir)
    fn_pages = build_fn_pages(refs, config, version)
    markdown_pages = build_markdown_pages(config, base_dir, version)
    return fn_pages, markdown_pages


def ingest_docs(config_path: str, options: IngestOptions, store: DocumentStore | None = None) -> IngestResult:
    """Main orchestration: config -> TypeDoc JSON -> pages -> document store."""
    config = load_config(config_path)
    base_dir = config_dir(config_path)
    package_version = read_version(config, base_dir)

    fn_pages, markdown_pages = build_pages(config, base_dir, package_version.version)

    if store is None:
        store = _open_store(options)

    version_id = publish_version(
        store,
        config.package_name,
        package_version.version,
        package_version.pre_release,
        fn_pages + markdown_pages,
        config.categories,
        config.submodules,
    )

    return IngestResult(
        package_name=config.package_name,
        version=package_version.version,
        function_pages=len(fn_pages),
        markdown_pages=len(markdown_pages),
        version_id=version_id,
    )


def rollback_docs(config_path: str, options: IngestOptions, store: DocumentStore | None = None) -> dict[str, int]:
    """Remove the config's current package version from the store."""
    config = load_config(config_path)
    package_version = read_version(config, config_dir(config_path))
    if store is None:
        store = _open_store(options)
    return rollback_version(store, config.package_name, package_version.version)


def dump_docs(config_path: str, output_dir: str, options: IngestOptions) -> IngestResult:
    """Write pages and the version record to a directory instead of a store."""
    config = load_config(config_path)
    base_dir = config_dir(config_path)
    package_version: PackageVersion = read_version(config, base_dir)

    fn_pages, markdown_pages = build_pages(config, base_dir, package_version.version)
    pages = fn_pages + markdown_pages

    dumper = PageDumper(output_dir, pretty=options.pretty)
    dumper.write_pages(pages)
    dumper.write_version(build_version_record(
        config.package_name,
        package_version.version,
        package_version.pre_release,
        pages,
        config.categories,
        config.submodules,
        created_at=0,
    ))

    return IngestResult(
        package_name=config.package_name,
        version=package_version.version,
        function_pages=len(fn_pages),
        markdown_pages=len(markdown_pages),
    )


def _open_store(options: IngestOptions) -> DocumentStore:
    if options.dry_run:
        return InMemoryDocumentStore()
    return LocalDocumentStore(options.store_dir or DEFAULT_STORE_DIR, pretty=options.pretty)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog='typedoc-ingest', description='TypeDoc docs ingestion')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command')

    # ingest command
    ingest_parser = subparsers.add_parser('ingest', help='Publish docs pages to the document store')
    ingest_parser.add_argument('config', help='Path to the docs config JSON')
    ingest_parser.add_argument('--store', default=DEFAULT_STORE_DIR, help=f'Store directory (default: {DEFAULT_STORE_DIR})')
    ingest_parser.add_argument('--dry-run', action='store_true', help='Build pages without persisting them')

    # rollback command
    rollback_parser = subparsers.add_parser('rollback', help='Remove the current version from the document store')
    rollback_parser.add_argument('config', help='Path to the docs config JSON')
    rollback_parser.add_argument('--store', default=DEFAULT_STORE_DIR, help=f'Store directory (default: {DEFAULT_STORE_DIR})')

    # dump command
    dump_parser = subparsers.add_parser('dump', help='Write docs pages to a directory')
    dump_parser.add_argument('config', help='Path to the docs config JSON')
    dump_parser.add_argument('output', help='Output directory')
    dump_parser.add_argument('--no-pretty', action='store_true', help='Disable pretty printing')

    # exports command
    exports_parser = subparsers.add_parser('exports', help='List exported declarations of a deno-doc JSON')
    exports_parser.add_argument('docs', help='Path to the deno-doc JSON')
    exports_parser.add_argument('--root', help='Repository root the source file URLs are resolved against')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.command is None:
        parser.print_help()
        return 0

    source = args.docs if args.command == 'exports' else args.config
    if not os.path.isfile(source):
        print(f"Error: {source} not found", file=sys.stderr)
        return 1

    try:
        if args.command == 'ingest':
            options = IngestOptions(store_dir=args.store, dry_run=args.dry_run)
            result = ingest_docs(args.config, options)
            print(f"Published {result.package_name} {result.version}: "
                  f"{result.function_pages} function pages, {result.markdown_pages} markdown pages")

        elif args.command == 'rollback':
            removed = rollback_docs(args.config, IngestOptions(store_dir=args.store))
            print(f"Removed {removed['versions']} version(s) and {removed['pages']} page(s)")

        elif args.command == 'dump':
            result = dump_docs(args.config, args.output, IngestOptions(pretty=not args.no_pretty))
            print(f"Done! Wrote {result.total_pages} pages")
            print(f"Output: {args.output}")

        elif args.command == 'exports':
            for line in describe_exports(read_deno_docs(args.docs), root=args.root):
                print(line)

    # UnknownDeclarationKindError and files outside the source directory are ValueErrors
    except (ConfigReadError, InvalidVersionError, UnsupportedTypeKindError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
