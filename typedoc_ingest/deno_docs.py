"""Helpers for deno-doc JSON output.

Newer releases are documented with deno-doc, whose JSON is a flat list of
declaration nodes rather than a reflection tree.
"""

import json
import os
from typing import Any
from urllib.parse import unquote, urlparse

KNOWN_DECLARATION_KINDS = {'function', 'interface', 'typeAlias', 'variable', 'moduleDoc'}


class UnknownDeclarationKindError(ValueError):
    """A deno-doc declaration kind this tool does not understand."""

    def __init__(self, kind: Any) -> None:
        super().__init__(f"Unknown declaration kind: {kind}")
        self.kind = kind


def read_deno_docs(json_path: str) -> list[dict[str, Any]]:
    """Read the declaration nodes of a deno-doc JSON file."""
    with open(json_path, 'r', encoding='utf-8') as f:
        docs = json.load(f)
    return docs.get('nodes') or []


def is_export_node(node: dict[str, Any]) -> bool:
    return node.get('declarationKind') == 'export'


def repo_path(root: str, node: dict[str, Any]) -> str:
    """Path of the node's source file relative to the repository root."""
    return os.path.relpath(_file_path(node), root)


def source_file(node: dict[str, Any], root: str | None = None, source_dir: str = 'src') -> str:
    """Path of the node's source file relative to the source directory.

    With ``root`` the path is resolved against the repository root. Without
    it, the path is taken after the last ``source_dir`` segment of the file
    URL.

    Raises:
        ValueError: The file is outside the source directory.
    """
    if root is not None:
        path = repo_path(root, node)
        prefix = f'{source_dir}/'
        if not path.startswith(prefix):
            raise ValueError(f"{path} is outside {source_dir}")
        return path[len(prefix):]

    path = _file_path(node)
    marker = f'/{source_dir}/'
    if marker not in path:
        raise ValueError(f"{path} is outside {source_dir}")
    return path.rsplit(marker, 1)[1]


def describe_exports(nodes: list[dict[str, Any]], root: str | None = None, source_dir: str = 'src') -> list[str]:
    """Render a markdown listing of exported declarations.

    Args:
        nodes: Deno-doc declaration nodes.
        root: Repository root the file URLs are resolved against.
        source_dir: Directory, relative to the root, the module paths start in.

    Returns:
        Markdown lines.

    Raises:
        UnknownDeclarationKindError: A declaration has an unknown kind.
        ValueError: A declaration's file is outside ``source_dir``.
    """
    lines: list[str] = []
    for node in filter(is_export_node, nodes):
        file = source_file(node, root, source_dir)
        module = file.replace('/index.ts', '')

        kind = node.get('kind')
        if kind in KNOWN_DECLARATION_KINDS:
            kind_label = kind
        elif kind == 'reference':
            kind_label = 're-export'
        else:
            raise UnknownDeclarationKindError(kind)

        lines.extend([
            '',
            f"# {node['name']}",
            '',
            f"- file: {file}",
            f"- module: {module}",
            f"- kind: {kind_label}",
        ])
    return lines


def _file_path(node: dict[str, Any]) -> str:
    return unquote(urlparse(node['location']['filename']).path)
