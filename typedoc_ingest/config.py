"""Docs config reader."""
import json
import os
from typing import Any

from typedoc_ingest.domain.constants import EXPORT_CONVENTIONS
from typedoc_ingest.domain.enums import PageType, ReflectionPageKind
from typedoc_ingest.domain.models import DocsConfig, KindOverride, StaticDoc


class ConfigReadError(Exception):
    """Error reading the docs config."""
    pass


def load_config(config_path: str) -> DocsConfig:
    """Read a JSON docs config file.

    Args:
        config_path: Path to the config file.

    Returns:
        Parsed DocsConfig.

    Raises:
        ConfigReadError: The file is missing, is not valid JSON or lacks
            required keys.
    """
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigReadError(f"Failed to read config {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigReadError(f"Config {config_path} must be a JSON object")
    return parse_config(raw)


def parse_config(raw: dict[str, Any]) -> DocsConfig:
    """Build a DocsConfig from its JSON representation."""
    missing = [key for key in ('package', 'json') if not raw.get(key)]
    if missing:
        raise ConfigReadError(f"Config is missing required keys: {', '.join(missing)}")

    try:
        files = [StaticDoc(**{k: f[k] for k in ('slug', 'category', 'title', 'summary', 'path')})
                 for f in raw.get('files', [])]
    except (KeyError, TypeError) as e:
        raise ConfigReadError(f"Invalid static file entry: {e}") from e

    kinds_map: dict[str, KindOverride] = {}
    for file_name, override in (raw.get('kinds_map') or {}).items():
        kind = override.get('kind')
        if kind not in {k.value for k in ReflectionPageKind}:
            raise ConfigReadError(f"Invalid kind {kind!r} for {file_name}")
        kinds_map[file_name] = KindOverride(kind=kind, category=override.get('category'))

    config = DocsConfig(
        package=raw['package'],
        json=raw['json'],
        categories=list(raw.get('categories', [])),
        files=files,
        kinds_map=kinds_map,
    )
    if 'package_name' in raw:
        config.package_name = raw['package_name']
    if 'submodules' in raw:
        config.submodules = list(raw['submodules'])
    if 'page_type' in raw:
        config.page_type = raw['page_type']
    if 'export_convention' in raw:
        config.export_convention = raw['export_convention']

    if config.page_type not in (PageType.TYPEDOC.value, PageType.TSDOC.value):
        raise ConfigReadError(f"Invalid page_type {config.page_type!r}")
    if config.export_convention not in EXPORT_CONVENTIONS:
        raise ConfigReadError(f"Invalid export_convention {config.export_convention!r}")
    return config


def config_dir(config_path: str) -> str:
    """Directory that relative config paths are resolved against."""
    return os.path.dirname(os.path.abspath(config_path))
