"""Package version reader."""
import json
import os

from typedoc_ingest.domain.constants import PRE_RELEASE_RE, VERSION_RE
from typedoc_ingest.domain.models import DocsConfig, PackageVersion


class InvalidVersionError(Exception):
    """The package version is missing or malformed."""
    pass


def read_version(config: DocsConfig, base_dir: str) -> PackageVersion:
    """Read and validate the documented package's version.

    Args:
        config: Docs config; ``config.package`` points at the package root.
        base_dir: Directory the config paths are relative to.

    Returns:
        PackageVersion with a ``v``-prefixed version string.

    Raises:
        InvalidVersionError: The version is missing or malformed.
        OSError: package.json cannot be read.
    """
    package_path = os.path.join(base_dir, config.package, 'package.json')
    with open(package_path, 'r', encoding='utf-8') as f:
        package_json = json.load(f)
    return parse_version(package_json.get('version'))


def parse_version(version: str | None) -> PackageVersion:
    """Validate a semver string and detect pre-releases."""
    if not version or not isinstance(version, str) or not VERSION_RE.match(version):
        raise InvalidVersionError(f'version is invalid "{version}"')
    return PackageVersion(
        version=f"v{version}",
        pre_release=bool(PRE_RELEASE_RE.search(version)),
    )
