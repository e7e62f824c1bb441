"""Locate an Android module's manifest and read its package name."""

from __future__ import annotations

import logging
import os
import pathlib

from adb_uninstall.client.errors import ManifestNotFoundError, ManifestParseError
from adb_uninstall.parser.manifest import parse_package_name

logger = logging.getLogger(__name__)

MANIFEST_FILENAME: str = "AndroidManifest.xml"

# Candidate locations relative to the module directory, in priority order:
# Gradle layout first, then the legacy Ant/Eclipse layout.
_MANIFEST_CANDIDATES: tuple[tuple[str, ...], ...] = (
    ("src", "main", MANIFEST_FILENAME),
    (MANIFEST_FILENAME,),
)


def locate_manifest(module_dir: str | os.PathLike[str]) -> pathlib.Path:
    """Return the path of the module's ``AndroidManifest.xml``.

    Raises:
        ManifestNotFoundError: If no candidate location holds a file.
    """
    root = pathlib.Path(module_dir)
    candidates = [root.joinpath(*parts) for parts in _MANIFEST_CANDIDATES]
    for path in candidates:
        if path.is_file():
            logger.debug("Using manifest %s", path)
            return path
    raise ManifestNotFoundError([str(p) for p in candidates])


def resolve_package_name(module_dir: str | os.PathLike[str]) -> str:
    """Return the application package declared by the module's manifest.

    Raises:
        ManifestNotFoundError: If the manifest cannot be found.
        ManifestParseError: If it cannot be read or declares no package.
    """
    path = locate_manifest(module_dir)
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise ManifestParseError(f"Cannot read {path}: {exc}") from exc
    package_name = parse_package_name(content)
    logger.info("Resolved package %s from %s", package_name, path)
    return package_name
