"""Parser for the package name in ``AndroidManifest.xml``."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from adb_uninstall.client.errors import ManifestParseError

_MANIFEST_TAG: str = "manifest"
_PACKAGE_ATTR: str = "package"


def parse_xml(xml: str | bytes, parser: str = "xml") -> BeautifulSoup:
    """Parse an XML document and return a BeautifulSoup tree.

    Args:
        xml: Raw XML content.
        parser: Parser feature to use (default: ``xml``, backed by lxml).

    Returns:
        Parsed BeautifulSoup document.
    """
    return BeautifulSoup(xml, parser)


def parse_package_name(xml: str | bytes) -> str:
    """Return the ``package`` attribute of the first ``<manifest>`` element.

    Args:
        xml: Contents of an ``AndroidManifest.xml``.

    Returns:
        The application package name, e.g. ``"com.example.app"``.

    Raises:
        ManifestParseError: If there is no ``<manifest>`` element or it has no
            non-empty ``package`` attribute.
    """
    soup = parse_xml(xml)
    manifest = soup.find(_MANIFEST_TAG)
    if not isinstance(manifest, Tag):
        raise ManifestParseError("Package not found: no <manifest> element")
    package = manifest.get(_PACKAGE_ATTR)
    if not isinstance(package, str) or not package.strip():
        raise ManifestParseError(
            "Package not found: <manifest> has no 'package' attribute"
        )
    return package.strip()
