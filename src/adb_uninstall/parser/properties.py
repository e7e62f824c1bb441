"""Parser for Android build properties and device enrichment."""

from __future__ import annotations

import logging
from dataclasses import replace

from adb_uninstall.model.device import Device
from adb_uninstall.model.listing import BuildProperties
from adb_uninstall.vendor.android.properties import PROPERTY_FIELDS

logger = logging.getLogger(__name__)


def parse_build_properties(text: str) -> BuildProperties:
    """Parse ``key=value`` lines into a :class:`.BuildProperties`.

    Lines are split on *every* ``=``.  Only lines that yield exactly two
    parts are kept, so a value that itself contains ``=`` (for example
    ``ro.build.fingerprint=a=b``) is dropped and listed in
    :attr:`.BuildProperties.skipped_lines`.  Lines without ``=`` (comments,
    blank lines) are ignored silently.  Later duplicates overwrite earlier
    ones.

    Args:
        text: Raw contents of ``/system/build.prop``.

    Returns:
        The parsed properties.
    """
    props = BuildProperties()
    for line in text.splitlines():
        if "=" not in line:
            continue
        parts = line.split("=")
        if len(parts) != 2:
            logger.debug("Skipping property line with %d parts: %r", len(parts), line)
            props.skipped_lines.append(line)
            continue
        key, value = parts
        props.values[key] = value
    return props


def enrich_device(device: Device, properties: str | BuildProperties) -> Device:
    """Return a copy of *device* with its descriptive fields filled in.

    The four known keys (manufacturer, model, release version, API level)
    are looked up in *properties*; a missing key leaves the field ``None``.
    *device* itself is not modified.

    Args:
        device: Device as produced by the device list parser.
        properties: Raw ``build.prop`` text or an already parsed
            :class:`.BuildProperties`.

    Returns:
        The enriched :class:`.Device`.
    """
    if isinstance(properties, str):
        properties = parse_build_properties(properties)
    fields = {attr: properties.get(key) for key, attr in PROPERTY_FIELDS.items()}
    return replace(device, **fields)
