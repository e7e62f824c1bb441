"""Parser for ``adb devices`` output."""

from __future__ import annotations

import logging

from adb_uninstall.model.device import Device
from adb_uninstall.model.listing import DeviceListing
from adb_uninstall.vendor.android.commands import DEVICE_LIST_HEADER

logger = logging.getLogger(__name__)

_FIELD_SEP: str = "\t"


def parse_device_list(text: str) -> DeviceListing:
    """Parse the output of ``adb devices`` into a :class:`.DeviceListing`.

    Everything up to and including the first line containing
    ``list of devices`` (case-insensitive) is discarded.  Each following
    non-empty line is split on tabs; the first two fields are the serial
    number and the connection state.  Lines with fewer than two fields, or
    with an empty serial or state, are skipped and reported in
    :attr:`.DeviceListing.skipped_lines`.

    Never raises: output without the header yields an empty listing with
    ``header_found=False``.

    Args:
        text: Raw stdout of ``adb devices``.

    Returns:
        Parsed devices in input order, plus the skipped lines.
    """
    listing = DeviceListing()
    for line in text.splitlines():
        if not listing.header_found:
            if DEVICE_LIST_HEADER in line.lower():
                listing.header_found = True
            continue
        if not line:
            continue
        fields = line.split(_FIELD_SEP)
        if len(fields) < 2 or not fields[0] or not fields[1]:
            logger.debug("Skipping malformed device line %r", line)
            listing.skipped_lines.append(line)
            continue
        listing.devices.append(Device(serial_number=fields[0], state=fields[1]))

    if not listing.header_found:
        logger.debug("No device list header in adb output (%d chars)", len(text))
    return listing


def parse_devices(text: str) -> list[Device]:
    """Shorthand for ``parse_device_list(text).devices``."""
    return parse_device_list(text).devices
