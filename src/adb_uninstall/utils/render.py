"""JSON-friendly renderers for devices and uninstall reports."""

from __future__ import annotations

import dataclasses
from typing import Any

from adb_uninstall.model.device import Device
from adb_uninstall.model.progress import UninstallReport


def render_devices(devices: list[Device]) -> list[dict[str, Any]]:
    """Serialize *devices* to a list of dicts.

    Each dict carries every :class:`.Device` field plus ``name``.  Absent
    properties stay ``None`` (``null`` in JSON).
    """
    return [{**dataclasses.asdict(d), "name": d.name} for d in devices]


def render_reports(reports: list[UninstallReport]) -> dict[str, Any]:
    """Serialize *reports* to a JSON-serializable dict.

    Returns:
        A dict with keys:

        - ``"succeeded"`` — serials where the package was removed.
        - ``"failed"`` — serials where removal failed.
        - ``"devices"`` — one dict per report.
    """
    return {
        "succeeded": [r.serial_number for r in reports if r.success],
        "failed": [r.serial_number for r in reports if not r.success],
        "devices": [dataclasses.asdict(r) for r in reports],
    }
