"""Typed model for a device reported by ``adb devices``."""

from __future__ import annotations

from dataclasses import dataclass

# State reported by adb for a connected, authorised device.
STATE_ONLINE: str = "device"


@dataclass(frozen=True)
class Device:
    """Identity and descriptive snapshot of one connected Android device.

    Descriptive fields are ``None`` when the build properties could not be
    read or did not contain the key.  An empty string is a real value.

    Attributes:
        serial_number: Serial assigned by adb (e.g. ``"emulator-5554"``).
        state: Connection state (``"device"``, ``"offline"``,
            ``"unauthorized"``, ...).
        manufacturer: ``ro.product.manufacturer``, if known.
        model: ``ro.product.model``, if known.
        release_version: ``ro.build.version.release``, if known.
        api_version: ``ro.build.version.sdk``, if known.
    """

    serial_number: str
    state: str
    manufacturer: str | None = None
    model: str | None = None
    release_version: str | None = None
    api_version: str | None = None

    @property
    def name(self) -> str:
        """Human-readable name, falling back to the serial number."""
        label = " ".join(p for p in (self.manufacturer, self.model) if p)
        if not label:
            return self.serial_number
        return f"{label} [{self.serial_number}]"

    @property
    def is_online(self) -> bool:
        return self.state == STATE_ONLINE
