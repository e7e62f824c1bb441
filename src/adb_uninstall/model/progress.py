"""Typed models for uninstall progress and outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field

# adb prints "Failure [REASON]" on stdout when the package manager refuses.
_FAILURE_PREFIX: str = "Failure"


@dataclass(frozen=True)
class UninstallProgress:
    """One line of ``adb uninstall`` output for a single device.

    Attributes:
        serial_number: Serial of the device being processed.
        device_name: Display name of the device (see :attr:`.Device.name`).
        package_name: Package being removed.
        line: Raw output line from adb.
    """

    serial_number: str
    device_name: str
    package_name: str
    line: str

    @property
    def message(self) -> str:
        return f"Uninstalling {self.package_name} from {self.device_name}: {self.line}"

    @property
    def is_failure(self) -> bool:
        return self.line.strip().startswith(_FAILURE_PREFIX)


@dataclass
class UninstallReport:
    """Outcome of uninstalling a package from one device.

    Attributes:
        serial_number: Serial of the device.
        package_name: Package that was removed (or attempted).
        lines: Output lines collected from adb, in order.
        success: ``True`` if adb exited cleanly and reported no ``Failure``.
        error: Error message when the command itself failed.
    """

    serial_number: str
    package_name: str
    lines: list[str] = field(default_factory=list)
    success: bool = False
    error: str | None = None
