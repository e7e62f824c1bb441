"""Custom exceptions for adb-uninstall."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


def _format_argv(argv: Sequence[str]) -> str:
    return " ".join(argv)


class AdbError(Exception):
    """Base exception for all adb-uninstall errors."""


class SdkNotConfiguredError(AdbError):
    """Raised when neither an adb path nor an Android SDK home is configured."""


class AdbCommandError(AdbError):
    """Raised when an adb process cannot be launched or run to completion."""

    def __init__(self, argv: Sequence[str], cause: Exception) -> None:
        self.argv = list(argv)
        self.cause = cause
        super().__init__(f"Command {_format_argv(argv)!r} failed: {cause}")


class AdbTimeoutError(AdbCommandError):
    """Raised when an adb process exceeds the configured timeout."""

    def __init__(self, argv: Sequence[str], timeout_s: float, cause: Exception) -> None:
        self.timeout_s = timeout_s
        super().__init__(argv, cause)


class AdbExitError(AdbError):
    """Raised when adb exits with a non-zero status code."""

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or "no error output"
        super().__init__(
            f"Command {_format_argv(argv)!r} exited with status {returncode}: {detail}"
        )


class DeviceNotFoundError(AdbError):
    """Raised when a requested serial number is not among the discovered devices."""

    def __init__(self, serial: str) -> None:
        self.serial = serial
        super().__init__(f"Device {serial!r} is not connected")


class ManifestError(AdbError):
    """Base class for AndroidManifest.xml lookup and parsing failures."""


class ManifestNotFoundError(ManifestError):
    """Raised when no AndroidManifest.xml exists in any known location."""

    def __init__(self, searched: Sequence[str]) -> None:
        self.searched = list(searched)
        super().__init__(
            "AndroidManifest.xml not found; searched: " + ", ".join(self.searched)
        )


class ManifestParseError(ManifestError):
    """Raised when the manifest is unreadable or carries no package name."""


@dataclass
class UninstallError(AdbError):
    """Raised when uninstalling a package from one device fails.

    Attributes:
        serial: Serial of the device.
        package_name: Package that was being removed.
        cause: Underlying :class:`AdbError`.
    """

    serial: str
    package_name: str
    cause: AdbError

    def __post_init__(self) -> None:
        super().__init__(
            f"Uninstalling {self.package_name} from {self.serial} failed: {self.cause}"
        )
