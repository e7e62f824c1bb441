"""adb bridge: issues adb commands and feeds their output to the parsers."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

from adb_uninstall.client.errors import AdbError
from adb_uninstall.client.runner import CommandRunner, SubprocessRunner
from adb_uninstall.model.device import Device
from adb_uninstall.model.listing import BuildProperties, DeviceListing
from adb_uninstall.parser.devices import parse_device_list
from adb_uninstall.parser.properties import enrich_device, parse_build_properties
from adb_uninstall.vendor.android import commands

logger = logging.getLogger(__name__)


class AdbBridge:
    """Runs adb through a :class:`.CommandRunner`.

    All calls are blocking and sequential.  The runner is the only seam to
    the operating system, so tests pass a fake runner with captured output.

    Args:
        adb_path: Path to the adb executable.
        runner: Command runner (default: :class:`.SubprocessRunner`).
    """

    def __init__(
        self,
        adb_path: str | os.PathLike[str],
        runner: CommandRunner | None = None,
    ) -> None:
        self.adb_path: str = os.fspath(adb_path)
        self._runner: CommandRunner = runner if runner is not None else SubprocessRunner()

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def list_devices(self) -> DeviceListing:
        """Run ``adb devices`` and parse the result.

        Raises:
            AdbError: If adb cannot be run.
        """
        output = self._runner.run(self._argv(commands.devices()))
        listing = parse_device_list(output)
        if listing.skipped_lines:
            logger.warning(
                "Ignored %d malformed line(s) in adb devices output",
                len(listing.skipped_lines),
            )
        logger.info("adb reported %d device(s)", len(listing.devices))
        return listing

    def read_properties(self, serial: str) -> BuildProperties:
        """Read and parse ``/system/build.prop`` from the device *serial*.

        Raises:
            AdbError: If adb cannot be run or the shell command fails.
        """
        output = self._runner.run(self._argv(commands.read_build_properties(serial)))
        props = parse_build_properties(output)
        logger.debug(
            "Read %d build properties from %s (%d skipped)",
            len(props),
            serial,
            len(props.skipped_lines),
        )
        return props

    def discover(self) -> list[Device]:
        """List devices and enrich each one with its build properties.

        Devices are processed one at a time in discovery order.  A device
        whose properties cannot be read is returned un-enriched.

        Raises:
            AdbError: If the device list itself cannot be obtained.
        """
        devices: list[Device] = []
        for device in self.list_devices().devices:
            try:
                props = self.read_properties(device.serial_number)
            except AdbError as exc:
                logger.warning(
                    "Could not read properties of %s (%s): %s",
                    device.serial_number,
                    device.state,
                    exc,
                )
                devices.append(device)
                continue
            devices.append(enrich_device(device, props))
        return devices

    # ------------------------------------------------------------------
    # Uninstall
    # ------------------------------------------------------------------

    def uninstall(self, device: Device, package_name: str) -> Iterator[str]:
        """Run ``adb uninstall`` for *package_name* on *device*.

        Yields:
            Each output line from adb, as it arrives.

        Raises:
            ValueError: If *package_name* is empty.
            AdbError: If adb cannot be run or exits non-zero.
        """
        if not package_name:
            raise ValueError("package_name must not be empty")
        logger.info("Uninstalling %s from %s", package_name, device.serial_number)
        return self._runner.stream(
            self._argv(commands.uninstall(device.serial_number, package_name))
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _argv(self, args: list[str]) -> list[str]:
        return [self.adb_path, *args]
