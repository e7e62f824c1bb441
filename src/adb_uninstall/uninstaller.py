"""Top-level facade: discover devices and uninstall an app from them."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator

from adb_uninstall.client.bridge import AdbBridge
from adb_uninstall.client.errors import AdbError, DeviceNotFoundError, UninstallError
from adb_uninstall.client.runner import CommandRunner, SubprocessRunner
from adb_uninstall.config import AdbConfig
from adb_uninstall.model.device import Device
from adb_uninstall.model.progress import UninstallProgress, UninstallReport
from adb_uninstall.utils import manifest

logger = logging.getLogger(__name__)


class AdbUninstaller:
    """Uninstalls an Android application from connected devices.

    Wraps :class:`.AdbBridge` with device selection, package-name
    resolution from the module manifest, and per-device progress reporting.

    Args:
        config: Where to find adb and the command timeout.
        runner: Command runner override (default: a
            :class:`.SubprocessRunner` using ``config.timeout_s``).

    Raises:
        SdkNotConfiguredError: If *config* cannot locate adb.
    """

    def __init__(
        self,
        config: AdbConfig | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.config: AdbConfig = config if config is not None else AdbConfig.from_env()
        adb_path = self.config.resolve_adb_path()
        self._bridge: AdbBridge = AdbBridge(
            adb_path,
            runner=runner if runner is not None else SubprocessRunner(self.config.timeout_s),
        )
        logger.debug(
            "AdbUninstaller initialised: adb=%s timeout=%.1fs",
            adb_path,
            self.config.timeout_s,
        )

    @property
    def bridge(self) -> AdbBridge:
        return self._bridge

    # ------------------------------------------------------------------
    # Discovery and selection
    # ------------------------------------------------------------------

    def discover_devices(self) -> list[Device]:
        """Return all connected devices, enriched with build properties.

        Raises:
            AdbError: If ``adb devices`` cannot be run.
        """
        return self._bridge.discover()

    @staticmethod
    def select(devices: list[Device], serials: Iterable[str]) -> list[Device]:
        """Return the devices whose serial is in *serials*, in discovery order.

        Raises:
            DeviceNotFoundError: If a serial does not match any device.
        """
        wanted = list(dict.fromkeys(serials))
        known = {d.serial_number for d in devices}
        for serial in wanted:
            if serial not in known:
                raise DeviceNotFoundError(serial)
        wanted_set = set(wanted)
        return [d for d in devices if d.serial_number in wanted_set]

    @staticmethod
    def resolve_package_name(module_dir: str | os.PathLike[str]) -> str:
        """Read the package name from the module's ``AndroidManifest.xml``.

        Raises:
            ManifestError: If the manifest is missing or declares no package.
        """
        return manifest.resolve_package_name(module_dir)

    # ------------------------------------------------------------------
    # Uninstall
    # ------------------------------------------------------------------

    def uninstall(
        self,
        devices: Iterable[Device],
        package_name: str,
    ) -> Iterator[UninstallProgress]:
        """Uninstall *package_name* from each device, yielding progress lines.

        Devices are processed sequentially.  Iteration stops at the first
        device whose command fails.

        Raises:
            ValueError: If *package_name* is empty.
            UninstallError: If adb fails for a device.
        """
        if not package_name:
            raise ValueError("package_name must not be empty")
        for device in devices:
            yield from self._uninstall_one(device, package_name)

    def uninstall_all(
        self,
        devices: Iterable[Device],
        package_name: str,
    ) -> list[UninstallReport]:
        """Uninstall *package_name* from every device and collect the outcomes.

        A failure on one device is recorded in its report and does not stop
        the remaining devices.

        Raises:
            ValueError: If *package_name* is empty.
        """
        if not package_name:
            raise ValueError("package_name must not be empty")
        reports: list[UninstallReport] = []
        for device in devices:
            report = UninstallReport(
                serial_number=device.serial_number,
                package_name=package_name,
            )
            failed = False
            try:
                for progress in self._uninstall_one(device, package_name):
                    report.lines.append(progress.line)
                    failed = failed or progress.is_failure
            except UninstallError as exc:
                report.error = str(exc)
                failed = True
            report.success = not failed
            reports.append(report)

        succeeded = sum(1 for r in reports if r.success)
        logger.info(
            "Uninstalled %s from %d of %d device(s)",
            package_name,
            succeeded,
            len(reports),
        )
        return reports

    def uninstall_from_module(
        self,
        devices: list[Device],
        module_dir: str | os.PathLike[str],
    ) -> list[UninstallReport]:
        """Resolve the package from *module_dir* and uninstall it from *devices*.

        An empty *devices* list returns ``[]`` without reading the manifest.

        Raises:
            ManifestError: If the package name cannot be resolved.
        """
        if not devices:
            return []
        package_name = self.resolve_package_name(module_dir)
        return self.uninstall_all(devices, package_name)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _uninstall_one(self, device: Device, package_name: str) -> Iterator[UninstallProgress]:
        try:
            for line in self._bridge.uninstall(device, package_name):
                progress = UninstallProgress(
                    serial_number=device.serial_number,
                    device_name=device.name,
                    package_name=package_name,
                    line=line,
                )
                if progress.is_failure:
                    logger.error("%s", progress.message)
                else:
                    logger.info("%s", progress.message)
                yield progress
        except AdbError as exc:
            logger.error(
                "Uninstalling %s from %s failed: %s",
                package_name,
                device.name,
                exc,
            )
            raise UninstallError(
                serial=device.serial_number,
                package_name=package_name,
                cause=exc,
            ) from exc
