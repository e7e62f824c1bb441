"""Configuration for locating and running adb."""

from __future__ import annotations

import logging
import os
import pathlib
import sys
from collections.abc import Mapping
from dataclasses import dataclass

from adb_uninstall.client.errors import SdkNotConfiguredError
from adb_uninstall.vendor.android.commands import PLATFORM_TOOLS_DIR

logger = logging.getLogger(__name__)

# Environment variables, in lookup order for the SDK home.
ENV_ADB_PATH: str = "ADB_UNINSTALL_ADB"
ENV_SDK_HOMES: tuple[str, ...] = ("ANDROID_HOME", "ANDROID_SDK_ROOT")
ENV_TIMEOUT: str = "ADB_UNINSTALL_TIMEOUT"

DEFAULT_TIMEOUT_S: float = 30.0

_ADB_EXECUTABLE: str = "adb.exe" if sys.platform.startswith("win") else "adb"


@dataclass(frozen=True)
class AdbConfig:
    """Where to find adb and how long to wait for it.

    Args:
        sdk_home: Android SDK root; adb is expected in its
            ``platform-tools`` directory.
        adb_path: Explicit adb executable, overriding *sdk_home*.
        timeout_s: Per-command timeout in seconds.
    """

    sdk_home: pathlib.Path | None = None
    adb_path: pathlib.Path | None = None
    timeout_s: float = DEFAULT_TIMEOUT_S

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AdbConfig:
        """Build a config from environment variables.

        Reads ``ADB_UNINSTALL_ADB``, then ``ANDROID_HOME`` /
        ``ANDROID_SDK_ROOT`` for the SDK home, and ``ADB_UNINSTALL_TIMEOUT``.

        Raises:
            ValueError: If the timeout is not a positive number.
        """
        env = os.environ if environ is None else environ
        adb_path = env.get(ENV_ADB_PATH) or None
        sdk_home = next((env[name] for name in ENV_SDK_HOMES if env.get(name)), None)

        timeout_s = DEFAULT_TIMEOUT_S
        raw_timeout = env.get(ENV_TIMEOUT)
        if raw_timeout:
            try:
                timeout_s = float(raw_timeout)
            except ValueError:
                raise ValueError(
                    f"{ENV_TIMEOUT} must be a number of seconds, got {raw_timeout!r}"
                ) from None
            if timeout_s <= 0:
                raise ValueError(f"{ENV_TIMEOUT} must be positive, got {raw_timeout!r}")

        return cls(
            sdk_home=pathlib.Path(sdk_home) if sdk_home else None,
            adb_path=pathlib.Path(adb_path) if adb_path else None,
            timeout_s=timeout_s,
        )

    def resolve_adb_path(self) -> pathlib.Path:
        """Return the adb executable to run.

        Raises:
            SdkNotConfiguredError: If neither :attr:`adb_path` nor
                :attr:`sdk_home` is set.
        """
        if self.adb_path is not None:
            return self.adb_path
        if self.sdk_home is None:
            raise SdkNotConfiguredError(
                "Android SDK is not configured: set ANDROID_HOME or "
                f"{ENV_ADB_PATH}"
            )
        path = self.sdk_home / PLATFORM_TOOLS_DIR / _ADB_EXECUTABLE
        logger.debug("Resolved adb at %s", path)
        return path
