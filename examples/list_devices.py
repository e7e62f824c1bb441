#!/usr/bin/env python3
"""Smoke-test script: list connected Android devices with their properties.

Usage::

    export ANDROID_HOME="$HOME/Android/Sdk"     # or ADB_UNINSTALL_ADB=/path/to/adb
    export ADB_UNINSTALL_TIMEOUT=30             # optional, seconds
    export ADB_UNINSTALL_DEBUG=1                # optional, enable debug logging
    python examples/list_devices.py

Exit codes:
    0 — devices listed (possibly none).
    1 — adb not configured or could not be run.
"""

from __future__ import annotations

import json
import logging
import os
import sys


def main() -> None:
    if os.environ.get("ADB_UNINSTALL_DEBUG", "0") == "1":
        logging.basicConfig(level=logging.DEBUG)

    from adb_uninstall.client.errors import AdbError
    from adb_uninstall.config import AdbConfig
    from adb_uninstall.uninstaller import AdbUninstaller
    from adb_uninstall.utils.render import render_devices

    try:
        uninstaller = AdbUninstaller(AdbConfig.from_env())
        devices = uninstaller.discover_devices()
    except (AdbError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(render_devices(devices), indent=2))


if __name__ == "__main__":
    main()
