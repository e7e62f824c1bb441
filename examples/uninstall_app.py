#!/usr/bin/env python3
"""Example: uninstall a project's app from connected devices (dry-run by default).

Usage::

    # Dry-run (no changes) — shows the devices and the package to remove:
    export ANDROID_HOME="$HOME/Android/Sdk"
    export APP_MODULE_DIR=~/projects/myapp/app
    python examples/uninstall_app.py

    # Apply, limited to two devices:
    export DEVICE_SERIALS=emulator-5554,R58M123ABC
    export APPLY=1
    python examples/uninstall_app.py

Environment variables:
    ANDROID_HOME          Android SDK root (or ANDROID_SDK_ROOT).
    ADB_UNINSTALL_ADB     Explicit adb executable, overrides the SDK root.
    APP_MODULE_DIR        Module directory holding AndroidManifest.xml.
    APP_PACKAGE           Package name; used instead of APP_MODULE_DIR if set.
    DEVICE_SERIALS        Comma-separated serials (default: all online devices).
    APPLY                 Set to "1" to actually uninstall (default: dry-run).
    ADB_UNINSTALL_DEBUG   Set to "1" to enable debug logging.
"""

from __future__ import annotations

import json
import logging
import os
import sys


def main() -> None:
    if os.environ.get("ADB_UNINSTALL_DEBUG", "0") == "1":
        logging.basicConfig(level=logging.DEBUG)

    package_name = os.environ.get("APP_PACKAGE", "")
    module_dir = os.environ.get("APP_MODULE_DIR", "")
    if not package_name and not module_dir:
        print("ERROR: APP_PACKAGE or APP_MODULE_DIR must be set.", file=sys.stderr)
        sys.exit(1)

    serials = [s.strip() for s in os.environ.get("DEVICE_SERIALS", "").split(",") if s.strip()]
    apply_changes = os.environ.get("APPLY", "0") == "1"

    from adb_uninstall.client.errors import AdbError
    from adb_uninstall.config import AdbConfig
    from adb_uninstall.uninstaller import AdbUninstaller
    from adb_uninstall.utils.render import render_reports

    try:
        uninstaller = AdbUninstaller(AdbConfig.from_env())
        devices = uninstaller.discover_devices()
        if serials:
            selected = uninstaller.select(devices, serials)
        else:
            selected = [d for d in devices if d.is_online]
        if not package_name:
            package_name = uninstaller.resolve_package_name(module_dir)
    except (AdbError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    if not selected:
        print("No devices selected.")
        return

    print(f"Package: {package_name}")
    print("Devices:")
    for device in selected:
        print(f"  {device.name}  state={device.state}  android={device.release_version}")
    print()

    if not apply_changes:
        print("Dry-run mode — set APPLY=1 to uninstall.")
        return

    try:
        reports = uninstaller.uninstall_all(selected, package_name)
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(render_reports(reports), indent=2))
    if any(not r.success for r in reports):
        sys.exit(1)


if __name__ == "__main__":
    main()
