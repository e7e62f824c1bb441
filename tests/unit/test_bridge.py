"""Unit tests for adb_uninstall.client.bridge."""

from __future__ import annotations

import logging
import pathlib
import sys
import textwrap
from unittest.mock import MagicMock

import pytest
from conftest import FakeRunner

from adb_uninstall.client.bridge import AdbBridge
from adb_uninstall.client.errors import AdbExitError
from adb_uninstall.client.runner import SubprocessRunner
from adb_uninstall.model.device import Device

FIXTURES = pathlib.Path(__file__).parent.parent / "fixtures"

ADB = "/sdk/platform-tools/adb"
DEVICES = "devices"


def _props_cmd(serial: str) -> str:
    return f"-s {serial} shell cat /system/build.prop"


def _bridge(runner: FakeRunner) -> AdbBridge:
    return AdbBridge(ADB, runner=runner)


# ---------------------------------------------------------------------------
# list_devices / read_properties
# ---------------------------------------------------------------------------

def test_list_devices_runs_adb_devices(fake_runner: FakeRunner) -> None:
    fake_runner.outputs[DEVICES] = (FIXTURES / "adb_devices.txt").read_text()
    listing = _bridge(fake_runner).list_devices()
    assert fake_runner.calls == [[ADB, "devices"]]
    assert len(listing.devices) == 3


def test_list_devices_warns_on_malformed_lines(
    fake_runner: FakeRunner, caplog: pytest.LogCaptureFixture
) -> None:
    fake_runner.outputs[DEVICES] = "List of devices attached\nbroken\nABC\tdevice\n"
    with caplog.at_level(logging.WARNING, logger="adb_uninstall.client.bridge"):
        listing = _bridge(fake_runner).list_devices()
    assert listing.skipped_lines == ["broken"]
    assert "1 malformed line" in caplog.text


def test_list_devices_propagates_adb_failure(fake_runner: FakeRunner) -> None:
    fake_runner.outputs[DEVICES] = AdbExitError([ADB, "devices"], 1, "daemon failed")
    with pytest.raises(AdbExitError):
        _bridge(fake_runner).list_devices()


def test_read_properties(fake_runner: FakeRunner) -> None:
    fake_runner.outputs[_props_cmd("ABC")] = (FIXTURES / "build.prop").read_text()
    props = _bridge(fake_runner).read_properties("ABC")
    assert props.get("ro.build.version.sdk") == "33"
    assert fake_runner.calls == [[ADB, "-s", "ABC", "shell", "cat", "/system/build.prop"]]


def test_adb_path_accepts_pathlike() -> None:
    bridge = AdbBridge(pathlib.Path("/sdk/platform-tools/adb"))
    assert bridge.adb_path == str(pathlib.Path("/sdk/platform-tools/adb"))


# ---------------------------------------------------------------------------
# discover
# ---------------------------------------------------------------------------

def test_discover_enriches_in_order(fake_runner: FakeRunner) -> None:
    fake_runner.outputs[DEVICES] = "List of devices attached\nA\tdevice\nB\tdevice\n"
    fake_runner.outputs[_props_cmd("A")] = "ro.product.model=One\n"
    fake_runner.outputs[_props_cmd("B")] = "ro.product.model=Two\n"
    devices = _bridge(fake_runner).discover()
    assert [(d.serial_number, d.model) for d in devices] == [("A", "One"), ("B", "Two")]
    assert [c[1:] for c in fake_runner.calls] == [
        ["devices"],
        ["-s", "A", "shell", "cat", "/system/build.prop"],
        ["-s", "B", "shell", "cat", "/system/build.prop"],
    ]


def test_discover_keeps_device_when_properties_fail(
    fake_runner: FakeRunner, caplog: pytest.LogCaptureFixture
) -> None:
    fake_runner.outputs[DEVICES] = "List of devices attached\nA\tunauthorized\nB\tdevice\n"
    fake_runner.outputs[_props_cmd("A")] = AdbExitError(
        [ADB], 1, "error: device unauthorized."
    )
    fake_runner.outputs[_props_cmd("B")] = "ro.product.manufacturer=Acme\n"
    with caplog.at_level(logging.WARNING, logger="adb_uninstall.client.bridge"):
        devices = _bridge(fake_runner).discover()
    assert devices[0] == Device(serial_number="A", state="unauthorized")
    assert devices[1].manufacturer == "Acme"
    assert "Could not read properties of A" in caplog.text


def test_discover_no_devices(fake_runner: FakeRunner) -> None:
    fake_runner.outputs[DEVICES] = "List of devices attached\n\n"
    assert _bridge(fake_runner).discover() == []
    assert len(fake_runner.calls) == 1


# ---------------------------------------------------------------------------
# uninstall
# ---------------------------------------------------------------------------

def test_uninstall_streams_lines(fake_runner: FakeRunner) -> None:
    fake_runner.outputs["-s A uninstall com.example"] = ["Success"]
    device = Device(serial_number="A", state="device")
    assert list(_bridge(fake_runner).uninstall(device, "com.example")) == ["Success"]
    assert fake_runner.calls == [[ADB, "-s", "A", "uninstall", "com.example"]]


def test_uninstall_empty_package_rejected_before_running(fake_runner: FakeRunner) -> None:
    device = Device(serial_number="A", state="device")
    with pytest.raises(ValueError, match="package_name"):
        _bridge(fake_runner).uninstall(device, "")
    assert fake_runner.calls == []


def test_uninstall_passes_argv_to_runner() -> None:
    runner = MagicMock()
    runner.stream.return_value = iter(["Performing Streamed Install", "Success"])
    device = Device(serial_number="A", state="device")
    lines = list(AdbBridge(ADB, runner=runner).uninstall(device, "com.example"))
    assert lines == ["Performing Streamed Install", "Success"]
    runner.stream.assert_called_once_with([ADB, "-s", "A", "uninstall", "com.example"])
    runner.run.assert_not_called()


# ---------------------------------------------------------------------------
# Real subprocess with a stand-in adb executable
# ---------------------------------------------------------------------------

_FAKE_ADB = textwrap.dedent(
    """\
    import sys

    if sys.argv[1:] == ["devices"]:
        sys.stdout.write("List of devices attached\\nABC\\tdevice\\n")
    else:
        sys.stdout.buffer.write(
            b"ro.product.manufacturer=Acme\\nro.product.model=X\\xff1\\n"
        )
    """
)


@pytest.mark.skipif(sys.platform == "win32", reason="needs an executable script")
def test_discover_survives_undecodable_property_output(tmp_path: pathlib.Path) -> None:
    adb = tmp_path / "adb"
    adb.write_text(f"#!{sys.executable}\n{_FAKE_ADB}")
    adb.chmod(0o755)
    devices = AdbBridge(adb, runner=SubprocessRunner(timeout_s=10.0)).discover()
    assert devices == [
        Device(
            serial_number="ABC",
            state="device",
            manufacturer="Acme",
            model="X\ufffd1",
        )
    ]
