"""Parse results for adb text output.

Both parsers are permissive: malformed lines are dropped rather than raised.
The dropped lines are kept on the result so callers can detect data loss.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from adb_uninstall.model.device import Device


@dataclass
class DeviceListing:
    """Result of parsing ``adb devices`` output.

    Attributes:
        devices: Parsed devices in input order.
        skipped_lines: Non-empty lines after the header that had fewer than
            two tab-separated fields.
        header_found: ``False`` if the ``List of devices`` marker was absent.
    """

    devices: list[Device] = field(default_factory=list)
    skipped_lines: list[str] = field(default_factory=list)
    header_found: bool = False


@dataclass
class BuildProperties:
    """Result of parsing ``build.prop`` style ``key=value`` output.

    Attributes:
        values: Property key to value, last occurrence wins.
        skipped_lines: Lines containing ``=`` that did not split into
            exactly two parts.
    """

    values: dict[str, str] = field(default_factory=dict)
    skipped_lines: list[str] = field(default_factory=list)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def __len__(self) -> int:
        return len(self.values)
