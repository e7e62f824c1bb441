"""Shared test doubles."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Union

import pytest

from adb_uninstall.client.errors import AdbError

Canned = Union[str, list[Union[str, AdbError]], AdbError]


class FakeRunner:
    """:class:`CommandRunner` returning canned output keyed by the adb arguments.

    Keys are the arguments after the adb executable joined by spaces, e.g.
    ``"-s ABC shell cat /system/build.prop"``.  A value may be a string
    (stdout), a list of lines for :meth:`stream`, or an :class:`AdbError`
    to raise.  An :class:`AdbError` inside a list is raised when
    :meth:`stream` reaches it.  Every call is recorded in :attr:`calls`.
    """

    def __init__(self) -> None:
        self.outputs: dict[str, Canned] = {}
        self.calls: list[list[str]] = []

    def _lookup(self, argv: Sequence[str]) -> Canned:
        self.calls.append(list(argv))
        key = " ".join(argv[1:])
        if key not in self.outputs:
            raise AssertionError(f"unexpected command: {key!r}")
        result = self.outputs[key]
        if isinstance(result, AdbError):
            raise result
        return result

    def run(self, argv: Sequence[str]) -> str:
        result = self._lookup(argv)
        if isinstance(result, str):
            return result
        return "\n".join(item for item in result if isinstance(item, str))

    def stream(self, argv: Sequence[str]) -> Iterator[str]:
        result = self._lookup(argv)
        items = result.splitlines() if isinstance(result, str) else result
        for item in items:
            if isinstance(item, AdbError):
                raise item
            yield item


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()
