import copy
import plistlib
from pathlib import Path

import pytest

from mlsblk.executor import RunResult

FIXTURES = Path(__file__).parent / "fixtures"

# disk0 (GUID) with one APFS partition; the canonical two-node scenario.
SCENARIO_LISTING = {
    "AllDisksAndPartitions": [
        {
            "DeviceIdentifier": "disk0",
            "Size": 121332826112,
            "Content": "GUID_partition_scheme",
            "Partitions": [
                {"DeviceIdentifier": "disk0s1", "Size": 121213132800, "Content": "Apple_APFS"},
            ],
        },
    ],
}


class FixtureExecutor:
    """Executor that answers diskutil commands from canned plists and records every call."""

    def __init__(self, listing=None, infos=None):
        self.listing = listing
        self.infos = infos or {}
        self.calls = []

    def __call__(self, cmd):
        self.calls.append(list(cmd))
        if cmd[:3] == ["diskutil", "list", "-plist"]:
            if self.listing is None:
                return RunResult(stdout="", stderr="diskutil: command failed", returncode=1)
            return RunResult(stdout=self.listing, stderr="", returncode=0)
        if cmd[:3] == ["diskutil", "info", "-plist"] and len(cmd) == 4:
            text = self.infos.get(cmd[3])
            if text is None:
                return RunResult(stdout="", stderr=f"Could not find disk: {cmd[3]}", returncode=1)
            return RunResult(stdout=text, stderr="", returncode=0)
        return RunResult(stdout="", stderr="unknown command", returncode=1)


def plist_text(obj) -> str:
    return plistlib.dumps(obj).decode()


@pytest.fixture
def scenario_listing() -> dict:
    return copy.deepcopy(SCENARIO_LISTING)


@pytest.fixture
def fixture_listing() -> dict:
    """Realistic multi-disk `diskutil list -plist` capture."""
    return plistlib.loads((FIXTURES / "diskutil_list.plist").read_bytes())


@pytest.fixture
def fixture_executor() -> FixtureExecutor:
    """Executor backed by the realistic fixtures; only disk1 and disk1s2 have info plists."""
    return FixtureExecutor(
        listing=(FIXTURES / "diskutil_list.plist").read_text(),
        infos={
            "disk1": (FIXTURES / "diskutil_info_disk1.plist").read_text(),
            "disk1s2": (FIXTURES / "diskutil_info_disk1s2.plist").read_text(),
        },
    )


@pytest.fixture
def executor_factory():
    """Factory: executor_factory(listing=<dict or None>, infos={id: dict})."""
    def factory(listing=None, infos=None):
        return FixtureExecutor(
            listing=plist_text(listing) if listing is not None else None,
            infos={k: plist_text(v) for k, v in (infos or {}).items()},
        )
    return factory
