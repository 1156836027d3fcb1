"""
End-to-end integration tests: fixture executor -> collect -> render.

Test 1: Default run over the realistic capture; every format agrees on the sorted forest.
Test 2: -f run; enrichment output survives into every format.
Test 3: A saved capture (--from-listing path) gives the same forest as the live command.
"""

import json
from pathlib import Path

from mlsblk.pipeline import collect
from mlsblk.renderers import OutputFormat, render
from mlsblk.renderers.columns import DEFAULT_COLUMNS, EXTENDED_COLUMNS
from mlsblk.sources import load_listing_file

FIXTURES = Path(__file__).parent / "fixtures"

MOUNTS = [
    ("/dev/disk3s1", "/System/Volumes/Data"),
    ("/dev/disk1s2", "/Volumes/Backup"),
    ("/dev/rdisk10s2", "/Volumes/Raw"),
    ("map auto_home", "/System/Volumes/Data/home"),
]

EXPECTED_ORDER = [
    "disk0", "disk0s1", "disk0s2", "disk0s3",
    "disk1", "disk1s1", "disk1s2", "disk1s3",
    "disk3", "disk3s1", "disk3s2", "disk3s5", "disk3s6",
    "disk10", "disk10s1", "disk10s2",
]


def _flatten(devices):
    for d in devices:
        yield d
        yield from _flatten(d.get("children", []))


def test_default_run_formats_agree(fixture_executor):
    topology = collect(fixture_executor, mount_entries=MOUNTS)

    tree = render(topology, DEFAULT_COLUMNS, OutputFormat.TREE)
    listing = render(topology, DEFAULT_COLUMNS, OutputFormat.LIST)
    doc = json.loads(render(topology, DEFAULT_COLUMNS, OutputFormat.JSON))

    tree_names = [line.split("── ")[-1].split(" ")[0] for line in tree.splitlines()[1:]]
    list_names = [line.split(" ")[0] for line in listing.splitlines()[1:]]
    json_names = [d["name"] for d in _flatten(doc["blockdevices"])]
    assert tree_names == list_names == json_names == EXPECTED_ORDER

    assert [d["name"] for d in doc["blockdevices"]] == ["disk0", "disk1", "disk3", "disk10"]
    by_name = {d["name"]: d for d in _flatten(doc["blockdevices"])}
    assert by_name["disk1s2"]["mountpoint"] == "/Volumes/Backup"
    assert by_name["disk10s2"]["mountpoint"] == ""
    assert by_name["disk3"]["fstype"] == ""
    assert by_name["disk3s1"]["fstype"] == "apfs"
    assert by_name["disk10s1"]["fstype"] == "vfat"
    assert by_name["disk10s2"]["fstype"] == "Microsoft Basic Data"
    assert by_name["disk1s2"]["fstype"] == "hfs"
    # Only the listing was fetched
    assert fixture_executor.calls == [["diskutil", "list", "-plist"]]


def test_enriched_run(fixture_executor):
    topology = collect(fixture_executor, mount_entries=[], enrich=True)

    doc = json.loads(render(topology, EXTENDED_COLUMNS, OutputFormat.JSON))
    by_name = {d["name"]: d for d in _flatten(doc["blockdevices"])}
    assert by_name["disk1s2"] == {
        "name": "disk1s2",
        "size": 999345127424,
        "type": "part",
        "mountpoint": "/Volumes/Backup",
        "fstype": "hfs",
        "label": "Backup",
        "uuid": "3E2F1A0B-9C8D-4E7F-A6B5-C4D3E2F1A0B9",
    }
    assert by_name["disk1"]["label"] == "WD Elements 25A2"
    # Lookups that failed left the listing-derived values in place
    assert by_name["disk3s1"]["label"] == "Macintosh HD - Data"
    assert by_name["disk3s1"]["uuid"] == "A1B2C3D4-E5F6-4711-8899-AABBCCDDEEFF"

    listing = render(topology, EXTENDED_COLUMNS, OutputFormat.LIST)
    assert (
        "disk1s2 930.7G part hfs /Volumes/Backup Backup 3E2F1A0B-9C8D-4E7F-A6B5-C4D3E2F1A0B9"
        in listing.splitlines()
    )


def test_saved_capture_matches_live(fixture_executor):
    live = collect(fixture_executor, mount_entries=MOUNTS)
    saved = collect(
        fixture_executor,
        listing=load_listing_file(FIXTURES / "diskutil_list.plist"),
        mount_entries=MOUNTS,
    )
    for fmt in OutputFormat:
        assert render(live, DEFAULT_COLUMNS, fmt) == render(saved, DEFAULT_COLUMNS, fmt)
