import threading
import time

import requests

from assets import AssetKind, extractor_for
from models import Person
from retriever import DedupSink, collect


def make_sink():
    emitted = []
    return DedupSink(emit=emitted.append), emitted


def test_collect_deduplicates_values():
    sink, emitted = make_sink()
    people = {"1": Person(name="Luke"), "2": Person(name="Leia"), "3": Person(name="Luke")}

    count = collect(
        ["x/people/1/", "x/people/2/", "x/people/3/", "x/people/1/"],
        people.get,
        extractor_for(AssetKind.PERSON, "name"),
        sink,
    )

    assert count == 2
    assert sorted(emitted) == ["Leia", "Luke"]


def test_collect_empty_reference_list():
    sink, emitted = make_sink()

    def fetch_one(asset_id):
        raise AssertionError("should not fetch")

    assert collect([], fetch_one, extractor_for(AssetKind.PERSON, "name"), sink) == 0
    assert emitted == []


def test_collect_skips_malformed_reference():
    sink, emitted = make_sink()
    fetched = []

    def fetch_one(asset_id):
        fetched.append(asset_id)
        return Person(name=f"person-{asset_id}")

    collect(
        ["x/people/1/", "x/people/2", "x/people/3/"],
        fetch_one,
        extractor_for(AssetKind.PERSON, "name"),
        sink,
    )

    assert sorted(fetched) == ["1", "3"]
    assert sorted(emitted) == ["person-1", "person-3"]


def test_collect_isolates_transport_errors():
    sink, emitted = make_sink()

    def fetch_one(asset_id):
        if asset_id == "2":
            raise requests.ConnectionError("connection reset")
        return Person(name=f"person-{asset_id}")

    count = collect(
        ["x/people/1/", "x/people/2/", "x/people/3/"],
        fetch_one,
        extractor_for(AssetKind.PERSON, "name"),
        sink,
    )

    assert count == 2
    assert sorted(emitted) == ["person-1", "person-3"]


def test_collect_isolates_unexpected_errors():
    sink, emitted = make_sink()

    def fetch_one(asset_id):
        if asset_id == "2":
            raise RuntimeError("unexpected payload shape")
        return Person(name=f"person-{asset_id}")

    count = collect(
        ["x/people/1/", "x/people/2/", "x/people/3/"],
        fetch_one,
        extractor_for(AssetKind.PERSON, "name"),
        sink,
    )

    assert count == 2
    assert sorted(emitted) == ["person-1", "person-3"]


def test_collect_isolates_extractor_errors():
    sink, emitted = make_sink()

    def extract(asset):
        if asset.name == "bad":
            raise KeyError("name")
        return asset.name

    people = {"1": Person(name="Luke"), "2": Person(name="bad")}
    count = collect(["x/people/1/", "x/people/2/"], people.get, extract, sink)

    assert count == 1
    assert emitted == ["Luke"]


def test_collect_skips_absent_objects_and_values():
    sink, emitted = make_sink()
    people = {"1": Person(name="Luke", eye_color="blue"), "2": Person(name="R2-D2")}

    collect(
        ["x/people/1/", "x/people/2/", "x/people/9/"],
        people.get,
        extractor_for(AssetKind.PERSON, "eye_color"),
        sink,
    )

    assert emitted == ["blue"]


def test_collect_runs_units_concurrently():
    sink, emitted = make_sink()
    barrier = threading.Barrier(4, timeout=5)

    def fetch_one(asset_id):
        # every unit must be in flight at once for the barrier to release
        barrier.wait()
        return Person(name=asset_id)

    collect(
        [f"x/people/{i}/" for i in range(4)],
        fetch_one,
        extractor_for(AssetKind.PERSON, "name"),
        sink,
    )

    assert sorted(emitted) == ["0", "1", "2", "3"]


def test_collect_waits_for_every_unit():
    sink, emitted = make_sink()

    def fetch_one(asset_id):
        time.sleep(0.05 * int(asset_id))
        return Person(name=asset_id)

    collect(
        [f"x/people/{i}/" for i in range(1, 5)],
        fetch_one,
        extractor_for(AssetKind.PERSON, "name"),
        sink,
    )

    assert len(emitted) == 4


def test_collect_respects_max_workers():
    sink, _ = make_sink()
    lock = threading.Lock()
    active = []
    peak = []

    def fetch_one(asset_id):
        with lock:
            active.append(asset_id)
            peak.append(len(active))
        time.sleep(0.02)
        with lock:
            active.remove(asset_id)
        return Person(name=asset_id)

    collect(
        [f"x/people/{i}/" for i in range(8)],
        fetch_one,
        extractor_for(AssetKind.PERSON, "name"),
        sink,
        max_workers=2,
    )

    assert max(peak) <= 2
    assert len(sink) == 8
