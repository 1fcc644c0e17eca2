import json
from datetime import datetime, timedelta, timezone

import pytest

from xeol.eol import (
    SCHEMA_VERSION,
    Cycle,
    DatabaseID,
    EolStoreReader,
    Product,
    cycle_from_json,
    new_id,
)


def test_empty_cycle():
    assert Cycle().is_empty()
    assert not Cycle(product_name="Fedora").is_empty()
    assert not Cycle(eol_bool=True).is_empty()


def test_to_json_round_trip():
    cycle = Cycle(
        product_name="Fedora",
        release_cycle="29",
        eol="2019-11-26",
        eol_bool=True,
        latest_release="29.1",
        latest_release_date="2019-11-26",
        release_date="2018-10-30",
    )
    assert cycle_from_json(cycle.to_json()) == cycle
    assert cycle_from_json(json.dumps(cycle.to_json())) == cycle


def test_to_json_uses_wire_names():
    data = Cycle(product_name="Python", release_cycle="3.7").to_json()
    assert data["productName"] == "Python"
    assert data["releaseCycle"] == "3.7"
    assert set(data) == {
        "productName",
        "releaseDate",
        "releaseCycle",
        "latestReleaseDate",
        "latestRelease",
        "eol",
        "eolBool",
    }


def test_cycle_from_partial_json_text():
    cycle = cycle_from_json('{"productName": "Python", "releaseCycle": "3.7", "eol": "2023-06-27", "extra": 1}')
    assert cycle == Cycle(product_name="Python", release_cycle="3.7", eol="2023-06-27")


def test_cycle_from_json_wrong_type():
    with pytest.raises(ValueError):
        cycle_from_json({"eolBool": "yes"})
    with pytest.raises(ValueError):
        cycle_from_json("[1, 2]")


def test_new_id_converts_to_utc():
    local = datetime(2020, 6, 13, 12, 0, tzinfo=timezone(timedelta(hours=-5)))
    db_id = new_id(local)
    assert db_id.build_timestamp == local
    assert db_id.build_timestamp.utcoffset() == timedelta(0)
    assert db_id.schema_version == SCHEMA_VERSION


def test_new_id_carries_schema_version_one():
    db_id = new_id(datetime(2021, 1, 1, tzinfo=timezone.utc))
    assert db_id.schema_version == 1


class _MemoryStore:
    def __init__(self, cycles):
        self._cycles = cycles

    def get_cycles_by_purl(self, purl):
        return self._cycles.get(purl, [])

    def get_cycles_by_cpe(self, cpe):
        return self._cycles.get(cpe, [])

    def get_all_products(self):
        return [Product(1, "Fedora")]


def test_store_reader_protocol():
    store = _MemoryStore({"cpe:/o:fedoraproject:fedora": [Cycle(product_name="Fedora")]})
    assert isinstance(store, EolStoreReader)
    assert store.get_cycles_by_cpe("cpe:/o:fedoraproject:fedora")[0].product_name == "Fedora"
    assert not isinstance(object(), EolStoreReader)


def test_database_id_equality():
    when = datetime(2020, 6, 13, tzinfo=timezone.utc)
    assert new_id(when) == DatabaseID(when, SCHEMA_VERSION)