"""Unit tests: PatientStore id assignment and CRUD semantics."""

from __future__ import annotations

import threading

from patient_api.patients.store import PatientStore


def _candidate(name: str = "Ada") -> dict:
    return {
        "resourceType": "Patient",
        "name": [{"text": name}],
        "gender": "female",
        "birthDate": "1815-12-10",
    }


def test_sequential_creates_get_ids_one_to_n(store: PatientStore) -> None:
    ids = [store.create(_candidate()).id for _ in range(5)]
    assert ids == [1, 2, 3, 4, 5]


def test_ids_are_not_reused_after_remove(store: PatientStore) -> None:
    first = store.create(_candidate()).id
    second = store.create(_candidate()).id
    store.remove(second)
    store.remove(first)

    third = store.create(_candidate()).id

    assert (first, second, third) == (1, 2, 3)
    assert store.list_ids() == [3]


def test_create_attaches_identifier(store: PatientStore) -> None:
    created = store.create(_candidate())

    assert created.record["identifier"] == [{"value": "1"}]
    assert created.record["name"] == [{"text": "Ada"}]


def test_read_round_trip_keeps_identifier(store: PatientStore) -> None:
    for _ in range(3):
        created = store.create(_candidate())
        record = store.read(created.id)
        assert record is not None
        assert record == created.record
        assert int(record["identifier"][0]["value"]) == created.id
        assert record["identifier"][0]["value"] == str(created.id)


def test_create_overrides_candidate_identifier(store: PatientStore) -> None:
    candidate = _candidate()
    candidate["identifier"] = [{"value": "999"}]

    created = store.create(candidate)

    assert created.record["identifier"] == [{"value": "1"}]
    assert candidate["identifier"] == [{"value": "999"}]


def test_read_missing_returns_none(store: PatientStore) -> None:
    assert store.read(1) is None
    assert store.read(-1) is None


def test_remove_is_permanent(store: PatientStore) -> None:
    patient_id = store.create(_candidate()).id
    store.remove(patient_id)

    assert store.read(patient_id) is None
    for _ in range(3):
        assert store.create(_candidate()).id != patient_id
    assert store.read(patient_id) is None


def test_remove_unknown_id_is_a_no_op(store: PatientStore) -> None:
    store.create(_candidate())
    store.remove(42)
    assert store.list_ids() == [1]


def test_update_replaces_whole_record(store: PatientStore) -> None:
    patient_id = store.create({**_candidate(), "active": True}).id
    replacement = {**_candidate("Ada King"), "identifier": [{"value": str(patient_id)}]}

    store.update(patient_id, replacement)

    assert store.read(patient_id) == replacement


def test_update_unknown_id_is_ignored(store: PatientStore) -> None:
    store.update(7, {**_candidate(), "identifier": [{"value": "7"}]})

    assert store.read(7) is None
    assert store.list_ids() == []
    # Ignored updates do not consume ids either.
    assert store.create(_candidate()).id == 1


def test_records_are_not_aliased(store: PatientStore) -> None:
    candidate = _candidate()
    created = store.create(candidate)

    candidate["name"][0]["text"] = "mutated"
    created.record["gender"] = "male"
    read_back = store.read(created.id)
    read_back["birthDate"] = "2000-01-01"

    assert store.read(created.id) == {**_candidate(), "identifier": [{"value": "1"}]}


def test_list_ids_and_membership(store: PatientStore) -> None:
    for _ in range(4):
        store.create(_candidate())
    store.remove(2)

    assert store.list_ids() == [1, 3, 4]
    assert len(store) == 3
    assert 3 in store
    assert 2 not in store


def test_reset_restarts_ids(store: PatientStore) -> None:
    store.create(_candidate())
    store.create(_candidate())

    store.reset()

    assert store.list_ids() == []
    assert store.create(_candidate()).id == 1


def test_concurrent_creates_get_unique_ids(store: PatientStore) -> None:
    ids: list[int] = []
    ids_lock = threading.Lock()

    def worker() -> None:
        for _ in range(50):
            patient_id = store.create(_candidate()).id
            with ids_lock:
                ids.append(patient_id)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(ids) == list(range(1, 401))
    assert store.list_ids() == list(range(1, 401))
