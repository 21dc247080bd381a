from __future__ import annotations

import copy
import threading
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CreatedPatient:
    id: int
    record: dict[str, Any]


class PatientStore:
    """
    In-memory Patient records keyed by a positive integer id.

    Ids come from a single counter starting at 1. They are never reused, even after
    the record they named is removed. The store does not validate: callers pass
    records that already went through `patient_api.patients.validator`.

    Every record is copied on the way in and on the way out, so callers cannot
    mutate stored state by holding on to a dict.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[int, dict[str, Any]] = {}
        self._next_id = 1

    def create(self, candidate: dict[str, Any]) -> CreatedPatient:
        # Minting the id and inserting the record happen under one lock acquisition.
        with self._lock:
            patient_id = self._next_id
            self._next_id += 1
            record = copy.deepcopy(candidate)
            record["identifier"] = [{"value": str(patient_id)}]
            self._records[patient_id] = record
        return CreatedPatient(id=patient_id, record=copy.deepcopy(record))

    def read(self, patient_id: int) -> dict[str, Any] | None:
        with self._lock:
            record = self._records.get(patient_id)
            return copy.deepcopy(record) if record is not None else None

    def update(self, patient_id: int, record: dict[str, Any]) -> None:
        """Replace the whole record. Unknown ids are ignored; callers answer 404 first."""
        with self._lock:
            if patient_id in self._records:
                self._records[patient_id] = copy.deepcopy(record)

    def remove(self, patient_id: int) -> None:
        with self._lock:
            self._records.pop(patient_id, None)

    def list_ids(self) -> list[int]:
        with self._lock:
            return sorted(self._records)

    def reset(self) -> None:
        """Drop every record and restart ids at 1. Test isolation only."""
        with self._lock:
            self._records.clear()
            self._next_id = 1

    def __contains__(self, patient_id: object) -> bool:
        with self._lock:
            return patient_id in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
