"""Self-care checklist expiry tests."""

import json

import pytest

from mindhaven.selfcare import ChecklistState, JsonFileStorage, MemoryStorage, SelfCareChecklist
from mindhaven.selfcare.checklist import EXPIRY_MS, STORAGE_KEY

HOUR_MS = 60 * 60 * 1000
T0 = 1_700_000_000_000


class FakeClock:
    def __init__(self, now: float = T0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage():
    return MemoryStorage()


def _checklist(storage, clock):
    return SelfCareChecklist(storage, clock=clock)


def test_fresh_checklist_is_expired(storage, clock):
    checklist = _checklist(storage, clock)
    assert checklist.load() is ChecklistState.EXPIRED
    assert checklist.checked == []
    assert checklist.progress == 0


def test_toggle_persists_items_and_timestamp(storage, clock):
    checklist = _checklist(storage, clock)
    assert checklist.toggle(1) is True
    assert checklist.toggle(3) is True
    blob = json.loads(storage.get(STORAGE_KEY))
    assert blob == {"items": [1, 3], "timestamp": T0}
    assert checklist.state is ChecklistState.ACTIVE

    assert checklist.toggle(1) is False
    assert json.loads(storage.get(STORAGE_KEY))["items"] == [3]


def test_restores_just_before_expiry(storage, clock):
    _checklist(storage, clock).toggle(2)

    clock.now = T0 + 11 * HOUR_MS + 59 * 60 * 1000
    reloaded = _checklist(storage, clock)
    assert reloaded.load() is ChecklistState.ACTIVE
    assert reloaded.checked == [2]


@pytest.mark.parametrize("age", [EXPIRY_MS, EXPIRY_MS + 1])
def test_expires_at_twelve_hours(storage, clock, age):
    _checklist(storage, clock).toggle(2)

    clock.now = T0 + age
    reloaded = _checklist(storage, clock)
    assert reloaded.load() is ChecklistState.EXPIRED
    assert reloaded.checked == []
    assert storage.get(STORAGE_KEY) is None


def test_every_toggle_restarts_the_window(storage, clock):
    checklist = _checklist(storage, clock)
    checklist.toggle(1)
    clock.now = T0 + 10 * HOUR_MS
    checklist.toggle(2)

    clock.now = T0 + 20 * HOUR_MS
    reloaded = _checklist(storage, clock)
    assert reloaded.load() is ChecklistState.ACTIVE
    assert reloaded.checked == [1, 2]


def test_reset_clears_immediately(storage, clock):
    checklist = _checklist(storage, clock)
    checklist.toggle(1)
    checklist.reset()
    assert checklist.checked == []
    assert checklist.state is ChecklistState.EXPIRED
    assert storage.get(STORAGE_KEY) is None


def test_progress_and_completion(storage, clock):
    checklist = _checklist(storage, clock)
    checklist.toggle(1)
    checklist.toggle(2)
    assert checklist.progress == 40.0
    assert checklist.is_complete is False
    assert checklist.celebration is None

    for item_id in (3, 4, 5):
        checklist.toggle(item_id)
    assert checklist.progress == 100.0
    assert checklist.is_complete is True
    assert checklist.celebration


def test_unknown_item_rejected(storage, clock):
    checklist = _checklist(storage, clock)
    with pytest.raises(ValueError):
        checklist.toggle(99)
    assert storage.get(STORAGE_KEY) is None


def test_corrupt_blob_is_discarded(storage, clock):
    storage.set(STORAGE_KEY, "{not json")
    checklist = _checklist(storage, clock)
    assert checklist.load() is ChecklistState.EXPIRED
    assert storage.get(STORAGE_KEY) is None


def test_time_remaining(storage, clock):
    checklist = _checklist(storage, clock)
    assert checklist.time_remaining() == "0h 0m"
    checklist.toggle(1)
    clock.now = T0 + 90 * 60 * 1000
    assert checklist.time_remaining() == "10h 30m"
    clock.now = T0 + EXPIRY_MS
    assert checklist.time_remaining() == "0h 0m"


def test_json_file_storage_survives_restart(tmp_path, clock):
    path = tmp_path / "state" / "selfcare.json"
    _checklist(JsonFileStorage(path), clock).toggle(4)

    reloaded = _checklist(JsonFileStorage(path), clock)
    assert reloaded.load() is ChecklistState.ACTIVE
    assert reloaded.checked == [4]

    reloaded.reset()
    assert JsonFileStorage(path).get(STORAGE_KEY) is None


def test_truncated_storage_file_is_discarded(tmp_path, clock, caplog):
    path = tmp_path / "selfcare.json"
    path.write_text("{truncated", encoding="utf-8")

    checklist = _checklist(JsonFileStorage(path), clock)
    with caplog.at_level("WARNING"):
        assert checklist.load() is ChecklistState.EXPIRED
    assert checklist.checked == []
    assert not path.exists()
    assert "unreadable" in caplog.text

    checklist.toggle(2)
    assert json.loads(path.read_text(encoding="utf-8"))[STORAGE_KEY]
