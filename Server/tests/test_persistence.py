import datetime
import json

import pytest
from pymongo.errors import PyMongoError

from palabra.errors import PersistenceError
from palabra.models.game import GameState, Status
from palabra.services.persistence import (
    LAST_PLAYED_KEY, STATE_KEY, JsonFileStateGateway, MemoryStateGateway, MongoStateGateway,
    restore_state, save_state, validate_stored_state
)

VALID = {"guesses": ["crane", "pluma"], "input": "ap", "status": "playing", "word": "apple"}


def _with(**changes):
    data = dict(VALID)
    data.update(changes)
    return data


def test_valid_payload_passes():
    assert validate_stored_state(VALID) is True
    assert validate_stored_state(_with(word=None)) is True
    payload = dict(VALID)
    del payload["word"]
    assert validate_stored_state(payload) is True


@pytest.mark.parametrize("payload", [
    None,
    [],
    "state",
    _with(guesses="crane"),
    _with(guesses=["crane"] * 7),
    _with(guesses=["crane"] * 6, status="playing"),
    _with(guesses=["crane", "cran"]),
    _with(guesses=["crane", 12345]),
    _with(input=None),
    _with(input="applex"),
    _with(status=1),
    _with(status="paused"),
    _with(word="app"),
    _with(word=42),
])
def test_invalid_payloads_rejected(payload):
    assert validate_stored_state(payload) is False


def _seeded(today, state):
    return MemoryStateGateway({LAST_PLAYED_KEY: today.isoformat(), STATE_KEY: state})


def test_restore_same_day(today):
    state = restore_state(_seeded(today, VALID), today)
    assert state == GameState(guesses=("crane", "pluma"), input="ap",
                              status=Status.PLAYING, word="apple")


def test_restore_accepts_json_string(today):
    state = restore_state(_seeded(today, json.dumps(VALID)), today)
    assert state.guesses == ("crane", "pluma")


def test_restore_seven_guesses_falls_back_to_fresh(today):
    gateway = _seeded(today, _with(guesses=["crane"] * 7))
    assert restore_state(gateway, today) == GameState()


def test_finished_board_still_marked_playing_is_not_restored(today):
    gateway = _seeded(today, _with(guesses=["crane"] * 6, input="lemon", status="playing"))
    assert restore_state(gateway, today) == GameState()


def test_lost_board_with_six_guesses_is_restored(today):
    state = restore_state(_seeded(today, _with(guesses=["crane"] * 6, input="", status="lost")), today)
    assert state.status is Status.LOST
    assert len(state.guesses) == 6


def test_restore_corrupt_json_falls_back_to_fresh(today):
    assert restore_state(_seeded(today, "{not json"), today) == GameState()


def test_restore_missing_state_is_fresh(today):
    gateway = MemoryStateGateway({LAST_PLAYED_KEY: today.isoformat()})
    assert restore_state(gateway, today) == GameState()


def test_new_day_purges_stored_state(today):
    gateway = _seeded(today - datetime.timedelta(days=1), VALID)
    assert restore_state(gateway, today) == GameState()
    assert STATE_KEY not in gateway.data
    assert gateway.data[LAST_PLAYED_KEY] == today.isoformat()


def test_restore_backend_failure_is_fresh(today):
    class Broken(MemoryStateGateway):
        def load(self, key):
            raise PersistenceError("disk on fire")

    assert restore_state(Broken(), today) == GameState()


def test_save_state_writes_serialized_form(gateway):
    save_state(gateway, GameState(guesses=("crane",), word="apple"))
    assert gateway.data[STATE_KEY] == {
        "guesses": ["crane"], "input": "", "status": "playing", "word": "apple"
    }


# --- JSON file gateway ---
def test_json_file_gateway_roundtrip(tmp_path):
    path = tmp_path / "state.json"
    gateway = JsonFileStateGateway(str(path))
    assert gateway.load(STATE_KEY) is None
    gateway.save(STATE_KEY, VALID)
    gateway.save(LAST_PLAYED_KEY, "2025-03-07")
    assert JsonFileStateGateway(str(path)).load(STATE_KEY) == VALID
    gateway.delete(STATE_KEY)
    assert gateway.load(STATE_KEY) is None
    assert gateway.load(LAST_PLAYED_KEY) == "2025-03-07"


def test_json_file_gateway_preserves_accents(tmp_path):
    path = tmp_path / "state.json"
    JsonFileStateGateway(str(path)).save(STATE_KEY, _with(word="árbol"))
    assert "árbol" in path.read_text(encoding="utf-8")


def test_json_file_gateway_corrupt_file(tmp_path, today):
    path = tmp_path / "state.json"
    path.write_text("{broken", encoding="utf-8")
    gateway = JsonFileStateGateway(str(path))
    with pytest.raises(PersistenceError):
        gateway.load(STATE_KEY)
    assert restore_state(gateway, today) == GameState()
    gateway.save(LAST_PLAYED_KEY, today.isoformat())
    assert gateway.load(LAST_PLAYED_KEY) == today.isoformat()


# --- MongoDB gateway ---
class FakeCollection:
    def __init__(self):
        self.docs = {}

    def find_one(self, query):
        return self.docs.get(query["_id"])

    def replace_one(self, query, doc, upsert=False):
        assert upsert
        self.docs[query["_id"]] = doc

    def delete_one(self, query):
        self.docs.pop(query["_id"], None)


class FailingCollection:
    def find_one(self, *args, **kwargs):
        raise PyMongoError("connection reset")

    replace_one = delete_one = find_one


def test_mongo_gateway_namespaces_keys():
    collection = FakeCollection()
    alice = MongoStateGateway(collection, namespace="alice")
    bob = MongoStateGateway(collection, namespace="bob")
    alice.save(STATE_KEY, VALID)
    assert alice.load(STATE_KEY) == VALID
    assert bob.load(STATE_KEY) is None
    assert "alice:state" in collection.docs
    alice.delete(STATE_KEY)
    assert alice.load(STATE_KEY) is None


def test_mongo_gateway_restore(today):
    gateway = MongoStateGateway(FakeCollection())
    assert restore_state(gateway, today) == GameState()
    save_state(gateway, GameState(input="cr", word="crane"))
    assert restore_state(gateway, today) == GameState(input="cr", word="crane")


def test_mongo_gateway_wraps_driver_errors():
    gateway = MongoStateGateway(FailingCollection())
    with pytest.raises(PersistenceError):
        gateway.load(STATE_KEY)
    with pytest.raises(PersistenceError):
        gateway.save(STATE_KEY, VALID)
