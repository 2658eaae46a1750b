"""
Persistence Service

Storage gateways for the client game state and the restore logic that
decides whether a stored state can be trusted.

Two keys are used per player: STATE_KEY holds the serialized GameState and
LAST_PLAYED_KEY holds the ISO date of the last play. A date change purges
the stored state.
"""

import datetime
import json
import logging
import os
from typing import Any, Dict, Optional

from pymongo.errors import PyMongoError
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..config.game_settings import MAX_GUESSES, WORD_LENGTH
from ..errors import PersistenceError
from ..models.game import GameState, Status

logger = logging.getLogger(__name__)

STATE_KEY = 'state'
LAST_PLAYED_KEY = 'lastPlayed'

VALID_STATUSES = frozenset(status.value for status in Status)


class PersistenceGateway:
    """
    Key/value storage for JSON-serializable values.

    Implementations raise PersistenceError when the backend fails; a missing
    key is not an error and loads as None.
    """

    def load(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def save(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryStateGateway(PersistenceGateway):
    """In-process storage, used for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self.data: Dict[str, Any] = dict(initial or {})

    def load(self, key):
        return self.data.get(key)

    def save(self, key, value):
        self.data[key] = value

    def delete(self, key):
        self.data.pop(key, None)


class JsonFileStateGateway(PersistenceGateway):
    """All keys of one player in a single JSON document on disk."""

    def __init__(self, path: str):
        self.path = path

    def _read(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Cannot read state file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"State file {self.path} does not hold a JSON object")
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except OSError as e:
            raise PersistenceError(f"Cannot write state file {self.path}: {e}") from e

    def load(self, key):
        return self._read().get(key)

    def save(self, key, value):
        try:
            data = self._read()
        except PersistenceError:
            logger.warning("Overwriting unreadable state file %s", self.path)
            data = {}
        data[key] = value
        self._write(data)

    def delete(self, key):
        try:
            data = self._read()
        except PersistenceError:
            data = {}
        if key in data:
            del data[key]
            self._write(data)


class MongoStateGateway(PersistenceGateway):
    """
    One MongoDB document per key: {"_id": "<namespace>:<key>", "value": ...}.

    The namespace separates players sharing a collection.
    """

    def __init__(self, collection, namespace: str = 'default'):
        self.collection = collection
        self.namespace = namespace

    @classmethod
    def from_uri(cls, mongo_uri: str, db_name: str = 'palabra',
                 namespace: str = 'default') -> "MongoStateGateway":
        client = MongoClient(mongo_uri, server_api=ServerApi('1'))
        try:
            client.admin.command('ping')
        except PyMongoError as e:
            raise PersistenceError(f"MongoDB connection error: {e}") from e
        logger.info("Connected to MongoDB database %s", db_name)
        return cls(client[db_name].game_states, namespace)

    def _id(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def load(self, key):
        try:
            doc = self.collection.find_one({"_id": self._id(key)})
        except PyMongoError as e:
            raise PersistenceError(f"Cannot load {key}: {e}") from e
        return doc.get("value") if doc else None

    def save(self, key, value):
        try:
            self.collection.replace_one({"_id": self._id(key)},
                                        {"_id": self._id(key), "value": value},
                                        upsert=True)
        except PyMongoError as e:
            raise PersistenceError(f"Cannot save {key}: {e}") from e

    def delete(self, key):
        try:
            self.collection.delete_one({"_id": self._id(key)})
        except PyMongoError as e:
            raise PersistenceError(f"Cannot delete {key}: {e}") from e


def validate_stored_state(parsed: Any) -> bool:
    """
    True if a stored payload is safe to restore.

    Every failed check is logged so a discarded save can be diagnosed.
    """
    if not isinstance(parsed, dict):
        logger.warning("Stored state was not an object")
        return False

    guesses = parsed.get('guesses')
    if not isinstance(guesses, list):
        logger.warning("Stored state guesses was not a list")
        return False

    if len(guesses) > MAX_GUESSES:
        logger.warning("Stored state guesses was longer than MAX_GUESSES")
        return False

    if not all(isinstance(guess, str) and len(guess) == WORD_LENGTH for guess in guesses):
        logger.warning("Stored state guesses contained an invalid guess")
        return False

    current_input = parsed.get('input')
    if not isinstance(current_input, str) or len(current_input) > WORD_LENGTH:
        logger.warning("Stored state input was not a string of at most %d characters", WORD_LENGTH)
        return False

    status = parsed.get('status')
    if not isinstance(status, str):
        logger.warning("Stored state status was not a string")
        return False

    if status not in VALID_STATUSES:
        logger.warning("Stored state status was %r, want 'playing', 'won', or 'lost'", status)
        return False

    if status == Status.PLAYING.value and len(guesses) == MAX_GUESSES:
        logger.warning("Stored state was still playing after %d guesses", MAX_GUESSES)
        return False

    word = parsed.get('word')
    if word is not None and not (isinstance(word, str) and len(word) == WORD_LENGTH):
        logger.warning("Stored state word was not a string of %d characters", WORD_LENGTH)
        return False

    return True


def _decode(stored: Any) -> Any:
    if isinstance(stored, str):
        try:
            return json.loads(stored)
        except json.JSONDecodeError as e:
            logger.warning("Error parsing stored state: %s", e)
            return None
    return stored


def restore_state(gateway: PersistenceGateway, today: datetime.date) -> GameState:
    """
    Resume today's game from storage, or start fresh.

    A new day purges the stored state and records the date. A stored state
    that fails validation, or a failing backend, yields a fresh state.
    """
    today_str = today.isoformat()
    try:
        if gateway.load(LAST_PLAYED_KEY) != today_str:
            gateway.delete(STATE_KEY)
            gateway.save(LAST_PLAYED_KEY, today_str)
            logger.info("New day, new game! (%s)", today_str)
            return GameState()

        parsed = _decode(gateway.load(STATE_KEY))
    except PersistenceError as e:
        logger.error("Could not restore stored state: %s", e)
        return GameState()

    if parsed is not None and validate_stored_state(parsed):
        return GameState.from_dict(parsed)

    logger.info("Stored state was not found or invalid, using defaults")
    return GameState()


def save_state(gateway: PersistenceGateway, state: GameState) -> None:
    gateway.save(STATE_KEY, state.to_dict())
