import datetime

import pytest

from palabra import create_app
from palabra.config import TestingConfig
from palabra.services import word_service as word_service_module
from palabra.services.persistence import MemoryStateGateway
from palabra.services.word_service import WordService

WORDS = ["apple", "crane", "árbol", "niñez", "pluma", "ratón", "lemon", "level"]
TODAY = datetime.date(2025, 3, 7)


@pytest.fixture
def words():
    return list(WORDS)


@pytest.fixture
def word_service(words, monkeypatch):
    service = WordService(words)
    monkeypatch.setattr(word_service_module, "_word_service", service)
    return service


@pytest.fixture
def app(word_service):
    return create_app(TestingConfig)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def gateway():
    return MemoryStateGateway()


@pytest.fixture
def today():
    return TODAY
