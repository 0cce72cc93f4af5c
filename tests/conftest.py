import pytest
from fastapi.testclient import TestClient

from backend.config import Settings
from backend.main import create_app
from backend.storage import JsonFileStore, MemoryStore


@pytest.fixture
def links_file(tmp_path):
    return tmp_path / "links.json"


@pytest.fixture
def settings(links_file):
    return Settings(links_file=links_file)


@pytest.fixture
def file_store(links_file):
    return JsonFileStore(links_file)


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def client(settings):
    """Client over an app backed by a fresh JSON file in tmp_path."""
    with TestClient(create_app(settings)) as client:
        yield client


def make_link(name="Home", url="http://example.com", category="websites"):
    return {"name": name, "url": url, "category": category}
