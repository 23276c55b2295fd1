"""Root-level pytest fixtures for all tests.

This module provides fixtures that are available to all tests in the project.
"""

import pytest
import test_helpers  # noqa: F401 - puts the project root on sys.path

from repositories.collection_repository import CollectionStore
from utils.parser_worker import HtmlParserWorker


@pytest.fixture
def parser_worker():
    """HTML parser worker shut down after each test."""
    worker = HtmlParserWorker("test-parser")
    yield worker
    worker.shutdown()


@pytest.fixture
def collection(tmp_path):
    """Empty collection store backed by a temp file."""
    return CollectionStore.load(tmp_path / "collection.json")


@pytest.fixture
def cache_paths(tmp_path):
    """Card and printings cache files under a temp directory."""
    return tmp_path / "cache" / "staples.json", tmp_path / "cache" / "printings.json"
