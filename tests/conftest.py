"""Pytest configuration and shared fixtures for the Subject Links API tests."""

from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from subject_links_api.app.core.config import Settings
from subject_links_api.app.core.db import init_db
from subject_links_api.app.core.subjects import SUBJECTS
from subject_links_api.app.main import create_app
from subject_links_api.app.services.link_service import LinkService
from subject_links_api.app.storage import DatabaseLinkBackend, JsonFileLinkBackend, LinkBackend


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "data.json"


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "links.db"


@pytest.fixture
def file_backend(data_file: Path) -> JsonFileLinkBackend:
    return JsonFileLinkBackend(SUBJECTS, data_file)


@pytest.fixture
def db_backend(db_path: Path) -> DatabaseLinkBackend:
    init_db(db_path)
    return DatabaseLinkBackend(SUBJECTS, db_path)


@pytest.fixture(params=["file", "database"])
def backend(request, data_file: Path, db_path: Path) -> LinkBackend:
    """Each test using this fixture runs once per storage backend."""
    if request.param == "file":
        return JsonFileLinkBackend(SUBJECTS, data_file)
    init_db(db_path)
    return DatabaseLinkBackend(SUBJECTS, db_path)


@pytest.fixture
def service(backend: LinkBackend) -> LinkService:
    return LinkService(backend, SUBJECTS)


@pytest.fixture
def file_settings(data_file: Path) -> Settings:
    return Settings(data_file=str(data_file))


@pytest.fixture
def client(file_settings: Settings) -> Iterator[TestClient]:
    """Test client for an app using the JSON file backend."""
    with TestClient(create_app(file_settings)) as test_client:
        yield test_client


@pytest.fixture
def db_client(db_path: Path) -> Iterator[TestClient]:
    """Test client for an app using the database backend."""
    with TestClient(create_app(Settings(database_url=str(db_path)))) as test_client:
        yield test_client
