from __future__ import annotations

import contextlib

import mongomock
import pytest
from fastapi.testclient import TestClient

from jobboard.core.config import Settings
from jobboard.main import create_app
from jobboard.services.storage import LocalResumeStorage
from tests.helpers import job_payload, register


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        mongodb_db="jobboard_test",
        jwt_secret_key="test-secret",
        upload_dir=str(tmp_path / "uploads"),
        log_level="WARNING",
    )


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def storage(tmp_path):
    return LocalResumeStorage(str(tmp_path / "resumes"))


@pytest.fixture
def app(settings, mongo_client, storage):
    return create_app(settings=settings, mongo_client=mongo_client, storage=storage)


@pytest.fixture
def db(mongo_client, settings):
    return mongo_client[settings.mongodb_db]


@pytest.fixture
def make_client(app):
    """Each client keeps its own cookie jar, i.e. acts as one logged-in user."""
    with contextlib.ExitStack() as stack:
        def _make(**kwargs) -> TestClient:
            return stack.enter_context(TestClient(app, **kwargs))
        yield _make


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def employer(make_client):
    c = make_client()
    r = register(c, role="Employer", email="boss@mail.com", name="Boss")
    assert r.status_code == 201
    return c


@pytest.fixture
def seeker(make_client):
    c = make_client()
    r = register(c, role="Job Seeker", email="seeker@mail.com")
    assert r.status_code == 201
    return c


@pytest.fixture
def posted_job(employer) -> dict:
    r = employer.post("/api/job/post", json=job_payload())
    assert r.status_code == 201
    return r.json()["job"]
