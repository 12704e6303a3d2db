"""Shared fixtures for the task board tests."""

import os
import sys
import tempfile
from concurrent.futures import Executor, Future
from pathlib import Path
from urllib.parse import urlsplit

import pytest

# Ensure the repo root modules are importable
sys.path.insert(0, str(Path(__file__).parent.parent))

# Point the app at a throwaway database before it is imported
_tmpdir = tempfile.mkdtemp(prefix="taskboard-tests-")
os.environ["TASKBOARD_DATABASE_URI"] = f"sqlite:///{Path(_tmpdir) / 'tasks.db'}"


class ImmediateExecutor(Executor):
    """Runs submitted calls inline so tests see their outcome right away."""

    def __init__(self):
        self.calls = []

    def submit(self, fn, *args, **kwargs):
        self.calls.append((fn, args, kwargs))
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future


class StaticIdentity:
    def __init__(self, user_id):
        self.user_id = user_id

    def get_user_id(self):
        return self.user_id


class FlaskResponse:
    def __init__(self, resp):
        self.status_code = resp.status_code
        self.ok = 200 <= resp.status_code < 300
        self.reason = resp.status.split(" ", 1)[1] if " " in resp.status else resp.status
        self._data = resp.get_json(silent=True)

    def json(self):
        return self._data


class FlaskSession:
    """Stands in for requests.Session, routing calls to the Flask test client."""

    def __init__(self, client):
        self.client = client

    def request(self, method, url, headers=None, json=None):
        path = urlsplit(url).path
        return FlaskResponse(self.client.open(path, method=method, headers=headers, json=json))


@pytest.fixture
def flask_app():
    from app import app
    from extensions import db

    app.config["TESTING"] = True
    with app.app_context():
        db.drop_all()
        db.create_all()
    yield app


@pytest.fixture
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture
def executor():
    return ImmediateExecutor()


@pytest.fixture
def make_api(client):
    from api_client import TaskApi

    def _make(user_id="user-a"):
        return TaskApi(StaticIdentity(user_id), base_url="http://localhost:3000/api",
                       session=FlaskSession(client))
    return _make
