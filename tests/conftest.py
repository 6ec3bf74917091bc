"""
Shared fixtures for todo-status tests

Run with: pytest tests/
"""

import sys
import json
import logging
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from todo_status.integrations.todoist import TODOIST_API

TESTDATA = Path(__file__).parent / 'testdata'


class FakeResponse:
    """Stand-in for requests.Response"""

    def __init__(self, status_code=200, payload=None, text=''):
        self.status_code = status_code
        self._payload = payload
        self.text = text or (json.dumps(payload) if payload is not None else '')

    def json(self):
        if self._payload is None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """Stand-in for requests.Session that serves canned responses by URL"""

    def __init__(self, routes=None):
        self.headers = {}
        self.routes = routes or {}
        self.calls = []

    def get(self, url, params=None):
        self.calls.append((url, params))
        response = self.routes[url]
        if isinstance(response, Exception):
            raise response
        return response

    def urls(self):
        return [url for url, _ in self.calls]


def load_json(name):
    return json.loads((TESTDATA / name).read_text(encoding='utf-8'))


@pytest.fixture
def testdata():
    return TESTDATA


@pytest.fixture
def todoist_session():
    """Session serving testdata/projects.json and testdata/tasks.json"""
    return FakeSession({
        f"{TODOIST_API}/projects": FakeResponse(200, load_json('projects.json')),
        f"{TODOIST_API}/tasks": FakeResponse(200, load_json('tasks.json')),
    })


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers main() attached so they don't outlive captured streams"""
    yield
    logger = logging.getLogger("TodoStatus")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
