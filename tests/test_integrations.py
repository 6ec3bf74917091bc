"""
Tests for the Todoist and keychain integrations
"""

import pytest
import requests
from keyring.errors import KeyringError

from conftest import FakeResponse, FakeSession
from todo_status.errors import CredentialError, ProjectNotFoundError, TodoistError
from todo_status.integrations import keychain
from todo_status.integrations.todoist import TODOIST_API, TodoistIntegration
from todo_status.models import Project, Task


class TestTodoistIntegration:
    """Test suite for Todoist integration"""

    def test_session_headers(self, todoist_session):
        TodoistIntegration('XXXX', session=todoist_session)

        assert todoist_session.headers['Authorization'] == 'Bearer XXXX'
        assert todoist_session.headers['Accept'] == 'application/json'

    def test_get_projects(self, todoist_session):
        todoist = TodoistIntegration('XXXX', session=todoist_session)

        projects = todoist.get_projects()

        assert projects[0] == Project(id=1, name='Inbox')
        assert [p.name for p in projects] == ['Inbox', 'Work', 'work']

    def test_resolve_project_id(self, todoist_session):
        todoist = TodoistIntegration('XXXX', session=todoist_session)

        assert todoist.resolve_project_id('Inbox') == 1
        assert todoist_session.calls == [(f"{TODOIST_API}/projects", None)]

    def test_resolve_project_id_is_case_sensitive(self, todoist_session):
        todoist = TodoistIntegration('XXXX', session=todoist_session)

        assert todoist.resolve_project_id('Work') == 2
        assert todoist.resolve_project_id('work') == 3

    def test_resolve_missing_project(self, todoist_session):
        todoist = TodoistIntegration('XXXX', session=todoist_session)

        with pytest.raises(ProjectNotFoundError) as excinfo:
            todoist.resolve_project_id('Errands')

        assert excinfo.value.project == 'Errands'
        assert 'Errands' in str(excinfo.value)

    def test_fetch_tasks(self, todoist_session):
        todoist = TodoistIntegration('XXXX', session=todoist_session)

        tasks = todoist.fetch_tasks(1)

        assert todoist_session.calls == [(f"{TODOIST_API}/tasks", {'project_id': '1'})]
        assert tasks[1] == Task(id=11, content='Call the plumber', description='about the sink')
        assert [t.title for t in tasks] == ['', '', '']

    def test_custom_api_url(self):
        session = FakeSession({
            "http://localhost:8080/api/tasks": FakeResponse(200, []),
        })
        todoist = TodoistIntegration('XXXX', api_url="http://localhost:8080/api/", session=session)

        assert todoist.fetch_tasks('2203306141') == []
        assert session.calls == [("http://localhost:8080/api/tasks", {'project_id': '2203306141'})]

    @pytest.mark.parametrize("status", [301, 401, 403, 404, 500, 503])
    def test_non_success_status(self, status):
        session = FakeSession({
            f"{TODOIST_API}/projects": FakeResponse(status, text='Forbidden'),
        })
        todoist = TodoistIntegration('XXXX', session=session)

        with pytest.raises(TodoistError, match=str(status)):
            todoist.get_projects()

    def test_transport_error(self):
        session = FakeSession({
            f"{TODOIST_API}/tasks": requests.ConnectionError("connection refused"),
        })
        todoist = TodoistIntegration('XXXX', session=session)

        with pytest.raises(TodoistError, match="connection refused"):
            todoist.fetch_tasks(1)

    def test_invalid_json(self):
        session = FakeSession({
            f"{TODOIST_API}/tasks": FakeResponse(200, text='<html>'),
        })
        todoist = TodoistIntegration('XXXX', session=session)

        with pytest.raises(TodoistError, match="Invalid JSON"):
            todoist.fetch_tasks(1)

    @pytest.mark.parametrize("body", [
        {'results': [], 'next_cursor': None},
        ['2995104339'],
        [{'content': 'no id'}],
        [None],
        'tasks',
    ])
    def test_unexpected_task_body(self, body):
        session = FakeSession({
            f"{TODOIST_API}/tasks": FakeResponse(200, body),
        })
        todoist = TodoistIntegration('XXXX', session=session)

        with pytest.raises(TodoistError, match="Unexpected"):
            todoist.fetch_tasks(1)

    def test_project_without_name(self):
        session = FakeSession({
            f"{TODOIST_API}/projects": FakeResponse(200, [{'id': 1}]),
        })
        todoist = TodoistIntegration('XXXX', session=session)

        with pytest.raises(TodoistError, match="name"):
            todoist.resolve_project_id('Inbox')


class TestKeychain:
    """Test suite for API token resolution"""

    def test_configured_token_wins(self, monkeypatch):
        def fail(service, account):
            raise AssertionError("keychain should not be read")

        monkeypatch.setattr(keychain.keyring, 'get_password', fail)

        assert keychain.resolve_token('XXXX') == 'XXXX'

    @pytest.mark.parametrize("configured", ['', None])
    def test_reads_keychain(self, monkeypatch, configured):
        lookups = []

        def get_password(service, account):
            lookups.append((service, account))
            return 'from-keychain'

        monkeypatch.setattr(keychain.keyring, 'get_password', get_password)

        assert keychain.resolve_token(configured) == 'from-keychain'
        assert lookups == [('todoist', 'api-token')]

    def test_missing_entry(self, monkeypatch):
        monkeypatch.setattr(keychain.keyring, 'get_password', lambda service, account: None)

        with pytest.raises(CredentialError, match="todoist"):
            keychain.resolve_token('')

    def test_keychain_error(self, monkeypatch):
        def get_password(service, account):
            raise KeyringError("access denied")

        monkeypatch.setattr(keychain.keyring, 'get_password', get_password)

        with pytest.raises(CredentialError, match="access denied"):
            keychain.resolve_token('')
