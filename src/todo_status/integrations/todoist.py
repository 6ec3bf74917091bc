"""
Todoist Integration

Reads projects and pending tasks from the Todoist REST API.

Only two read-only endpoints are used:
- GET /projects              (project name → ID lookup)
- GET /tasks?project_id=<id> (pending tasks of one project)

Every failure (transport error, non-2xx status, undecodable body) raises
TodoistError; nothing is retried.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

from ..errors import ProjectNotFoundError, TodoistError
from ..models import Project, Task, TodoistId

TODOIST_API = 'https://api.todoist.com/rest/v2'


class TodoistIntegration:
    """Read-only client for the Todoist REST API"""

    def __init__(self, token: str, api_url: str = TODOIST_API,
                 session: Optional[requests.Session] = None):
        """
        Initialize Todoist integration

        Args:
            token: Todoist API token (sent as a bearer token)
            api_url: Base URL of the REST API
            session: HTTP session to use (a new one by default)
        """
        self.logger = logging.getLogger("TodoStatus.Todoist")
        self.api_url = api_url.rstrip('/')
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({
            'Accept': 'application/json',
            'Authorization': f'Bearer {token}'
        })

    def get_projects(self) -> List[Project]:
        """Get all projects visible to the token"""
        raw_projects = self._get_objects('projects', required=('id', 'name'))
        return [Project.from_api(p) for p in raw_projects]

    def resolve_project_id(self, name: str) -> TodoistId:
        """
        Look up a project ID by name

        Names are compared exactly (case-sensitive); the first match wins.

        Raises:
            ProjectNotFoundError: If no project has that name
        """
        self.logger.info(f"Looking up project ID for project: {name}")

        for project in self.get_projects():
            if project.name == name:
                return project.id

        raise ProjectNotFoundError(name)

    def fetch_tasks(self, project_id: TodoistId) -> List[Task]:
        """
        Get pending tasks for a project

        Returns:
            Task objects with content and description set (not yet parsed)
        """
        self.logger.info(f"Looking for tasks with project ID: {project_id}")

        raw_tasks = self._get_objects(
            'tasks', params={'project_id': str(project_id)}, required=('id',)
        )
        tasks = [Task.from_api(t) for t in raw_tasks]

        self.logger.info(f"Found {len(tasks)} tasks")
        return tasks

    def _get(self, path: str, params: Optional[dict] = None) -> Any:
        """GET an API endpoint and return the decoded JSON body"""
        url = f"{self.api_url}/{path}"

        try:
            response = self.session.get(url, params=params)
        except requests.RequestException as e:
            raise TodoistError(f"Request to {url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise TodoistError(
                f"Todoist API error ({response.status_code}): {response.text}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise TodoistError(f"Invalid JSON from {url}: {e}") from e

    def _get_objects(self, path: str, params: Optional[dict] = None,
                     required: Tuple[str, ...] = ('id',)) -> List[Dict[str, Any]]:
        """GET an endpoint that returns a JSON array of objects"""
        body = self._get(path, params=params)

        if not isinstance(body, list):
            raise TodoistError(
                f"Unexpected response from {self.api_url}/{path}: "
                f"expected a JSON array, got {type(body).__name__}"
            )

        for item in body:
            if not isinstance(item, dict) or any(key not in item for key in required):
                raise TodoistError(
                    f"Unexpected item from {self.api_url}/{path}: {item!r} "
                    f"(needs {', '.join(required)})"
                )

        return body
