#!/usr/bin/env python3
"""
todo-status

Menu bar plugin that lists pending Todoist tasks:
1. Resolves the API token (config or keychain)
2. Looks up the project ID by name (unless configured)
3. Fetches the project's pending tasks
4. Parses [title](url) note out of each task's content
5. Renders a title line and the task list through templates
6. Prints the result for the menu bar to display
"""

import sys
import logging
from typing import List, Optional, TextIO

import requests

from .config import StatusConfig, load_config
from .errors import TodoStatusError
from .integrations import TodoistIntegration, resolve_token
from .models import Task
from .rendering import compose_title, load_output_template, render_output


def setup_logging(level: str = 'INFO') -> logging.Logger:
    """Setup logging to stderr (stdout belongs to the menu bar)"""
    logger = logging.getLogger("TodoStatus")

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            '%(asctime)s - TodoStatus - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level.upper())
    return logger


class TodoStatus:
    """Builds the menu bar text for one project's pending tasks"""

    def __init__(self, config: StatusConfig, session: Optional[requests.Session] = None):
        """
        Args:
            config: Resolved configuration
            session: HTTP session for Todoist requests (a new one by default)
        """
        self.config = config
        self.session = session
        self.logger = logging.getLogger("TodoStatus")

    def get_tasks(self) -> List[Task]:
        """Fetch and parse the pending tasks of the configured project"""
        token = resolve_token(self.config.api_token)
        todoist = TodoistIntegration(token, api_url=self.config.api_url, session=self.session)

        project_id = self.config.project_id
        if project_id < 1:
            project_id = todoist.resolve_project_id(self.config.project)

        tasks = todoist.fetch_tasks(project_id)
        for task in tasks:
            task.parse(self.config.pipe_sub)

        return tasks

    def render(self) -> str:
        """
        Build the complete output text

        Raises:
            TodoStatusError: On any credential, API or output template failure
        """
        template_source = load_output_template(self.config.output_template)
        tasks = self.get_tasks()
        title = compose_title(len(tasks), self.config)
        return render_output(title, tasks, template_source)

    def run(self, out: TextIO) -> None:
        """Render and write to ``out``; nothing is written if rendering fails"""
        text = self.render()
        out.write(text)
        out.flush()


# ==================== CLI Interface ====================

def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point"""
    logger = setup_logging()

    try:
        config = load_config(argv)
        setup_logging(config.log_level)
        TodoStatus(config).run(sys.stdout)
    except TodoStatusError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
