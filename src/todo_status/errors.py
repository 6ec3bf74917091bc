"""
Errors raised by todo-status

Everything here is fatal: main() catches TodoStatusError, logs it and exits
non-zero. Recoverable conditions (content parse fallback, title fallback) are
handled where they happen and never raised.
"""


class TodoStatusError(Exception):
    """Base class for all fatal todo-status errors"""


class ConfigError(TodoStatusError):
    """Configuration file or option could not be used"""


class CredentialError(TodoStatusError):
    """API token could not be read from the secret store"""


class TodoistError(TodoStatusError):
    """Todoist request failed or returned something unusable"""


class ProjectNotFoundError(TodoistError):
    """No project with the configured name exists"""

    def __init__(self, project: str):
        super().__init__(f"Project does not exist: {project}")
        self.project = project


class OutputTemplateError(TodoStatusError):
    """Output template could not be read, parsed or rendered"""
