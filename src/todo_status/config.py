"""
Configuration for todo-status

Options are read, lowest precedence first, from built-in defaults, a YAML
config file, ST_* environment variables and command line flags, then frozen
into a StatusConfig that is passed explicitly to each component.
"""

import os
import argparse
from pathlib import Path
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .errors import ConfigError

ENV_PREFIX = 'ST_'
DEFAULT_CONFIG_PATH = Path('~/.config/todo-status/config.yaml')

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

DEFAULT_TITLE_TEMPLATE = (
    ':{% if num_tasks <= 50 %}{{ num_tasks }}{% else %}ellipsis{% endif %}.circle.fill:'
)

# option name -> (default, help)
OPTIONS = {
    'project': ('Inbox', 'project to list tasks for'),
    'project-id': (0, 'project ID (overrides project if set)'),
    'api-token': ('', 'todoist API token (read from the keychain if unset)'),
    'api-url': ('https://api.todoist.com/rest/v2', 'todoist REST API base URL'),
    'title': (DEFAULT_TITLE_TEMPLATE, 'menu bar title template'),
    'title-color': ('#DC143C', 'title color'),
    'empty-title': (None, 'menu bar title template when there are no tasks'),
    'empty-title-color': (None, 'title color when there are no tasks'),
    'output-template': (None, 'template file for output'),
    'pipe-sub': ('｜', 'character to substitute for pipes in task titles'),
    'log-level': ('INFO', 'logging level (DEBUG, INFO, WARNING, ERROR)'),
}

# fields where None means "unset" rather than a missing value
OPTIONAL_FIELDS = ('api_token', 'empty_title', 'empty_title_color', 'output_template')


@dataclass(frozen=True)
class StatusConfig:
    """Resolved configuration for one run"""
    project: str = OPTIONS['project'][0]
    project_id: int = OPTIONS['project-id'][0]
    api_token: Optional[str] = OPTIONS['api-token'][0]
    api_url: str = OPTIONS['api-url'][0]
    title: str = OPTIONS['title'][0]
    title_color: str = OPTIONS['title-color'][0]
    empty_title: Optional[str] = None
    empty_title_color: Optional[str] = None
    output_template: Optional[str] = None
    pipe_sub: str = OPTIONS['pipe-sub'][0]
    log_level: str = OPTIONS['log-level'][0]

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> 'StatusConfig':
        """
        Build config from a mapping keyed by option name ('project-id', ...)

        Raises:
            ConfigError: On unknown options, a blank required option or a
                non-integer project-id
        """
        unknown = set(options) - set(OPTIONS)
        if unknown:
            raise ConfigError(f"Unknown config option(s): {', '.join(sorted(map(str, unknown)))}")

        values = {name.replace('-', '_'): value for name, value in options.items()}

        if 'project_id' in values:
            values['project_id'] = _parse_project_id(values['project_id'])

        for key, value in values.items():
            if value is None:
                if key not in OPTIONAL_FIELDS:
                    raise ConfigError(f"{key.replace('_', '-')} must not be empty")
            elif key != 'project_id' and not isinstance(value, str):
                values[key] = str(value)

        level = values.get('log_level')
        if level is not None and level.upper() not in LOG_LEVELS:
            raise ConfigError(f"log-level must be one of {', '.join(LOG_LEVELS)}: {level!r}")

        return cls(**values)


def _parse_project_id(value: Any) -> int:
    """Accept an int or a decimal string; a blank value means unset"""
    if value is None or value == '':
        return 0
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ConfigError(f"project-id must be an integer: {value!r}")


def load_config_file(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load options from a YAML file

    An explicit path must exist; the default path is optional.
    """
    if config_path is None:
        path = DEFAULT_CONFIG_PATH.expanduser()
        if not path.exists():
            return {}
    else:
        path = Path(config_path).expanduser()
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    return data


def options_from_env(environ: Mapping[str, str]) -> Dict[str, str]:
    """Collect ST_* environment variables, e.g. ST_PROJECT_ID → project-id"""
    options = {}
    for name in OPTIONS:
        var = ENV_PREFIX + name.upper().replace('-', '_')
        if var in environ:
            options[name] = environ[var]
    return options


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="List pending Todoist tasks for a menu bar status display"
    )
    parser.add_argument(
        '--config',
        help=f'Path to YAML config file (default: {DEFAULT_CONFIG_PATH})'
    )
    for name, (default, help_text) in OPTIONS.items():
        parser.add_argument(
            f'--{name}',
            type=int if name == 'project-id' else str,
            default=None,
            # argparse %-formats help; templates contain '%'
            help=f'{help_text} (default: {default!r})'.replace('%', '%%')
        )
    return parser


def load_config(argv: Optional[List[str]] = None,
                environ: Optional[Mapping[str, str]] = None) -> StatusConfig:
    """
    Resolve configuration from defaults, config file, environment and flags

    Args:
        argv: Command line arguments (default: sys.argv[1:])
        environ: Environment (default: os.environ)
    """
    if environ is None:
        environ = os.environ

    args = vars(build_parser().parse_args(argv))
    config_path = args.pop('config') or environ.get(ENV_PREFIX + 'CONFIG')

    options: Dict[str, Any] = {}
    options.update(load_config_file(config_path))
    options.update(options_from_env(environ))
    options.update({
        name.replace('_', '-'): value
        for name, value in args.items()
        if value is not None
    })

    return StatusConfig.from_options(options)
