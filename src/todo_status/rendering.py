"""
Title and output rendering

Both the menu bar title and the full output are Jinja2 templates. They fail
differently: a broken title template falls back to a fixed string, a broken
output template is fatal.
"""

import logging
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, StrictUndefined

from .config import StatusConfig
from .errors import OutputTemplateError
from .models import Task, Title

logger = logging.getLogger("TodoStatus.Render")

DEFAULT_TITLE = "Pending tasks: {count}\n"

OUTPUT_TEMPLATE = (
    "{{ title.text }}"
    "{% if title.color %} | color={{ title.color }} sfcolor={{ title.color }}{% endif %}\n"
    "---\n"
    "{% for task in tasks %}{{ task.title }}\n{% endfor %}"
)

_env = Environment(undefined=StrictUndefined, keep_trailing_newline=True)


def default_title(num_tasks: int) -> str:
    return DEFAULT_TITLE.format(count=num_tasks)


def render_title_template(template: Optional[str], num_tasks: int) -> Optional[str]:
    """
    Render a title template with ``num_tasks`` in its context

    Returns:
        Rendered text, or None if the template is empty or fails to parse
        or render
    """
    if not template:
        return None

    try:
        return _env.from_string(template).render(num_tasks=num_tasks)
    except Exception as e:
        logger.debug(f"Title template failed ({e}), using default title")
        return None


def compose_title(num_tasks: int, config: StatusConfig) -> Title:
    """
    Build the menu bar title for a task count

    An empty list uses the empty-title settings; each of the template and the
    colour falls back to its non-empty counterpart when unset.
    """
    if num_tasks < 1:
        template = config.empty_title or config.title
        color = config.empty_title_color
        if color is None:
            color = config.title_color
    else:
        template = config.title
        color = config.title_color

    text = render_title_template(template, num_tasks)
    if text is None:
        text = default_title(num_tasks)

    return Title(text=text, color=color or '')


def load_output_template(path: Optional[str]) -> str:
    """
    Get output template source

    Args:
        path: Template file to read, or None/'' for the built-in template

    Raises:
        OutputTemplateError: If the file cannot be read
    """
    if not path:
        return OUTPUT_TEMPLATE

    template_file = Path(path).expanduser()
    try:
        return template_file.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise OutputTemplateError(f"Cannot read output template {template_file}: {e}") from e


def render_output(title: Title, tasks: List[Task], template_source: str) -> str:
    """
    Render the full menu bar output

    Raises:
        OutputTemplateError: If the template is malformed, refers to
            missing fields or fails while rendering
    """
    try:
        template = _env.from_string(template_source)
        return template.render(title=title, tasks=tasks)
    except Exception as e:
        raise OutputTemplateError(f"Output template failed: {e}") from e
