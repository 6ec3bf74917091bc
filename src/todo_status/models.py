"""
Data model for todo-status

Project and Task mirror the Todoist REST objects we read (unknown fields are
dropped). Title is the composed menu bar header.
"""

import re
import logging
from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Union

logger = logging.getLogger("TodoStatus.Parse")

# [label](target) note
CONTENT_PATTERN = re.compile(r'\[([^\]]*)\]\(([^\)]*)\)\s*(.*)')

TodoistId = Union[int, str]

# Fullwidth vertical line
PIPE_SUB = '｜'


class ParsedContent(NamedTuple):
    """Fields extracted from a task's content string"""
    title: str
    url: str
    note: str
    matched: bool


def parse_content(content: str) -> ParsedContent:
    """
    Extract display title, link target and note from task content

    Content of the form ``[label](target) note`` yields
    ``(label, target, note)``; anything else yields the content verbatim as
    the title with empty url and note.
    """
    match = CONTENT_PATTERN.search(content)
    if match is None:
        return ParsedContent(title=content, url='', note='', matched=False)

    return ParsedContent(
        title=match.group(1),
        url=match.group(2),
        note=match.group(3),
        matched=True
    )


@dataclass(frozen=True)
class Project:
    """Todoist project"""
    id: TodoistId
    name: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Project':
        return cls(id=data['id'], name=data['name'])


@dataclass
class Task:
    """Pending Todoist task plus the fields derived from its content"""
    id: TodoistId
    content: str
    description: str = ''
    title: str = ''
    url: str = ''
    note: str = ''

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Task':
        return cls(
            id=data['id'],
            content=str(data.get('content') or ''),
            description=str(data.get('description') or '')
        )

    def parse(self, pipe_sub: str = PIPE_SUB) -> None:
        """
        Populate title, url and note from content

        Literal pipes in the title are replaced with ``pipe_sub`` since the
        menu bar uses ``|`` to separate display text from parameters.
        """
        parsed = parse_content(self.content)
        if not parsed.matched:
            logger.info(f"Content has no [title](url) link, using it verbatim: {self.content}")

        self.title = parsed.title.replace('|', pipe_sub)
        self.url = parsed.url
        self.note = parsed.note


@dataclass(frozen=True)
class Title:
    """Menu bar header line and its colour ('' for no colour)"""
    text: str
    color: str = ''
