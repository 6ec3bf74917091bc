"""
Integration modules for external systems
"""

from .todoist import TodoistIntegration, TODOIST_API
from .keychain import resolve_token

__all__ = ['TodoistIntegration', 'TODOIST_API', 'resolve_token']
