"""
todo-status: pending Todoist tasks for a menu bar status display
"""

__version__ = '0.1.0'
