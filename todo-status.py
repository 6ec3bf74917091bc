#!/usr/bin/env python3
"""
todo-status menu bar plugin

Prints pending tasks of a Todoist project in menu bar plugin format
(SwiftBar / xbar). Symlink or copy into the plugin folder with a refresh
interval in the name, e.g. todo-status.5m.py.

Usage:
    ./todo-status.py                          # Tasks in the Inbox project
    ./todo-status.py --project Work           # Tasks in another project
    ./todo-status.py --project-id 2203306141  # Skip the project name lookup

Every option can also be set in ~/.config/todo-status/config.yaml or as an
ST_* environment variable (e.g. ST_API_TOKEN, ST_PROJECT_ID).
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).resolve().parent / 'src'))

from todo_status.cli import main

if __name__ == '__main__':
    sys.exit(main())
