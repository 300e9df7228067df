"""
Constants for storage keys, notification messages and UI defaults.
"""
from __future__ import annotations

# Single key holding the JSON array of all tasks (every date)
TASKS_STORAGE_KEY = "tasks_data"

# In-app banner dwell time (seconds)
DEFAULT_NOTIFICATION_DWELL = 3.0

# Day strip size around the selected date
DEFAULT_WINDOW_BEFORE = 5
DEFAULT_WINDOW_AFTER = 5

# Notification message templates
MSG_TASK_ADDED = 'Task "{title}" added successfully!'
MSG_TASK_COMPLETED = 'Task "{title}" completed!'
MSG_TASK_REOPENED = 'Task "{title}" marked as incomplete'
MSG_TASK_DELETED = 'Task "{title}" deleted successfully'

# Storage backends (DAYTASKS_STORAGE)
STORAGE_SQLITE = "sqlite"
STORAGE_FILE = "file"
STORAGE_MEMORY = "memory"
STORAGE_BACKENDS = (STORAGE_SQLITE, STORAGE_FILE, STORAGE_MEMORY)

# Day view limits (Telegram: 4096 chars per message, 100 inline buttons)
DAY_PAGE_SIZE = 15
MAX_WINDOW_SIDE = 10
MESSAGE_TEXT_LIMIT = 4096
