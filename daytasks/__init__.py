"""Personal per-day task list: task store, persistence, notifications and a Telegram UI."""
