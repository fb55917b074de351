import os
from pathlib import Path

APP_NAME = "HabitTracker"
ENV_DATA_DIR = "HABIT_TRACKER_DATA_DIR"


def user_data_dir(app_name=APP_NAME):
	"""Return per-user data dir, creating it if needed.

	HABIT_TRACKER_DATA_DIR wins when set; otherwise the platform location
	(LOCALAPPDATA on Windows, XDG_DATA_HOME elsewhere) is used.
	"""
	override = os.environ.get(ENV_DATA_DIR)
	if override:
		path = Path(override).expanduser()
	else:
		if os.name == "nt":
			base = os.environ.get("LOCALAPPDATA", os.path.expanduser("~\\AppData\\Local"))
		else:
			base = os.environ.get("XDG_DATA_HOME") or os.path.expanduser("~/.local/share")
		path = Path(base) / app_name
	path.mkdir(parents=True, exist_ok=True)
	return path


def db_path():
	return user_data_dir() / "habits.db"


def settings_path():
	return user_data_dir() / "settings.json"
