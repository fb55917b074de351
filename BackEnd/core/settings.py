"""User settings.

Stored as settings.json in the per-user data dir, next to the database.
A few values can be overridden from the environment:

	HABIT_TRACKER_TZ                   IANA zone used for attribution
	HABIT_TRACKER_GRID_WEEK_START      "sunday" or "monday"

The session length cap is fixed (models.MAX_SESSION_SECONDS) and is not
a setting.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from BackEnd.core.calendar_grid import MONDAY, SUNDAY
from BackEnd.core.errors import SettingsError
from BackEnd.core.paths import settings_path

logger = logging.getLogger(__name__)

WEEK_START_NAMES = {"sunday": SUNDAY, "monday": MONDAY}

ENV_TZ = "HABIT_TRACKER_TZ"
ENV_GRID_WEEK_START = "HABIT_TRACKER_GRID_WEEK_START"


@dataclass(frozen=True)
class Settings:
	tz_name: Optional[str] = None  # None: system local zone
	grid_week_start: str = "sunday"

	@property
	def tz(self):
		if not self.tz_name:
			return None
		return ZoneInfo(self.tz_name)

	@property
	def grid_start_index(self) -> int:
		return WEEK_START_NAMES[self.grid_week_start]


def _validated(raw: Mapping) -> Settings:
	tz_name = raw.get("tz_name") or None
	if tz_name:
		try:
			ZoneInfo(tz_name)
		except (ZoneInfoNotFoundError, ValueError):
			raise SettingsError(f"Invalid timezone '{tz_name}'. Use IANA timezone identifiers.")

	week_start = str(raw.get("grid_week_start", "sunday")).strip().lower()
	if week_start not in WEEK_START_NAMES:
		raise SettingsError(
			f"grid_week_start must be one of {', '.join(sorted(WEEK_START_NAMES))}, got '{week_start}'"
		)

	return Settings(tz_name=tz_name, grid_week_start=week_start)


def load_settings(path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> Settings:
	"""Read settings.json (missing file means defaults) and apply env overrides."""
	if path is None:
		path = settings_path()
	if environ is None:
		environ = os.environ

	raw = {}
	if path.exists():
		try:
			with open(path, encoding="utf-8") as f:
				raw = json.load(f)
		except json.JSONDecodeError as e:
			raise SettingsError(f"Invalid JSON in settings file {path}: {e}")
		if not isinstance(raw, dict):
			raise SettingsError(f"Settings file {path} must hold a JSON object")

	if environ.get(ENV_TZ):
		raw["tz_name"] = environ[ENV_TZ]
	if environ.get(ENV_GRID_WEEK_START):
		raw["grid_week_start"] = environ[ENV_GRID_WEEK_START]

	settings = _validated(raw)
	logger.debug("Loaded settings %s", settings)
	return settings


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
	if path is None:
		path = settings_path()
	with open(path, "w", encoding="utf-8") as f:
		json.dump(asdict(settings), f, indent=2)
	logger.info("Saved settings to %s", path)
	return path
