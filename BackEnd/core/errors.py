class TrackerError(Exception):
	"""Base class for errors raised by the tracker core."""


class SessionValidationError(TrackerError, ValueError):
	"""A session cannot be recorded as entered.

	`reason` is the human readable text shown to the user.
	"""

	def __init__(self, reason: str):
		super().__init__(reason)
		self.reason = reason


class SettingsError(TrackerError, ValueError):
	"""settings.json or an environment override holds an invalid value."""
