from dataclasses import dataclass
from datetime import datetime, timedelta

from BackEnd.core.models import MAX_SESSION_SECONDS, ActiveTimer

RUNNING = "running"
PAUSED = "paused"
FINISHED = "finished"


@dataclass
class TimerSnapshot:
	habit_id: str
	state: str
	elapsed_sec: int


class LiveTimer:
	"""
	Elapsed-time tracker for one running habit (no Qt).

	Every sample() adds the wall-clock delta since the previous sample, so
	late or skipped wake-ups (suspended laptop, backgrounded app) still
	count. Elapsed time never exceeds max_seconds; reaching it finishes
	the timer at exactly the cap.
	"""

	def __init__(self, habit_id: str, started_at: datetime, max_seconds: int = MAX_SESSION_SECONDS):
		if not habit_id:
			raise ValueError("Habit must be selected before starting timer.")
		self.habit_id = habit_id
		self.started_at = started_at
		self.max_seconds = int(max_seconds)

		self.state = RUNNING
		self._elapsed = timedelta(0)
		self._last_sample = started_at

	@property
	def elapsed_sec(self) -> int:
		return int(self._elapsed.total_seconds())

	@property
	def finished(self) -> bool:
		return self.state == FINISHED

	def snapshot(self) -> TimerSnapshot:
		return TimerSnapshot(habit_id=self.habit_id, state=self.state, elapsed_sec=self.elapsed_sec)

	def active_timer(self) -> ActiveTimer:
		return ActiveTimer(habit_id=self.habit_id, start=self.started_at)

	def sample(self, now: datetime) -> int:
		"""Fold the time since the last sample into elapsed; return elapsed seconds."""
		if self.state != RUNNING:
			return self.elapsed_sec

		# a clock stepping backwards adds nothing
		delta = max(timedelta(0), now - self._last_sample)
		self._last_sample = now
		self._elapsed += delta

		cap = timedelta(seconds=self.max_seconds)
		if self._elapsed >= cap:
			self._elapsed = cap
			self.state = FINISHED
		return self.elapsed_sec

	def pause(self, now: datetime) -> None:
		if self.state != RUNNING:
			return
		self.sample(now)
		if self.state == RUNNING:
			self.state = PAUSED

	def resume(self, now: datetime) -> None:
		if self.state != PAUSED:
			return
		# time spent paused is not counted
		self._last_sample = now
		self.state = RUNNING
