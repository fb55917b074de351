import logging
from datetime import datetime
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from BackEnd.core.errors import SessionValidationError
from BackEnd.core.live_timer import FINISHED, PAUSED, RUNNING, LiveTimer
from BackEnd.core.models import MAX_SESSION_SECONDS
from BackEnd.services.recording import complete_timer

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
	return datetime.now().astimezone()


class TimerService(QObject):
	tick = Signal(int)  # emits elapsed seconds
	state_changed = Signal(str)  # emits 'idle', 'running', 'paused', 'finished'
	completed = Signal(object)  # emits RecordedSession

	def __init__(
		self,
		clock: Callable[[], datetime] = _local_now,
		max_seconds: int = MAX_SESSION_SECONDS,
		tz=None,
		interval_ms: int = 1000,
	):
		super().__init__()
		self.clock = clock
		self.max_seconds = int(max_seconds)
		self.tz = tz
		self.timer: Optional[LiveTimer] = None
		self._timer = QTimer()
		self._timer.setInterval(interval_ms)
		self._timer.timeout.connect(self._on_tick)

	@property
	def running(self) -> bool:
		return self.timer is not None and self.timer.state == RUNNING

	@property
	def paused(self) -> bool:
		return self.timer is not None and self.timer.state == PAUSED

	@property
	def finished(self) -> bool:
		"""Cap reached but not yet recorded; only stop() or cancel() move on."""
		return self.timer is not None and self.timer.state == FINISHED

	@property
	def elapsed_sec(self) -> int:
		return self.timer.elapsed_sec if self.timer is not None else 0

	def start(self, habit_id: str):
		if self.timer is not None:
			return
		self.timer = LiveTimer(habit_id, self.clock(), max_seconds=self.max_seconds)
		self._timer.start()
		logger.info("Timer started for habit %s", habit_id)
		self.state_changed.emit('running')

	def pause_resume(self):
		if self.timer is None:
			return
		if self.finished:
			return
		if self.paused:
			self.timer.resume(self.clock())
			self._timer.start()
			self.state_changed.emit('running')
		else:
			self._timer.stop()
			self.timer.pause(self.clock())
			# a pause that lands past the cap is left for stop() to record
			self.state_changed.emit(self.timer.state)

	def stop(self, adjusted_seconds: Optional[int] = None):
		"""Finish the timer and emit the validated session.

		`adjusted_seconds` replaces the measured duration (review step).
		Raises SessionValidationError when the duration is not acceptable;
		the timer is kept so the user can correct it or cancel.
		"""
		if self.timer is None:
			return None
		self._timer.stop()
		self.timer.sample(self.clock())
		seconds = self.timer.elapsed_sec if adjusted_seconds is None else int(adjusted_seconds)
		return self._finish(seconds)

	def cancel(self):
		"""Discard the running timer without recording anything."""
		if self.timer is None:
			return
		self._timer.stop()
		logger.info("Timer for habit %s cancelled", self.timer.habit_id)
		self.timer = None
		self.state_changed.emit('idle')

	def _finish(self, seconds: int):
		try:
			recorded = complete_timer(
				self.timer.active_timer(), seconds, tz=self.tz, max_seconds=self.max_seconds
			)
		except SessionValidationError:
			if self.timer.state == RUNNING:
				self.timer.pause(self.clock())
			self.state_changed.emit(self.timer.state)
			raise
		self.timer = None
		self.state_changed.emit('idle')
		self.completed.emit(recorded)
		return recorded

	def _on_tick(self):
		if not self.running:
			return
		elapsed = self.timer.sample(self.clock())
		self.tick.emit(elapsed)
		if self.timer.finished:
			self._timer.stop()
			logger.info("Timer reached the %s second cap", self.max_seconds)
			self._finish(elapsed)
