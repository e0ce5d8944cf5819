"""
Per-provider fixed-window rate limiter.

Counts requests and cost units inside a fixed window. Counters reset to
zero the first time they are touched after the window has expired, so
bursts at window edges are possible.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable

from ..models import RateLimitBudget

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60.0

# Placeholder cost for a request whose real cost is unknown until it runs.
TYPICAL_REQUEST_COST = 1000


@dataclass
class RateLimitState:
	"""Counters for the current window."""
	request_count: int = 0
	cost_count: int = 0
	last_reset: float = 0.0


class ProviderRateLimiter:
	"""
	Admission control for a single provider.

	The check (can_admit) and the bookkeeping (record_admission) are
	separate calls; the executor checks before running a task and records
	after it succeeds.
	"""

	def __init__(
		self,
		provider_name: str,
		budget: RateLimitBudget,
		window_seconds: float = WINDOW_SECONDS,
		clock: Callable[[], float] = time.monotonic,
	):
		self.provider_name = provider_name
		self.budget = budget
		self.window_seconds = window_seconds
		self._clock = clock
		self._state = RateLimitState(last_reset=clock())

	def _roll_window(self) -> None:
		now = self._clock()
		if now - self._state.last_reset >= self.window_seconds:
			self._state.request_count = 0
			self._state.cost_count = 0
			self._state.last_reset = now

	def can_admit(self, estimated_cost: int = TYPICAL_REQUEST_COST) -> bool:
		"""Return True if a request of this cost fits in the current window."""
		self._roll_window()
		state = self._state

		if state.request_count >= self.budget.requests_per_window:
			logger.warning(
				f"Rate limit hit for {self.provider_name}: "
				f"{state.request_count}/{self.budget.requests_per_window} requests"
			)
			return False

		if state.cost_count + estimated_cost > self.budget.cost_per_window:
			logger.warning(
				f"Cost budget hit for {self.provider_name}: "
				f"{state.cost_count}+{estimated_cost} > {self.budget.cost_per_window}"
			)
			return False

		return True

	def record_admission(self, cost: int = TYPICAL_REQUEST_COST) -> None:
		"""Count one request of the given cost against the current window."""
		self._roll_window()
		self._state.request_count += 1
		self._state.cost_count += cost

	def snapshot(self) -> dict:
		"""Get current window usage."""
		self._roll_window()
		remaining = self.window_seconds - (self._clock() - self._state.last_reset)
		return {
			"provider": self.provider_name,
			"requests": self._state.request_count,
			"requests_limit": self.budget.requests_per_window,
			"cost": self._state.cost_count,
			"cost_limit": self.budget.cost_per_window,
			"window_resets_in": max(0.0, remaining),
		}
