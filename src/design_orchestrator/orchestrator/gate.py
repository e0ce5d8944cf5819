"""
Concurrency gate - a FIFO counting semaphore.

Unlike asyncio.Semaphore, a release hands the permit straight to the
longest-waiting acquirer instead of returning it to the pool, so a
newcomer can never overtake a queued waiter.
"""

import asyncio
from collections import deque

DEFAULT_CAPACITY = 3


class ConcurrencyGate:
	"""
	Bounds how many tasks may be in flight at once.

	There is no timeout and no watchdog: a task that never finishes keeps
	its permit. Cancellation is not handled either, so a waiter cancelled
	after release() handed it a permit but before it resumed leaks that permit.
	"""

	def __init__(self, capacity: int = DEFAULT_CAPACITY):
		if capacity < 1:
			raise ValueError(f"Gate capacity must be at least 1, got {capacity}")
		self.capacity = capacity
		self._available = capacity
		self._waiters: deque[asyncio.Future[None]] = deque()

	@property
	def available(self) -> int:
		"""Permits not held by anyone."""
		return self._available

	@property
	def outstanding(self) -> int:
		"""Permits currently held, including ones handed to a waiter that has not resumed yet."""
		return self.capacity - self._available

	@property
	def waiting(self) -> int:
		"""Number of suspended acquirers."""
		return sum(1 for w in self._waiters if not w.done())

	async def acquire(self) -> None:
		"""Take a permit, suspending in FIFO order if none is free."""
		if self._available > 0:
			self._available -= 1
			return

		waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
		self._waiters.append(waiter)
		await waiter

	def release(self) -> None:
		"""Give a permit to the oldest waiter, or back to the pool."""
		while self._waiters:
			waiter = self._waiters.popleft()
			if not waiter.done():
				waiter.set_result(None)
				return

		if self._available >= self.capacity:
			raise RuntimeError("ConcurrencyGate released more times than acquired")
		self._available += 1

	async def __aenter__(self) -> "ConcurrencyGate":
		await self.acquire()
		return self

	async def __aexit__(self, exc_type, exc, tb) -> None:
		self.release()
