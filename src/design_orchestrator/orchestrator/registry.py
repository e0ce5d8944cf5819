"""
Provider Registry - provider descriptors, rate limiters, and selection.

Selection uses a fixed affinity table from category to preferred provider
names. When no preferred provider is available it falls back to the first
available provider in registration order, whatever its capabilities.
That fallback is best effort: callers learn about it through the
`degraded` flag on the result, not through an error.
"""

import inspect
import logging
import time
from typing import Any, Awaitable, Callable, Iterator, Optional, Union

from ..errors import NoProviderAvailableError
from ..models import Category, Provider, Task
from .rate_limiter import WINDOW_SECONDS, ProviderRateLimiter

logger = logging.getLogger(__name__)

PROVIDER_AFFINITY: dict[Category, tuple[str, ...]] = {
	Category.DOCUMENTATION: ("gemini",),
	Category.CODE_GENERATION: ("gpt4",),
	Category.REASONING: ("claude",),
	Category.OPTIMIZATION: ("gpt4", "claude"),
}

ConnectionProbe = Callable[[Provider], Union[bool, Awaitable[bool]]]


async def availability_probe(provider: Provider) -> bool:
	"""Default probe: report the provider's availability flag."""
	return provider.available


class ProviderRegistry:
	"""Holds providers in registration order, each with its own rate limiter."""

	def __init__(
		self,
		window_seconds: float = WINDOW_SECONDS,
		clock: Callable[[], float] = time.monotonic,
	):
		self.window_seconds = window_seconds
		self._clock = clock
		self._providers: dict[str, Provider] = {}
		self._limiters: dict[str, ProviderRateLimiter] = {}

	def __len__(self) -> int:
		return len(self._providers)

	def __iter__(self) -> Iterator[Provider]:
		return iter(list(self._providers.values()))

	def __contains__(self, name: object) -> bool:
		return name in self._providers

	def register(self, provider: Provider) -> None:
		"""Add or replace a provider. Always starts a fresh rate limiter."""
		provider = provider.model_copy(deep=True)
		self._providers[provider.name] = provider
		self._limiters[provider.name] = ProviderRateLimiter(
			provider.name,
			provider.rate_limits,
			window_seconds=self.window_seconds,
			clock=self._clock,
		)
		logger.info(f"Registered provider: {provider.name} ({provider.model})")

	def get(self, name: str) -> Optional[Provider]:
		return self._providers.get(name)

	def rate_limiter_for(self, name: str) -> Optional[ProviderRateLimiter]:
		return self._limiters.get(name)

	def select_provider_for(self, task: Task) -> Provider:
		"""
		Pick a provider for a task.

		Raises:
			NoProviderAvailableError: if no registered provider is available
		"""
		preferred = PROVIDER_AFFINITY[task.category]
		for name, provider in self._providers.items():
			if provider.available and name in preferred:
				return provider

		for provider in self._providers.values():
			if provider.available:
				logger.debug(
					f"No preferred provider for {task.category.value}, falling back to {provider.name}"
				)
				return provider

		raise NoProviderAvailableError(task.id, task.category.value)

	def status(self) -> dict[str, dict[str, Any]]:
		"""Provider descriptors plus a derived availability label."""
		return {
			name: {
				**provider.model_dump(),
				"status": "available" if provider.available else "error",
			}
			for name, provider in self._providers.items()
		}

	def usage(self) -> dict[str, dict]:
		"""Current rate limit window usage per provider."""
		return {name: limiter.snapshot() for name, limiter in self._limiters.items()}

	async def probe_all(self, probe: ConnectionProbe = availability_probe) -> dict[str, bool]:
		"""Run a reachability probe against every provider, one at a time."""
		results: dict[str, bool] = {}
		for provider in list(self._providers.values()):
			try:
				outcome = probe(provider)
				if inspect.isawaitable(outcome):
					outcome = await outcome
				results[provider.name] = bool(outcome)
			except Exception as e:
				logger.error(f"Provider {provider.name} connection failed: {e}")
				results[provider.name] = False
		return results
