"""Tests for provider registration, selection, status, and probes."""

import pytest

from design_orchestrator.errors import NoProviderAvailableError
from design_orchestrator.models import Category
from design_orchestrator.orchestrator.engine import default_providers
from design_orchestrator.orchestrator.registry import ProviderRegistry

from .helpers import make_provider, make_task


def _registry(*providers) -> ProviderRegistry:
	registry = ProviderRegistry()
	for provider in providers:
		registry.register(provider)
	return registry


class TestSelection:
	"""Affinity-table selection with best-effort fallback."""

	@pytest.mark.parametrize("category,expected", [
		(Category.DOCUMENTATION, "gemini"),
		(Category.CODE_GENERATION, "gpt4"),
		(Category.REASONING, "claude"),
		(Category.OPTIMIZATION, "gpt4"),
	])
	def test_default_providers_follow_affinity(self, category, expected):
		registry = _registry(*default_providers())
		assert registry.select_provider_for(make_task(category)).name == expected

	def test_optimization_uses_first_registered_preferred_provider(self):
		registry = _registry(
			make_provider("claude", capabilities=["reasoning"]),
			make_provider("gpt4", capabilities=["code-generation"]),
		)
		assert registry.select_provider_for(make_task(Category.OPTIMIZATION)).name == "claude"

	def test_unavailable_preferred_provider_is_skipped(self):
		registry = _registry(
			make_provider("gpt4", available=False),
			make_provider("claude"),
		)
		assert registry.select_provider_for(make_task(Category.OPTIMIZATION)).name == "claude"

	def test_fallback_ignores_capabilities(self):
		"""A reasoning task goes to any available provider when claude is missing."""
		registry = _registry(
			make_provider("gemini", available=False),
			make_provider("docs-only", capabilities=["documentation"]),
		)
		provider = registry.select_provider_for(make_task(Category.REASONING))
		assert provider.name == "docs-only"
		assert not provider.supports(Category.REASONING)

	def test_fallback_uses_registration_order(self):
		registry = _registry(
			make_provider("zeta"),
			make_provider("alpha"),
		)
		assert registry.select_provider_for(make_task(Category.CODE_GENERATION)).name == "zeta"

	def test_no_available_provider_raises(self):
		registry = _registry(make_provider("gemini", available=False))
		task = make_task(Category.DOCUMENTATION)

		with pytest.raises(NoProviderAvailableError) as exc_info:
			registry.select_provider_for(task)

		assert exc_info.value.task_id == task.id
		assert "documentation" in str(exc_info.value)

	def test_empty_registry_raises(self):
		with pytest.raises(NoProviderAvailableError):
			ProviderRegistry().select_provider_for(make_task())


class TestRegistration:
	def test_register_creates_rate_limiter(self):
		registry = _registry(make_provider("gemini", requests_per_window=7))
		limiter = registry.rate_limiter_for("gemini")
		assert limiter is not None
		assert limiter.budget.requests_per_window == 7

	def test_reregister_replaces_provider_and_resets_limiter(self):
		registry = _registry(make_provider("gemini", requests_per_window=1))
		old_limiter = registry.rate_limiter_for("gemini")
		old_limiter.record_admission()
		assert not old_limiter.can_admit()

		registry.register(make_provider("gemini", model="gemini-2", requests_per_window=1))

		assert len(registry) == 1
		assert registry.get("gemini").model == "gemini-2"
		assert registry.rate_limiter_for("gemini") is not old_limiter
		assert registry.rate_limiter_for("gemini").can_admit()

	def test_registry_keeps_its_own_copy(self):
		provider = make_provider("gemini")
		registry = _registry(provider)
		provider.available = False
		assert registry.get("gemini").available is True

	def test_contains_and_iteration_order(self):
		registry = _registry(make_provider("b"), make_provider("a"))
		assert "a" in registry
		assert [p.name for p in registry] == ["b", "a"]


class TestStatus:
	def test_status_labels(self):
		registry = _registry(
			make_provider("gemini"),
			make_provider("gpt4", available=False),
		)
		status = registry.status()
		assert status["gemini"]["status"] == "available"
		assert status["gpt4"]["status"] == "error"
		assert status["gemini"]["model"] == "gemini-model"
		assert status["gemini"]["rate_limits"]["requests_per_window"] == 60

	def test_status_is_idempotent(self):
		registry = _registry(*default_providers())
		assert registry.status() == registry.status()

	def test_usage_reports_each_provider(self):
		registry = _registry(*default_providers())
		assert set(registry.usage()) == {"gemini", "gpt4", "claude"}


class TestProbes:
	@pytest.mark.asyncio
	async def test_default_probe_reports_availability(self):
		registry = _registry(
			make_provider("gemini"),
			make_provider("gpt4", available=False),
		)
		assert await registry.probe_all() == {"gemini": True, "gpt4": False}

	@pytest.mark.asyncio
	async def test_probe_exception_counts_as_unreachable(self):
		registry = _registry(make_provider("gemini"), make_provider("claude"))

		async def probe(provider):
			if provider.name == "claude":
				raise ConnectionError("refused")
			return True

		assert await registry.probe_all(probe) == {"gemini": True, "claude": False}

	@pytest.mark.asyncio
	async def test_sync_probe_supported(self):
		registry = _registry(make_provider("gemini"))
		assert await registry.probe_all(lambda provider: False) == {"gemini": False}
