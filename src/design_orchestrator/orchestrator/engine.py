"""
DesignOrchestrator - the inbound interface of the engine.

Callers construct an orchestrator explicitly and hold on to it; there is
no process-wide instance.
"""

import logging
import time
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from ..config import Config, load_providers
from ..errors import OrchestrationFailure
from ..models import (
	Category,
	OrchestrationMetadata,
	OrchestrationResult,
	Provider,
	ProviderCosts,
	RateLimitBudget,
	generate_task_id,
)
from .aggregator import (
	aggregate_results,
	calculate_overall_confidence,
	collect_errors,
	collect_warnings,
	extract_models_used,
)
from .executor import OutcomeCallback, TaskExecutor
from .handlers import CategoryHandler, default_handlers, design_name
from .rate_limiter import TYPICAL_REQUEST_COST, WINDOW_SECONDS
from .registry import ConnectionProbe, ProviderRegistry, availability_probe
from .tasks import OrchestrationOptions, Requirements, TaskBuilder

logger = logging.getLogger(__name__)


def default_providers() -> list[Provider]:
	"""The three built-in providers, in registration order."""
	return [
		Provider(
			name="gemini",
			model="gemini-pro",
			capabilities=["documentation", "explanation", "analysis"],
			rate_limits=RateLimitBudget(requests_per_window=60, cost_per_window=1_000_000),
			costs=ProviderCosts(input_cost_per_1k=0.0005, output_cost_per_1k=0.0015),
		),
		Provider(
			name="gpt4",
			model="gpt-4-turbo",
			capabilities=["code-generation", "refactoring", "optimization"],
			rate_limits=RateLimitBudget(requests_per_window=30, cost_per_window=150_000),
			costs=ProviderCosts(input_cost_per_1k=0.01, output_cost_per_1k=0.03),
		),
		Provider(
			name="claude",
			model="claude-3-sonnet",
			capabilities=["reasoning", "analysis", "architecture"],
			rate_limits=RateLimitBudget(requests_per_window=50, cost_per_window=200_000),
			costs=ProviderCosts(input_cost_per_1k=0.003, output_cost_per_1k=0.015),
		),
	]


class DesignOrchestrator:
	"""
	Fans a design description out to specialized providers and
	aggregates the results.

	Args:
		providers: Providers to register, in order. None registers default_providers();
			an empty iterable registers nothing.
		handlers: Category handler mapping; must cover every category
		probe: Reachability check used by test_provider_connections
		default_options: Options used when process_design_spec gets none
	"""

	def __init__(
		self,
		providers: Optional[Iterable[Provider]] = None,
		handlers: Optional[Mapping[Category, CategoryHandler]] = None,
		probe: ConnectionProbe = availability_probe,
		default_options: Optional[OrchestrationOptions] = None,
		estimated_cost: int = TYPICAL_REQUEST_COST,
		window_seconds: float = WINDOW_SECONDS,
		clock: Callable[[], float] = time.monotonic,
		on_task_complete: Optional[OutcomeCallback] = None,
	):
		self.registry = ProviderRegistry(window_seconds=window_seconds, clock=clock)
		self.default_options = default_options or OrchestrationOptions()
		self.task_builder = TaskBuilder()
		self.executor = TaskExecutor(
			self.registry,
			handlers if handlers is not None else default_handlers(),
			estimated_cost=estimated_cost,
			enforce_timeouts=self.default_options.enforce_timeouts,
			on_task_complete=on_task_complete,
		)
		self.probe = probe

		for provider in default_providers() if providers is None else providers:
			self.register_provider(provider)
		logger.info(f"Initialized {len(self.registry)} AI providers")

	@classmethod
	def from_config(cls, config: Config, **kwargs: Any) -> "DesignOrchestrator":
		"""Build an orchestrator from loaded configuration."""
		configured = load_providers(config)
		kwargs.setdefault("providers", configured or None)
		kwargs.setdefault("handlers", default_handlers(config.simulated_latency))
		kwargs.setdefault("default_options", OrchestrationOptions(
			parallel=config.parallel,
			max_concurrent_tasks=config.max_concurrent_tasks,
			enforce_timeouts=config.enforce_timeouts,
		))
		kwargs.setdefault("estimated_cost", config.typical_request_cost)
		kwargs.setdefault("window_seconds", config.rate_limit_window)
		return cls(**kwargs)

	async def process_design_spec(
		self,
		design: Any,
		requirements: Union[Requirements, Mapping[str, Any], None],
		options: Optional[OrchestrationOptions] = None,
	) -> OrchestrationResult:
		"""
		Process a design description through the requested providers.

		Never raises. Per-task failures show up in `errors` with
		success=True; anything that escapes task handling gives
		success=False and an empty result set.
		"""
		run_id = generate_task_id()
		start = time.monotonic()
		options = options or self.default_options

		logger.info(f"Starting orchestration {run_id} for design spec: {design_name(design)}")

		try:
			tasks = self.task_builder.build(design, requirements, options)

			if options.parallel:
				outcomes = await self.executor.run_parallel(
					tasks, options.max_concurrent_tasks, enforce_timeouts=options.enforce_timeouts,
				)
			else:
				outcomes = await self.executor.run_sequential(
					tasks, enforce_timeouts=options.enforce_timeouts,
				)

			result = OrchestrationResult(
				task_id=run_id,
				success=True,
				results=aggregate_results(outcomes),
				metadata=OrchestrationMetadata(
					total_processing_time=time.monotonic() - start,
					models_used=extract_models_used(outcomes),
					parallel_tasks=len(tasks),
					confidence=calculate_overall_confidence(outcomes),
				),
				errors=collect_errors(outcomes),
				warnings=collect_warnings(outcomes),
			)
		except Exception as e:
			failure = e if isinstance(e, OrchestrationFailure) else OrchestrationFailure(str(e) or type(e).__name__, e)
			logger.error(f"Orchestration {run_id} failed: {failure}", exc_info=True)
			return OrchestrationResult(
				task_id=run_id,
				success=False,
				metadata=OrchestrationMetadata(total_processing_time=time.monotonic() - start),
				errors=[str(failure)],
			)

		logger.info(
			f"Orchestration {run_id} completed in {result.metadata.total_processing_time:.3f}s "
			f"({len(result.results.populated())}/{len(tasks)} categories)"
		)
		return result

	def register_provider(self, provider: Provider) -> None:
		"""Add or update a provider; its rate limiter starts fresh."""
		self.registry.register(provider)

	def get_provider_status(self) -> dict[str, dict[str, Any]]:
		return self.registry.status()

	async def test_provider_connections(self) -> dict[str, bool]:
		"""Probe every registered provider for reachability."""
		return await self.registry.probe_all(self.probe)
