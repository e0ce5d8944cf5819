"""
Executor - runs tasks end-to-end, in parallel or one at a time.

Each task goes: select provider -> rate limit check -> category handler ->
record admission. Every task-level failure is caught and recorded as a
TaskOutcome; no task can abort its siblings.
"""

import asyncio
import inspect
import logging
import time
from dataclasses import replace
from typing import Awaitable, Callable, Mapping, Optional

from ..errors import (
	HandlerFailureError,
	RateLimitExceededError,
	TaskExecutionError,
	TaskTimeoutError,
)
from ..models import Category, CategoryResult, Provider, ResultMetadata, Task, TaskOutcome
from .gate import DEFAULT_CAPACITY, ConcurrencyGate
from .handlers import CategoryHandler
from .rate_limiter import TYPICAL_REQUEST_COST
from .registry import ProviderRegistry

logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[TaskOutcome], Awaitable[None]]


class TaskExecutor:
	"""
	Drives a task list through the provider registry and category handlers.

	Timeout constraints on tasks are informational unless enforce_timeouts
	is set, in which case the handler call is bounded by the task's
	timeout_seconds and an overrun fails the task with TaskTimeoutError.
	"""

	def __init__(
		self,
		registry: ProviderRegistry,
		handlers: Mapping[Category, CategoryHandler],
		estimated_cost: int = TYPICAL_REQUEST_COST,
		enforce_timeouts: bool = False,
		on_task_complete: Optional[OutcomeCallback] = None,
	):
		missing = [c.value for c in Category if c not in handlers]
		if missing:
			raise ValueError(f"No handler registered for: {', '.join(missing)}")

		self.registry = registry
		self.handlers = dict(handlers)
		self.estimated_cost = estimated_cost
		self.enforce_timeouts = enforce_timeouts
		self.on_task_complete = on_task_complete

	async def run_parallel(
		self,
		tasks: list[Task],
		max_concurrent: int = DEFAULT_CAPACITY,
		enforce_timeouts: Optional[bool] = None,
	) -> dict[str, TaskOutcome]:
		"""Run all tasks concurrently, at most max_concurrent in flight."""
		gate = ConcurrencyGate(max_concurrent)
		outcomes: dict[str, TaskOutcome] = {}

		logger.info(f"Processing {len(tasks)} tasks in parallel (max {max_concurrent} concurrent)")

		async def process(task: Task) -> None:
			async with gate:
				outcome = await self._run_one(task, enforce_timeouts)
			outcomes[task.id] = outcome
			await self._notify(outcome)

		# Fan out, then wait for every task to reach a terminal state
		await asyncio.gather(*(asyncio.create_task(process(task)) for task in tasks))
		return outcomes

	async def run_sequential(
		self,
		tasks: list[Task],
		enforce_timeouts: Optional[bool] = None,
	) -> dict[str, TaskOutcome]:
		"""Run tasks one at a time in list order."""
		outcomes: dict[str, TaskOutcome] = {}

		logger.info(f"Processing {len(tasks)} tasks sequentially")

		for task in tasks:
			outcome = await self._run_one(task, enforce_timeouts)
			outcomes[task.id] = outcome
			await self._notify(outcome)

		return outcomes

	async def execute_task(self, task: Task, enforce_timeouts: Optional[bool] = None) -> CategoryResult:
		"""
		Execute one task end-to-end.

		Raises:
			NoProviderAvailableError: selection found nothing
			RateLimitExceededError: the provider's window is exhausted
			HandlerFailureError: the handler raised, timed out, or returned the wrong type
		"""
		provider = self.registry.select_provider_for(task)

		limiter = self.registry.rate_limiter_for(provider.name)
		if limiter is not None and not limiter.can_admit(self.estimated_cost):
			raise RateLimitExceededError(task.id, provider.name)

		logger.info(f"Processing task {task.id} with {provider.name}")

		start = time.monotonic()
		result = await self._call_handler(task, provider, enforce_timeouts)
		processing_time = time.monotonic() - start

		if limiter is not None:
			limiter.record_admission(self.estimated_cost)

		# The registered model is authoritative over whatever the handler reported
		return replace(
			result,
			metadata=replace(
				result.metadata,
				model=provider.model,
				provider=provider.name,
				processing_time=processing_time,
				degraded=not provider.supports(task.category),
			),
		)

	async def _call_handler(
		self,
		task: Task,
		provider: Provider,
		enforce_timeouts: Optional[bool],
	) -> CategoryResult:
		if enforce_timeouts is None:
			enforce_timeouts = self.enforce_timeouts
		timeout = task.constraints.timeout_seconds if enforce_timeouts else None
		handler = self.handlers[task.category]

		async def invoke() -> CategoryResult:
			outcome = handler(task, provider)
			if inspect.isawaitable(outcome):
				outcome = await outcome
			return outcome

		try:
			if timeout is not None:
				result = await asyncio.wait_for(invoke(), timeout)
			else:
				result = await invoke()
		except asyncio.TimeoutError as e:
			if timeout is None:
				raise HandlerFailureError(task.id, provider.name, e) from e
			raise TaskTimeoutError(task.id, provider.name, timeout) from e
		except Exception as e:
			raise HandlerFailureError(task.id, provider.name, e) from e

		if getattr(result, "category", None) is not task.category:
			raise HandlerFailureError(
				task.id,
				provider.name,
				message=f"Handler for {task.category.value} returned {type(result).__name__}",
			)
		if not isinstance(result.metadata, ResultMetadata):
			raise HandlerFailureError(
				task.id,
				provider.name,
				message=f"Handler for {task.category.value} returned metadata of type {type(result.metadata).__name__}",
			)
		return result

	async def _run_one(self, task: Task, enforce_timeouts: Optional[bool]) -> TaskOutcome:
		try:
			result = await self.execute_task(task, enforce_timeouts)
		except TaskExecutionError as e:
			logger.warning(f"Task {task.id} failed: {e}")
			return TaskOutcome(task_id=task.id, category=task.category, error=str(e))
		except Exception as e:
			logger.exception(f"Task {task.id} failed unexpectedly")
			return TaskOutcome(task_id=task.id, category=task.category, error=f"Unexpected error: {e}")
		return TaskOutcome(task_id=task.id, category=task.category, result=result)

	async def _notify(self, outcome: TaskOutcome) -> None:
		if self.on_task_complete is None:
			return
		try:
			await self.on_task_complete(outcome)
		except Exception as e:
			logger.warning(f"on_task_complete callback failed for {outcome.task_id}: {e}")
