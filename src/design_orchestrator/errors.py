"""
Error taxonomy for the orchestration engine.

Task-level errors are caught at the task boundary by the executor and
recorded against the task id. Anything else that escapes a run is
reported as an OrchestrationFailure.
"""

from typing import Optional


class OrchestratorError(Exception):
	"""Base class for all orchestrator errors."""


class TaskExecutionError(OrchestratorError):
	"""A single task failed. Never aborts sibling tasks."""

	def __init__(self, task_id: str, message: str):
		super().__init__(message)
		self.task_id = task_id


class NoProviderAvailableError(TaskExecutionError):
	"""Selection found no available provider."""

	def __init__(self, task_id: str, category: str):
		super().__init__(task_id, f"No suitable provider found for task type: {category}")
		self.category = category


class RateLimitExceededError(TaskExecutionError):
	"""The provider's rate limiter rejected the admission attempt."""

	def __init__(self, task_id: str, provider_name: str):
		super().__init__(task_id, f"Rate limit exceeded for provider: {provider_name}")
		self.provider_name = provider_name


class HandlerFailureError(TaskExecutionError):
	"""The category handler raised."""

	def __init__(self, task_id: str, provider_name: str, cause: Optional[BaseException] = None, message: str = ""):
		if not message:
			message = f"Handler failed on provider {provider_name}: {cause}"
		super().__init__(task_id, message)
		self.provider_name = provider_name
		self.cause = cause


class TaskTimeoutError(HandlerFailureError):
	"""The handler overran the task's declared timeout (only when enforcement is enabled)."""

	def __init__(self, task_id: str, provider_name: str, timeout_seconds: float):
		super().__init__(
			task_id,
			provider_name,
			message=f"Task timed out after {timeout_seconds:g}s on provider {provider_name}",
		)
		self.timeout_seconds = timeout_seconds


class TaskBuildError(OrchestratorError):
	"""Requirements or options could not be turned into tasks."""


class OrchestrationFailure(OrchestratorError):
	"""An error escaped task-level handling and failed the whole run."""

	def __init__(self, message: str, cause: Optional[BaseException] = None):
		super().__init__(message)
		self.cause = cause
