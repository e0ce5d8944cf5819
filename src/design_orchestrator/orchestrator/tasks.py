"""
Task Builder - turns requirement flags into concrete tasks.

One task per requested category, always in category order, each with
category-specific default parameters and constraints.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from ..errors import TaskBuildError
from ..models import Category, Priority, Task, TaskConstraints, generate_task_id
from .gate import DEFAULT_CAPACITY

FRAMEWORKS = ("react", "vue", "angular", "svelte")

# Accepted requirement keys, including the camelCase names older callers send.
_REQUIREMENT_ALIASES = {
	"documentation": "documentation",
	"generateDocumentation": "documentation",
	"code": "code",
	"generateCode": "code",
	"reasoning": "reasoning",
	"analysis": "reasoning",
	"analyzeDesign": "reasoning",
	"optimization": "optimization",
	"optimizeImplementation": "optimization",
}


@dataclass(frozen=True)
class Requirements:
	"""Which categories the caller wants."""
	documentation: bool = False
	code: bool = False
	reasoning: bool = False
	optimization: bool = False

	@classmethod
	def coerce(cls, value: Union["Requirements", Mapping[str, Any], None]) -> "Requirements":
		"""Build Requirements from an instance, a flag mapping, or None."""
		if value is None:
			return cls()
		if isinstance(value, cls):
			return value

		flags: dict[str, bool] = {}
		for key, flag in value.items():
			field_name = _REQUIREMENT_ALIASES.get(key)
			if field_name is None:
				raise TaskBuildError(f"Unknown requirement: {key}")
			flags[field_name] = flags.get(field_name, False) or bool(flag)
		return cls(**flags)

	def categories(self) -> list[Category]:
		"""Requested categories in canonical order."""
		wanted = [
			(self.documentation, Category.DOCUMENTATION),
			(self.code, Category.CODE_GENERATION),
			(self.reasoning, Category.REASONING),
			(self.optimization, Category.OPTIMIZATION),
		]
		return [category for flag, category in wanted if flag]


@dataclass(frozen=True)
class OrchestrationOptions:
	"""How a run should be built and executed."""
	framework: str = "react"
	priority: Optional[Priority] = None
	parallel: bool = False
	max_concurrent_tasks: int = DEFAULT_CAPACITY
	enforce_timeouts: bool = False


@dataclass(frozen=True)
class _CategoryDefaults:
	priority: Priority
	max_output_tokens: int
	timeout_seconds: float
	parameters: Mapping[str, Any]


CATEGORY_DEFAULTS: dict[Category, _CategoryDefaults] = {
	Category.DOCUMENTATION: _CategoryDefaults(
		priority=Priority.MEDIUM,
		max_output_tokens=4000,
		timeout_seconds=30.0,
		parameters={
			"include_usage_examples": True,
			"include_accessibility": True,
			"format": "markdown",
		},
	),
	Category.CODE_GENERATION: _CategoryDefaults(
		priority=Priority.HIGH,
		max_output_tokens=8000,
		timeout_seconds=45.0,
		parameters={
			"include_tests": True,
			"include_types": True,
			"style": "typescript",
		},
	),
	Category.REASONING: _CategoryDefaults(
		priority=Priority.MEDIUM,
		max_output_tokens=6000,
		timeout_seconds=40.0,
		parameters={
			"focus_areas": ("architecture", "patterns", "maintainability"),
			"include_tradeoffs": True,
			"depth": "detailed",
		},
	),
	Category.OPTIMIZATION: _CategoryDefaults(
		priority=Priority.LOW,
		max_output_tokens=3000,
		timeout_seconds=25.0,
		parameters={
			"focus_areas": ("performance", "accessibility", "bundle-size"),
			"include_metrics": True,
		},
	),
}


class TaskBuilder:
	"""Builds the task list for one orchestration run."""

	def validate(self, options: OrchestrationOptions) -> None:
		"""Reject options that cannot produce a runnable task list."""
		if options.framework not in FRAMEWORKS:
			raise TaskBuildError(
				f"Unsupported framework '{options.framework}', expected one of {', '.join(FRAMEWORKS)}"
			)
		if options.max_concurrent_tasks < 1:
			raise TaskBuildError(
				f"max_concurrent_tasks must be at least 1, got {options.max_concurrent_tasks}"
			)
		if options.priority is not None and options.priority not in {p.value for p in Priority}:
			raise TaskBuildError(f"Unknown priority '{options.priority}'")

	def build(
		self,
		payload: Any,
		requirements: Union[Requirements, Mapping[str, Any], None],
		options: Optional[OrchestrationOptions] = None,
	) -> list[Task]:
		"""
		Create one task per requested category.

		Returns an empty list when nothing was requested.

		Raises:
			TaskBuildError: on unknown requirement keys or invalid options
		"""
		options = options or OrchestrationOptions()
		self.validate(options)

		tasks = []
		for category in Requirements.coerce(requirements).categories():
			defaults = CATEGORY_DEFAULTS[category]
			parameters = dict(defaults.parameters)
			if category is Category.CODE_GENERATION:
				parameters["framework"] = options.framework

			tasks.append(Task(
				id=f"{category.prefix}{generate_task_id()}",
				category=category,
				priority=Priority(options.priority) if options.priority else defaults.priority,
				payload=payload,
				parameters=MappingProxyType(parameters),
				constraints=TaskConstraints(
					max_output_tokens=defaults.max_output_tokens,
					timeout_seconds=defaults.timeout_seconds,
				),
			))
		return tasks
