"""
Default category handlers.

Each handler receives (task, provider) and returns the category's result
type. These are stand-ins for real model calls: they derive a small
amount of content from the design payload and sleep for a configurable
simulated latency so that the scheduler sees a real suspension point.
"""

import asyncio
from typing import Any, Awaitable, Callable, Mapping, Union

from ..models import (
	Category,
	CategoryResult,
	CodeGenerationResult,
	DocumentationResult,
	OptimizationResult,
	Provider,
	ReasoningResult,
	ResultMetadata,
	Task,
)

CategoryHandler = Callable[[Task, Provider], Union[CategoryResult, Awaitable[CategoryResult]]]

FRAMEWORK_DEPENDENCIES = {
	"react": ["react", "typescript"],
	"vue": ["vue", "typescript"],
	"angular": ["@angular/core", "typescript"],
	"svelte": ["svelte", "typescript"],
}


def design_name(payload: Any) -> str:
	"""Best-effort human name for an opaque design payload."""
	if isinstance(payload, Mapping):
		metadata = payload.get("metadata")
		if isinstance(metadata, Mapping):
			for key in ("name", "specId", "spec_id"):
				if metadata.get(key):
					return str(metadata[key])
		if payload.get("name"):
			return str(payload["name"])
	return "design"


def component_names(payload: Any) -> list[str]:
	"""Component names listed in the payload, if it has any."""
	if not isinstance(payload, Mapping):
		return []
	components = payload.get("components") or []
	names = []
	for component in components:
		if isinstance(component, Mapping) and component.get("name"):
			names.append(str(component["name"]))
		elif isinstance(component, str):
			names.append(component)
	return names


class DefaultHandlers:
	"""The built-in handler set, one coroutine per category."""

	def __init__(self, latency: float = 0.0):
		self.latency = latency

	async def _simulate_call(self) -> None:
		await asyncio.sleep(self.latency)

	async def documentation(self, task: Task, provider: Provider) -> DocumentationResult:
		await self._simulate_call()
		name = design_name(task.payload)
		components = component_names(task.payload)
		return DocumentationResult(
			overview=f"Component documentation for {name} generated by {provider.model}",
			component_docs=[
				{"name": c, "description": f"{c} component", "props": [], "examples": []}
				for c in components
			],
			design_system_docs="Design system documentation",
			usage_examples=(
				[f"Example: {c}" for c in components]
				if task.parameters.get("include_usage_examples") else []
			),
			accessibility=(
				"Accessibility documentation"
				if task.parameters.get("include_accessibility") else ""
			),
			metadata=ResultMetadata(model=provider.model, confidence=0.9),
		)

	async def code_generation(self, task: Task, provider: Provider) -> CodeGenerationResult:
		await self._simulate_call()
		framework = task.parameters.get("framework", "react")
		components = component_names(task.payload)
		return CodeGenerationResult(
			framework=framework,
			components=[
				{"name": c, "framework": framework, "code": "", "exports": [c]}
				for c in components
			],
			tests=(
				[{"component_name": c, "framework": framework, "coverage": 0.0} for c in components]
				if task.parameters.get("include_tests") else []
			),
			build_config="Build configuration",
			dependencies=list(FRAMEWORK_DEPENDENCIES.get(framework, ["typescript"])),
			metadata=ResultMetadata(model=provider.model, confidence=0.95),
		)

	async def reasoning(self, task: Task, provider: Provider) -> ReasoningResult:
		await self._simulate_call()
		components = component_names(task.payload)
		return ReasoningResult(
			design_analysis={
				"complexity": len(components),
				"patterns": [],
				"issues": [],
				"focus_areas": list(task.parameters.get("focus_areas", ())),
			},
			metadata=ResultMetadata(model=provider.model, confidence=0.88),
		)

	async def optimization(self, task: Task, provider: Provider) -> OptimizationResult:
		await self._simulate_call()
		return OptimizationResult(
			metadata=ResultMetadata(model=provider.model, confidence=0.85),
		)

	def as_mapping(self) -> dict[Category, CategoryHandler]:
		return {
			Category.DOCUMENTATION: self.documentation,
			Category.CODE_GENERATION: self.code_generation,
			Category.REASONING: self.reasoning,
			Category.OPTIMIZATION: self.optimization,
		}


def default_handlers(latency: float = 0.0) -> dict[Category, CategoryHandler]:
	"""Handler mapping covering every category."""
	return DefaultHandlers(latency).as_mapping()
