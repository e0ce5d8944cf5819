"""
Core data types for the orchestration engine.

Tasks and per-category results are plain dataclasses; provider
descriptors are pydantic models so they can be validated when loaded
from config.toml.
"""

import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Optional, Union

from pydantic import BaseModel, Field


class Category(str, Enum):
	"""The closed set of task categories."""
	DOCUMENTATION = "documentation"
	CODE_GENERATION = "code-generation"
	REASONING = "reasoning"
	OPTIMIZATION = "optimization"

	@property
	def prefix(self) -> str:
		"""Task id prefix that encodes this category."""
		return _PREFIXES[self]

	@property
	def result_key(self) -> str:
		"""Attribute name of this category in CategoryResults."""
		return _RESULT_KEYS[self]

	@classmethod
	def from_task_id(cls, task_id: str) -> Optional["Category"]:
		"""Classify a task id by its prefix."""
		for category in cls:
			if task_id.startswith(category.prefix):
				return category
		return None


_PREFIXES = {
	Category.DOCUMENTATION: "doc-",
	Category.CODE_GENERATION: "code-",
	Category.REASONING: "reason-",
	Category.OPTIMIZATION: "opt-",
}

_RESULT_KEYS = {
	Category.DOCUMENTATION: "documentation",
	Category.CODE_GENERATION: "code_generation",
	Category.REASONING: "reasoning",
	Category.OPTIMIZATION: "optimization",
}


class Priority(str, Enum):
	"""Task priority. Informational only, scheduling ignores it."""
	HIGH = "high"
	MEDIUM = "medium"
	LOW = "low"


def generate_task_id() -> str:
	"""Mint a unique id suffix, e.g. 'task-1718000000000-a1b2c3'."""
	return f"task-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


@dataclass(frozen=True)
class TaskConstraints:
	"""Optional per-task limits."""
	max_output_tokens: Optional[int] = None
	timeout_seconds: Optional[float] = None
	temperature: Optional[float] = None


@dataclass(frozen=True)
class Task:
	"""One unit of requested work bound to exactly one category."""
	id: str
	category: Category
	priority: Priority
	payload: Any
	parameters: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
	constraints: TaskConstraints = field(default_factory=TaskConstraints)


# =============================================================================
# Providers
# =============================================================================

class RateLimitBudget(BaseModel):
	"""Per-window request and cost budget."""
	requests_per_window: int = Field(default=60, ge=0)
	cost_per_window: int = Field(default=1_000_000, ge=0)


class ProviderCosts(BaseModel):
	"""Cost metadata. Informational, never enforced."""
	input_cost_per_1k: float = Field(default=0.0, ge=0)
	output_cost_per_1k: float = Field(default=0.0, ge=0)


class Provider(BaseModel):
	"""A named backend able to fulfil one or more task categories."""
	name: str = Field(min_length=1, description="Unique provider key")
	model: str = Field(description="Underlying model name")
	capabilities: list[str] = Field(default_factory=list)
	available: bool = Field(default=True)
	rate_limits: RateLimitBudget = Field(default_factory=RateLimitBudget)
	costs: ProviderCosts = Field(default_factory=ProviderCosts)

	def supports(self, category: Category) -> bool:
		"""Whether the declared capabilities include this category."""
		return category.value in self.capabilities


# =============================================================================
# Per-category results
# =============================================================================

@dataclass
class ResultMetadata:
	"""Metadata every category result carries."""
	model: str
	confidence: float
	provider: str = ""
	processing_time: float = 0.0
	degraded: bool = False


@dataclass
class DocumentationResult:
	metadata: ResultMetadata
	overview: str = ""
	component_docs: list[dict[str, Any]] = field(default_factory=list)
	design_system_docs: str = ""
	usage_examples: list[str] = field(default_factory=list)
	accessibility: str = ""

	category: ClassVar[Category] = Category.DOCUMENTATION


@dataclass
class CodeGenerationResult:
	metadata: ResultMetadata
	framework: str = "react"
	components: list[dict[str, Any]] = field(default_factory=list)
	utilities: list[dict[str, Any]] = field(default_factory=list)
	tests: list[dict[str, Any]] = field(default_factory=list)
	build_config: str = ""
	dependencies: list[str] = field(default_factory=list)

	category: ClassVar[Category] = Category.CODE_GENERATION


@dataclass
class ReasoningResult:
	metadata: ResultMetadata
	design_analysis: dict[str, Any] = field(default_factory=dict)
	architectural_recommendations: list[dict[str, Any]] = field(default_factory=list)
	patterns: list[dict[str, Any]] = field(default_factory=list)
	tradeoffs: list[dict[str, Any]] = field(default_factory=list)
	improvements: list[dict[str, Any]] = field(default_factory=list)

	category: ClassVar[Category] = Category.REASONING


@dataclass
class OptimizationResult:
	metadata: ResultMetadata
	performance: list[dict[str, Any]] = field(default_factory=list)
	accessibility: list[dict[str, Any]] = field(default_factory=list)
	maintainability: list[dict[str, Any]] = field(default_factory=list)
	bundle_size: list[dict[str, Any]] = field(default_factory=list)

	category: ClassVar[Category] = Category.OPTIMIZATION


CategoryResult = Union[DocumentationResult, CodeGenerationResult, ReasoningResult, OptimizationResult]


@dataclass
class TaskOutcome:
	"""Terminal state of one task: either a result or an error message."""
	task_id: str
	category: Category
	result: Optional[CategoryResult] = None
	error: Optional[str] = None

	@property
	def succeeded(self) -> bool:
		return self.error is None and self.result is not None


# =============================================================================
# Orchestration result
# =============================================================================

@dataclass
class CategoryResults:
	"""Aggregated results, one slot per category."""
	documentation: Optional[DocumentationResult] = None
	code_generation: Optional[CodeGenerationResult] = None
	reasoning: Optional[ReasoningResult] = None
	optimization: Optional[OptimizationResult] = None

	def populated(self) -> dict[str, CategoryResult]:
		"""Return only the categories that have a result."""
		return {
			key: value
			for key, value in (
				("documentation", self.documentation),
				("code_generation", self.code_generation),
				("reasoning", self.reasoning),
				("optimization", self.optimization),
			)
			if value is not None
		}


@dataclass
class OrchestrationMetadata:
	total_processing_time: float = 0.0
	models_used: list[str] = field(default_factory=list)
	parallel_tasks: int = 0
	confidence: float = 0.0


@dataclass
class OrchestrationResult:
	"""Outcome of one process_design_spec call."""
	task_id: str
	success: bool
	results: CategoryResults = field(default_factory=CategoryResults)
	metadata: OrchestrationMetadata = field(default_factory=OrchestrationMetadata)
	errors: list[str] = field(default_factory=list)
	warnings: list[str] = field(default_factory=list)

	def to_dict(self) -> dict[str, Any]:
		"""JSON-ready view of the result."""
		return asdict(self)
