"""Orchestrator module - Task building, provider selection, execution, and aggregation."""

from .engine import DesignOrchestrator, default_providers
from .executor import TaskExecutor
from .gate import ConcurrencyGate
from .rate_limiter import ProviderRateLimiter
from .registry import ProviderRegistry
from .tasks import OrchestrationOptions, Requirements, TaskBuilder

__all__ = [
	"DesignOrchestrator",
	"default_providers",
	"TaskExecutor",
	"ConcurrencyGate",
	"ProviderRateLimiter",
	"ProviderRegistry",
	"OrchestrationOptions",
	"Requirements",
	"TaskBuilder",
]
