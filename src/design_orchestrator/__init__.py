"""Design Orchestrator - fan design descriptions out to specialized AI providers."""

from .models import Category, OrchestrationResult, Priority, Provider
from .orchestrator import DesignOrchestrator, OrchestrationOptions, Requirements

__version__ = "0.1.0"

__all__ = [
	"Category",
	"DesignOrchestrator",
	"OrchestrationOptions",
	"OrchestrationResult",
	"Priority",
	"Provider",
	"Requirements",
]
