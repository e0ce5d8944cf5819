"""Shared test fixtures and helpers for design-orchestrator tests."""

import asyncio
from types import MappingProxyType
from typing import Optional

from design_orchestrator.models import (
	Category,
	Priority,
	Provider,
	RateLimitBudget,
	Task,
	TaskConstraints,
)
from design_orchestrator.orchestrator.handlers import default_handlers

SAMPLE_DESIGN = {
	"metadata": {"specId": "spec-001", "name": "Checkout Flow"},
	"components": [
		{"name": "Button"},
		{"name": "CartSummary"},
	],
}


class FakeClock:
	"""Manually advanced clock for rate limiter tests."""

	def __init__(self, start: float = 1000.0):
		self.now = start

	def __call__(self) -> float:
		return self.now

	def advance(self, seconds: float) -> None:
		self.now += seconds


def make_provider(
	name: str = "gemini",
	model: Optional[str] = None,
	capabilities: Optional[list[str]] = None,
	available: bool = True,
	requests_per_window: int = 60,
	cost_per_window: int = 1_000_000,
) -> Provider:
	"""Create a Provider with test-friendly defaults."""
	return Provider(
		name=name,
		model=model or f"{name}-model",
		capabilities=capabilities if capabilities is not None else ["documentation"],
		available=available,
		rate_limits=RateLimitBudget(
			requests_per_window=requests_per_window,
			cost_per_window=cost_per_window,
		),
	)


def make_task(
	category: Category = Category.DOCUMENTATION,
	suffix: str = "1",
	timeout_seconds: Optional[float] = None,
	payload: object = None,
) -> Task:
	"""Create a Task whose id carries the category prefix."""
	return Task(
		id=f"{category.prefix}task-{suffix}",
		category=category,
		priority=Priority.MEDIUM,
		payload=SAMPLE_DESIGN if payload is None else payload,
		parameters=MappingProxyType({"framework": "react"}),
		constraints=TaskConstraints(timeout_seconds=timeout_seconds),
	)


def handlers_with(**overrides):
	"""Default handler mapping with some categories replaced, keyed by Category name."""
	handlers = default_handlers()
	for key, handler in overrides.items():
		handlers[Category[key.upper()]] = handler
	return handlers


async def settle(rounds: int = 5) -> None:
	"""Let ready callbacks on the event loop run."""
	for _ in range(rounds):
		await asyncio.sleep(0)
