"""Tests for the rich report views."""

import io

import pytest
from rich.console import Console

from design_orchestrator.models import (
	CategoryResults,
	OrchestrationMetadata,
	OrchestrationResult,
	ReasoningResult,
	ResultMetadata,
)
from design_orchestrator.orchestrator import DesignOrchestrator
from design_orchestrator.report import (
	format_duration,
	render_connection_results,
	render_orchestration_result,
	render_provider_status,
)


def _console() -> Console:
	return Console(file=io.StringIO(), width=140)


def _output(console: Console) -> str:
	return console.file.getvalue()


@pytest.mark.parametrize("seconds,expected", [
	(0.0001, "<1ms"),
	(0.045, "45ms"),
	(1.25, "1.2s"),
	(123, "2m 3s"),
])
def test_format_duration(seconds, expected):
	assert format_duration(seconds) == expected


def test_provider_status_table():
	orchestrator = DesignOrchestrator()
	console = _console()

	render_provider_status(orchestrator.get_provider_status(), orchestrator.registry.usage(), console)

	out = _output(console)
	assert "AI Providers" in out
	assert "gpt-4-turbo" in out
	assert "0/30" in out


def test_provider_status_empty():
	console = _console()
	render_provider_status({}, console=console)
	assert "No providers registered" in _output(console)


def test_connection_results():
	console = _console()
	render_connection_results({"gemini": True, "gpt4": False}, console)
	out = _output(console)
	assert "OK" in out
	assert "FAIL" in out


def test_orchestration_result_shows_degraded_and_errors():
	result = OrchestrationResult(
		task_id="task-1-abc123",
		success=True,
		results=CategoryResults(
			reasoning=ReasoningResult(metadata=ResultMetadata(
				model="gemini-pro", confidence=0.88, provider="gemini", degraded=True,
			)),
		),
		metadata=OrchestrationMetadata(
			total_processing_time=0.5,
			models_used=["gemini-pro"],
			parallel_tasks=2,
			confidence=0.88,
		),
		errors=["doc-task-1: Rate limit exceeded for provider: gemini"],
		warnings=["reason-task-2: routed to provider 'gemini'"],
	)
	console = _console()

	render_orchestration_result(result, console)

	out = _output(console)
	assert "succeeded" in out
	assert "(degraded)" in out
	assert "Results (1/2 tasks)" in out
	assert "Rate limit exceeded" in out
	assert "warning:" in out
	assert "0.88" in out


def test_failed_orchestration_result():
	console = _console()
	render_orchestration_result(
		OrchestrationResult(task_id="task-2", success=False, errors=["Unsupported framework"]),
		console,
	)
	out = _output(console)
	assert "failed" in out
	assert "Models used: -" in out
