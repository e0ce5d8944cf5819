"""Rich views for provider status, connection probes, and orchestration results."""

from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .models import OrchestrationResult


def format_duration(seconds: float) -> str:
	"""Format a duration for display. e.g. '1.2s', '45ms', '2m 3s'."""
	if seconds < 0.001:
		return "<1ms"
	if seconds < 1.0:
		return f"{seconds * 1000:.0f}ms"
	if seconds < 60.0:
		return f"{seconds:.1f}s"
	minutes = int(seconds // 60)
	secs = seconds % 60
	return f"{minutes}m {secs:.0f}s"


def status_style(ok: bool) -> str:
	"""Return a Rich style string for pass/fail."""
	return "green" if ok else "red"


def render_provider_status(
	status: dict[str, dict[str, Any]],
	usage: Optional[dict[str, dict]] = None,
	console: Optional[Console] = None,
) -> None:
	"""Render a table of registered providers."""
	console = console or Console()

	if not status:
		console.print("[dim]No providers registered.[/dim]")
		return

	usage = usage or {}
	table = Table(title="AI Providers")
	table.add_column("Provider", style="cyan")
	table.add_column("Model")
	table.add_column("Capabilities")
	table.add_column("Requests", justify="right")
	table.add_column("Cost", justify="right")
	table.add_column("Status", justify="center")

	for name, info in status.items():
		limits = info["rate_limits"]
		window = usage.get(name, {})
		style = status_style(info["status"] == "available")
		table.add_row(
			name,
			info["model"],
			", ".join(info["capabilities"]),
			f"{window.get('requests', 0)}/{limits['requests_per_window']}",
			f"{window.get('cost', 0)}/{limits['cost_per_window']}",
			f"[{style}]{info['status']}[/{style}]",
		)

	console.print(table)


def render_connection_results(results: dict[str, bool], console: Optional[Console] = None) -> None:
	"""Render the outcome of a connection probe."""
	console = console or Console()

	if not results:
		console.print("[dim]No providers registered.[/dim]")
		return

	table = Table(title="Provider Connections")
	table.add_column("Provider", style="cyan")
	table.add_column("Reachable", justify="center")

	for name, ok in results.items():
		style = status_style(ok)
		table.add_row(name, f"[{style}]{'OK' if ok else 'FAIL'}[/{style}]")

	console.print(table)


def render_orchestration_result(result: OrchestrationResult, console: Optional[Console] = None) -> None:
	"""Render per-category results plus errors and warnings."""
	console = console or Console()
	meta = result.metadata
	style = status_style(result.success)

	console.print(
		f"[bold]Orchestration {result.task_id}[/bold] "
		f"[{style}]{'succeeded' if result.success else 'failed'}[/{style}] "
		f"in {format_duration(meta.total_processing_time)}"
	)

	populated = result.results.populated()
	if populated:
		table = Table(title=f"Results ({len(populated)}/{meta.parallel_tasks} tasks)")
		table.add_column("Category", style="cyan")
		table.add_column("Provider")
		table.add_column("Model")
		table.add_column("Time", justify="right")
		table.add_column("Confidence", justify="right")

		for category, category_result in populated.items():
			rm = category_result.metadata
			provider = rm.provider + (" [yellow](degraded)[/yellow]" if rm.degraded else "")
			table.add_row(
				category,
				provider,
				rm.model,
				format_duration(rm.processing_time),
				f"{rm.confidence:.2f}",
			)
		console.print(table)

	console.print(f"Models used: {', '.join(meta.models_used) or '-'}")
	console.print(f"Overall confidence: {meta.confidence:.2f}")

	for warning in result.warnings:
		console.print(f"[yellow]warning:[/yellow] {escape(warning)}")
	for error in result.errors:
		console.print(f"[red]error:[/red] {escape(error)}")
