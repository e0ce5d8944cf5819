"""CLI for design-orchestrator: providers, probe, and run commands."""

import argparse
import asyncio
import json
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from pathlib import Path
from typing import Any

from rich.console import Console

from .config import load_config
from .logging_config import setup_logging
from .orchestrator import DesignOrchestrator, OrchestrationOptions, Requirements
from .orchestrator.tasks import FRAMEWORKS
from .report import render_connection_results, render_orchestration_result, render_provider_status


def _version() -> str:
	try:
		return pkg_version("design-orchestrator")
	except PackageNotFoundError:
		return "unknown"


def _build_orchestrator(args: argparse.Namespace) -> DesignOrchestrator:
	config = load_config()
	setup_logging(config, level=getattr(args, "log_level", None))
	return DesignOrchestrator.from_config(config)


def _load_design(path: str) -> Any:
	"""Read a JSON design file, exiting with status 2 if it cannot be used."""
	try:
		with open(Path(path), encoding="utf-8") as f:
			return json.load(f)
	except (OSError, json.JSONDecodeError) as e:
		print(f"Cannot read design file {path}: {e}", file=sys.stderr)
		sys.exit(2)


def cmd_providers(args: argparse.Namespace) -> None:
	"""Show registered providers and their rate limit usage."""
	orchestrator = _build_orchestrator(args)
	render_provider_status(orchestrator.get_provider_status(), orchestrator.registry.usage(), Console())


def cmd_probe(args: argparse.Namespace) -> None:
	"""Probe every provider for reachability."""
	orchestrator = _build_orchestrator(args)
	results = asyncio.run(orchestrator.test_provider_connections())
	render_connection_results(results, Console())
	if not all(results.values()):
		sys.exit(1)


def cmd_run(args: argparse.Namespace) -> None:
	"""Run an orchestration over a design file."""
	design = _load_design(args.design_file)
	orchestrator = _build_orchestrator(args)

	if args.all:
		requirements = Requirements(documentation=True, code=True, reasoning=True, optimization=True)
	else:
		requirements = Requirements(
			documentation=args.docs,
			code=args.code,
			reasoning=args.analyze,
			optimization=args.optimize,
		)

	defaults = orchestrator.default_options
	options = OrchestrationOptions(
		framework=args.framework,
		priority=args.priority,
		parallel=args.parallel or defaults.parallel,
		max_concurrent_tasks=args.max_concurrent or defaults.max_concurrent_tasks,
		enforce_timeouts=args.enforce_timeouts or defaults.enforce_timeouts,
	)

	result = asyncio.run(orchestrator.process_design_spec(design, requirements, options))

	if args.json:
		print(json.dumps(result.to_dict(), indent=2, default=str))
	else:
		render_orchestration_result(result, Console())

	if not result.success:
		sys.exit(1)


def main() -> None:
	"""CLI entry point."""
	parser = argparse.ArgumentParser(
		prog="design-orchestrator",
		description="Fan design descriptions out to specialized AI providers",
	)
	parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
	parser.add_argument("--log-level", type=str, default=None, help="DEBUG, INFO, WARNING or ERROR")
	subparsers = parser.add_subparsers(dest="command")

	# providers
	providers_parser = subparsers.add_parser("providers", help="Show provider status")
	providers_parser.set_defaults(func=cmd_providers)

	# probe
	probe_parser = subparsers.add_parser("probe", help="Test provider connections")
	probe_parser.set_defaults(func=cmd_probe)

	# run
	run_parser = subparsers.add_parser("run", help="Orchestrate a design file")
	run_parser.add_argument("design_file", help="Path to a JSON design description")
	run_parser.add_argument("--docs", action="store_true", help="Generate documentation")
	run_parser.add_argument("--code", action="store_true", help="Generate code")
	run_parser.add_argument("--analyze", action="store_true", help="Analyze the design")
	run_parser.add_argument("--optimize", action="store_true", help="Suggest optimizations")
	run_parser.add_argument("--all", action="store_true", help="Request every category")
	run_parser.add_argument("--framework", choices=FRAMEWORKS, default="react", help="Target framework")
	run_parser.add_argument("--priority", choices=["high", "medium", "low"], default=None, help="Override task priority")
	run_parser.add_argument("--parallel", action="store_true", help="Run tasks concurrently")
	run_parser.add_argument("--max-concurrent", type=int, default=None, help="Max tasks in flight (parallel only)")
	run_parser.add_argument("--enforce-timeouts", action="store_true", help="Fail tasks that overrun their timeout")
	run_parser.add_argument("--json", action="store_true", help="Print the result as JSON")
	run_parser.set_defaults(func=cmd_run)

	args = parser.parse_args()

	if not args.command:
		parser.print_help()
		sys.exit(1)

	args.func(args)
