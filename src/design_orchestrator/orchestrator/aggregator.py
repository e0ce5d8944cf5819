"""Result Aggregator - folds per-task outcomes into one orchestration result."""

from typing import Mapping

from ..models import Category, CategoryResults, TaskOutcome


def aggregate_results(outcomes: Mapping[str, TaskOutcome]) -> CategoryResults:
	"""
	Bucket successful outcomes by the category encoded in their task id.

	If two tasks share a category the later one in the mapping wins.
	"""
	aggregated = CategoryResults()
	for task_id, outcome in outcomes.items():
		if not outcome.succeeded:
			continue
		category = Category.from_task_id(task_id)
		if category is None:
			continue
		setattr(aggregated, category.result_key, outcome.result)
	return aggregated


def extract_models_used(outcomes: Mapping[str, TaskOutcome]) -> list[str]:
	"""Distinct model names of successful results, in first-seen order."""
	models: list[str] = []
	for outcome in outcomes.values():
		if not outcome.succeeded:
			continue
		model = outcome.result.metadata.model
		if model and model not in models:
			models.append(model)
	return models


def calculate_overall_confidence(outcomes: Mapping[str, TaskOutcome]) -> float:
	"""Mean confidence over successful outcomes; 0.0 when none succeeded."""
	scores = [o.result.metadata.confidence for o in outcomes.values() if o.succeeded]
	if not scores:
		return 0.0
	return sum(scores) / len(scores)


def collect_errors(outcomes: Mapping[str, TaskOutcome]) -> list[str]:
	return [f"{task_id}: {o.error}" for task_id, o in outcomes.items() if o.error is not None]


def collect_warnings(outcomes: Mapping[str, TaskOutcome]) -> list[str]:
	"""One warning per result served by a provider lacking the task's capability."""
	warnings = []
	for task_id, outcome in outcomes.items():
		if outcome.succeeded and outcome.result.metadata.degraded:
			warnings.append(
				f"{task_id}: routed to provider '{outcome.result.metadata.provider}' "
				f"which does not declare '{outcome.category.value}' capability"
			)
	return warnings
