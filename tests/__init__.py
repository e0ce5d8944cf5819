"""
Test suite for design-orchestrator.

Covers each engine component in isolation (rate limiter, concurrency
gate, registry, task builder, executor, aggregator) plus end-to-end runs
through DesignOrchestrator, the config layer, and the CLI.
"""
