"""Scenario orchestration."""

from .scenario_orchestrator import ScenarioOrchestrator

__all__ = ["ScenarioOrchestrator"]
