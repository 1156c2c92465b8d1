"""Workflow orchestration with structured duration logging.

Updates:
    v0.1.0 - 2026-10-19 - Sync and async workflow dispatch for CulturePulse.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter
from typing import Any, Protocol


class Workflow(Protocol):
    """Synchronous workflow contract."""

    name: str

    def run(self, context: dict) -> dict:
        """Execute the workflow and return its result payload."""

        ...


class AsyncWorkflow(Protocol):
    """Workflow contract for operations that await external I/O."""

    name: str

    async def run_async(self, context: dict) -> dict:
        """Execute the workflow and return its result payload."""

        ...


@dataclass(slots=True)
class Orchestrator:
    workflows: dict[str, Workflow | AsyncWorkflow]

    _logger = logging.getLogger(__name__)

    def execute(self, workflow_name: str, context: dict) -> dict:
        """Run a registered synchronous workflow.

        Args:
            workflow_name (str): Name of the workflow to execute.
            context (dict): Payload passed to the workflow.

        Returns:
            dict: Output produced by the workflow.

        Raises:
            KeyError: If the workflow name is unknown.
            TypeError: If the workflow only supports async execution.
        """

        workflow = self._lookup(workflow_name)
        if not callable(getattr(workflow, "run", None)):
            raise TypeError(f"Workflow '{workflow_name}' must be executed with execute_async().")
        started = perf_counter()
        try:
            result = workflow.run(context)
        except Exception as exc:
            self._log_failure(workflow_name, started, exc)
            raise
        self._log_success(workflow_name, started, context)
        return result

    async def execute_async(self, workflow_name: str, context: dict) -> dict:
        """Run a registered workflow, awaiting it when it is asynchronous.

        Raises:
            KeyError: If the workflow name is unknown.
        """

        workflow = self._lookup(workflow_name)
        started = perf_counter()
        try:
            if callable(getattr(workflow, "run_async", None)):
                result = await workflow.run_async(context)
            else:
                result = workflow.run(context)
        except Exception as exc:
            self._log_failure(workflow_name, started, exc)
            raise
        self._log_success(workflow_name, started, context)
        return result

    def register(self, workflow: Any) -> None:
        """Register a workflow implementation under its ``name``."""

        self.workflows[workflow.name] = workflow

    def _lookup(self, workflow_name: str) -> Any:
        workflow = self.workflows.get(workflow_name)
        if not workflow:
            raise KeyError(f"Workflow '{workflow_name}' is not registered.")
        return workflow

    def _log_failure(self, workflow_name: str, started: float, exc: Exception) -> None:
        duration_ms = (perf_counter() - started) * 1000
        self._logger.error(
            "workflow_failed",
            extra={
                "tool": workflow_name,
                "duration_ms": round(duration_ms, 2),
                "error": str(exc),
            },
            exc_info=True,
        )

    def _log_success(self, workflow_name: str, started: float, context: dict) -> None:
        duration_ms = (perf_counter() - started) * 1000
        self._logger.info(
            "workflow_completed",
            extra={
                "tool": workflow_name,
                "duration_ms": round(duration_ms, 2),
                "context_keys": sorted(context.keys()),
            },
        )
