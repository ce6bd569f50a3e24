from __future__ import annotations
from .engine import (  # noqa: F401
    BranchNotMatchedError,
    Step,
    StepValidationError,
    Workflow,
    WorkflowError,
    WorkflowRun,
    WorkflowRunResult,
    create_step,
)

__all__ = [
    "BranchNotMatchedError",
    "Step",
    "StepValidationError",
    "Workflow",
    "WorkflowError",
    "WorkflowRun",
    "WorkflowRunResult",
    "create_step",
]
