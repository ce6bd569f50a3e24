# agent_hub/app/routes/workflows.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Request

from ...config import get_logger
from ...hub import AgentHub
from ...schemas.io import WorkflowInfo, WorkflowRunRequest
from ...workflows.engine import WorkflowRunResult

log = get_logger(__name__)
router = APIRouter(prefix="/workflows", tags=["workflows"])


def _hub(request: Request) -> AgentHub:
    return request.app.state.hub


@router.get("", response_model=List[WorkflowInfo])
def list_workflows(request: Request) -> List[WorkflowInfo]:
    return [WorkflowInfo(**w) for w in _hub(request).describe_workflows()]


@router.post("/{workflow_id}/runs", response_model=WorkflowRunResult)
async def run_workflow(workflow_id: str, req: WorkflowRunRequest, request: Request) -> WorkflowRunResult:
    """Failed runs still answer 200; check `status` and `error` in the body."""
    try:
        wf = _hub(request).workflow(workflow_id)
    except KeyError:
        raise HTTPException(404, f"Unknown workflow: {workflow_id}") from None
    return await wf.create_run(req.run_id).astart(req.input)
