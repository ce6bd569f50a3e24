# agent_hub/app/routes/agents.py
from __future__ import annotations

import inspect
import time
from typing import Any, Dict, List, cast

from fastapi import APIRouter, HTTPException, Request

from ...config import get_logger
from ...hub import AgentHub
from ...schemas.io import InvokeRequest, InvokeResponse

log = get_logger(__name__)
router = APIRouter(prefix="/agents", tags=["agents"])


def _hub(request: Request) -> AgentHub:
    return request.app.state.hub


async def _invoke_agent(agent: Any, state: Dict[str, Any]) -> Dict[str, Any]:
    """
    Prefer ainvoke (MCP tools and the sqlite history are async); fall back to invoke.
    Always return Dict[str, Any] or raise 500 if the agent returns a non-dict.
    """
    maybe = getattr(agent, "ainvoke", None)
    result = maybe(state) if callable(maybe) else agent.invoke(state)
    if inspect.isawaitable(result):
        result = await result
    if not isinstance(result, dict):
        raise HTTPException(500, f"Agent {type(agent).__name__} returned non-dict: {type(result).__name__}")
    return cast(Dict[str, Any], result)


@router.get("", response_model=List[str])
def list_agents(request: Request) -> List[str]:
    return _hub(request).agent_names()


@router.post("/{agent_name}/invoke", response_model=InvokeResponse)
async def invoke_agent(agent_name: str, req: InvokeRequest, request: Request) -> InvokeResponse:
    hub = _hub(request)
    if agent_name not in hub.agent_names():
        raise HTTPException(404, f"Unknown agent: {agent_name}")

    t0 = time.perf_counter()
    try:
        agent = await hub.agent(agent_name)
        out = await _invoke_agent(agent, req.state)
    except HTTPException:
        raise
    except Exception as e:
        log.exception("agent.failed", extra={"agent": agent_name})
        raise HTTPException(502, f"Agent {agent_name} failed: {e}") from e

    ms = int((time.perf_counter() - t0) * 1000)
    return InvokeResponse(agent=agent_name, ms=ms, state_in=req.state, state_out=out)
