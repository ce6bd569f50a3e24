from __future__ import annotations
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class InvokeRequest(BaseModel):
    state: Dict[str, Any] = Field(default_factory=dict)

class InvokeResponse(BaseModel):
    agent: str
    ms: int
    state_in: Dict[str, Any]
    state_out: Dict[str, Any]

class WorkflowRunRequest(BaseModel):
    input: Dict[str, Any] = Field(default_factory=dict)
    run_id: Optional[str] = None

class WorkflowInfo(BaseModel):
    id: str
    description: str
    steps: List[str]
