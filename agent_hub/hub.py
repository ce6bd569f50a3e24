"""
AgentHub: the one place that knows which workflows and agents exist.

Workflows are committed up front (they are cheap and stateless). Agents may
hold MCP connections and database handles, so they are opened lazily on
first use, cached, and closed together by `aclose()`.
"""

from __future__ import annotations
import asyncio
import contextlib
from typing import Any, AsyncContextManager, Callable, Dict, List, Optional

from .agents.content_agent import ContentAnalysisAgent
from .agents.financial_agent import open_financial_agent
from .agents.personal_assistant import open_personal_assistant
from .config import Config, get_logger
from .core.agent_protocol import Agent
from .tools import ToolRegistry, register_default_tools
from .workflows.content_branched import build_branched_workflow
from .workflows.content_workflow import build_content_workflow
from .workflows.course_branch import build_course_branch_workflow, build_logical_operators_workflow
from .workflows.engine import Workflow

log = get_logger(__name__)

AgentOpener = Callable[[], AsyncContextManager[Agent]]


@contextlib.asynccontextmanager
async def _ready(agent: Agent):
    yield agent


class AgentHub:
    def __init__(self) -> None:
        self._workflows: Dict[str, Workflow] = {}
        self._openers: Dict[str, AgentOpener] = {}
        self._agents: Dict[str, Agent] = {}
        self._lock = asyncio.Lock()
        self._stack = contextlib.AsyncExitStack()

    # ── workflows ──
    def add_workflow(self, workflow: Workflow) -> None:
        if not workflow.committed:
            raise ValueError(f"Workflow '{workflow.id}' must be committed before registering")
        self._workflows[workflow.id] = workflow

    def workflow(self, workflow_id: str) -> Workflow:
        try:
            return self._workflows[workflow_id]
        except KeyError:
            raise KeyError(f"Unknown workflow: {workflow_id}") from None

    def workflow_ids(self) -> List[str]:
        return sorted(self._workflows)

    def describe_workflows(self) -> List[Dict[str, Any]]:
        return [
            {"id": wf.id, "description": wf.description, "steps": [s.id for s in wf.steps]}
            for wf in (self._workflows[k] for k in self.workflow_ids())
        ]

    # ── agents ──
    def add_agent(self, name: str, opener: AgentOpener) -> None:
        self._openers[name] = opener

    def add_agent_instance(self, name: str, agent: Agent) -> None:
        """Register an already-built agent (no resources to manage)."""
        self._openers[name] = lambda: _ready(agent)

    def agent_names(self) -> List[str]:
        return sorted(self._openers)

    async def agent(self, name: str) -> Agent:
        if name not in self._openers:
            raise KeyError(f"Unknown agent: {name}")
        async with self._lock:
            if name not in self._agents:
                self._agents[name] = await self._stack.enter_async_context(self._openers[name]())
                log.info("hub.agent_opened", extra={"agent": name})
            return self._agents[name]

    async def aclose(self) -> None:
        async with self._lock:
            await self._stack.aclose()
            self._agents.clear()
            self._stack = contextlib.AsyncExitStack()
        log.info("hub.closed")


def create_hub(cfg: Optional[Config] = None, registry: Optional[ToolRegistry] = None) -> AgentHub:
    """Hub with the bundled workflows and the financial, personal and content agents."""
    cfg = cfg or Config.load()
    reg = register_default_tools(cfg, registry or ToolRegistry())
    hub = AgentHub()

    content_agent: Dict[str, ContentAnalysisAgent] = {}

    def content_analyzer() -> ContentAnalysisAgent:
        # Built on first use so the workflows run without Vertex settings
        if "agent" not in content_agent:
            content_agent["agent"] = ContentAnalysisAgent.from_config(cfg)
        return content_agent["agent"]

    hub.add_workflow(build_content_workflow(content_analyzer))
    hub.add_workflow(build_branched_workflow())
    hub.add_workflow(build_logical_operators_workflow())
    hub.add_workflow(build_course_branch_workflow())

    hub.add_agent("financial", lambda: open_financial_agent(cfg, registry=reg))
    hub.add_agent("personal", lambda: open_personal_assistant(cfg))
    hub.add_agent("content", lambda: _ready(content_analyzer()))
    return hub
