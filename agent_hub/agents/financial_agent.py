from __future__ import annotations
import contextlib
from typing import AsyncIterator, Optional

from ..config import Config, get_logger
from ..llm.vertex import get_vertex_chat_model
from ..mcp.toolset import MCPToolset
from ..memory.checkpoint import open_checkpointer
from ..prompts import get_prompt
from ..tools import ToolRegistry, register_default_tools
from .assistant_agent import AssistantAgent

log = get_logger(__name__)

AGENT_NAME = "financial"


@contextlib.asynccontextmanager
async def open_financial_agent(
    cfg: Optional[Config] = None,
    *,
    llm=None,
    registry: Optional[ToolRegistry] = None,
    mcp_client_factory=None,
) -> AsyncIterator[AssistantAgent]:
    """
    Financial assistant: transaction CSV analysis plus Gmail, GitHub,
    Hacker News and notes through MCP.

    MCP connections and the history store stay open for the whole block.
    """
    cfg = cfg or Config.load()
    profile = cfg.agent_profile(AGENT_NAME)
    reg = registry or register_default_tools(cfg, ToolRegistry())
    mcp_kwargs = {"client_factory": mcp_client_factory} if mcp_client_factory else {}

    async with contextlib.AsyncExitStack() as stack:
        toolset = await stack.enter_async_context(
            MCPToolset(cfg.mcp_servers_for(AGENT_NAME), notes_dir=cfg.notes_dir, **mcp_kwargs)
        )
        checkpointer = await stack.enter_async_context(open_checkpointer(profile.memory))

        agent = AssistantAgent(
            AGENT_NAME,
            llm or get_vertex_chat_model(cfg, agent=AGENT_NAME),
            get_prompt("financial_assistant"),
            tools=[*reg.as_langchain_tools(profile.tools), *toolset.tools],
            checkpointer=checkpointer,
            last_messages=profile.memory.last_messages,
        )
        log.info("agent.opened", extra={"agent": AGENT_NAME, "tools": [t.name for t in agent.tools]})
        yield agent
