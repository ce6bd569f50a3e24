from __future__ import annotations
import contextlib
from typing import AsyncIterator, Optional

from langgraph.store.base import BaseStore

from ..config import Config, get_logger
from ..llm.vertex import get_vertex_chat_model
from ..mcp.toolset import MCPToolset
from ..memory.checkpoint import open_checkpointer
from ..memory.working_memory import WorkingMemory
from ..prompts import get_prompt
from ..prompts.personal_prompt import WORKING_MEMORY_TEMPLATE
from .assistant_agent import AssistantAgent

log = get_logger(__name__)

AGENT_NAME = "personal"


@contextlib.asynccontextmanager
async def open_personal_assistant(
    cfg: Optional[Config] = None,
    *,
    llm=None,
    store: Optional[BaseStore] = None,
    mcp_client_factory=None,
) -> AsyncIterator[AssistantAgent]:
    """
    Personal assistant: email, tech news and notes, remembering what the
    user shares through a working-memory profile.
    """
    cfg = cfg or Config.load()
    profile = cfg.agent_profile(AGENT_NAME)
    mcp_kwargs = {"client_factory": mcp_client_factory} if mcp_client_factory else {}

    async with contextlib.AsyncExitStack() as stack:
        toolset = await stack.enter_async_context(
            MCPToolset(cfg.mcp_servers_for(AGENT_NAME), notes_dir=cfg.notes_dir, **mcp_kwargs)
        )
        checkpointer = await stack.enter_async_context(open_checkpointer(profile.memory))

        working_memory = None
        if profile.memory.working_memory:
            working_memory = WorkingMemory(WORKING_MEMORY_TEMPLATE, store=store)

        agent = AssistantAgent(
            AGENT_NAME,
            llm or get_vertex_chat_model(cfg, agent=AGENT_NAME),
            get_prompt("personal_assistant"),
            tools=toolset.tools,
            checkpointer=checkpointer,
            last_messages=profile.memory.last_messages,
            working_memory=working_memory,
            prompt_vars={"notes_dir": cfg.notes_dir, "working_memory": WORKING_MEMORY_TEMPLATE},
        )
        log.info("agent.opened", extra={"agent": AGENT_NAME, "tools": [t.name for t in agent.tools]})
        yield agent
