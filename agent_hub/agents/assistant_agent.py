from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from langchain_core.messages import AnyMessage, BaseMessage, HumanMessage
from langchain_core.prompts import BasePromptTemplate
from langchain_core.runnables import RunnableConfig, RunnableLambda
from langchain_core.tools import BaseTool
from langgraph.checkpoint.base import BaseCheckpointSaver
from langgraph.graph import StateGraph, START, END
from langgraph.graph.message import add_messages
from langgraph.prebuilt import ToolNode, tools_condition
from typing_extensions import Annotated, TypedDict

from ..config import get_logger
from ..core.instrumentation import log_invoke_start, log_invoke_end, llm_meta
from ..memory.history import recent_messages
from ..memory.working_memory import DEFAULT_RESOURCE, WorkingMemory, resource_id_from_config

log = get_logger(__name__)


class AssistantState(TypedDict):
    messages: Annotated[List[AnyMessage], add_messages]


def message_text(msg: BaseMessage) -> str:
    """Plain text of a chat message; Gemini may return a list of content parts."""
    content = msg.content
    if isinstance(content, str):
        return content
    parts: List[str] = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(str(part.get("text", "")))
    return "".join(parts)


class AssistantAgent:
    """
    Conversational agent with tools and memory, compiled as a LangGraph loop:

        START → agent ──(tool calls?)──► tools ─┐
                  ▲                             │
                  └─────────────────────────────┘
                  └──(no tool calls)──► END

    # Contract
    - Input state:  {"user_input": str, "thread_id"?: str, "resource_id"?: str}
    - Output state: {"text": str, "thread_id": str, "resource_id": str}
      resource_id defaults to "default-user"; thread_id defaults to resource_id,
      so one user keeps a single running conversation unless told otherwise.

    # Memory
    - Conversation history lives in the checkpointer, keyed by thread_id. The
      model only sees the last `last_messages` messages (window opens on a
      human turn).
    - With `working_memory`, the per-resource profile is rendered into the
      prompt variable `working_memory` and the model gets the
      `update_working_memory` tool to rewrite it.

    # Prompt
    - A ChatPromptTemplate with a `messages` placeholder; `prompt_vars` fill
      any other variables (e.g. notes_dir).

    # Async
    - MCP tools are coroutine-only and the sqlite checkpointer is async, so
      agents opened by the hub must be called through `ainvoke`. `invoke`
      works with sync tools and the in-memory (or no) checkpointer.

    # Error surface
    - Model and checkpointer exceptions propagate; tool exceptions are sent
      back to the model as tool output.
    """

    def __init__(
        self,
        name: str,
        llm,
        prompt: BasePromptTemplate,
        *,
        tools: Sequence[BaseTool] = (),
        checkpointer: Optional[BaseCheckpointSaver] = None,
        last_messages: Optional[int] = 20,
        working_memory: Optional[WorkingMemory] = None,
        prompt_vars: Optional[Mapping[str, Any]] = None,
    ):
        self.name = name
        self.llm = llm
        self.prompt = prompt
        self.checkpointer = checkpointer
        self.last_messages = last_messages
        self.working_memory = working_memory
        self.prompt_vars = dict(prompt_vars or {})

        self.tools: List[BaseTool] = list(tools)
        if working_memory is not None:
            self.tools.append(working_memory.as_tool())

        self.model = llm.bind_tools(self.tools) if self.tools else llm
        self.meta = {"agent": name, "tool_count": len(self.tools), **llm_meta(llm)}
        self.graph = self._build_graph()

    # ── graph ──
    def _prompt_inputs(self, state: AssistantState, config: RunnableConfig) -> Dict[str, Any]:
        inputs = dict(self.prompt_vars)
        inputs["messages"] = recent_messages(state["messages"], self.last_messages)
        if self.working_memory is not None:
            inputs["working_memory"] = self.working_memory.load(resource_id_from_config(config))
        return inputs

    def _build_graph(self):
        def n_agent(state: AssistantState, config: RunnableConfig) -> Dict[str, Any]:
            prompt_value = self.prompt.invoke(self._prompt_inputs(state, config))
            return {"messages": [self.model.invoke(prompt_value, config)]}

        async def an_agent(state: AssistantState, config: RunnableConfig) -> Dict[str, Any]:
            prompt_value = await self.prompt.ainvoke(self._prompt_inputs(state, config))
            return {"messages": [await self.model.ainvoke(prompt_value, config)]}

        g = StateGraph(AssistantState)
        g.add_node("agent", RunnableLambda(n_agent, afunc=an_agent, name="agent"))
        g.add_edge(START, "agent")
        if self.tools:
            g.add_node("tools", ToolNode(self.tools))
            g.add_conditional_edges("agent", tools_condition)
            g.add_edge("tools", "agent")
        else:
            g.add_edge("agent", END)
        return g.compile(checkpointer=self.checkpointer)

    # ── helpers ──
    @staticmethod
    def _ids(state: Mapping[str, Any]) -> Tuple[str, str]:
        resource_id = str(state.get("resource_id") or DEFAULT_RESOURCE)
        thread_id = str(state.get("thread_id") or resource_id)
        return thread_id, resource_id

    def _run_args(self, state: Mapping[str, Any]) -> Tuple[Dict[str, Any], RunnableConfig, str, str]:
        thread_id, resource_id = self._ids(state)
        graph_input = {"messages": [HumanMessage(content=str(state.get("user_input", "")))]}
        config: RunnableConfig = {"configurable": {"thread_id": thread_id, "resource_id": resource_id}}
        return graph_input, config, thread_id, resource_id

    @staticmethod
    def _output(result: Mapping[str, Any], thread_id: str, resource_id: str) -> Dict[str, Any]:
        messages = result.get("messages") or []
        text = message_text(messages[-1]) if messages else ""
        return {"text": text, "thread_id": thread_id, "resource_id": resource_id}

    # ── Agent protocol ──
    def invoke(self, state: Mapping[str, Any]) -> Dict[str, Any]:
        t0 = log_invoke_start(log, f"AssistantAgent:{self.name}", state, extra=self.meta)
        graph_input, config, thread_id, resource_id = self._run_args(state)
        result = self.graph.invoke(graph_input, config)
        out = self._output(result, thread_id, resource_id)
        log_invoke_end(log, f"AssistantAgent:{self.name}", t0, out, extra=self.meta)
        return out

    async def ainvoke(self, state: Mapping[str, Any]) -> Dict[str, Any]:
        t0 = log_invoke_start(log, f"AssistantAgent:{self.name}", state, extra=self.meta)
        graph_input, config, thread_id, resource_id = self._run_args(state)
        result = await self.graph.ainvoke(graph_input, config)
        out = self._output(result, thread_id, resource_id)
        log_invoke_end(log, f"AssistantAgent:{self.name}", t0, out, extra=self.meta)
        return out
