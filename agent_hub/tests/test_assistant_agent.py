import pytest
from langchain_core.messages import HumanMessage, SystemMessage, ToolMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder
from langgraph.checkpoint.memory import InMemorySaver

from agent_hub.agents.assistant_agent import AssistantAgent, message_text
from agent_hub.memory.working_memory import WorkingMemory
from agent_hub.tools import ToolRegistry
from helpers.fake_llm import make_tool_llm, reply, tool_call

PROMPT = ChatPromptTemplate.from_messages([
    ("system", "You are a test assistant. Memory: {working_memory}"),
    MessagesPlaceholder("messages"),
])

def _agent(llm, **kwargs) -> AssistantAgent:
    kwargs.setdefault("prompt_vars", {"working_memory": "none"})
    return AssistantAgent("tester", llm, PROMPT, **kwargs)

def _humans(messages):
    return [m.content for m in messages if isinstance(m, HumanMessage)]


def test_plain_reply_and_default_ids():
    llm = make_tool_llm([reply("Hello Sam")])
    out = _agent(llm).invoke({"user_input": "Hi, I'm Sam"})
    assert out == {"text": "Hello Sam", "thread_id": "default-user", "resource_id": "default-user"}
    system, human = llm.seen[0]
    assert isinstance(system, SystemMessage) and "Memory: none" in system.content
    assert human.content == "Hi, I'm Sam"

def test_thread_defaults_to_resource():
    out = _agent(make_tool_llm([reply("ok")])).invoke({"user_input": "x", "resource_id": "ana"})
    assert (out["thread_id"], out["resource_id"]) == ("ana", "ana")

def test_tool_loop_runs_tool_then_answers():
    calls = []
    reg = ToolRegistry()

    def exchange_rate(currency: str) -> str:
        """Current USD exchange rate for a currency code."""
        calls.append(currency)
        return "1.10"

    reg.register("exchange_rate", exchange_rate)
    llm = make_tool_llm([tool_call("exchange_rate", {"currency": "EUR"}), reply("EUR is 1.10 USD")])
    agent = _agent(llm, tools=reg.as_langchain_tools())

    out = agent.invoke({"user_input": "EUR rate?"})
    assert out["text"] == "EUR is 1.10 USD"
    assert calls == ["EUR"]
    assert llm.bound_tools == ["exchange_rate"]
    tool_msgs = [m for m in llm.seen[1] if isinstance(m, ToolMessage)]
    assert tool_msgs and tool_msgs[0].content == "1.10"

def test_history_is_kept_per_thread():
    llm = make_tool_llm([reply("first"), reply("second"), reply("other")])
    agent = _agent(llm, checkpointer=InMemorySaver())

    agent.invoke({"user_input": "one", "thread_id": "t1"})
    agent.invoke({"user_input": "two", "thread_id": "t1"})
    agent.invoke({"user_input": "fresh", "thread_id": "t2"})

    assert _humans(llm.seen[1]) == ["one", "two"]
    assert _humans(llm.seen[2]) == ["fresh"]

def test_only_recent_messages_reach_the_model():
    llm = make_tool_llm([reply("a1"), reply("a2")])
    agent = _agent(llm, checkpointer=InMemorySaver(), last_messages=2)
    agent.invoke({"user_input": "old", "thread_id": "t"})
    agent.invoke({"user_input": "new", "thread_id": "t"})
    # [old, a1, new] trimmed to the last two, then moved to the human turn
    assert _humans(llm.seen[1]) == ["new"]
    assert len(llm.seen[1]) == 2  # system + new

def test_working_memory_tool_updates_the_prompt():
    wm = WorkingMemory("<user></user>")
    llm = make_tool_llm([
        tool_call("update_working_memory", {"content": "<user>Sam, likes Rust</user>"}),
        reply("Noted!"),
        reply("You like Rust."),
    ])
    agent = _agent(llm, working_memory=wm, checkpointer=InMemorySaver())
    assert "update_working_memory" in llm.bound_tools

    agent.invoke({"user_input": "I'm Sam and I like Rust", "resource_id": "sam"})
    assert wm.load("sam") == "<user>Sam, likes Rust</user>"
    assert "Memory: <user></user>" in llm.seen[0][0].content

    agent.invoke({"user_input": "What do I like?", "resource_id": "sam"})
    assert "Sam, likes Rust" in llm.seen[-1][0].content

@pytest.mark.asyncio
async def test_ainvoke_with_tools():
    reg = ToolRegistry()

    async def lookup(key: str) -> str:
        """Look up a note."""
        return f"note:{key}"

    reg.register("lookup", lookup)
    llm = make_tool_llm([tool_call("lookup", {"key": "todo"}), reply("Your note says todo")])
    out = await _agent(llm, tools=reg.as_langchain_tools()).ainvoke({"user_input": "notes?", "thread_id": "n"})
    assert out == {"text": "Your note says todo", "thread_id": "n", "resource_id": "default-user"}

def test_message_text_handles_content_parts():
    msg = reply("")
    msg.content = [{"type": "text", "text": "Hello "}, {"type": "image_url", "image_url": "x"}, "world"]
    assert message_text(msg) == "Hello world"
