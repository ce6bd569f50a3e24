import pytest
from langchain_core.messages import AIMessage, HumanMessage, ToolMessage
from langgraph.checkpoint.memory import InMemorySaver

from agent_hub.config import MemorySettings
from agent_hub.memory.checkpoint import open_checkpointer
from agent_hub.memory.history import recent_messages
from agent_hub.memory.working_memory import DEFAULT_RESOURCE, WorkingMemory, resource_id_from_config

TEMPLATE = "<user><first_name></first_name></user>"


# ---- history window ----

def _conversation():
    return [
        HumanMessage("h1"), AIMessage("a1"),
        HumanMessage("h2"),
        AIMessage("", tool_calls=[{"name": "t", "args": {}, "id": "c1"}]),
        ToolMessage("tool out", tool_call_id="c1"),
        AIMessage("a2"),
    ]

def test_window_keeps_everything_when_short_enough():
    msgs = _conversation()
    assert recent_messages(msgs, 20) == msgs
    assert recent_messages(msgs, None) == msgs

def test_window_starts_on_a_human_turn():
    msgs = _conversation()
    # last 5 would start with a1; the window moves forward to h2
    assert recent_messages(msgs, 5) == msgs[2:]

def test_window_extends_back_over_a_tool_loop():
    msgs = _conversation()
    # last 2 are [tool, a2]; no human inside, so it reaches back to h2
    assert recent_messages(msgs, 2) == msgs[2:]


# ---- working memory ----

def test_working_memory_defaults_to_template_and_is_per_resource():
    wm = WorkingMemory(TEMPLATE)
    assert wm.load("sam") == TEMPLATE
    wm.save("sam", "<user><first_name>Sam</first_name></user>")
    assert "Sam" in wm.load("sam")
    assert wm.load("ana") == TEMPLATE

def test_update_tool_writes_for_the_configured_resource():
    wm = WorkingMemory(TEMPLATE)
    tool = wm.as_tool()
    assert tool.name == "update_working_memory"
    out = tool.invoke({"content": "<user>Ana</user>"}, config={"configurable": {"resource_id": "ana"}})
    assert out == "Working memory updated."
    assert wm.load("ana") == "<user>Ana</user>"
    assert wm.load(DEFAULT_RESOURCE) == TEMPLATE

def test_resource_id_from_config():
    assert resource_id_from_config({"configurable": {"resource_id": "x"}}) == "x"
    assert resource_id_from_config({}) == DEFAULT_RESOURCE
    assert resource_id_from_config(None) == DEFAULT_RESOURCE


# ---- checkpointers ----

@pytest.mark.asyncio
async def test_open_checkpointer_backends(tmp_path):
    async with open_checkpointer(MemorySettings(backend="none")) as saver:
        assert saver is None
    async with open_checkpointer(MemorySettings(backend="memory")) as saver:
        assert isinstance(saver, InMemorySaver)
    db = tmp_path / "nested" / "memory.db"
    async with open_checkpointer(MemorySettings(backend="sqlite", path=str(db))) as saver:
        assert saver is not None
    assert db.exists()

@pytest.mark.asyncio
async def test_open_checkpointer_rejects_unknown_backend():
    with pytest.raises(ValueError):
        async with open_checkpointer(MemorySettings(backend="mongo")):
            pass

def test_memory_settings_from_dict():
    s = MemorySettings.from_dict({"backend": "sqlite", "path": "x.db", "working_memory": True})
    assert (s.backend, s.path, s.last_messages, s.working_memory) == ("sqlite", "x.db", 20, True)
    assert MemorySettings.from_dict(None).backend == "memory"
