# tests/conftest.py
from __future__ import annotations
import pytest

from langchain_core.language_models.fake_chat_models import FakeListChatModel

from agent_hub.config import Config, MCPServerSettings
from agent_hub.workflows import content_branched

# ---- Fake LLM factory ----
@pytest.fixture
def fake_llm_factory():
    """
    Usage:
        llm = fake_llm_factory(["hello", "world"])
    This cycles responses in order.
    """
    def _make(responses):
        return FakeListChatModel(responses=responses)
    return _make

# ---- Offline config ----
@pytest.fixture
def cfg(tmp_path) -> Config:
    """
    Config built in code (no YAML, no env): no GCP project, in-memory history,
    and MCP servers that resolve to nothing so toolsets stay empty.
    """
    return Config(
        notes_dir=str(tmp_path / "notes"),
        transactions_url=None,
        mcp_servers={
            "zapier": MCPServerSettings(url_env="AGENT_HUB_TEST_UNSET_URL"),
            "hackernews": MCPServerSettings(),
        },
        agents={
            "financial": {
                "tools": ["get_transactions"],
                "mcp_servers": ["zapier", "hackernews"],
                "memory": {"backend": "memory"},
            },
            "personal": {
                "mcp_servers": ["zapier"],
                "memory": {"backend": "memory", "last_messages": 20, "working_memory": True},
            },
        },
    )

@pytest.fixture(autouse=True)
def _seeded_scores():
    content_branched.seed_scores(1234)
    yield
    content_branched.seed_scores(None)
