from types import SimpleNamespace

import pytest
from fastmcp.exceptions import ToolError
from mcp.types import EmbeddedResource, ImageContent, TextContent, TextResourceContents, Tool

from agent_hub.config import MCPServerSettings
from agent_hub.mcp.toolset import MCPToolset, content_to_text


class FakeClient:
    """Stands in for fastmcp.Client: records its config and serves scripted tools."""

    def __init__(self, config):
        self.config = config
        self.entered = False
        self.exited = False
        self.calls = []

    async def __aenter__(self):
        self.entered = True
        return self

    async def __aexit__(self, *exc):
        self.exited = True

    async def list_tools(self):
        return [
            Tool(
                name="read_file",
                description="Read a file from the notes directory",
                inputSchema={"type": "object", "properties": {"path": {"type": "string"}}, "required": ["path"]},
            ),
            Tool(name="explode", description=None, inputSchema={"type": "object", "properties": {}}),
            Tool(name="soft_fail", description="Returns an error result", inputSchema={"type": "object", "properties": {}}),
        ]

    async def call_tool(self, name, arguments):
        self.calls.append((name, arguments))
        if name == "explode":
            raise ToolError("server exploded")
        if name == "soft_fail":
            return SimpleNamespace(content=[TextContent(type="text", text="no such note")], is_error=True)
        return SimpleNamespace(content=[TextContent(type="text", text=f"contents of {arguments['path']}")], is_error=False)


def _servers():
    return {
        "text_editor": MCPServerSettings(command="npx", args=["-y", "fs-server", "{notes_dir}"]),
        "zapier": MCPServerSettings(url_env="AGENT_HUB_TEST_ZAPIER_URL"),
    }


def test_content_to_text_flattens_blocks():
    blocks = [
        TextContent(type="text", text="hello"),
        ImageContent(type="image", data="aGk=", mimeType="image/png"),
        EmbeddedResource(type="resource", resource=TextResourceContents(uri="file:///notes/todo.md", text="- buy milk")),
    ]
    assert content_to_text(blocks) == "hello\n[Image: image/png]\n- buy milk"
    assert content_to_text([]) == ""

def test_unconfigured_servers_are_skipped(monkeypatch):
    monkeypatch.delenv("AGENT_HUB_TEST_ZAPIER_URL", raising=False)
    made = []
    ts = MCPToolset(_servers(), notes_dir="/tmp/notes", client_factory=lambda cfg: made.append(cfg) or FakeClient(cfg))
    assert list(ts.servers) == ["text_editor"]
    assert made == [{"mcpServers": {"text_editor": {"command": "npx", "args": ["-y", "fs-server", "/tmp/notes"]}}}]

def test_url_from_env_is_used(monkeypatch):
    monkeypatch.setenv("AGENT_HUB_TEST_ZAPIER_URL", "https://mcp.example.test/sse")
    ts = MCPToolset(_servers(), client_factory=FakeClient)
    assert ts.client.config["mcpServers"]["zapier"] == {"url": "https://mcp.example.test/sse"}

@pytest.mark.asyncio
async def test_no_servers_means_no_client_and_no_tools():
    async with MCPToolset({"zapier": MCPServerSettings()}, client_factory=FakeClient) as ts:
        assert ts.client is None
        assert ts.tools == []

@pytest.mark.asyncio
async def test_tools_are_wrapped_and_callable():
    ts = MCPToolset(_servers(), client_factory=FakeClient)
    async with ts:
        assert ts.client.entered
        tools = {t.name: t for t in ts.tools}
        assert set(tools) == {"read_file", "explode", "soft_fail"}
        assert tools["read_file"].description == "Read a file from the notes directory"
        assert tools["explode"].description == "explode"

        assert await tools["read_file"].ainvoke({"path": "todo.md"}) == "contents of todo.md"
        assert ts.client.calls[-1] == ("read_file", {"path": "todo.md"})

        # Remote failures come back as tool output instead of raising
        assert "server exploded" in await tools["explode"].ainvoke({})
        assert "no such note" in await tools["soft_fail"].ainvoke({})
    assert ts.client.exited
    assert ts.tools == []

class ListingFailsClient(FakeClient):
    async def list_tools(self):
        raise RuntimeError("server closed the stream")

@pytest.mark.asyncio
async def test_client_is_closed_when_tool_listing_fails():
    ts = MCPToolset({"fs": MCPServerSettings(command="npx")}, client_factory=ListingFailsClient)
    with pytest.raises(RuntimeError, match="server closed the stream"):
        async with ts:
            pass
    assert ts.client.entered and ts.client.exited
    assert ts.tools == []

@pytest.mark.asyncio
async def test_tool_argument_schema_comes_from_the_server():
    async with MCPToolset(_servers(), client_factory=FakeClient) as ts:
        read_file = next(t for t in ts.tools if t.name == "read_file")
        assert read_file.args_schema["required"] == ["path"]
