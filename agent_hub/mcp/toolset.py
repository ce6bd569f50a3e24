"""
MCP (Model Context Protocol) tools for assistant agents.

MCPToolset connects to the configured servers through one fastmcp.Client and
exposes every remote tool as an async LangChain StructuredTool, so agents can
bind them next to local tools.
"""

from __future__ import annotations
import sys
from typing import Any, Callable, Dict, List, Mapping, Optional

from fastmcp import Client
from fastmcp.exceptions import ToolError
from langchain_core.tools import BaseTool, StructuredTool, ToolException
from mcp.types import EmbeddedResource, ImageContent, TextContent

from ..config import get_logger
from ..config.config import MCPServerSettings

log = get_logger(__name__)


def _field(obj: Any, name: str, legacy: str) -> Any:
    """Snake-case attribute when the installed mcp/fastmcp has it, camelCase otherwise."""
    if name in getattr(type(obj), "model_fields", {}) or hasattr(type(obj), name):
        return getattr(obj, name)
    return getattr(obj, legacy, None)


def content_to_text(content: list) -> str:
    """
    Flatten MCP content blocks into text for a tool message.

    TextContent contributes its text, images a placeholder with the MIME type,
    embedded resources their text (or a placeholder for binary blobs).
    """
    if not content:
        return ""

    parts = []
    for item in content:
        if isinstance(item, TextContent):
            parts.append(item.text)
        elif isinstance(item, ImageContent):
            parts.append(f"[Image: {_field(item, 'mime_type', 'mimeType')}]")
        elif isinstance(item, EmbeddedResource):
            resource = item.resource
            if getattr(resource, "text", None):
                parts.append(resource.text)
            elif getattr(resource, "blob", None):
                parts.append(f"[Binary data: {_field(resource, 'mime_type', 'mimeType') or 'unknown'}]")
            else:
                parts.append(f"[Resource: {getattr(resource, 'uri', 'unknown')}]")
        else:
            parts.append(str(item))
    return "\n".join(parts)


class MCPToolset:
    """
    Async context manager owning the MCP connections of one agent.

        async with MCPToolset(cfg.mcp_servers_for("personal"), notes_dir=cfg.notes_dir) as ts:
            tools = ts.tools

    Servers without a URL or command (e.g. ZAPIER_MCP_URL unset) are skipped
    with a warning instead of failing the whole agent.
    """

    def __init__(
        self,
        servers: Mapping[str, MCPServerSettings],
        *,
        notes_dir: str = "notes",
        client_factory: Callable[[Dict[str, Any]], Any] = Client,
    ):
        self.servers: Dict[str, MCPServerSettings] = {}
        for name, server in servers.items():
            if server.is_configured():
                self.servers[name] = server
            else:
                log.warning("mcp.server_skipped", extra={"server": name, "reason": "no url or command"})

        self.client: Optional[Any] = None
        if self.servers:
            payload = {name: s.to_client_entry(notes_dir) for name, s in self.servers.items()}
            self.client = client_factory({"mcpServers": payload})
        self.tools: List[BaseTool] = []

    async def __aenter__(self) -> "MCPToolset":
        if self.client is not None:
            await self.client.__aenter__()
            try:
                listed = await self.client.list_tools()
            except BaseException:
                await self.client.__aexit__(*sys.exc_info())
                raise
            self.tools = [self._wrap(t) for t in listed]
        log.info("mcp.connected", extra={"servers": sorted(self.servers), "tool_count": len(self.tools)})
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.client is not None:
            await self.client.__aexit__(exc_type, exc, tb)
        self.tools = []

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> str:
        if self.client is None:
            raise ToolException("MCP client not initialized")
        try:
            result = await self.client.call_tool(name, arguments)
        except ToolError as e:
            raise ToolException(str(e)) from e
        text = content_to_text(result.content)
        if getattr(result, "is_error", False):
            raise ToolException(text or f"MCP tool {name} failed")
        return text

    def _wrap(self, tool: Any) -> BaseTool:
        name = tool.name

        async def _call(**kwargs: Any) -> str:
            return await self.call_tool(name, kwargs)

        return StructuredTool(
            name=name,
            description=tool.description or name,
            args_schema=_field(tool, "input_schema", "inputSchema"),
            coroutine=_call,
            handle_tool_error=True,
        )
