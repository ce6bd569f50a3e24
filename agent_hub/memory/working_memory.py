from typing import Any, Mapping, Optional

from langchain_core.runnables import RunnableConfig
from langchain_core.tools import BaseTool, tool
from langgraph.store.base import BaseStore
from langgraph.store.memory import InMemoryStore

from ..config import get_logger

log = get_logger(__name__)

DEFAULT_RESOURCE = "default-user"

def resource_id_from_config(config: Optional[Mapping[str, Any]]) -> str:
    """The user/resource a run belongs to, from config["configurable"]["resource_id"]."""
    configurable = (config or {}).get("configurable") or {}
    return str(configurable.get("resource_id") or DEFAULT_RESOURCE)

class WorkingMemory:
    """
    A free-form profile per resource (user) that the model rewrites as it learns.

    The current profile is rendered into the system prompt on every turn; the
    `update_working_memory` tool replaces it. Until the first update the blank
    `template` is shown so the model knows which fields to fill.
    """

    namespace = ("working_memory",)
    key = "profile"

    def __init__(self, template: str, store: Optional[BaseStore] = None):
        self.template = template
        self.store = store or InMemoryStore()

    def load(self, resource_id: str) -> str:
        item = self.store.get((*self.namespace, resource_id), self.key)
        if item is None:
            return self.template
        return str(item.value.get("content", self.template))

    def save(self, resource_id: str, content: str) -> None:
        self.store.put((*self.namespace, resource_id), self.key, {"content": content})
        log.info("working_memory.updated", extra={"resource_id": resource_id, "chars": len(content)})

    def as_tool(self) -> BaseTool:
        memory = self

        @tool("update_working_memory")
        def update_working_memory(content: str, config: RunnableConfig) -> str:
            """Replace the stored working memory about the user. Send the full profile with every known field filled in."""
            memory.save(resource_id_from_config(config), content)
            return "Working memory updated."

        return update_working_memory
