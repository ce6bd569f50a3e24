from __future__ import annotations
import asyncio
import inspect
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

from langchain_core.tools import BaseTool, StructuredTool

@dataclass
class ToolEntry:
    name: str
    func: Callable[..., Any]
    description: str

class ToolRegistry:
    """
    Named local tools (sync or async callables) that agents can be given.

    Main Features:
        - register(name, func, description=None)
        - call(name, **kwargs) / acall(name, **kwargs)
            Async functions are awaited; sync ones run in a worker thread
            under acall.
        - as_langchain_tools(names)
            Wrap selected entries as LangChain StructuredTools for bind_tools.
    """

    def __init__(self) -> None:
        self._tools: Dict[str, ToolEntry] = {}

    def register(self, name: str, func: Callable[..., Any], description: Optional[str] = None) -> None:
        """
        Register a callable tool under the given name (last one wins).

        Raises:
            TypeError: If `func` is not callable.
            ValueError: If no description is given and `func` has no docstring.
        """
        if not callable(func):
            raise TypeError("func must be callable")
        desc = description or inspect.getdoc(func)
        if not desc:
            raise ValueError(f"Tool '{name}' needs a description or a docstring")
        self._tools[name] = ToolEntry(name=name, func=func, description=desc)

    def names(self) -> List[str]:
        return sorted(self._tools)

    def get(self, name: str) -> Callable[..., Any]:
        """
        Raises:
            KeyError: If the tool name is not found.
        """
        if name not in self._tools:
            raise KeyError(f"Tool not found: {name}")
        return self._tools[name].func

    def call(self, name: str, **kwargs) -> Any:
        return self.get(name)(**kwargs)

    async def acall(self, name: str, **kwargs) -> Any:
        func = self.get(name)
        if inspect.iscoroutinefunction(func):
            return await func(**kwargs)
        return await asyncio.to_thread(func, **kwargs)

    def as_langchain_tools(self, names: Optional[Iterable[str]] = None) -> List[BaseTool]:
        """
        Wrap entries as StructuredTools; the argument schema is inferred from
        the function signature. Tool errors are returned to the model as text.
        """
        selected = self.names() if names is None else list(names)
        tools: List[BaseTool] = []
        for name in selected:
            self.get(name)  # KeyError for unknown names
            entry = self._tools[name]
            if inspect.iscoroutinefunction(entry.func):
                fn = {"coroutine": entry.func}
            else:
                fn = {"func": entry.func}
            tools.append(StructuredTool.from_function(
                name=entry.name,
                description=entry.description,
                handle_tool_error=True,
                **fn,
            ))
        return tools


# Global default registry instance
registry = ToolRegistry()
