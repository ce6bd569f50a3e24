from __future__ import annotations
from typing import Protocol, Mapping, Dict, Any

class Agent(Protocol):
    """Contract shared by every agent the hub can serve."""
    def invoke(self, state: Mapping[str, Any]) -> Dict[str, Any]:
        ...

    async def ainvoke(self, state: Mapping[str, Any]) -> Dict[str, Any]:
        ...
