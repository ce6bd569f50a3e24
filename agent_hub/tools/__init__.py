from __future__ import annotations
from typing import Optional

from ..config import Config
from .registry import ToolRegistry, registry
from .transactions_tool import make_get_transactions

def register_default_tools(cfg: Config, reg: Optional[ToolRegistry] = None) -> ToolRegistry:
    """Register the local tools agents can reference by name in their profile."""
    reg = reg or registry
    reg.register("get_transactions", make_get_transactions(cfg.transactions_url))
    return reg

__all__ = ["ToolRegistry", "registry", "register_default_tools"]
