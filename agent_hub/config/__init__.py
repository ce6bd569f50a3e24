from __future__ import annotations
from .config import Config, LLMDefaults, MemorySettings, MCPServerSettings  # noqa: F401
from .logging_config import init_logging, get_logger  # noqa: F401

__all__ = ["Config", "LLMDefaults", "MemorySettings", "MCPServerSettings", "init_logging", "get_logger"]
