from __future__ import annotations
from typing import Dict
import importlib
import pkgutil
import re

from langchain_core.prompts import BasePromptTemplate

# Public registry (filled by discovery)
PROMPTS: Dict[str, BasePromptTemplate] = {}

_NAME_CLEAN = re.compile(r"_prompt$", re.IGNORECASE)

def _norm_from_attr(attr_name: str) -> str:
    """
    'FINANCIAL_ASSISTANT_PROMPT' -> 'financial_assistant'
    """
    return _NAME_CLEAN.sub("", attr_name.lower()).rstrip("_")

def _register(name: str, prompt: BasePromptTemplate) -> None:
    if not isinstance(prompt, BasePromptTemplate):
        raise TypeError(f"Prompt '{name}' must be a BasePromptTemplate")
    PROMPTS[name] = prompt

def _register_from_module(mod) -> None:
    """
    1) If the module defines __all_prompts__ (dict[name, prompt]), use it exactly.
    2) Else register every BasePromptTemplate attribute under its normalized name.
    """
    custom = getattr(mod, "__all_prompts__", None)
    if isinstance(custom, dict):
        for k, v in custom.items():
            _register(k, v)
        return

    for attr, obj in vars(mod).items():
        if isinstance(obj, BasePromptTemplate):
            _register(_norm_from_attr(attr), obj)

def _discover() -> None:
    """Import every `*_prompt` submodule and register what it exposes."""
    pkg = importlib.import_module(__name__)
    for m in pkgutil.iter_modules(pkg.__path__):
        if m.ispkg or not m.name.endswith("_prompt"):
            continue
        _register_from_module(importlib.import_module(f"{__name__}.{m.name}"))

def reload_prompts() -> Dict[str, str]:
    """Dev helper: clear & re-discover prompts; return summary."""
    PROMPTS.clear()
    _discover()
    return list_prompts()

def get_prompt(name: str) -> BasePromptTemplate:
    try:
        return PROMPTS[name]
    except KeyError:
        raise KeyError(f"Unknown prompt: {name}. Known: {sorted(PROMPTS.keys())}") from None

def list_prompts() -> Dict[str, str]:
    return {k: type(v).__name__ for k, v in PROMPTS.items()}

# ---- initial discovery at import time ----
_discover()

__all__ = ["PROMPTS", "get_prompt", "list_prompts", "reload_prompts"]
