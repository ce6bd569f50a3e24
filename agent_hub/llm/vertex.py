from __future__ import annotations
from typing import Optional, Dict, Any

from langchain_google_vertexai import ChatVertexAI
from ..config.config import Config

# ChatVertexAI constructor allow-list
_CTOR_ALLOWED = {
    "project",
    "location",
    "model",
    "temperature",
    "top_p",
    "top_k",
    "max_output_tokens",
    "response_mime_type",
    "max_retries",
    # NOTE: credentials injected separately
}

# YAML name -> constructor name
_CTOR_ALIASES = {
    "timeout_s": "request_timeout",
}

def _split_kwargs(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Keep only the keys ChatVertexAI understands. Agent sections also carry
    tools / mcp_servers / memory, which are dropped here.
    """
    ctor: Dict[str, Any] = {}
    for k, v in raw.items():
        if v is None:
            continue
        if k in _CTOR_ALLOWED:
            ctor[k] = v
        elif k in _CTOR_ALIASES:
            ctor[_CTOR_ALIASES[k]] = v
    return ctor

def get_vertex_chat_model(
    cfg: Optional[Config] = None,
    agent: Optional[str] = None,
    **overrides: Any,
) -> ChatVertexAI:
    """
    Build a Gemini chat model on Vertex AI:
      global defaults <- agents.<agent> <- **overrides
    The result supports `bind_tools` and LCEL composition (prompt | llm | parser).
    """
    cfg = cfg or Config.load()
    cfg.require_vertex()

    # Wire env (ADC vs local SA)
    cfg.apply_google_env()

    # Explicit creds if any (None under ADC)
    creds = cfg.load_credentials()
    cfg.init_vertex(credentials=creds)

    ctor_kwargs = _split_kwargs(cfg.llm_kwargs(agent=agent, **overrides))
    return ChatVertexAI(credentials=creds, **ctor_kwargs)
