from __future__ import annotations
import time
import re
from typing import Mapping, Dict, Any, Iterable
from logging import Logger

from .context import current_context

# Regex to normalize whitespace for previews
_WS = re.compile(r"\s+")

# Text-like keys worth previewing in start/end events
_IN_KEYS = ("user_input", "content", "text")
_OUT_KEYS = ("text", "processed_content", "processing_path", "processing_type", "summary")

def _preview(val: Any, max_chars: int = 120) -> str:
    """
    Convert any value to a compact preview string:
    - Collapse whitespace runs into single spaces.
    - Truncate to `max_chars` characters (adding an ellipsis if truncated).
    """
    s = _WS.sub(" ", str(val)).strip()
    return (s[: max_chars - 1] + "…") if len(s) > max_chars else s

def _pick_meta(state: Mapping[str, Any], keys: Iterable[str]) -> Dict[str, Any]:
    """
    Produce `<key>_preview` and `<key>_len` entries for the keys present in `state`.
    """
    out: Dict[str, Any] = {}
    for k in keys:
        if k in state:
            v = state[k]
            out[f"{k}_preview"] = _preview(v)
            out[f"{k}_len"] = len(str(v))
    return out

def log_invoke_start(
    log: Logger,
    component: str,
    state: Mapping[str, Any],
    extra: Dict[str, Any] | None = None,
) -> float:
    """
    Log the start of an agent invocation or workflow step.

    Returns the perf_counter timestamp to hand back to `log_invoke_end`.
    Bound context fields (request_id, run_id) are attached to the payload.
    """
    t0 = time.perf_counter()
    payload = {
        "component": component,
        "stage": "start",
        "in_keys": sorted(state.keys()),
        **_pick_meta(state, _IN_KEYS),
    }
    if extra:
        payload.update(extra)
    payload.update(current_context())
    log.debug("invoke.start", extra=payload)
    return t0

def log_invoke_end(
    log: Logger,
    component: str,
    t0: float,
    out: Mapping[str, Any],
    extra: Dict[str, Any] | None = None,
) -> None:
    """
    Log the end of an invocation: elapsed ms, output keys and previews.
    """
    payload = {
        "component": component,
        "stage": "end",
        "ms": int((time.perf_counter() - t0) * 1000),
        "out_keys": sorted(out.keys()),
        **_pick_meta(out, _OUT_KEYS),
    }
    if extra:
        payload.update(extra)
    payload.update(current_context())
    log.info("invoke.end", extra=payload)

def llm_meta(llm: Any) -> Dict[str, Any]:
    """Best-effort model metadata for start/end events (attribute names vary across wrappers)."""
    return {
        "model": getattr(llm, "model", getattr(llm, "model_name", None)),
        "temperature": getattr(llm, "temperature", None),
        "max_output_tokens": getattr(llm, "max_output_tokens", None),
    }
