from __future__ import annotations
from typing import Any, Dict, Mapping, Optional

from langchain_core.output_parsers import StrOutputParser
from langchain_core.utils.json import parse_json_markdown
from pydantic import ValidationError

from ..config import Config, get_logger
from ..core.instrumentation import log_invoke_start, log_invoke_end, llm_meta
from ..llm.vertex import get_vertex_chat_model
from ..prompts import get_prompt
from ..schemas.content import ContentAnalysis

log = get_logger(__name__)


class ContentAnalysisAgent:
    """
    Structured review of a piece of content:
        prompt("content_analysis") → model → StrOutputParser → JSON → ContentAnalysis

    # Contract
    - analyze(content, content_type) -> ContentAnalysis
    - Input state:  {"content": str, "type"?: str}   (type defaults to "article")
    - Output state: {"analysis": {quality_score, main_themes, improvements, feedback}}

    # Parsing
    - The model is asked for bare JSON; fenced ```json blocks are accepted too.
    - Output that is not JSON or does not fit ContentAnalysis raises ValueError.
      Callers that need a result no matter what (the content workflow) catch it.
    """

    def __init__(self, llm=None, *, prompt=None, agent_name: str = "content"):
        self.llm = llm or get_vertex_chat_model(agent=agent_name)
        self.prompt = prompt or get_prompt("content_analysis")
        self.chain = self.prompt | self.llm | StrOutputParser()
        self.meta = llm_meta(self.llm)

    @classmethod
    def from_config(cls, cfg: Optional[Config] = None) -> "ContentAnalysisAgent":
        return cls(get_vertex_chat_model(cfg, agent="content"))

    @staticmethod
    def parse(raw: str) -> ContentAnalysis:
        try:
            data = parse_json_markdown(raw)
        except ValueError as e:
            raise ValueError(f"Content analysis is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ValueError("Content analysis must be a JSON object")
        try:
            return ContentAnalysis.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Content analysis has the wrong shape: {e}") from e

    def analyze(self, content: str, content_type: str = "article") -> ContentAnalysis:
        raw: str = self.chain.invoke({"content": content, "content_type": content_type})
        return self.parse(raw)

    async def aanalyze(self, content: str, content_type: str = "article") -> ContentAnalysis:
        raw: str = await self.chain.ainvoke({"content": content, "content_type": content_type})
        return self.parse(raw)

    def invoke(self, state: Mapping[str, Any]) -> Dict[str, Any]:
        t0 = log_invoke_start(log, "ContentAnalysisAgent", state, extra=self.meta)
        analysis = self.analyze(str(state.get("content", "")), str(state.get("type") or "article"))
        out = {"analysis": analysis.model_dump()}
        log_invoke_end(log, "ContentAnalysisAgent", t0, out, extra=self.meta)
        return out

    async def ainvoke(self, state: Mapping[str, Any]) -> Dict[str, Any]:
        t0 = log_invoke_start(log, "ContentAnalysisAgent", state, extra=self.meta)
        analysis = await self.aanalyze(str(state.get("content", "")), str(state.get("type") or "article"))
        out = {"analysis": analysis.model_dump()}
        log_invoke_end(log, "ContentAnalysisAgent", t0, out, extra=self.meta)
        return out
