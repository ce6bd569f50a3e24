"""
content-processing-workflow: validate -> enhance -> summarize -> AI analysis.

The first three steps are deterministic; `ai-analysis` asks the content agent
for a structured review and degrades to a fixed fallback when the model (or
its configuration) is unavailable.
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field

from ..config import Config, get_logger
from ..agents.content_agent import ContentAnalysisAgent
from ..schemas.content import (
    AnalyzedContent,
    ContentAnalysis,
    ContentInput,
    ContentType,
    EnhancedContent,
    SummarizedContent,
    ValidatedContent,
)
from . import text_stats
from .engine import Step, Workflow, create_step

log = get_logger(__name__)

WORKFLOW_ID = "content-processing-workflow"
MIN_WORDS = 5

AnalyzerProvider = Callable[[], Any]


class _ValidateInput(BaseModel):
    content: str = Field(min_length=1)
    type: ContentType = "article"


@create_step(
    id="validate-content",
    description="Validates incoming text content",
    input_schema=_ValidateInput,
    output_schema=ValidatedContent,
)
def validate_content(inp: _ValidateInput) -> dict:
    word_count = text_stats.count_words(inp.content)
    log.debug("content.validate", extra={"word_count": word_count})
    if word_count < MIN_WORDS:
        raise ValueError(f"Content too short: {word_count} words")
    return {
        "content": inp.content.strip(),
        "type": inp.type,
        "word_count": word_count,
        "is_valid": True,
    }


@create_step(
    id="enhance-content",
    description="Adds metadata to validated content",
    input_schema=ValidatedContent,
    output_schema=EnhancedContent,
)
def enhance_content(inp: ValidatedContent) -> dict:
    difficulty = "easy"
    if inp.word_count > 300:
        difficulty = "hard"
    elif inp.word_count > 100:
        difficulty = "medium"
    return {
        "content": inp.content,
        "type": inp.type,
        "word_count": inp.word_count,
        "metadata": {
            "reading_time": text_stats.reading_time_minutes(inp.word_count),
            "difficulty": difficulty,
            "processed_at": datetime.now(timezone.utc).isoformat(),
        },
    }


@create_step(
    id="generate-summary",
    description="Creates a summary of the content",
    input_schema=EnhancedContent,
    output_schema=SummarizedContent,
)
def generate_summary(inp: EnhancedContent) -> dict:
    summary = text_stats.first_sentence(inp.content)
    if inp.word_count > 50:
        summary += (
            f" This {inp.type} contains {inp.word_count} words and takes approximately "
            f"{inp.metadata.reading_time} minute(s) to read."
        )
    log.debug("content.summary", extra={"chars": len(summary)})
    return {**inp.model_dump(), "summary": summary}


def fallback_analysis(content_type: str, error: Exception) -> ContentAnalysis:
    return ContentAnalysis(
        quality_score=5,
        main_themes=[content_type],
        improvements=["Unable to analyze - please try again"],
        feedback=f"Analysis failed: {error}",
    )


def make_ai_analysis_step(provider: AnalyzerProvider) -> Step:
    """`provider()` returns an object with `analyze(content, content_type) -> ContentAnalysis`."""

    @create_step(
        id="ai-analysis",
        description="Uses AI agent to analyze content quality and provide feedback",
        input_schema=SummarizedContent,
        output_schema=AnalyzedContent,
    )
    def ai_analysis(inp: SummarizedContent) -> dict:
        try:
            analysis = provider().analyze(inp.content, inp.type)
        except Exception as e:
            log.warning("content.analysis_failed", extra={"error": str(e), "error_type": type(e).__name__})
            analysis = fallback_analysis(inp.type, e)
        return {**inp.model_dump(), "ai_analysis": analysis.model_dump()}

    return ai_analysis


def default_analyzer() -> ContentAnalysisAgent:
    return ContentAnalysisAgent.from_config(Config.load())


def build_content_workflow(provider: Optional[AnalyzerProvider] = None) -> Workflow:
    return (
        Workflow(
            id=WORKFLOW_ID,
            description="Validates, enhances, summarizes, and AI-analyzes content",
            input_schema=ContentInput,
            output_schema=AnalyzedContent,
        )
        .then(validate_content)
        .then(enhance_content)
        .then(generate_summary)
        .then(make_ai_analysis_step(provider or default_analyzer))
        .commit()
    )
