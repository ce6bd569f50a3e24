"""
branched-content-workflow: count words, then route to exactly one processor.

    social                  -> social-processing
    < 50 words              -> quick-processing
    50..200 words           -> standard-processing
    > 200 words             -> detailed-processing
"""

from __future__ import annotations
import random
from typing import Any, Mapping, Optional

from ..config import get_logger
from ..schemas.content import (
    BranchedOutput,
    ContentInput,
    CountedContent,
    DetailedProcessed,
    ProcessedContent,
    SocialProcessed,
    StandardProcessed,
)
from . import text_stats
from .engine import Workflow, create_step

log = get_logger(__name__)

WORKFLOW_ID = "branched-content-workflow"

# Scores are simulated; a seeded Random makes them reproducible in tests
_rng = random.Random()

def seed_scores(seed: Optional[int]) -> None:
    _rng.seed(seed)


@create_step(
    id="word-count",
    description="Calculate word count to determine processing path",
    input_schema=ContentInput,
    output_schema=CountedContent,
)
def word_count_step(inp: ContentInput) -> dict:
    n = text_stats.count_words(inp.content)
    log.info("content.word_count", extra={"word_count": n, "content_type": inp.type})
    return {"content": inp.content, "type": inp.type, "word_count": n}


@create_step(
    id="quick-processing",
    description="Quick processing for short content",
    input_schema=CountedContent,
    output_schema=ProcessedContent,
)
def quick_processing(inp: CountedContent) -> dict:
    return {
        "processed_content": f"QUICK: {inp.content[:100]}...",
        "processing_type": "quick",
        "time_spent": 200,
    }


@create_step(
    id="standard-processing",
    description="Standard processing for medium content",
    input_schema=CountedContent,
    output_schema=StandardProcessed,
)
def standard_processing(inp: CountedContent) -> dict:
    keywords = [w for w in text_stats.words(inp.content) if len(w) > 4]
    return {
        "processed_content": f"STANDARD: {inp.content}",
        "processing_type": "standard",
        "time_spent": 500,
        "basic_analysis": {
            "readability_score": _rng.randint(60, 99),
            "keyword_count": len(keywords),
        },
    }


@create_step(
    id="detailed-processing",
    description="Detailed processing for long content",
    input_schema=CountedContent,
    output_schema=DetailedProcessed,
)
def detailed_processing(inp: CountedContent) -> dict:
    return {
        "processed_content": f"DETAILED: {inp.content}",
        "processing_type": "detailed",
        "time_spent": 1000,
        "detailed_analysis": {
            "readability_score": _rng.randint(60, 99),
            "seo_score": _rng.randint(70, 99),
            "sentiment": text_stats.sentiment(
                inp.content, text_stats.SHORT_POSITIVE_WORDS, text_stats.SHORT_NEGATIVE_WORDS
            ),
            "word_count": inp.word_count,
            "paragraph_count": text_stats.count_paragraphs(inp.content),
        },
    }


@create_step(
    id="social-processing",
    description="Special processing for social media content",
    input_schema=CountedContent,
    output_schema=SocialProcessed,
)
def social_processing(inp: CountedContent) -> dict:
    if inp.word_count < 20:
        engagement = "high"
    elif inp.word_count < 50:
        engagement = "medium"
    else:
        engagement = "low"
    return {
        "processed_content": f"SOCIAL: {inp.content}",
        "processing_type": "social",
        "time_spent": 300,
        "social_metrics": {
            "hashtag_count": text_stats.count_hashtags(inp.content),
            "mention_count": text_stats.count_mentions(inp.content),
            "engagement": engagement,
        },
    }


# ── predicates (evaluated in order, first true wins) ──

def is_social(d: Mapping[str, Any]) -> bool:
    return d["type"] == "social"

def is_short(d: Mapping[str, Any]) -> bool:
    return d["word_count"] < 50 and d["type"] != "social"

def is_medium(d: Mapping[str, Any]) -> bool:
    return 50 <= d["word_count"] <= 200 and d["type"] != "social"

def is_long(d: Mapping[str, Any]) -> bool:
    return d["word_count"] > 200 and d["type"] != "social"


def build_branched_workflow() -> Workflow:
    return (
        Workflow(
            id=WORKFLOW_ID,
            description="Intelligently routes content based on length and type",
            input_schema=ContentInput,
            output_schema=BranchedOutput,
        )
        .then(word_count_step)
        .branch([
            (is_social, social_processing),
            (is_short, quick_processing),
            (is_medium, standard_processing),
            (is_long, detailed_processing),
        ])
        .commit()
    )
