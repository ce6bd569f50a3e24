"""
Conditional routing with compound predicates (AND / OR / NOT).

Both workflows share the `analyze-content` step and the processing steps;
they differ only in the ordered predicate list of their branch.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Mapping

from ..config import get_logger
from ..schemas.content import ContentProfile, CourseInput, ProcessingReport
from . import text_stats
from .engine import Step, Workflow, create_step

log = get_logger(__name__)

LOGICAL_WORKFLOW_ID = "logical-operators-workflow"
COURSE_WORKFLOW_ID = "course-branch-workflow"


@create_step(
    id="analyze-content",
    description="Comprehensive content analysis for branching decisions",
    input_schema=CourseInput,
    output_schema=ContentProfile,
)
def analyze_content(inp: CourseInput) -> dict:
    n = text_stats.count_words(inp.content)
    profile = {
        "content": inp.content,
        "type": inp.type,
        "word_count": n,
        "complexity": text_stats.complexity(text_stats.average_word_length(inp.content)),
        "category": text_stats.length_category(n),
        "has_hashtags": text_stats.has_hashtags(inp.content),
        "has_mentions": text_stats.has_mentions(inp.content),
        "sentiment": text_stats.sentiment(inp.content),
    }
    log.info("content.analyzed", extra={k: v for k, v in profile.items() if k != "content"})
    return profile


def _processing_step(
    id: str,
    description: str,
    path: str,
    prefix: str,
    recommendations: List[str],
    optimizations: List[str],
    extra_recommendations: Callable[[ContentProfile], List[str]] = lambda p: [],
) -> Step:
    @create_step(id=id, description=description, input_schema=ContentProfile, output_schema=ProcessingReport)
    def process(inp: ContentProfile) -> dict:
        return {
            "processed_content": f"{prefix} {inp.content}",
            "processing_path": path,
            "recommendations": recommendations + extra_recommendations(inp),
            "optimizations": list(optimizations),
        }
    return process


social_media_processing = _processing_step(
    "social-media-processing",
    "Optimized for social media content",
    "Social Media Optimized",
    "📱 SOCIAL:",
    [
        "Consider adding relevant hashtags",
        "Keep it engaging and concise",
        "Use visual elements when possible",
    ],
    ["Engagement focus", "Hashtag optimization", "Visual appeal"],
    extra_recommendations=lambda p: [] if p.has_hashtags else ["Add 2-3 relevant hashtags"],
)

quick_simple_processing = _processing_step(
    "quick-simple-processing",
    "Fast processing for short and simple content",
    "Quick & Simple",
    "⚡ QUICK:",
    ["Content is concise and clear", "Consider expanding with examples"],
    ["Speed optimized", "Minimal processing"],
)

complex_content_processing = _processing_step(
    "complex-content-processing",
    "Detailed processing for complex content",
    "Complex Analysis",
    "🔍 COMPLEX:",
    [
        "Consider breaking into smaller sections",
        "Add headings for better structure",
        "Include examples and explanations",
    ],
    ["Deep analysis", "Structure optimization", "Readability enhancement"],
)

positive_content_processing = _processing_step(
    "positive-content-processing",
    "Special processing for positive content",
    "Positive Amplification",
    "😊 POSITIVE:",
    [
        "Share this positive content widely",
        "Consider creating more content like this",
        "Engage with positive community responses",
    ],
    ["Sentiment amplification", "Engagement boost", "Community building"],
)

standard_processing = _processing_step(
    "standard-processing",
    "Standard processing for general content",
    "Standard Processing",
    "🔄 STANDARD:",
    [
        "Content processed with standard parameters",
        "Consider optimizing for specific use case",
    ],
    ["Balanced approach", "General optimization"],
)


# ── predicates ──

def _check(name: str, result: bool, **parts: bool) -> bool:
    log.debug("branch.condition", extra={"condition": name, "result": result, **parts})
    return result

def _short_and_simple(d: Mapping[str, Any]) -> bool:
    return d["category"] == "short" and d["complexity"] == "simple"

def _social_ish(d: Mapping[str, Any]) -> bool:
    return d["type"] == "social" or d["has_hashtags"] or d["has_mentions"]

def social_with_elements(d: Mapping[str, Any]) -> bool:
    social = d["type"] == "social"
    elements = d["has_hashtags"] or d["has_mentions"]
    return _check("social_with_elements", social and elements,
                  is_social=social, has_hashtags=d["has_hashtags"], has_mentions=d["has_mentions"])

def short_simple_positive(d: Mapping[str, Any]) -> bool:
    short = d["category"] == "short"
    simple = d["complexity"] == "simple"
    positive = d["sentiment"] == "positive"
    return _check("short_simple_positive", short and simple and positive,
                  is_short=short, is_simple=simple, is_positive=positive)

def complex_long_or_negative(d: Mapping[str, Any]) -> bool:
    complex_ = d["complexity"] == "complex"
    long_ = d["category"] == "long"
    negative = d["sentiment"] == "negative"
    return _check("complex_long_or_negative", complex_ or long_ or negative,
                  is_complex=complex_, is_long=long_, is_negative=negative)

def positive_not_negative(d: Mapping[str, Any]) -> bool:
    not_negative = d["sentiment"] != "negative"
    positive = d["sentiment"] == "positive"
    return _check("positive_not_negative", not_negative and positive,
                  not_negative=not_negative, is_positive=positive)

def not_short_simple_nor_social(d: Mapping[str, Any]) -> bool:
    not_short_simple = not _short_and_simple(d)
    not_social = d["type"] != "social"
    return _check("not_short_simple_nor_social", not_short_simple and not_social,
                  not_short_simple=not_short_simple, not_social=not_social)

def short_and_simple(d: Mapping[str, Any]) -> bool:
    short = d["category"] == "short"
    simple = d["complexity"] == "simple"
    return _check("short_and_simple", short and simple, is_short=short, is_simple=simple)

def social_or_elements(d: Mapping[str, Any]) -> bool:
    social = d["type"] == "social"
    return _check("social_or_elements", bool(_social_ish(d)),
                  is_social=social, has_hashtags=d["has_hashtags"], has_mentions=d["has_mentions"])

def everything_else(d: Mapping[str, Any]) -> bool:
    short_simple = _short_and_simple(d)
    social_ish = bool(_social_ish(d))
    return _check("everything_else", not (short_simple or social_ish),
                  short_and_simple=short_simple, social_or_elements=social_ish)


def _base(id: str, description: str) -> Workflow:
    return Workflow(
        id=id,
        description=description,
        input_schema=CourseInput,
        output_schema=ProcessingReport,
    ).then(analyze_content)

def build_logical_operators_workflow() -> Workflow:
    return (
        _base(LOGICAL_WORKFLOW_ID, "Demonstrates AND, OR, and NOT operators in branching")
        .branch([
            (social_with_elements, social_media_processing),
            (short_simple_positive, quick_simple_processing),
            (complex_long_or_negative, complex_content_processing),
            (positive_not_negative, positive_content_processing),
            (not_short_simple_nor_social, standard_processing),
        ])
        .commit()
    )

def build_course_branch_workflow() -> Workflow:
    return (
        _base(COURSE_WORKFLOW_ID, "Simple conditional branching for course demonstration")
        .branch([
            (short_and_simple, quick_simple_processing),
            (social_or_elements, social_media_processing),
            (everything_else, standard_processing),
        ])
        .commit()
    )

WORKFLOW_BUILDERS: Dict[str, Callable[[], Workflow]] = {
    LOGICAL_WORKFLOW_ID: build_logical_operators_workflow,
    COURSE_WORKFLOW_ID: build_course_branch_workflow,
}
