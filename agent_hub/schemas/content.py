"""
Pydantic shapes flowing between workflow steps.

Each model describes the record *after* a step ran; the next step declares the
same model (or a narrower one) as its input.
"""

from typing import List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

ContentType = Literal["article", "blog", "social"]
CourseContentType = Literal["article", "blog", "social", "email"]
Sentiment = Literal["positive", "neutral", "negative"]
Complexity = Literal["simple", "moderate", "complex"]
LengthCategory = Literal["short", "medium", "long"]
Difficulty = Literal["easy", "medium", "hard"]


# ── content-processing-workflow ──────────────────────────────────────────────

class ContentInput(BaseModel):
    content: str
    type: ContentType = "article"

class ValidatedContent(BaseModel):
    content: str
    type: str
    word_count: int
    is_valid: bool

class ContentMetadata(BaseModel):
    reading_time: int
    difficulty: Difficulty
    processed_at: str

class EnhancedContent(BaseModel):
    content: str
    type: str
    word_count: int
    metadata: ContentMetadata

class SummarizedContent(EnhancedContent):
    summary: str

class ContentAnalysis(BaseModel):
    quality_score: float = Field(ge=1, le=10, description="Quality score from 1-10")
    main_themes: List[str] = Field(min_length=1, max_length=4, description="Main themes and topics (2-4 items)")
    improvements: List[str] = Field(min_length=1, description="Specific improvement suggestions")
    feedback: str = Field(description="Overall constructive feedback")

class AnalyzedContent(SummarizedContent):
    ai_analysis: ContentAnalysis


# ── branched-content-workflow ────────────────────────────────────────────────

class CountedContent(BaseModel):
    content: str
    type: ContentType
    word_count: int

class ProcessedContent(BaseModel):
    # extra="forbid" keeps the four output shapes mutually exclusive in BranchedOutput
    model_config = ConfigDict(extra="forbid")

    processed_content: str
    processing_type: str
    time_spent: int

class BasicAnalysis(BaseModel):
    readability_score: int
    keyword_count: int

class StandardProcessed(ProcessedContent):
    basic_analysis: BasicAnalysis

class DetailedAnalysis(BaseModel):
    readability_score: int
    seo_score: int
    sentiment: Sentiment
    word_count: int
    paragraph_count: int

class DetailedProcessed(ProcessedContent):
    detailed_analysis: DetailedAnalysis

class SocialMetrics(BaseModel):
    hashtag_count: int
    mention_count: int
    engagement: Literal["high", "medium", "low"]

class SocialProcessed(ProcessedContent):
    social_metrics: SocialMetrics

BranchedOutput = Union[SocialProcessed, DetailedProcessed, StandardProcessed, ProcessedContent]


# ── course-branch-workflow / logical-operators-workflow ──────────────────────

class CourseInput(BaseModel):
    content: str
    type: CourseContentType = "article"

class ContentProfile(BaseModel):
    content: str
    type: CourseContentType
    word_count: int
    complexity: Complexity
    category: LengthCategory
    has_hashtags: bool
    has_mentions: bool
    sentiment: Sentiment

class ProcessingReport(BaseModel):
    processed_content: str
    processing_path: str
    recommendations: List[str]
    optimizations: List[str]
