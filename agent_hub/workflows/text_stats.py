"""Cheap text heuristics used by the content workflows to route and annotate content."""

from __future__ import annotations
import math
import re
from typing import List, Sequence

HASHTAG_RE = re.compile(r"#\w+")
MENTION_RE = re.compile(r"@\w+")
_SENTENCE_SPLIT = re.compile(r"[.!?]+")

POSITIVE_WORDS = ("good", "great", "excellent", "amazing", "love", "awesome")
NEGATIVE_WORDS = ("bad", "terrible", "awful", "horrible", "hate", "disappointing")

# Detailed processing only knows the first four of each
SHORT_POSITIVE_WORDS = POSITIVE_WORDS[:4]
SHORT_NEGATIVE_WORDS = NEGATIVE_WORDS[:4]


def words(text: str) -> List[str]:
    return text.split()

def count_words(text: str) -> int:
    return len(words(text))

def average_word_length(text: str) -> float:
    ws = words(text)
    if not ws:
        return 0.0
    return sum(len(w) for w in ws) / len(ws)

def length_category(word_count: int) -> str:
    if word_count >= 200:
        return "long"
    if word_count >= 50:
        return "medium"
    return "short"

def complexity(avg_word_length: float) -> str:
    if avg_word_length > 7:
        return "complex"
    if avg_word_length > 5:
        return "moderate"
    return "simple"

def has_hashtags(text: str) -> bool:
    return HASHTAG_RE.search(text) is not None

def has_mentions(text: str) -> bool:
    return MENTION_RE.search(text) is not None

def count_hashtags(text: str) -> int:
    return len(HASHTAG_RE.findall(text))

def count_mentions(text: str) -> int:
    return len(MENTION_RE.findall(text))

def sentiment(
    text: str,
    positive: Sequence[str] = POSITIVE_WORDS,
    negative: Sequence[str] = NEGATIVE_WORDS,
) -> str:
    """
    Keyword vote: each listed word found anywhere in the text (substring match,
    case-insensitive) counts once. Ties are neutral.
    """
    lowered = text.lower()
    pos = sum(1 for w in positive if w in lowered)
    neg = sum(1 for w in negative if w in lowered)
    if pos > neg:
        return "positive"
    if neg > pos:
        return "negative"
    return "neutral"

def count_paragraphs(text: str) -> int:
    return len(text.split("\n\n"))

def first_sentence(text: str) -> str:
    for sentence in _SENTENCE_SPLIT.split(text):
        if sentence.strip():
            return sentence.strip() + "."
    return ""

def reading_time_minutes(word_count: int, wpm: int = 200) -> int:
    return math.ceil(word_count / wpm)
