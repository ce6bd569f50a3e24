"""
Named inputs for the conditional workflows with the processing path each
workflow is expected to take. `None` means no branch matches and the run fails.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from .course_branch import COURSE_WORKFLOW_ID, LOGICAL_WORKFLOW_ID

QUICK = "Quick & Simple"
SOCIAL = "Social Media Optimized"
COMPLEX = "Complex Analysis"
POSITIVE = "Positive Amplification"
STANDARD = "Standard Processing"


@dataclass(frozen=True)
class Scenario:
    name: str
    content: str
    type: str = "article"
    expected: Mapping[str, Optional[str]] = field(default_factory=dict)

    @property
    def input(self) -> Dict[str, str]:
        return {"content": self.content, "type": self.type}


def _expect(course: Optional[str], logical: Optional[str]) -> Dict[str, Optional[str]]:
    return {COURSE_WORKFLOW_ID: course, LOGICAL_WORKFLOW_ID: logical}


SCENARIOS: List[Scenario] = [
    Scenario("Short and Simple", "Hello world",
             expected=_expect(QUICK, None)),
    Scenario("Social with Hashtags", "Check out this amazing #coding tutorial! #javascript", "social",
             expected=_expect(SOCIAL, SOCIAL)),
    # Short and simple is checked first in the course workflow
    Scenario("Social with Mentions", "Hey @john, what do you think about this new feature?", "social",
             expected=_expect(QUICK, SOCIAL)),
    Scenario(
        "Complex Long Content",
        "This comprehensive analysis delves into the intricate methodologies and sophisticated "
        "approaches utilized in contemporary technological implementations, examining the "
        "multifaceted implications and comprehensive ramifications of advanced computational "
        "paradigms within enterprise-level infrastructure architectures.",
        expected=_expect(STANDARD, COMPLEX),
    ),
    Scenario(
        "Standard Medium Content",
        "This is a medium-length article about technology trends. It covers various topics "
        "including software development, artificial intelligence, and data science. The content "
        "is informative and well-structured.",
        expected=_expect(STANDARD, STANDARD),
    ),
    Scenario("Positive Short Content", "This is an amazing and excellent tutorial!",
             expected=_expect(STANDARD, POSITIVE)),
    Scenario("Negative Content", "This terrible and awful experience was disappointing.",
             expected=_expect(STANDARD, COMPLEX)),
    Scenario(
        "Blog Post",
        "Welcome to my blog! Today I want to share some insights about productivity and time "
        "management. These tips have helped me become more efficient.",
        "blog",
        expected=_expect(STANDARD, STANDARD),
    ),
    Scenario(
        "Email Content",
        "Hi team, I hope this email finds you well. I wanted to update you on the project "
        "status and next steps.",
        "email",
        expected=_expect(QUICK, None),
    ),
    Scenario("Very Short Content", "Hi!",
             expected=_expect(QUICK, None)),
]


def get_scenario(name: str) -> Scenario:
    for s in SCENARIOS:
        if s.name == name:
            return s
    raise KeyError(f"Unknown scenario: {name}")
