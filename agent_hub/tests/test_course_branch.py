import io
import logging

import pytest

from agent_hub.runner.run_conditional import check, replay
from agent_hub.workflows.course_branch import (
    COURSE_WORKFLOW_ID,
    LOGICAL_WORKFLOW_ID,
    WORKFLOW_BUILDERS,
    analyze_content,
)
from agent_hub.workflows.scenarios import SCENARIOS, get_scenario

PREFIXES = {
    "Social Media Optimized": "📱 SOCIAL:",
    "Quick & Simple": "⚡ QUICK:",
    "Complex Analysis": "🔍 COMPLEX:",
    "Positive Amplification": "😊 POSITIVE:",
    "Standard Processing": "🔄 STANDARD:",
}

@pytest.fixture(scope="module")
def workflows():
    return {wid: build() for wid, build in WORKFLOW_BUILDERS.items()}


def test_analyze_content_profile():
    out = analyze_content.run({"content": "Hey @john, what do you think about this new feature?", "type": "social"})
    assert out == {
        "content": "Hey @john, what do you think about this new feature?",
        "type": "social",
        "word_count": 10,
        "complexity": "simple",
        "category": "short",
        "has_hashtags": False,
        "has_mentions": True,
        "sentiment": "neutral",
    }

@pytest.mark.parametrize("workflow_id", [COURSE_WORKFLOW_ID, LOGICAL_WORKFLOW_ID])
@pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s.name)
def test_scenarios(workflows, workflow_id, scenario):
    res = workflows[workflow_id].invoke(scenario.input)
    expected = scenario.expected[workflow_id]
    if expected is None:
        assert res.status == "failed"
        assert workflow_id in res.error
        assert res.path == ["analyze-content"]
    else:
        assert res.status == "success", res.error
        r = res.result
        assert r["processing_path"] == expected
        assert r["processed_content"] == f"{PREFIXES[expected]} {scenario.content}"
        assert r["recommendations"] and r["optimizations"]

def test_social_without_hashtags_gets_hashtag_tip(workflows):
    res = workflows[LOGICAL_WORKFLOW_ID].invoke(get_scenario("Social with Mentions").input)
    assert res.result["processing_path"] == "Social Media Optimized"
    assert res.result["recommendations"][-1] == "Add 2-3 relevant hashtags"

def test_social_with_hashtags_has_no_hashtag_tip(workflows):
    res = workflows[COURSE_WORKFLOW_ID].invoke(get_scenario("Social with Hashtags").input)
    assert "Add 2-3 relevant hashtags" not in res.result["recommendations"]
    assert len(res.result["recommendations"]) == 3

def test_email_type_is_accepted(workflows):
    res = workflows[COURSE_WORKFLOW_ID].invoke({"content": "Quick note", "type": "email"})
    assert res.steps["analyze-content"]["type"] == "email"

def test_replay_reports_no_mismatches(workflows):
    out = io.StringIO()
    assert replay(workflows.values(), SCENARIOS, out=out) == 0
    assert "❌" not in out.getvalue()

def test_check_flags_wrong_expectation(workflows):
    res = workflows[COURSE_WORKFLOW_ID].invoke({"content": "Hi!"})
    assert check(res, "Quick & Simple") == (True, "Quick & Simple")
    assert check(res, "Standard Processing")[0] is False
    assert check(res, None)[0] is False

def test_unknown_scenario():
    with pytest.raises(KeyError):
        get_scenario("nope")

def test_course_predicates_log_their_sub_conditions(workflows, caplog):
    caplog.set_level(logging.DEBUG, logger="agent_hub.workflows.course_branch")
    workflows[COURSE_WORKFLOW_ID].invoke(get_scenario("Blog Post").input)
    checks = {r.condition: r for r in caplog.records if getattr(r, "condition", None)}
    assert (checks["short_and_simple"].is_short, checks["short_and_simple"].is_simple) == (True, False)
    assert checks["social_or_elements"].is_social is False
    assert checks["social_or_elements"].has_hashtags is False
    assert checks["everything_else"].result is True
    assert checks["everything_else"].social_or_elements is False
