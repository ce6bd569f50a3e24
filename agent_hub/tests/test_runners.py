import json

import pytest

from agent_hub.runner import run_conditional, run_workflow
from agent_hub.workflows.engine import WorkflowRunResult


@pytest.fixture(autouse=True)
def _offline(monkeypatch, tmp_path):
    for name in ("GOOGLE_CLOUD_PROJECT", "GCP_PROJECT", "AGENT_HUB_CONFIG", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_run_workflow_prints_json_for_other_workflows(capsys):
    code = run_workflow.main(["--workflow", "branched-content-workflow", "--content", "Quick note", "--type", "blog"])
    assert code == 0
    body = json.loads(capsys.readouterr().out)
    assert body["path"] == ["word-count", "quick-processing"]
    assert body["result"]["processed_content"] == "QUICK: Quick note..."

def test_run_workflow_unknown_id(capsys):
    assert run_workflow.main(["--workflow", "nope"]) == 2
    assert "Unknown workflow" in capsys.readouterr().err

def test_run_workflow_failed_run_exits_1(capsys):
    assert run_workflow.main(["--content", "too short"]) == 1
    assert "Content too short" in capsys.readouterr().err

def test_content_report_format():
    result = WorkflowRunResult(
        run_id="r", workflow_id="content-processing-workflow", status="success",
        result={
            "content": "Hello there world of words.",
            "word_count": 5,
            "metadata": {"reading_time": 1, "difficulty": "easy", "processed_at": "2025-01-01T00:00:00+00:00"},
            "summary": "Hello there world of words.",
            "ai_analysis": {"quality_score": 7, "main_themes": ["greeting"], "improvements": ["Say more"], "feedback": "Fine."},
        },
    )
    report = run_workflow.format_content_report(result)
    assert "⭐ Quality Score: 7/10" in report
    assert "   1. Say more" in report
    assert "🏷️ Main Themes: greeting" in report

def test_run_conditional_single_scenario(capsys):
    code = run_conditional.main(["--workflow", "course-branch-workflow", "--scenario", "Blog Post"])
    out = capsys.readouterr().out
    assert code == 0
    assert "✅ Blog Post" in out
    assert "all scenarios passed" in out

def test_run_conditional_unknown_scenario(capsys):
    assert run_conditional.main(["--scenario", "nope"]) == 2

def test_type_help_matches_the_workflows():
    help_text = " ".join(run_workflow.build_parser().format_help().split())
    assert "article, blog or social" in help_text
    assert "also accept email" in help_text
