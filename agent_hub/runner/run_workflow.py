# agent_hub/runner/run_workflow.py
'''
# Content pipeline on the bundled sample (AI analysis falls back without Vertex settings)
python -m agent_hub.runner.run_workflow

# Any registered workflow, raw JSON result
python -m agent_hub.runner.run_workflow --workflow branched-content-workflow \
    --content "Check out this #python tip" --type social --json
'''

from __future__ import annotations
import argparse, json, sys
from typing import List

from ..config import Config, init_logging
from ..hub import create_hub
from ..workflows.content_workflow import WORKFLOW_ID as CONTENT_WORKFLOW_ID
from ..workflows.engine import WorkflowRunResult

SAMPLE_CONTENT = (
    "Climate change is one of the most pressing challenges of our time, requiring immediate "
    "action from governments, businesses, and individuals worldwide."
)

TYPE_HELP = (
    "Content type: article, blog or social. "
    "The course-branch and logical-operators workflows also accept email."
)

def format_content_report(result: WorkflowRunResult) -> str:
    r = result.result or {}
    meta = r.get("metadata", {})
    analysis = r.get("ai_analysis", {})
    lines: List[str] = [
        "✅ Success!",
        f"📝 Content: {r.get('content')}",
        f"📊 Word count: {r.get('word_count')}",
        f"⏱️ Reading time: {meta.get('reading_time')} minutes",
        f"🎯 Difficulty: {meta.get('difficulty')}",
        f"📅 Processed at: {meta.get('processed_at')}",
        f"📋 Summary: {r.get('summary')}",
        "",
        "🤖 AI Analysis:",
        f"⭐ Quality Score: {analysis.get('quality_score')}/10",
        f"🏷️ Main Themes: {', '.join(analysis.get('main_themes', []))}",
        "💡 Improvements:",
    ]
    lines += [f"   {i}. {imp}" for i, imp in enumerate(analysis.get("improvements", []), 1)]
    lines.append(f"💬 Feedback: {analysis.get('feedback')}")
    return "\n".join(lines)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run one workflow and print its result.")
    parser.add_argument("--workflow", default=CONTENT_WORKFLOW_ID, help="Workflow id.")
    parser.add_argument("--content", default=SAMPLE_CONTENT, help="Content text (quoted).")
    parser.add_argument("--type", default="blog", help=TYPE_HELP)
    parser.add_argument("--json", action="store_true", help="Print the full run result as JSON.")
    return parser

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    cfg = Config.load()
    init_logging(cfg)
    hub = create_hub(cfg)

    try:
        wf = hub.workflow(args.workflow)
    except KeyError as e:
        print(f"❌ {e.args[0]}. Known: {', '.join(hub.workflow_ids())}", file=sys.stderr)
        return 2

    result = wf.invoke({"content": args.content, "type": args.type})

    if args.json or args.workflow != CONTENT_WORKFLOW_ID:
        print(json.dumps(result.model_dump(), ensure_ascii=False, indent=2))
    elif result.status == "success":
        print(format_content_report(result))
    else:
        print(f"❌ Error: {result.error}", file=sys.stderr)
    return 0 if result.status == "success" else 1

if __name__ == "__main__":
    raise SystemExit(main())
