# agent_hub/runner/run_conditional.py
'''
# Replay every scenario through both conditional workflows
python -m agent_hub.runner.run_conditional

# One workflow, one scenario
python -m agent_hub.runner.run_conditional --workflow course-branch-workflow --scenario "Blog Post"
'''

from __future__ import annotations
import argparse, sys
from typing import Iterable, List, Optional, Tuple

from ..config import Config, init_logging
from ..workflows.course_branch import WORKFLOW_BUILDERS
from ..workflows.engine import Workflow, WorkflowRunResult
from ..workflows.scenarios import SCENARIOS, Scenario, get_scenario

def check(result: WorkflowRunResult, expected: Optional[str]) -> Tuple[bool, str]:
    """(passed, observed path). A `None` expectation means the run must fail with no match."""
    if result.status == "failed":
        return expected is None, f"no branch ({result.error})"
    path = (result.result or {}).get("processing_path", "?")
    return path == expected, path

def replay(workflows: Iterable[Workflow], scenarios: Iterable[Scenario], out=None) -> int:
    out = out or sys.stdout
    failures = 0
    for wf in workflows:
        print(f"🧪 {wf.id}", file=out)
        for sc in scenarios:
            expected = sc.expected.get(wf.id)
            result = wf.invoke(sc.input)
            ok, observed = check(result, expected)
            failures += 0 if ok else 1
            mark = "✅" if ok else "❌"
            print(f"  {mark} {sc.name}: expected {expected or 'no branch'}, got {observed}", file=out)
        print("-" * 80, file=out)
    return failures

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Replay the conditional-branching scenarios.")
    parser.add_argument("--workflow", choices=sorted(WORKFLOW_BUILDERS), help="Only this workflow.")
    parser.add_argument("--scenario", help="Only the scenario with this name.")
    args = parser.parse_args(argv)

    init_logging(Config.load())

    ids: List[str] = [args.workflow] if args.workflow else sorted(WORKFLOW_BUILDERS)
    workflows = [WORKFLOW_BUILDERS[i]() for i in ids]
    try:
        scenarios = [get_scenario(args.scenario)] if args.scenario else SCENARIOS
    except KeyError as e:
        print(f"❌ {e.args[0]}", file=sys.stderr)
        return 2

    failures = replay(workflows, scenarios)
    print(f"{'🎉 all scenarios passed' if not failures else f'❌ {failures} mismatch(es)'}")
    return 0 if not failures else 1

if __name__ == "__main__":
    raise SystemExit(main())
