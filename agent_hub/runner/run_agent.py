# agent_hub/runner/run_agent.py
'''
# Needs GOOGLE_CLOUD_PROJECT (and credentials); MCP servers without a URL are skipped
python -m agent_hub.runner.run_agent --agent personal --message "Hi, I'm Sam. Any Rust news today?"

# Continue a specific conversation
python -m agent_hub.runner.run_agent --agent financial --thread budget-2025 \
    --message "How much did I spend on groceries?"
'''

from __future__ import annotations
import argparse, asyncio, json
from typing import Any, Dict

from ..config import Config, init_logging
from ..hub import create_hub

async def _run(cfg: Config, agent_name: str, state: Dict[str, Any]) -> Dict[str, Any]:
    hub = create_hub(cfg)
    try:
        agent = await hub.agent(agent_name)
        return await agent.ainvoke(state)
    finally:
        await hub.aclose()

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Send one message to an assistant agent.")
    parser.add_argument("--agent", default="personal", choices=["financial", "personal"])
    parser.add_argument("--message", required=True, help="User message (quoted).")
    parser.add_argument("--thread", default=None, help="Conversation id (defaults to the resource id).")
    parser.add_argument("--resource", default=None, help="User id for memory (default-user).")
    args = parser.parse_args(argv)

    cfg = Config.load()
    init_logging(cfg)

    state = {"user_input": args.message, "thread_id": args.thread, "resource_id": args.resource}
    out = asyncio.run(_run(cfg, args.agent, state))
    print(json.dumps(out, ensure_ascii=False, indent=2))
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
