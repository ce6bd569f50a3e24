'''
cmd:
uvicorn agent_hub.app.main:app --reload

# Run a workflow
curl -X POST localhost:8000/workflows/branched-content-workflow/runs \
  -H 'content-type: application/json' \
  -d '{"input":{"content":"Check out this #python tip","type":"social"}}'

# Talk to the personal assistant (history is kept per thread_id)
curl -X POST localhost:8000/agents/personal/invoke \
  -H 'content-type: application/json' \
  -d '{"state":{"user_input":"Hi, I am Sam and I love Rust.","resource_id":"sam"}}'

Example response format:

json
{
  "agent": "personal",
  "ms": 1834,
  "state_in":  {"user_input": "Hi, I am Sam and I love Rust.", "resource_id": "sam"},
  "state_out": {"text": "Nice to meet you, Sam! ...", "thread_id": "sam", "resource_id": "sam"}
}
'''
from __future__ import annotations
import contextlib
from typing import Optional
from uuid import uuid4

from fastapi import FastAPI, Request

from ..config import Config, init_logging, get_logger
from ..core.context import set_request_id
from ..hub import AgentHub, create_hub
from .routes.agents import router as agents_router
from .routes.workflows import router as workflows_router

log = get_logger(__name__)

def create_app(cfg: Optional[Config] = None, hub: Optional[AgentHub] = None) -> FastAPI:
    # Config + logging
    cfg = cfg or Config.load()
    init_logging(cfg)
    hub = hub or create_hub(cfg)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await hub.aclose()

    app = FastAPI(title="Agent Hub", version="0.1.0", lifespan=lifespan)
    app.state.hub = hub

    # Routers
    app.include_router(agents_router)
    app.include_router(workflows_router)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        rid = request.headers.get("x-request-id") or str(uuid4())
        set_request_id(rid)
        resp = await call_next(request)
        resp.headers["x-request-id"] = rid
        return resp

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    log.info("FastAPI app initialized", extra={"workflows": hub.workflow_ids(), "agents": hub.agent_names()})
    return app

app = create_app()
