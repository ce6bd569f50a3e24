import pytest
from fastapi.testclient import TestClient

from agent_hub.app.main import create_app
from agent_hub.hub import create_hub


class EchoAgent:
    async def ainvoke(self, state):
        return {"text": f"echo: {state.get('user_input', '')}"}

    def invoke(self, state):
        raise AssertionError("the API prefers ainvoke")


class BrokenAgent:
    async def ainvoke(self, state):
        raise RuntimeError("model quota exceeded")

    def invoke(self, state):
        raise RuntimeError("model quota exceeded")


@pytest.fixture
def client(cfg):
    hub = create_hub(cfg)
    hub.add_agent_instance("echo", EchoAgent())
    hub.add_agent_instance("broken", BrokenAgent())
    with TestClient(create_app(cfg, hub)) as c:
        yield c


def test_healthz_and_request_id(client):
    r = client.get("/healthz", headers={"x-request-id": "req-42"})
    assert r.status_code == 200 and r.json() == {"status": "ok"}
    assert r.headers["x-request-id"] == "req-42"
    assert client.get("/healthz").headers["x-request-id"]

def test_list_workflows(client):
    body = client.get("/workflows").json()
    ids = [w["id"] for w in body]
    assert "branched-content-workflow" in ids
    branched = next(w for w in body if w["id"] == "branched-content-workflow")
    assert branched["steps"][0] == "word-count"

def test_run_workflow_success(client):
    r = client.post(
        "/workflows/branched-content-workflow/runs",
        json={"input": {"content": "Loving the new release #python @friend", "type": "social"}, "run_id": "run-1"},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "success"
    assert body["run_id"] == "run-1"
    assert body["path"] == ["word-count", "social-processing"]
    assert body["result"]["social_metrics"]["hashtag_count"] == 1

def test_failed_run_is_still_200(client):
    r = client.post("/workflows/content-processing-workflow/runs", json={"input": {"content": "too short", "type": "blog"}})
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "failed"
    assert "Content too short: 2 words" in body["error"]
    assert body["result"] is None

def test_invalid_workflow_input_is_a_failed_run(client):
    body = client.post("/workflows/branched-content-workflow/runs", json={"input": {"type": "blog"}}).json()
    assert body["status"] == "failed"
    assert body["path"] == []

def test_unknown_workflow_is_404(client):
    r = client.post("/workflows/nope/runs", json={"input": {}})
    assert r.status_code == 404

def test_list_agents(client):
    assert client.get("/agents").json() == ["broken", "content", "echo", "financial", "personal"]

def test_invoke_agent(client):
    r = client.post("/agents/echo/invoke", json={"state": {"user_input": "hi"}})
    assert r.status_code == 200
    body = r.json()
    assert body["agent"] == "echo"
    assert body["state_in"] == {"user_input": "hi"}
    assert body["state_out"] == {"text": "echo: hi"}
    assert isinstance(body["ms"], int)

def test_unknown_agent_is_404(client):
    assert client.post("/agents/nope/invoke", json={"state": {}}).status_code == 404

def test_agent_failure_is_502(client):
    r = client.post("/agents/broken/invoke", json={"state": {"user_input": "hi"}})
    assert r.status_code == 502
    assert "model quota exceeded" in r.json()["detail"]
