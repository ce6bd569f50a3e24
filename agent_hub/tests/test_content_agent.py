import json

import pytest

from agent_hub.agents.content_agent import ContentAnalysisAgent

ANALYSIS = {
    "quality_score": 6,
    "main_themes": ["productivity", "habits"],
    "improvements": ["Add an example", "Shorten the intro"],
    "feedback": "Useful tips, loosely structured.",
}


def test_analyze_parses_bare_json(fake_llm_factory):
    agent = ContentAnalysisAgent(fake_llm_factory([json.dumps(ANALYSIS)]))
    result = agent.analyze("Some blog text", "blog")
    assert result.quality_score == 6
    assert result.main_themes == ["productivity", "habits"]

def test_analyze_accepts_fenced_json(fake_llm_factory):
    agent = ContentAnalysisAgent(fake_llm_factory(["Here you go:\n```json\n" + json.dumps(ANALYSIS) + "\n```"]))
    assert agent.analyze("text").feedback == ANALYSIS["feedback"]

@pytest.mark.parametrize("raw", [
    "I think it is pretty good!",
    json.dumps({**ANALYSIS, "quality_score": 11}),
    json.dumps({**ANALYSIS, "main_themes": []}),
    json.dumps({**ANALYSIS, "main_themes": ["a", "b", "c", "d", "e"]}),
    json.dumps({**ANALYSIS, "improvements": []}),
    json.dumps(["not", "an", "object"]),
])
def test_invalid_output_raises_value_error(fake_llm_factory, raw):
    agent = ContentAnalysisAgent(fake_llm_factory([raw]))
    with pytest.raises(ValueError):
        agent.analyze("text")

def test_invoke_maps_state(fake_llm_factory):
    agent = ContentAnalysisAgent(fake_llm_factory([json.dumps(ANALYSIS)]))
    out = agent.invoke({"content": "Some text"})
    assert out == {"analysis": {**ANALYSIS, "quality_score": 6.0}}

@pytest.mark.asyncio
async def test_ainvoke(fake_llm_factory):
    agent = ContentAnalysisAgent(fake_llm_factory([json.dumps(ANALYSIS)]))
    out = await agent.ainvoke({"content": "Some text", "type": "social"})
    assert out["analysis"]["improvements"] == ANALYSIS["improvements"]

def test_prompt_carries_content_and_type(fake_llm_factory):
    agent = ContentAnalysisAgent(fake_llm_factory([json.dumps(ANALYSIS)]))
    messages = agent.prompt.format_messages(content="Rust tips", content_type="social")
    assert "social content" in messages[-1].content
    assert "Rust tips" in messages[-1].content
