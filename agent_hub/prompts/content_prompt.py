from __future__ import annotations

from langchain_core.prompts import ChatPromptTemplate

CONTENT_SYSTEM = (
    "You are a content analyst. You assess written content for quality, clarity and "
    "structure, identify its main themes, and give specific, constructive feedback. "
    "You always answer with a single JSON object and nothing else."
)

CONTENT_ANALYSIS_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", CONTENT_SYSTEM),
        ("user",
         "Please analyze this {content_type} content and provide a comprehensive assessment.\n\n"
         "Content:\n{content}\n\n"
         "Analyze the content for:\n"
         "- Quality and clarity (score 1-10)\n"
         "- Main themes and topics (2-4 key themes)\n"
         "- Specific areas for improvement\n"
         "- Overall constructive feedback\n\n"
         "Return JSON with exactly these keys:\n"
         '{{"quality_score": <number 1-10>, "main_themes": [<string>, ...], '
         '"improvements": [<string>, ...], "feedback": <string>}}'),
    ]
)
