from __future__ import annotations
from typing import List, Optional, Sequence

from langchain_core.messages import BaseMessage, HumanMessage

def recent_messages(messages: Sequence[BaseMessage], limit: Optional[int]) -> List[BaseMessage]:
    """
    The last `limit` messages, moved back or forward so the window opens on a
    human turn. A window must not start with a tool result or a tool call whose
    request was cut off.
    """
    msgs = list(messages)
    if not limit or len(msgs) <= limit:
        return msgs

    start = len(msgs) - limit
    for i in range(start, len(msgs)):
        if isinstance(msgs[i], HumanMessage):
            return msgs[i:]
    # No human turn inside the window (long tool loop): extend back to the last one
    for i in range(start - 1, -1, -1):
        if isinstance(msgs[i], HumanMessage):
            return msgs[i:]
    return msgs[start:]
