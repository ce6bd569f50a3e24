from __future__ import annotations
import contextlib
from pathlib import Path
from typing import AsyncIterator, Optional

from langgraph.checkpoint.base import BaseCheckpointSaver
from langgraph.checkpoint.memory import InMemorySaver
from langgraph.checkpoint.sqlite.aio import AsyncSqliteSaver

from ..config import get_logger
from ..config.config import MemorySettings

log = get_logger(__name__)

_BACKENDS = ("none", "memory", "sqlite")

@contextlib.asynccontextmanager
async def open_checkpointer(settings: MemorySettings) -> AsyncIterator[Optional[BaseCheckpointSaver]]:
    """
    Conversation history store for one agent, keyed by thread_id.

      none   -> no persistence (every call starts a fresh conversation)
      memory -> process-local InMemorySaver
      sqlite -> AsyncSqliteSaver on `settings.path`, kept open for the block
    """
    if settings.backend not in _BACKENDS:
        raise ValueError(f"Unknown memory backend: {settings.backend!r} (expected one of {_BACKENDS})")

    if settings.backend == "none":
        yield None
    elif settings.backend == "memory":
        yield InMemorySaver()
    else:
        path = Path(settings.path)
        path.parent.mkdir(parents=True, exist_ok=True)
        async with AsyncSqliteSaver.from_conn_string(str(path)) as saver:
            log.info("memory.sqlite_opened", extra={"path": str(path)})
            yield saver
