from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import Config
from ..core.context import current_context

# Built-in LogRecord attributes; everything else on a record came in via `extra=`
_SKIP = {
    "name","msg","args","levelname","levelno","pathname","filename","module",
    "exc_info","exc_text","stack_info","lineno","funcName","created","msecs",
    "relativeCreated","thread","threadName","processName","process","asctime",
    "taskName","message",
}

def _gather_extra(record: logging.LogRecord) -> dict:
    out = {}
    for k, v in record.__dict__.items():
        if k not in _SKIP and not k.startswith("_"):
            out[k] = v
    # request_id / run_id bound by the middleware or a workflow run
    for k, v in current_context().items():
        out.setdefault(k, v)
    return out

class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
        }
        extra = _gather_extra(record)
        if extra:
            payload.update(extra)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)

class PrettyFormatter(logging.Formatter):
    """Human-readable lines; bound context ids are appended in brackets."""
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        ctx = current_context()
        if ctx:
            line += " [" + " ".join(f"{k}={v}" for k, v in sorted(ctx.items())) + "]"
        return line

PRETTY_FMT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
DATE_FMT = "%H:%M:%S"

def _formatter(cfg: Config) -> logging.Formatter:
    if cfg.logging.format == "json":
        return JsonFormatter()
    return PrettyFormatter(PRETTY_FMT, DATE_FMT)

def init_logging(cfg: Optional[Config] = None) -> None:
    cfg = cfg or Config.load()
    root = logging.getLogger()
    root.setLevel(getattr(logging, cfg.logging.level.upper(), logging.INFO))
    for h in list(root.handlers):
        root.removeHandler(h)

    ch = logging.StreamHandler()
    ch.setFormatter(_formatter(cfg))
    root.addHandler(ch)

    if cfg.logging.file:
        log_path = Path(cfg.logging.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(
            log_path,
            maxBytes=cfg.logging.rotate_mb * 1024 * 1024,
            backupCount=cfg.logging.rotate_backups,
        )
        fh.setFormatter(_formatter(cfg))
        root.addHandler(fh)

def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
