# agent_hub/config/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import vertexai
import yaml
from dotenv import load_dotenv
from google.oauth2.service_account import Credentials as _SACredentials

DEFAULT_YAML = Path(__file__).with_name("default.yaml")

# --------- helpers ---------
def _load_yaml(p: Path) -> Dict[str, Any]:
    if not p.exists():
        return {}
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

def _env_bool(name: str, default: bool = False) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return str(v).lower() in ("1", "true", "yes", "on")

def _coalesce_env(*names: str, default: Optional[str] = None) -> Optional[str]:
    for n in names:
        if os.getenv(n):
            return os.getenv(n)
    return default

def _section(y: Dict[str, Any], name: str) -> Dict[str, Any]:
    s = y.get(name)
    return s if isinstance(s, dict) else {}

# --------- dataclasses for config ---------
@dataclass
class LLMDefaults:
    model_name: str = "gemini-2.0-flash-lite"
    temperature: float = 0.2
    top_p: float = 0.95
    top_k: int = 40
    max_output_tokens: int = 2048
    response_mime_type: str = "text/plain"
    timeout_s: int = 60

@dataclass
class LoggingDefaults:
    level: str = "INFO"
    format: str = "json"  # json | pretty
    file: Optional[str] = None
    rotate_mb: int = 10
    rotate_backups: int = 5

@dataclass
class MemorySettings:
    backend: str = "memory"          # none | memory | sqlite
    path: str = "memory.db"          # sqlite file, relative to the working dir
    last_messages: Optional[int] = 20
    working_memory: bool = False

    @classmethod
    def from_dict(cls, d: Dict[str, Any] | None) -> "MemorySettings":
        d = d or {}
        return cls(
            backend=str(d.get("backend", cls.backend)),
            path=str(d.get("path", cls.path)),
            last_messages=d.get("last_messages", cls.last_messages),
            working_memory=bool(d.get("working_memory", cls.working_memory)),
        )

@dataclass
class MCPServerSettings:
    """
    One MCP server. Either `url` (HTTP/SSE transport) or `command` + `args`
    (stdio transport). `url_env` names an environment variable holding the URL.
    """
    url: Optional[str] = None
    url_env: Optional[str] = None
    command: Optional[str] = None
    args: List[str] = field(default_factory=list)
    env: Optional[Dict[str, str]] = None

    def resolved_url(self) -> Optional[str]:
        if self.url_env and os.getenv(self.url_env):
            return os.getenv(self.url_env)
        return self.url or None

    def is_configured(self) -> bool:
        return bool(self.resolved_url() or self.command)

    def to_client_entry(self, notes_dir: str) -> Dict[str, Any]:
        """Entry for the `mcpServers` mapping understood by fastmcp.Client."""
        url = self.resolved_url()
        if url:
            return {"url": url}
        entry: Dict[str, Any] = {
            "command": self.command,
            "args": [a.replace("{notes_dir}", notes_dir) for a in self.args],
        }
        if self.env:
            entry["env"] = dict(self.env)
        return entry

@dataclass
class AgentProfile:
    """Non-LLM settings of one assistant agent (tools, MCP servers, memory)."""
    tools: List[str] = field(default_factory=list)
    mcp_servers: List[str] = field(default_factory=list)
    memory: MemorySettings = field(default_factory=MemorySettings)

@dataclass
class Config:
    # Source info (optional, handy for debugging)
    _source: str = "defaults"

    # Cloud & Auth
    project: Optional[str] = None
    location: Optional[str] = None
    credentials_name: Optional[str] = None
    use_adc: bool = False

    # Global LLM defaults
    llm: LLMDefaults = field(default_factory=LLMDefaults)

    # Agent-level sections: LLM overrides plus tools / mcp_servers / memory
    agents: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    # MCP servers by name
    mcp_servers: Dict[str, MCPServerSettings] = field(default_factory=dict)

    # Filesystem notes directory exposed to the text editor MCP server
    notes_dir: str = "notes"

    # Published CSV backing the get_transactions tool
    transactions_url: Optional[str] = None

    # Logging
    logging: LoggingDefaults = field(default_factory=LoggingDefaults)

    # Retry policy for model calls
    retry: Dict[str, Any] = field(default_factory=lambda: {"max_attempts": 3})

    # ---------- Loading ----------
    @classmethod
    def load(cls, yaml_path: Optional[Path] = None) -> "Config":
        load_dotenv()
        if yaml_path is None:
            yaml_path = Path(os.getenv("AGENT_HUB_CONFIG") or DEFAULT_YAML)
        y = _load_yaml(yaml_path)
        llm_y = _section(y, "llm")
        log_y = _section(y, "logging")

        # 1) Start from YAML
        cfg = cls(
            _source=f"file:{yaml_path}" if y else "defaults",
            project=y.get("project"),
            location=y.get("location"),
            credentials_name=y.get("credentials_name"),
            use_adc=_env_bool("USE_ADC", False),
            llm=LLMDefaults(
                model_name=llm_y.get("model_name", LLMDefaults.model_name),
                temperature=llm_y.get("temperature", LLMDefaults.temperature),
                top_p=llm_y.get("top_p", LLMDefaults.top_p),
                top_k=llm_y.get("top_k", LLMDefaults.top_k),
                max_output_tokens=llm_y.get("max_output_tokens", LLMDefaults.max_output_tokens),
                response_mime_type=llm_y.get("response_mime_type", LLMDefaults.response_mime_type),
                timeout_s=llm_y.get("timeout_s", LLMDefaults.timeout_s),
            ),
            agents=_section(y, "agents"),
            mcp_servers={
                name: MCPServerSettings(**(entry or {}))
                for name, entry in _section(y, "mcp_servers").items()
            },
            notes_dir=y.get("notes_dir", "notes"),
            transactions_url=y.get("transactions_url"),
            logging=LoggingDefaults(
                level=log_y.get("level", LoggingDefaults.level),
                format=log_y.get("format", LoggingDefaults.format),
                file=log_y.get("file", LoggingDefaults.file),
                rotate_mb=log_y.get("rotate_mb", LoggingDefaults.rotate_mb),
                rotate_backups=log_y.get("rotate_backups", LoggingDefaults.rotate_backups),
            ),
            retry=_section(y, "retry") or {"max_attempts": 3},
        )

        # 2) Env overrides (highest priority)
        cfg.project = _coalesce_env("GOOGLE_CLOUD_PROJECT", "GCP_PROJECT", default=cfg.project)
        cfg.location = _coalesce_env("GOOGLE_CLOUD_REGION", "GOOGLE_CLOUD_LOCATION", default=cfg.location)
        cfg.notes_dir = os.getenv("NOTES_DIR", cfg.notes_dir)
        cfg.transactions_url = os.getenv("TRANSACTIONS_CSV_URL", cfg.transactions_url)
        cfg.logging.level = os.getenv("LOG_LEVEL", cfg.logging.level)
        env_cred = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
        if env_cred:
            cfg.credentials_name = env_cred  # absolute path

        return cfg

    def require_vertex(self) -> None:
        """Vertex models need a project and a region; workflows without an LLM do not."""
        if not self.project or not self.location:
            raise RuntimeError("Config missing GCP 'project' or 'location' (YAML or env).")

    # ---------- Agent profiles ----------
    def agent_profile(self, agent: str) -> AgentProfile:
        section = self.agents.get(agent) or {}
        return AgentProfile(
            tools=list(section.get("tools") or []),
            mcp_servers=list(section.get("mcp_servers") or []),
            memory=MemorySettings.from_dict(section.get("memory")),
        )

    def mcp_servers_for(self, agent: str) -> Dict[str, MCPServerSettings]:
        """Resolve the agent's MCP server names against the `mcp_servers` section."""
        out: Dict[str, MCPServerSettings] = {}
        for name in self.agent_profile(agent).mcp_servers:
            if name not in self.mcp_servers:
                raise KeyError(f"Agent '{agent}' references unknown MCP server: {name}")
            out[name] = self.mcp_servers[name]
        return out

    # ---------- Auth resolution ----------
    def credential_path(self) -> Optional[Path]:
        """Resolve local credentials file path when USE_ADC=false."""
        if self.use_adc:
            return None
        if self.credentials_name and os.path.isabs(self.credentials_name):
            return Path(self.credentials_name)
        if self.credentials_name:
            candidate = Path(__file__).resolve().parents[1] / ".keys" / self.credentials_name
            if candidate.exists():
                return candidate
        # No local key => rely on ADC
        return None

    def apply_google_env(self) -> None:
        """
        Export env vars for SDKs that read ADC from the environment.
        Always sets GOOGLE_CLOUD_PROJECT / GOOGLE_CLOUD_REGION for downstream libs.
        """
        if self.use_adc:
            os.environ.pop("GOOGLE_APPLICATION_CREDENTIALS", None)
        else:
            p = self.credential_path()
            if p is not None:
                os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = str(p.resolve())
        os.environ["GOOGLE_CLOUD_PROJECT"] = self.project or ""
        os.environ["GOOGLE_CLOUD_REGION"] = self.location or ""

    def load_credentials(self):
        """
        Service-account credentials when a key file is configured, otherwise None (ADC).
        """
        if self.use_adc:
            return None
        p = self.credential_path()
        if p is None or not p.exists():
            return None
        return _SACredentials.from_service_account_file(
            str(p),
            scopes=["https://www.googleapis.com/auth/cloud-platform"],
        )

    def init_vertex(self, credentials=None) -> None:
        if credentials is None:
            vertexai.init(project=self.project, location=self.location)
        else:
            vertexai.init(project=self.project, location=self.location, credentials=credentials)

    # ---------- LLM kwargs builder ----------
    def llm_kwargs(self, agent: Optional[str] = None, **overrides) -> Dict[str, Any]:
        """
        Kwargs for the chat model wrapper:
        global defaults <- agents.<agent> <- per-call overrides.
        Non-LLM keys of the agent section (tools, memory, ...) ride along and are
        dropped by the model factory.
        """
        base = {
            "project": self.project,
            "location": self.location,
            "model": self.llm.model_name,
            "temperature": self.llm.temperature,
            "top_p": self.llm.top_p,
            "top_k": int(self.llm.top_k),
            "max_output_tokens": int(self.llm.max_output_tokens),
            "response_mime_type": self.llm.response_mime_type,
            "timeout_s": int(self.llm.timeout_s),
            "max_retries": int(self.retry.get("max_attempts", 3)),
        }
        if agent and agent in self.agents:
            section = dict(self.agents[agent])
            if "model_name" in section:
                section["model"] = section.pop("model_name")
            base.update(section)
        base.update(overrides)
        return base
