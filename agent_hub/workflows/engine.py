# agent_hub/workflows/engine.py
# Declarative step chaining on top of LangGraph.
#
#   wf = (
#       Workflow(id="demo", input_schema=In)
#       .then(prepare_step)                      # sequential stage
#       .branch([(is_social, social_step),       # first true predicate wins
#                (is_short,  quick_step)])
#       .commit()                                # compile to a StateGraph
#   )
#   result = wf.invoke({"content": "..."})       # WorkflowRunResult
#
# Each step is a node. A branch is a router node that evaluates the predicates
# in order and records the chosen step id in state["route"], followed by a
# conditional edge to that step. The current record travels in state["data"];
# every step replaces it with its validated output.

from __future__ import annotations
import inspect
import operator
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Sequence, Tuple, Type, Union

from langchain_core.runnables import RunnableLambda
from langgraph.graph import StateGraph, START, END
from pydantic import BaseModel, Field, TypeAdapter, ValidationError
from typing_extensions import Annotated, TypedDict

from ..config import get_logger
from ..core.context import bind_context
from ..core.instrumentation import log_invoke_start, log_invoke_end

log = get_logger(__name__)

Predicate = Callable[[Mapping[str, Any]], bool]


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────

class WorkflowError(RuntimeError):
    """Base class for failures raised while a workflow runs."""

class StepValidationError(WorkflowError):
    def __init__(self, step_id: str, phase: str, error: ValidationError):
        self.step_id = step_id
        self.phase = phase  # "input" | "output"
        self.errors = error.errors()
        super().__init__(f"Step '{step_id}' {phase} failed validation: {error}")

class BranchNotMatchedError(WorkflowError):
    def __init__(self, workflow_id: str, candidates: Sequence[str]):
        self.workflow_id = workflow_id
        self.candidates = list(candidates)
        super().__init__(
            f"No branch condition matched in workflow '{workflow_id}' "
            f"(candidates: {', '.join(candidates)})"
        )


# ─────────────────────────────────────────────────────────────────────────────
# Steps
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Step:
    """
    A named transform with declared input and output shapes.

    `execute` receives the validated input model and returns a mapping (or a
    model) that must satisfy `output_schema`. Extra keys in the incoming
    record are ignored, so a step only sees the fields it declares.
    """
    id: str
    input_schema: Type[BaseModel]
    output_schema: Type[BaseModel]
    execute: Callable[[Any], Any]
    description: str = ""

    def run(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        try:
            inp = self.input_schema.model_validate(dict(data))
        except ValidationError as e:
            raise StepValidationError(self.id, "input", e) from e

        t0 = log_invoke_start(log, f"step:{self.id}", data)
        raw = self.execute(inp)
        if isinstance(raw, BaseModel):
            raw = raw.model_dump()
        try:
            out = self.output_schema.model_validate(raw).model_dump()
        except ValidationError as e:
            raise StepValidationError(self.id, "output", e) from e
        log_invoke_end(log, f"step:{self.id}", t0, out)
        return out

def create_step(
    *,
    id: str,
    input_schema: Type[BaseModel],
    output_schema: Type[BaseModel],
    description: str = "",
) -> Callable[[Callable[[Any], Any]], Step]:
    """Decorator turning a plain function into a Step (docstring as fallback description)."""
    def decorator(fn: Callable[[Any], Any]) -> Step:
        return Step(
            id=id,
            input_schema=input_schema,
            output_schema=output_schema,
            execute=fn,
            description=description or inspect.getdoc(fn) or "",
        )
    return decorator

@dataclass(frozen=True)
class Branch:
    options: Tuple[Tuple[Predicate, Step], ...]


# ─────────────────────────────────────────────────────────────────────────────
# Run state & result
# ─────────────────────────────────────────────────────────────────────────────

def _merge(left: Dict[str, Any], right: Dict[str, Any]) -> Dict[str, Any]:
    return {**left, **right}

class RunState(TypedDict, total=False):
    data: Dict[str, Any]                                   # current record
    route: str                                             # step picked by the last branch
    path: Annotated[List[str], operator.add]               # executed step ids, in order
    outputs: Annotated[Dict[str, Dict[str, Any]], _merge]  # step id -> output

_RESERVED_IDS = set(RunState.__annotations__)

def _chosen_route(state: RunState) -> str:
    return state["route"]

class WorkflowRunResult(BaseModel):
    run_id: str
    workflow_id: str
    status: Literal["success", "failed"]
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    path: List[str] = Field(default_factory=list)
    steps: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


# ─────────────────────────────────────────────────────────────────────────────
# Workflow builder
# ─────────────────────────────────────────────────────────────────────────────

class Workflow:
    """
    Ordered stages (steps and branches) compiled into a LangGraph graph.

    Public contract:
      .then(step) / .branch([(predicate, step), ...]) / .commit()
      .invoke(input) / await .ainvoke(input) -> WorkflowRunResult
      .create_run(run_id=None).start(input)
    """

    def __init__(
        self,
        *,
        id: str,
        input_schema: Type[BaseModel],
        output_schema: Any = None,
        description: str = "",
    ):
        self.id = id
        self.description = description
        self.input_schema = input_schema
        self.output_schema = output_schema
        self._output_adapter = TypeAdapter(output_schema) if output_schema is not None else None
        self._stages: List[Union[Step, Branch]] = []
        self._graph = None

    # ── building ──
    def then(self, step: Step) -> "Workflow":
        self._ensure_open()
        self._stages.append(step)
        return self

    def branch(self, options: Sequence[Tuple[Predicate, Step]]) -> "Workflow":
        self._ensure_open()
        if not options:
            raise ValueError("branch() needs at least one (predicate, step) pair")
        self._stages.append(Branch(tuple(options)))
        return self

    def commit(self) -> "Workflow":
        self._ensure_open()
        if not self._stages:
            raise ValueError(f"Workflow '{self.id}' has no steps")
        seen: set[str] = set()
        for step in self.steps:
            if step.id in _RESERVED_IDS:
                raise ValueError(f"Step id '{step.id}' is reserved")
            if step.id in seen:
                raise ValueError(f"Duplicate step id '{step.id}' in workflow '{self.id}'")
            seen.add(step.id)
        self._graph = self._build_graph()
        return self

    @property
    def committed(self) -> bool:
        return self._graph is not None

    @property
    def steps(self) -> List[Step]:
        out: List[Step] = []
        for stage in self._stages:
            if isinstance(stage, Step):
                out.append(stage)
            else:
                out.extend(step for _, step in stage.options)
        return out

    def _ensure_open(self) -> None:
        if self._graph is not None:
            raise RuntimeError(f"Workflow '{self.id}' is already committed")

    # ── graph wiring ──
    @staticmethod
    def _node(step: Step) -> RunnableLambda:
        def n_step(state: RunState) -> Dict[str, Any]:
            out = step.run(state.get("data", {}))
            return {"data": out, "path": [step.id], "outputs": {step.id: out}}
        return RunnableLambda(n_step, name=step.id)

    def _router(self, branch: Branch) -> RunnableLambda:
        def n_branch(state: RunState) -> Dict[str, Any]:
            data = state.get("data", {})
            for predicate, step in branch.options:
                matched = bool(predicate(data))
                log.debug("workflow.branch.check", extra={"workflow": self.id, "candidate": step.id, "matched": matched})
                if matched:
                    log.info("workflow.branch.selected", extra={"workflow": self.id, "step": step.id})
                    return {"route": step.id}
            raise BranchNotMatchedError(self.id, [s.id for _, s in branch.options])
        return RunnableLambda(n_branch, name="branch")

    def _build_graph(self):
        g = StateGraph(RunState)
        exits: List[str] = [START]

        for i, stage in enumerate(self._stages):
            if isinstance(stage, Step):
                g.add_node(stage.id, self._node(stage))
                for src in exits:
                    g.add_edge(src, stage.id)
                exits = [stage.id]
            else:
                router = f"__branch_{i}__"
                g.add_node(router, self._router(stage))
                for src in exits:
                    g.add_edge(src, router)
                targets = {step.id: step.id for _, step in stage.options}
                for _, step in stage.options:
                    g.add_node(step.id, self._node(step))
                g.add_conditional_edges(router, _chosen_route, targets)
                exits = list(targets)

        for src in exits:
            g.add_edge(src, END)
        return g.compile()

    # ── running ──
    def create_run(self, run_id: Optional[str] = None) -> "WorkflowRun":
        if self._graph is None:
            raise RuntimeError(f"Workflow '{self.id}' must be committed before it can run")
        return WorkflowRun(self, run_id=run_id)

    def invoke(self, input_data: Union[Mapping[str, Any], BaseModel]) -> WorkflowRunResult:
        return self.create_run().start(input_data)

    async def ainvoke(self, input_data: Union[Mapping[str, Any], BaseModel]) -> WorkflowRunResult:
        return await self.create_run().astart(input_data)


class WorkflowRun:
    """One execution of a committed workflow. Failures are reported, not raised."""

    def __init__(self, workflow: Workflow, *, run_id: Optional[str] = None):
        self.workflow = workflow
        self.run_id = run_id or uuid.uuid4().hex

    def start(self, input_data: Union[Mapping[str, Any], BaseModel]) -> WorkflowRunResult:
        with bind_context(run_id=self.run_id, workflow=self.workflow.id):
            init, failed = self._prepare(input_data)
            if failed is not None:
                return failed
            state: Dict[str, Any] = init
            try:
                for state in self.workflow._graph.stream(init, stream_mode="values"):
                    pass
            except Exception as e:
                return self._failed(state, e)
            return self._finish(state)

    async def astart(self, input_data: Union[Mapping[str, Any], BaseModel]) -> WorkflowRunResult:
        with bind_context(run_id=self.run_id, workflow=self.workflow.id):
            init, failed = self._prepare(input_data)
            if failed is not None:
                return failed
            state: Dict[str, Any] = init
            try:
                async for state in self.workflow._graph.astream(init, stream_mode="values"):
                    pass
            except Exception as e:
                return self._failed(state, e)
            return self._finish(state)

    # ── helpers ──
    def _prepare(self, input_data: Any) -> Tuple[Dict[str, Any], Optional[WorkflowRunResult]]:
        log.info("workflow.run.start", extra={"workflow": self.workflow.id})
        try:
            raw = input_data.model_dump() if isinstance(input_data, BaseModel) else dict(input_data)
            data = self.workflow.input_schema.model_validate(raw).model_dump()
        except (TypeError, ValueError) as e:
            return {}, self._failed({}, f"Workflow input failed validation: {e}")
        return {"data": data, "path": [], "outputs": {}}, None

    def _failed(self, state: Mapping[str, Any], error: Union[Exception, str]) -> WorkflowRunResult:
        message = str(error)
        log.warning("workflow.run.failed", extra={
            "workflow": self.workflow.id,
            "error": message,
            "error_type": type(error).__name__ if isinstance(error, Exception) else "ValidationError",
        })
        return WorkflowRunResult(
            run_id=self.run_id,
            workflow_id=self.workflow.id,
            status="failed",
            error=message,
            path=list(state.get("path", [])),
            steps=dict(state.get("outputs", {})),
        )

    def _finish(self, state: Mapping[str, Any]) -> WorkflowRunResult:
        data = dict(state.get("data", {}))
        adapter = self.workflow._output_adapter
        if adapter is not None:
            try:
                data = adapter.dump_python(adapter.validate_python(data))
            except ValidationError as e:
                return self._failed(state, f"Workflow output failed validation: {e}")
        log.info("workflow.run.end", extra={"workflow": self.workflow.id, "path": list(state.get("path", []))})
        return WorkflowRunResult(
            run_id=self.run_id,
            workflow_id=self.workflow.id,
            status="success",
            result=data,
            path=list(state.get("path", [])),
            steps=dict(state.get("outputs", {})),
        )
