"""Runs and run steps of the assistants API: requests, responses and calls."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from llmapi.request import ApiRequest, HttpMethod, Pagination
from llmapi.thread import ThreadMessage, ThreadRequest

E = TypeVar("E", bound=Enum)


class RunStatus(str, Enum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    FAILED = "failed"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class RequiredActionType(str, Enum):
    SUBMIT_TOOL_OUTPUTS = "submit_tool_outputs"


class RunError(str, Enum):
    SERVER_ERROR = "server_error"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"


class TruncationStrategy(str, Enum):
    """How a thread is cut to fit the model's context."""

    # Messages in the middle of the thread are dropped.
    AUTO = "auto"
    # Only the n most recent messages are kept.
    LAST_MESSAGES = "last_messages"


class RunStepStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    CANCELLING = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"


class RunStepType(str, Enum):
    MESSAGE_CREATION = "message_creation"
    TOOL_CALLS = "tool_calls"


def _enum(cls: type[E], raw: Any) -> E | str:
    try:
        return cls(raw)
    except ValueError:
        return raw


def _plain(value: Any) -> str:
    return str(getattr(value, "value", value))


def _copy_map(value: Mapping[str, Any] | None) -> dict[str, Any] | None:
    return dict(value) if value is not None else None


def _opt_int(value: Any) -> int | None:
    return int(value) if value is not None else None


def _opt_float(value: Any) -> float | None:
    return float(value) if value is not None else None


def _dict_list(value: Any) -> list[dict[str, Any]]:
    return [dict(item) for item in value or []]


@dataclass
class ThreadTruncationStrategy:
    """The truncation strategy for a thread; ``last_messages`` goes with LAST_MESSAGES."""

    type: TruncationStrategy | str = ""
    last_messages: int | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.type:
            out["type"] = _plain(self.type)
        if self.last_messages is not None:
            out["last_messages"] = self.last_messages
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ThreadTruncationStrategy:
        raw = data.get("type") or ""
        return cls(
            type=_enum(TruncationStrategy, raw) if raw else "",
            last_messages=_opt_int(data.get("last_messages")),
        )


@dataclass
class RunLastError:
    """The last error a run or step ran into."""

    code: RunError | str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RunLastError:
        return cls(
            code=_enum(RunError, data.get("code") or ""),
            message=data.get("message") or "",
        )


@dataclass
class RunRequiredAction:
    """What a run needs before it can continue; ``tool_calls`` are plain JSON objects."""

    type: RequiredActionType | str = ""
    tool_calls: list[dict[str, Any]] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RunRequiredAction:
        submit = data.get("submit_tool_outputs")
        return cls(
            type=_enum(RequiredActionType, data.get("type") or ""),
            tool_calls=_dict_list(submit.get("tool_calls")) if submit is not None else None,
        )


def _optional(data: Mapping[str, Any], key: str, cls: Any) -> Any:
    value = data.get(key)
    return cls.from_dict(value) if value is not None else None


@dataclass
class Run:
    """An execution of an assistant on a thread."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    thread_id: str = ""
    assistant_id: str = ""
    status: RunStatus | str = ""
    required_action: RunRequiredAction | None = None
    last_error: RunLastError | None = None
    expires_at: int = 0
    started_at: int | None = None
    cancelled_at: int | None = None
    failed_at: int | None = None
    completed_at: int | None = None
    model: str = ""
    instructions: str = ""
    tools: list[dict[str, Any]] = field(default_factory=list)
    file_ids: list[str] | None = None
    metadata: dict[str, Any] | None = None
    usage: dict[str, Any] = field(default_factory=dict)
    temperature: float | None = None
    max_prompt_tokens: int = 0
    max_completion_tokens: int = 0
    truncation_strategy: ThreadTruncationStrategy | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Run:
        file_ids = data.get("file_ids")
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=int(data.get("created_at") or 0),
            thread_id=data.get("thread_id") or "",
            assistant_id=data.get("assistant_id") or "",
            status=_enum(RunStatus, data.get("status") or ""),
            required_action=_optional(data, "required_action", RunRequiredAction),
            last_error=_optional(data, "last_error", RunLastError),
            expires_at=int(data.get("expires_at") or 0),
            started_at=_opt_int(data.get("started_at")),
            cancelled_at=_opt_int(data.get("cancelled_at")),
            failed_at=_opt_int(data.get("failed_at")),
            completed_at=_opt_int(data.get("completed_at")),
            model=data.get("model") or "",
            instructions=data.get("instructions") or "",
            tools=_dict_list(data.get("tools")),
            file_ids=list(file_ids) if file_ids is not None else None,
            metadata=_copy_map(data.get("metadata")),
            usage=dict(data.get("usage") or {}),
            temperature=_opt_float(data.get("temperature")),
            max_prompt_tokens=int(data.get("max_prompt_tokens") or 0),
            max_completion_tokens=int(data.get("max_completion_tokens") or 0),
            truncation_strategy=_optional(data, "truncation_strategy", ThreadTruncationStrategy),
        )


@dataclass
class RunRequest:
    """Options for starting a run.

    ``tool_choice`` and ``response_format`` may be strings or objects;
    ``parallel_tool_calls`` is sent whenever it is not None, False included.
    """

    assistant_id: str = ""
    model: str = ""
    instructions: str = ""
    additional_instructions: str = ""
    additional_messages: list[ThreadMessage] | None = None
    tools: list[dict[str, Any]] | None = None
    metadata: dict[str, Any] | None = None
    temperature: float | None = None
    top_p: float | None = None
    max_prompt_tokens: int = 0
    max_completion_tokens: int = 0
    truncation_strategy: ThreadTruncationStrategy | None = None
    tool_choice: Any = None
    response_format: Any = None
    parallel_tool_calls: Any = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"assistant_id": self.assistant_id}
        for key in ("model", "instructions", "additional_instructions"):
            value = getattr(self, key)
            if value:
                out[key] = value
        if self.additional_messages:
            out["additional_messages"] = [m.to_dict() for m in self.additional_messages]
        if self.tools:
            out["tools"] = [dict(tool) for tool in self.tools]
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        if self.temperature is not None:
            out["temperature"] = self.temperature
        if self.top_p is not None:
            out["top_p"] = self.top_p
        if self.max_prompt_tokens:
            out["max_prompt_tokens"] = self.max_prompt_tokens
        if self.max_completion_tokens:
            out["max_completion_tokens"] = self.max_completion_tokens
        if self.truncation_strategy is not None:
            out["truncation_strategy"] = self.truncation_strategy.to_dict()
        for key in ("tool_choice", "response_format", "parallel_tool_calls"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out


@dataclass
class RunModifyRequest:
    """New metadata for a run."""

    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"metadata": dict(self.metadata)} if self.metadata else {}


@dataclass
class RunList:
    """A list of runs."""

    runs: list[Run] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RunList:
        return cls(runs=[Run.from_dict(r) for r in data.get("data") or []])


@dataclass
class ToolOutput:
    """The output of one tool call."""

    tool_call_id: str
    output: Any = None


@dataclass
class SubmitToolOutputsRequest:
    """Tool outputs sent to a run that requires action."""

    tool_outputs: list[ToolOutput] | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.tool_outputs is None:
            return {"tool_outputs": None}
        return {
            "tool_outputs": [
                {"tool_call_id": o.tool_call_id, "output": o.output}
                for o in self.tool_outputs
            ]
        }


@dataclass
class CreateThreadAndRunRequest:
    """Run options together with the thread to create for the run."""

    run: RunRequest = field(default_factory=RunRequest)
    thread: ThreadRequest = field(default_factory=ThreadRequest)

    def to_dict(self) -> dict[str, Any]:
        out = self.run.to_dict()
        out["thread"] = self.thread.to_dict()
        return out


@dataclass
class StepDetails:
    """What a run step did; ``tool_calls`` are plain JSON objects."""

    type: RunStepType | str = ""
    message_creation_id: str | None = None
    tool_calls: list[dict[str, Any]] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StepDetails:
        creation = data.get("message_creation")
        tool_calls = data.get("tool_calls")
        return cls(
            type=_enum(RunStepType, data.get("type") or ""),
            message_creation_id=(
                creation.get("message_id") or "" if creation is not None else None
            ),
            tool_calls=_dict_list(tool_calls) if tool_calls else None,
        )


@dataclass
class RunStep:
    """One step of a run."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    assistant_id: str = ""
    thread_id: str = ""
    run_id: str = ""
    type: RunStepType | str = ""
    status: RunStepStatus | str = ""
    step_details: StepDetails = field(default_factory=StepDetails)
    last_error: RunLastError | None = None
    expired_at: int | None = None
    cancelled_at: int | None = None
    failed_at: int | None = None
    completed_at: int | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RunStep:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=int(data.get("created_at") or 0),
            assistant_id=data.get("assistant_id") or "",
            thread_id=data.get("thread_id") or "",
            run_id=data.get("run_id") or "",
            type=_enum(RunStepType, data.get("type") or ""),
            status=_enum(RunStepStatus, data.get("status") or ""),
            step_details=StepDetails.from_dict(data.get("step_details") or {}),
            last_error=_optional(data, "last_error", RunLastError),
            expired_at=_opt_int(data.get("expired_at")),
            cancelled_at=_opt_int(data.get("cancelled_at")),
            failed_at=_opt_int(data.get("failed_at")),
            completed_at=_opt_int(data.get("completed_at")),
            metadata=_copy_map(data.get("metadata")),
        )


@dataclass
class RunStepList:
    """A page of run steps."""

    run_steps: list[RunStep] = field(default_factory=list)
    first_id: str = ""
    last_id: str = ""
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RunStepList:
        return cls(
            run_steps=[RunStep.from_dict(s) for s in data.get("data") or []],
            first_id=data.get("first_id") or "",
            last_id=data.get("last_id") or "",
            has_more=bool(data.get("has_more")),
        )


def _runs_path(thread_id: str) -> str:
    return f"/threads/{thread_id}/runs"


def create_run(thread_id: str, request: RunRequest) -> ApiRequest:
    """Describe the call that starts a run on a thread."""
    return ApiRequest(
        HttpMethod.POST, _runs_path(thread_id), body=request.to_dict(), assistants_beta=True
    )


def retrieve_run(thread_id: str, run_id: str) -> ApiRequest:
    """Describe the call that retrieves a run."""
    return ApiRequest(
        HttpMethod.GET, f"{_runs_path(thread_id)}/{run_id}", assistants_beta=True
    )


def modify_run(thread_id: str, run_id: str, request: RunModifyRequest) -> ApiRequest:
    """Describe the call that modifies a run."""
    return ApiRequest(
        HttpMethod.POST,
        f"{_runs_path(thread_id)}/{run_id}",
        body=request.to_dict(),
        assistants_beta=True,
    )


def list_runs(thread_id: str, pagination: Pagination | None = None) -> ApiRequest:
    """Describe the call that lists the runs of a thread."""
    query = tuple((pagination or Pagination()).query_items())
    return ApiRequest(
        HttpMethod.GET, _runs_path(thread_id), query=query, assistants_beta=True
    )


def submit_tool_outputs(
    thread_id: str, run_id: str, request: SubmitToolOutputsRequest
) -> ApiRequest:
    """Describe the call that submits tool outputs to a run."""
    return ApiRequest(
        HttpMethod.POST,
        f"{_runs_path(thread_id)}/{run_id}/submit_tool_outputs",
        body=request.to_dict(),
        assistants_beta=True,
    )


def cancel_run(thread_id: str, run_id: str) -> ApiRequest:
    """Describe the call that cancels a run."""
    return ApiRequest(
        HttpMethod.POST, f"{_runs_path(thread_id)}/{run_id}/cancel", assistants_beta=True
    )


def create_thread_and_run(request: CreateThreadAndRunRequest) -> ApiRequest:
    """Describe the call that creates a thread and starts a run on it."""
    return ApiRequest(
        HttpMethod.POST, "/threads/runs", body=request.to_dict(), assistants_beta=True
    )


def retrieve_run_step(thread_id: str, run_id: str, step_id: str) -> ApiRequest:
    """Describe the call that retrieves a run step."""
    return ApiRequest(
        HttpMethod.GET,
        f"{_runs_path(thread_id)}/{run_id}/steps/{step_id}",
        assistants_beta=True,
    )


def list_run_steps(
    thread_id: str, run_id: str, pagination: Pagination | None = None
) -> ApiRequest:
    """Describe the call that lists the steps of a run."""
    query = tuple((pagination or Pagination()).query_items())
    return ApiRequest(
        HttpMethod.GET,
        f"{_runs_path(thread_id)}/{run_id}/steps",
        query=query,
        assistants_beta=True,
    )