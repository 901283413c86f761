"""Threads of the assistants API: requests, responses and calls."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from llmapi.request import ApiRequest, HttpMethod

THREADS_PATH = "/threads"


class ChunkingStrategyType(str, Enum):
    AUTO = "auto"
    STATIC = "static"


class ThreadMessageRole(str, Enum):
    ASSISTANT = "assistant"
    USER = "user"


def _plain(value: Any) -> str:
    return str(getattr(value, "value", value))


def _copy_map(value: Mapping[str, Any] | None) -> dict[str, Any] | None:
    return dict(value) if value is not None else None


@dataclass
class StaticChunkingStrategy:
    """Fixed chunk sizes for splitting files."""

    max_chunk_size_tokens: int = 0
    chunk_overlap_tokens: int = 0


@dataclass
class ChunkingStrategy:
    """How files added to a vector store are split into chunks."""

    type: ChunkingStrategyType | str = ChunkingStrategyType.AUTO
    static: StaticChunkingStrategy | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": _plain(self.type)}
        if self.static is not None:
            out["static"] = {
                "max_chunk_size_tokens": self.static.max_chunk_size_tokens,
                "chunk_overlap_tokens": self.static.chunk_overlap_tokens,
            }
        return out


@dataclass
class VectorStoreToolResources:
    """A vector store to create along with a thread."""

    file_ids: list[str] | None = None
    chunking_strategy: ChunkingStrategy | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.file_ids:
            out["file_ids"] = list(self.file_ids)
        if self.chunking_strategy is not None:
            out["chunking_strategy"] = self.chunking_strategy.to_dict()
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        return out


def _ids_object(key: str, ids: list[str]) -> dict[str, Any]:
    return {key: list(ids)} if ids else {}


@dataclass
class ToolResources:
    """Files and vector stores available to a thread's tools.

    ``None`` leaves a tool's entry out; an empty list sends it without ids.
    """

    code_interpreter_file_ids: list[str] | None = None
    file_search_vector_store_ids: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.code_interpreter_file_ids is not None:
            out["code_interpreter"] = _ids_object("file_ids", self.code_interpreter_file_ids)
        if self.file_search_vector_store_ids is not None:
            out["file_search"] = _ids_object(
                "vector_store_ids", self.file_search_vector_store_ids
            )
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ToolResources:
        code = data.get("code_interpreter")
        search = data.get("file_search")
        return cls(
            code_interpreter_file_ids=(
                list(code.get("file_ids") or []) if code is not None else None
            ),
            file_search_vector_store_ids=(
                list(search.get("vector_store_ids") or []) if search is not None else None
            ),
        )


@dataclass
class ToolResourcesRequest:
    """Tool resources sent when creating a thread."""

    code_interpreter_file_ids: list[str] | None = None
    file_search_vector_store_ids: list[str] | None = None
    file_search_vector_stores: list[VectorStoreToolResources] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.code_interpreter_file_ids is not None:
            out["code_interpreter"] = _ids_object("file_ids", self.code_interpreter_file_ids)
        if (
            self.file_search_vector_store_ids is not None
            or self.file_search_vector_stores is not None
        ):
            search: dict[str, Any] = {}
            if self.file_search_vector_store_ids:
                search["vector_store_ids"] = list(self.file_search_vector_store_ids)
            if self.file_search_vector_stores:
                search["vector_stores"] = [
                    store.to_dict() for store in self.file_search_vector_stores
                ]
            out["file_search"] = search
        return out


@dataclass
class ThreadAttachment:
    """A file attached to a message, with the tools it is meant for."""

    file_id: str
    tools: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"file_id": self.file_id, "tools": [{"type": t} for t in self.tools]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ThreadAttachment:
        return cls(
            file_id=data.get("file_id") or "",
            tools=[tool.get("type") or "" for tool in data.get("tools") or []],
        )


def _role(raw: Any) -> ThreadMessageRole | str:
    try:
        return ThreadMessageRole(raw)
    except ValueError:
        return raw


@dataclass
class ThreadMessage:
    """A message given when a thread is created."""

    role: ThreadMessageRole | str
    content: str
    file_ids: list[str] | None = None
    attachments: list[ThreadAttachment] | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"role": _plain(self.role), "content": self.content}
        if self.file_ids:
            out["file_ids"] = list(self.file_ids)
        if self.attachments:
            out["attachments"] = [a.to_dict() for a in self.attachments]
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ThreadMessage:
        attachments = data.get("attachments")
        return cls(
            role=_role(data.get("role") or ""),
            content=data.get("content") or "",
            file_ids=list(data["file_ids"]) if data.get("file_ids") else None,
            attachments=(
                [ThreadAttachment.from_dict(a) for a in attachments] if attachments else None
            ),
            metadata=_copy_map(data.get("metadata")),
        )


@dataclass
class ThreadRequest:
    """Options for creating a thread."""

    messages: list[ThreadMessage] | None = None
    metadata: dict[str, Any] | None = None
    tool_resources: ToolResourcesRequest | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.messages:
            out["messages"] = [m.to_dict() for m in self.messages]
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        if self.tool_resources is not None:
            out["tool_resources"] = self.tool_resources.to_dict()
        return out


@dataclass
class ModifyThreadRequest:
    """New metadata and tool resources for a thread."""

    metadata: dict[str, Any] | None = None
    tool_resources: ToolResources | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"metadata": _copy_map(self.metadata)}
        if self.tool_resources is not None:
            out["tool_resources"] = self.tool_resources.to_dict()
        return out


@dataclass
class Thread:
    """A conversation thread."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    metadata: dict[str, Any] | None = None
    tool_resources: ToolResources = field(default_factory=ToolResources)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Thread:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=int(data.get("created_at") or 0),
            metadata=_copy_map(data.get("metadata")),
            tool_resources=ToolResources.from_dict(data.get("tool_resources") or {}),
        )


@dataclass
class ThreadDeleteResponse:
    """The outcome of deleting a thread."""

    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ThreadDeleteResponse:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted")),
        )


def create_thread(request: ThreadRequest) -> ApiRequest:
    """Describe the call that creates a thread."""
    return ApiRequest(
        HttpMethod.POST, THREADS_PATH, body=request.to_dict(), assistants_beta=True
    )


def retrieve_thread(thread_id: str) -> ApiRequest:
    """Describe the call that retrieves a thread."""
    return ApiRequest(HttpMethod.GET, f"{THREADS_PATH}/{thread_id}", assistants_beta=True)


def modify_thread(thread_id: str, request: ModifyThreadRequest) -> ApiRequest:
    """Describe the call that modifies a thread."""
    return ApiRequest(
        HttpMethod.POST,
        f"{THREADS_PATH}/{thread_id}",
        body=request.to_dict(),
        assistants_beta=True,
    )


def delete_thread(thread_id: str) -> ApiRequest:
    """Describe the call that deletes a thread."""
    return ApiRequest(
        HttpMethod.DELETE, f"{THREADS_PATH}/{thread_id}", assistants_beta=True
    )