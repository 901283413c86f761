"""Vector stores, their files and file batches: requests, responses and calls."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from llmapi.request import ApiRequest, HttpMethod, Pagination

VECTOR_STORES_PATH = "/vector_stores"
FILES_SEGMENT = "/files"
FILE_BATCHES_SEGMENT = "/file_batches"


def _copy_map(value: Mapping[str, Any] | None) -> dict[str, Any] | None:
    return dict(value) if value is not None else None


def _opt_int(value: Any) -> int | None:
    return int(value) if value is not None else None


@dataclass
class VectorStoreFileCount:
    """How many files of a store or batch are in each state."""

    in_progress: int = 0
    completed: int = 0
    failed: int = 0
    cancelled: int = 0
    total: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VectorStoreFileCount:
        return cls(
            in_progress=int(data.get("in_progress") or 0),
            completed=int(data.get("completed") or 0),
            failed=int(data.get("failed") or 0),
            cancelled=int(data.get("cancelled") or 0),
            total=int(data.get("total") or 0),
        )


@dataclass
class VectorStoreExpires:
    """When a vector store expires: ``days`` after the ``anchor`` event."""

    anchor: str = ""
    days: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"anchor": self.anchor, "days": self.days}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VectorStoreExpires:
        return cls(anchor=data.get("anchor") or "", days=int(data.get("days") or 0))


@dataclass
class VectorStore:
    """A vector store."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    name: str = ""
    usage_bytes: int = 0
    file_counts: VectorStoreFileCount = field(default_factory=VectorStoreFileCount)
    status: str = ""
    expires_after: VectorStoreExpires | None = None
    expires_at: int | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VectorStore:
        expires_after = data.get("expires_after")
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=int(data.get("created_at") or 0),
            name=data.get("name") or "",
            usage_bytes=int(data.get("usage_bytes") or 0),
            file_counts=VectorStoreFileCount.from_dict(data.get("file_counts") or {}),
            status=data.get("status") or "",
            expires_after=(
                VectorStoreExpires.from_dict(expires_after)
                if expires_after is not None
                else None
            ),
            expires_at=_opt_int(data.get("expires_at")),
            metadata=_copy_map(data.get("metadata")),
        )


@dataclass
class VectorStoreRequest:
    """Options for creating or modifying a vector store."""

    name: str = ""
    file_ids: list[str] | None = None
    expires_after: VectorStoreExpires | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.name:
            out["name"] = self.name
        if self.file_ids:
            out["file_ids"] = list(self.file_ids)
        if self.expires_after is not None:
            out["expires_after"] = self.expires_after.to_dict()
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        return out


@dataclass
class VectorStoresList:
    """A page of vector stores."""

    vector_stores: list[VectorStore] = field(default_factory=list)
    last_id: str | None = None
    first_id: str | None = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VectorStoresList:
        return cls(
            vector_stores=[VectorStore.from_dict(v) for v in data.get("data") or []],
            last_id=data.get("last_id"),
            first_id=data.get("first_id"),
            has_more=bool(data.get("has_more")),
        )


@dataclass
class VectorStoreDeleteResponse:
    """The outcome of deleting a vector store."""

    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VectorStoreDeleteResponse:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted")),
        )


@dataclass
class VectorStoreFile:
    """A file held in a vector store."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    vector_store_id: str = ""
    usage_bytes: int = 0
    status: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VectorStoreFile:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=int(data.get("created_at") or 0),
            vector_store_id=data.get("vector_store_id") or "",
            usage_bytes=int(data.get("usage_bytes") or 0),
            status=data.get("status") or "",
        )


@dataclass
class VectorStoreFileRequest:
    """A file to add to a vector store."""

    file_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"file_id": self.file_id}


@dataclass
class VectorStoreFilesList:
    """A page of vector store files."""

    vector_store_files: list[VectorStoreFile] = field(default_factory=list)
    first_id: str | None = None
    last_id: str | None = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VectorStoreFilesList:
        return cls(
            vector_store_files=[VectorStoreFile.from_dict(f) for f in data.get("data") or []],
            first_id=data.get("first_id"),
            last_id=data.get("last_id"),
            has_more=bool(data.get("has_more")),
        )


@dataclass
class VectorStoreFileBatch:
    """A batch of files being added to a vector store."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    vector_store_id: str = ""
    status: str = ""
    file_counts: VectorStoreFileCount = field(default_factory=VectorStoreFileCount)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VectorStoreFileBatch:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=int(data.get("created_at") or 0),
            vector_store_id=data.get("vector_store_id") or "",
            status=data.get("status") or "",
            file_counts=VectorStoreFileCount.from_dict(data.get("file_counts") or {}),
        )


@dataclass
class VectorStoreFileBatchRequest:
    """The files to add to a vector store in one batch."""

    file_ids: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"file_ids": list(self.file_ids) if self.file_ids is not None else None}


def _store_path(vector_store_id: str) -> str:
    return f"{VECTOR_STORES_PATH}/{vector_store_id}"


def _batch_path(vector_store_id: str, batch_id: str) -> str:
    return f"{_store_path(vector_store_id)}{FILE_BATCHES_SEGMENT}/{batch_id}"


def _query(pagination: Pagination | None) -> tuple[tuple[str, str], ...]:
    return tuple((pagination or Pagination()).query_items())


def create_vector_store(request: VectorStoreRequest) -> ApiRequest:
    """Describe the call that creates a vector store."""
    return ApiRequest(
        HttpMethod.POST, VECTOR_STORES_PATH, body=request.to_dict(), assistants_beta=True
    )


def retrieve_vector_store(vector_store_id: str) -> ApiRequest:
    """Describe the call that retrieves a vector store."""
    return ApiRequest(HttpMethod.GET, _store_path(vector_store_id), assistants_beta=True)


def modify_vector_store(vector_store_id: str, request: VectorStoreRequest) -> ApiRequest:
    """Describe the call that modifies a vector store."""
    return ApiRequest(
        HttpMethod.POST,
        _store_path(vector_store_id),
        body=request.to_dict(),
        assistants_beta=True,
    )


def delete_vector_store(vector_store_id: str) -> ApiRequest:
    """Describe the call that deletes a vector store."""
    return ApiRequest(HttpMethod.DELETE, _store_path(vector_store_id), assistants_beta=True)


def list_vector_stores(pagination: Pagination | None = None) -> ApiRequest:
    """Describe the call that lists vector stores."""
    return ApiRequest(
        HttpMethod.GET, VECTOR_STORES_PATH, query=_query(pagination), assistants_beta=True
    )


def create_vector_store_file(
    vector_store_id: str, request: VectorStoreFileRequest
) -> ApiRequest:
    """Describe the call that adds a file to a vector store."""
    return ApiRequest(
        HttpMethod.POST,
        f"{_store_path(vector_store_id)}{FILES_SEGMENT}",
        body=request.to_dict(),
        assistants_beta=True,
    )


def retrieve_vector_store_file(vector_store_id: str, file_id: str) -> ApiRequest:
    """Describe the call that retrieves a vector store file."""
    return ApiRequest(
        HttpMethod.GET,
        f"{_store_path(vector_store_id)}{FILES_SEGMENT}/{file_id}",
        assistants_beta=True,
    )


def delete_vector_store_file(vector_store_id: str, file_id: str) -> ApiRequest:
    """Describe the call that removes a file from a vector store; its body is not read."""
    return ApiRequest(
        HttpMethod.DELETE,
        f"{_store_path(vector_store_id)}{FILES_SEGMENT}/{file_id}",
        assistants_beta=True,
    )


def list_vector_store_files(
    vector_store_id: str, pagination: Pagination | None = None
) -> ApiRequest:
    """Describe the call that lists the files of a vector store."""
    return ApiRequest(
        HttpMethod.GET,
        f"{_store_path(vector_store_id)}{FILES_SEGMENT}",
        query=_query(pagination),
        assistants_beta=True,
    )


def create_vector_store_file_batch(
    vector_store_id: str, request: VectorStoreFileBatchRequest
) -> ApiRequest:
    """Describe the call that adds a batch of files to a vector store."""
    return ApiRequest(
        HttpMethod.POST,
        f"{_store_path(vector_store_id)}{FILE_BATCHES_SEGMENT}",
        body=request.to_dict(),
        assistants_beta=True,
    )


def retrieve_vector_store_file_batch(vector_store_id: str, batch_id: str) -> ApiRequest:
    """Describe the call that retrieves a file batch."""
    return ApiRequest(
        HttpMethod.GET, _batch_path(vector_store_id, batch_id), assistants_beta=True
    )


def cancel_vector_store_file_batch(vector_store_id: str, batch_id: str) -> ApiRequest:
    """Describe the call that cancels a file batch."""
    return ApiRequest(
        HttpMethod.POST,
        f"{_batch_path(vector_store_id, batch_id)}/cancel",
        assistants_beta=True,
    )


def list_vector_store_files_in_batch(
    vector_store_id: str, batch_id: str, pagination: Pagination | None = None
) -> ApiRequest:
    """Describe the call that lists the files of a file batch."""
    return ApiRequest(
        HttpMethod.GET,
        f"{_batch_path(vector_store_id, batch_id)}/files",
        query=_query(pagination),
        assistants_beta=True,
    )