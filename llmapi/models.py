"""Model listing, lookup and deletion."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from llmapi.request import ApiRequest, HttpMethod


@dataclass
class Permission:
    """What an organisation may do with a model."""

    created_at: int = 0
    id: str = ""
    object: str = ""
    allow_create_engine: bool = False
    allow_sampling: bool = False
    allow_logprobs: bool = False
    allow_search_indices: bool = False
    allow_view: bool = False
    allow_fine_tuning: bool = False
    organization: str = ""
    group: Any = None
    is_blocking: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Permission:
        return cls(
            created_at=int(data.get("created") or 0),
            id=data.get("id") or "",
            object=data.get("object") or "",
            allow_create_engine=bool(data.get("allow_create_engine")),
            allow_sampling=bool(data.get("allow_sampling")),
            allow_logprobs=bool(data.get("allow_logprobs")),
            allow_search_indices=bool(data.get("allow_search_indices")),
            allow_view=bool(data.get("allow_view")),
            allow_fine_tuning=bool(data.get("allow_fine_tuning")),
            organization=data.get("organization") or "",
            group=data.get("group"),
            is_blocking=bool(data.get("is_blocking")),
        )


@dataclass
class Model:
    """A model available to the account."""

    created_at: int = 0
    id: str = ""
    object: str = ""
    owned_by: str = ""
    permission: list[Permission] = field(default_factory=list)
    root: str = ""
    parent: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Model:
        return cls(
            created_at=int(data.get("created") or 0),
            id=data.get("id") or "",
            object=data.get("object") or "",
            owned_by=data.get("owned_by") or "",
            permission=[Permission.from_dict(p) for p in data.get("permission") or []],
            root=data.get("root") or "",
            parent=data.get("parent") or "",
        )


@dataclass
class FineTuneModelDeleteResponse:
    """The outcome of deleting a fine-tuned model."""

    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FineTuneModelDeleteResponse:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted")),
        )


@dataclass
class ModelsList:
    """The models that belong to the user or organisation."""

    models: list[Model] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ModelsList:
        return cls(models=[Model.from_dict(m) for m in data.get("data") or []])


def list_models() -> ApiRequest:
    """Describe the call that lists the available models."""
    return ApiRequest(HttpMethod.GET, "/models")


def get_model(model_id: str) -> ApiRequest:
    """Describe the call that retrieves one model."""
    return ApiRequest(HttpMethod.GET, f"/models/{model_id}")


def delete_fine_tune_model(model_id: str) -> ApiRequest:
    """Describe the call that deletes a fine-tuned model."""
    return ApiRequest(HttpMethod.DELETE, "/models/" + model_id)