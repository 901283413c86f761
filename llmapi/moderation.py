"""Moderation requests and results."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from llmapi.request import ApiRequest, HttpMethod

MODERATION_OMNI_LATEST = "omni-moderation-latest"
MODERATION_OMNI_20240926 = "omni-moderation-2024-09-26"
MODERATION_TEXT_STABLE = "text-moderation-stable"
MODERATION_TEXT_LATEST = "text-moderation-latest"
# Deprecated: use MODERATION_TEXT_STABLE or MODERATION_TEXT_LATEST.
MODERATION_TEXT_001 = "text-moderation-001"

VALID_MODERATION_MODELS = frozenset(
    {
        MODERATION_OMNI_LATEST,
        MODERATION_OMNI_20240926,
        MODERATION_TEXT_STABLE,
        MODERATION_TEXT_LATEST,
    }
)


class InvalidModerationModelError(ValueError):
    """The requested model cannot be used for moderation."""

    def __init__(
        self,
        message: str = (
            "this model is not supported with moderation, please use "
            "text-moderation-stable or text-moderation-latest instead"
        ),
    ) -> None:
        super().__init__(message)


@dataclass
class ModerationRequest:
    """Text to check and, optionally, the model to check it with."""

    input: str = ""
    model: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.input:
            out["input"] = self.input
        if self.model:
            out["model"] = self.model
        return out


def _key(name: str) -> Any:
    return field(default=None, metadata={"key": name})


def _from_json(cls: type, data: Mapping[str, Any], convert: Any) -> Any:
    return cls(**{f.name: convert(data.get(f.metadata["key"]) or 0) for f in fields(cls)})


def _to_json(obj: Any) -> dict[str, Any]:
    return {f.metadata["key"]: getattr(obj, f.name) for f in fields(obj)}


@dataclass
class ResultCategories:
    """Which categories the content was flagged for."""

    hate: bool = field(default=False, metadata={"key": "hate"})
    hate_threatening: bool = field(default=False, metadata={"key": "hate/threatening"})
    harassment: bool = field(default=False, metadata={"key": "harassment"})
    harassment_threatening: bool = field(
        default=False, metadata={"key": "harassment/threatening"}
    )
    self_harm: bool = field(default=False, metadata={"key": "self-harm"})
    self_harm_intent: bool = field(default=False, metadata={"key": "self-harm/intent"})
    self_harm_instructions: bool = field(
        default=False, metadata={"key": "self-harm/instructions"}
    )
    sexual: bool = field(default=False, metadata={"key": "sexual"})
    sexual_minors: bool = field(default=False, metadata={"key": "sexual/minors"})
    violence: bool = field(default=False, metadata={"key": "violence"})
    violence_graphic: bool = field(default=False, metadata={"key": "violence/graphic"})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResultCategories:
        return _from_json(cls, data, bool)

    def to_dict(self) -> dict[str, Any]:
        return _to_json(self)


@dataclass
class ResultCategoryScores:
    """The score for each moderation category."""

    hate: float = field(default=0.0, metadata={"key": "hate"})
    hate_threatening: float = field(default=0.0, metadata={"key": "hate/threatening"})
    harassment: float = field(default=0.0, metadata={"key": "harassment"})
    harassment_threatening: float = field(
        default=0.0, metadata={"key": "harassment/threatening"}
    )
    self_harm: float = field(default=0.0, metadata={"key": "self-harm"})
    self_harm_intent: float = field(default=0.0, metadata={"key": "self-harm/intent"})
    self_harm_instructions: float = field(
        default=0.0, metadata={"key": "self-harm/instructions"}
    )
    sexual: float = field(default=0.0, metadata={"key": "sexual"})
    sexual_minors: float = field(default=0.0, metadata={"key": "sexual/minors"})
    violence: float = field(default=0.0, metadata={"key": "violence"})
    violence_graphic: float = field(default=0.0, metadata={"key": "violence/graphic"})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResultCategoryScores:
        return _from_json(cls, data, float)

    def to_dict(self) -> dict[str, Any]:
        return _to_json(self)


@dataclass
class Result:
    """The moderation outcome for one input."""

    categories: ResultCategories = field(default_factory=ResultCategories)
    category_scores: ResultCategoryScores = field(default_factory=ResultCategoryScores)
    flagged: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Result:
        return cls(
            categories=ResultCategories.from_dict(data.get("categories") or {}),
            category_scores=ResultCategoryScores.from_dict(data.get("category_scores") or {}),
            flagged=bool(data.get("flagged")),
        )


@dataclass
class ModerationResponse:
    """The results of a moderation call."""

    id: str = ""
    model: str = ""
    results: list[Result] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ModerationResponse:
        return cls(
            id=data.get("id") or "",
            model=data.get("model") or "",
            results=[Result.from_dict(item) for item in data.get("results") or []],
        )


def create_moderation(request: ModerationRequest) -> ApiRequest:
    """Describe a moderation call; reject models moderation does not support."""
    if request.model and request.model not in VALID_MODERATION_MODELS:
        raise InvalidModerationModelError()
    return ApiRequest(
        HttpMethod.POST,
        "/moderations",
        body=request.to_dict(),
        model=request.model,
    )