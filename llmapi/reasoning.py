"""Parameter checks for reasoning (o-series) chat models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class ReasoningModelError(ValueError):
    """Base class for requests a reasoning model cannot accept."""

    default_message = "this request is not supported by reasoning models"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class MaxTokensDeprecatedError(ReasoningModelError):
    """max_tokens was set where max_completion_tokens is required."""

    default_message = (
        "this model is not supported MaxTokens, please use MaxCompletionTokens"
    )


class LogprobsLimitationError(ReasoningModelError):
    """Log probabilities were requested."""

    default_message = "this model has beta-limitations, logprobs not supported"


class ParameterLimitationError(ReasoningModelError):
    """A sampling parameter differs from its fixed value."""

    default_message = (
        "this model has beta-limitations, temperature, top_p and n are fixed at 1, "
        "while presence_penalty and frequency_penalty are fixed at 0"
    )


_REASONING_PREFIXES = ("o1", "o3")


def _field(request: Any, name: str, default: Any) -> Any:
    if isinstance(request, Mapping):
        value = request.get(name, default)
    else:
        value = getattr(request, name, default)
    return default if value is None else value


class ReasoningValidator:
    """Rejects chat requests that o1/o3 models do not support."""

    def validate(self, request: Any) -> None:
        """Raise a ReasoningModelError if ``request`` breaks a model limitation.

        ``request`` is a mapping or an object with the chat request fields
        (model, max_tokens, logprobs, temperature, top_p, n,
        presence_penalty, frequency_penalty).
        """
        model = _field(request, "model", "")
        if not model.startswith(_REASONING_PREFIXES):
            return

        if _field(request, "max_tokens", 0) > 0:
            raise MaxTokensDeprecatedError()
        if _field(request, "logprobs", False):
            raise LogprobsLimitationError()
        for name in ("temperature", "top_p", "n"):
            value = _field(request, name, 0)
            if value > 0 and value != 1:
                raise ParameterLimitationError()
        for name in ("presence_penalty", "frequency_penalty"):
            if _field(request, name, 0) > 0:
                raise ParameterLimitationError()