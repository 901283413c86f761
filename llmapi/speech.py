"""Text-to-speech requests."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from llmapi.request import ApiRequest, HttpMethod


class SpeechModel(str, Enum):
    TTS_1 = "tts-1"
    TTS_1_HD = "tts-1-hd"
    CANARY_TTS = "canary-tts"


class SpeechVoice(str, Enum):
    ALLOY = "alloy"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SHIMMER = "shimmer"


class SpeechResponseFormat(str, Enum):
    MP3 = "mp3"
    OPUS = "opus"
    AAC = "aac"
    FLAC = "flac"
    WAV = "wav"
    PCM = "pcm"


def _plain(value: Any) -> str:
    return str(getattr(value, "value", value))


@dataclass
class CreateSpeechRequest:
    """Text to speak and how to speak it.

    ``response_format`` defaults to mp3 and ``speed`` to 1.0 on the server
    when left unset.
    """

    model: SpeechModel | str
    input: str
    voice: SpeechVoice | str
    response_format: SpeechResponseFormat | str = ""
    speed: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "model": _plain(self.model),
            "input": self.input,
            "voice": _plain(self.voice),
        }
        if self.response_format:
            out["response_format"] = _plain(self.response_format)
        if self.speed:
            out["speed"] = self.speed
        return out


def create_speech(request: CreateSpeechRequest) -> ApiRequest:
    """Describe the speech call; its response body is the audio itself."""
    return ApiRequest(
        HttpMethod.POST,
        "/audio/speech",
        body=request.to_dict(),
        model=_plain(request.model),
        content_type="application/json",
        raw_response=True,
    )