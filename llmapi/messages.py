"""Messages inside assistant threads: requests, responses and calls."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from llmapi.request import ApiRequest, HttpMethod
from llmapi.thread import ThreadAttachment

MESSAGES_SEGMENT = "messages"


def _copy_map(value: Mapping[str, Any] | None) -> dict[str, Any] | None:
    return dict(value) if value is not None else None


@dataclass
class MessageText:
    """Text content with its annotations."""

    value: str = ""
    annotations: list[Any] | None = None


@dataclass
class ImageFile:
    """An image content part referring to an uploaded file."""

    file_id: str = ""


@dataclass
class ImageURL:
    """An image content part referring to a URL."""

    url: str = ""
    detail: str = ""


@dataclass
class MessageContent:
    """One content part of a message."""

    type: str = ""
    text: MessageText | None = None
    image_file: ImageFile | None = None
    image_url: ImageURL | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MessageContent:
        text = data.get("text")
        image_file = data.get("image_file")
        image_url = data.get("image_url")
        annotations = text.get("annotations") if text is not None else None
        return cls(
            type=data.get("type") or "",
            text=(
                MessageText(
                    value=text.get("value") or "",
                    annotations=list(annotations) if annotations is not None else None,
                )
                if text is not None
                else None
            ),
            image_file=(
                ImageFile(file_id=image_file.get("file_id") or "")
                if image_file is not None
                else None
            ),
            image_url=(
                ImageURL(url=image_url.get("url") or "", detail=image_url.get("detail") or "")
                if image_url is not None
                else None
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type}
        if self.text is not None:
            out["text"] = {
                "value": self.text.value,
                "annotations": (
                    list(self.text.annotations) if self.text.annotations is not None else None
                ),
            }
        if self.image_file is not None:
            out["image_file"] = {"file_id": self.image_file.file_id}
        if self.image_url is not None:
            out["image_url"] = {"url": self.image_url.url, "detail": self.image_url.detail}
        return out


@dataclass
class Message:
    """A message in a thread."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    thread_id: str = ""
    role: str = ""
    content: list[MessageContent] = field(default_factory=list)
    file_ids: list[str] | None = None
    assistant_id: str | None = None
    run_id: str | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Message:
        file_ids = data.get("file_ids")
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=int(data.get("created_at") or 0),
            thread_id=data.get("thread_id") or "",
            role=data.get("role") or "",
            content=[MessageContent.from_dict(c) for c in data.get("content") or []],
            file_ids=list(file_ids) if file_ids is not None else None,
            assistant_id=data.get("assistant_id"),
            run_id=data.get("run_id"),
            metadata=_copy_map(data.get("metadata")),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "object": self.object,
            "created_at": self.created_at,
            "thread_id": self.thread_id,
            "role": self.role,
            "content": [c.to_dict() for c in self.content],
            "file_ids": list(self.file_ids) if self.file_ids is not None else None,
        }
        if self.assistant_id is not None:
            out["assistant_id"] = self.assistant_id
        if self.run_id is not None:
            out["run_id"] = self.run_id
        out["metadata"] = _copy_map(self.metadata)
        return out


@dataclass
class MessagesList:
    """A page of messages."""

    messages: list[Message] = field(default_factory=list)
    object: str = ""
    first_id: str | None = None
    last_id: str | None = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MessagesList:
        return cls(
            messages=[Message.from_dict(m) for m in data.get("data") or []],
            object=data.get("object") or "",
            first_id=data.get("first_id"),
            last_id=data.get("last_id"),
            has_more=bool(data.get("has_more")),
        )


@dataclass
class MessageRequest:
    """A message to add to a thread."""

    role: str
    content: str
    file_ids: list[str] | None = None
    metadata: dict[str, Any] | None = None
    attachments: list[ThreadAttachment] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.file_ids:
            out["file_ids"] = list(self.file_ids)
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        if self.attachments:
            out["attachments"] = [a.to_dict() for a in self.attachments]
        return out


@dataclass
class MessageFile:
    """A file attached to a message."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    message_id: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MessageFile:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=int(data.get("created_at") or 0),
            message_id=data.get("message_id") or "",
        )


@dataclass
class MessageFilesList:
    """The files attached to a message."""

    message_files: list[MessageFile] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MessageFilesList:
        return cls(message_files=[MessageFile.from_dict(f) for f in data.get("data") or []])


@dataclass
class MessageDeletionStatus:
    """The outcome of deleting a message."""

    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MessageDeletionStatus:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted")),
        )


def _messages_path(thread_id: str) -> str:
    return f"/threads/{thread_id}/{MESSAGES_SEGMENT}"


def create_message(thread_id: str, request: MessageRequest) -> ApiRequest:
    """Describe the call that adds a message to a thread."""
    return ApiRequest(
        HttpMethod.POST,
        _messages_path(thread_id),
        body=request.to_dict(),
        assistants_beta=True,
    )


def list_messages(
    thread_id: str,
    limit: int | None = None,
    order: str | None = None,
    after: str | None = None,
    before: str | None = None,
    run_id: str | None = None,
) -> ApiRequest:
    """Describe the call that lists the messages of a thread."""
    query: list[tuple[str, str]] = []
    if limit is not None:
        query.append(("limit", str(int(limit))))
    if order is not None:
        query.append(("order", order))
    if after is not None:
        query.append(("after", after))
    if before is not None:
        query.append(("before", before))
    if run_id is not None:
        query.append(("run_id", run_id))
    return ApiRequest(
        HttpMethod.GET,
        _messages_path(thread_id),
        query=tuple(query),
        assistants_beta=True,
    )


def retrieve_message(thread_id: str, message_id: str) -> ApiRequest:
    """Describe the call that retrieves a message."""
    return ApiRequest(
        HttpMethod.GET, f"{_messages_path(thread_id)}/{message_id}", assistants_beta=True
    )


def modify_message(
    thread_id: str, message_id: str, metadata: Mapping[str, str] | None
) -> ApiRequest:
    """Describe the call that replaces a message's metadata."""
    return ApiRequest(
        HttpMethod.POST,
        f"{_messages_path(thread_id)}/{message_id}",
        body={"metadata": _copy_map(metadata)},
        assistants_beta=True,
    )


def retrieve_message_file(thread_id: str, message_id: str, file_id: str) -> ApiRequest:
    """Describe the call that retrieves a file attached to a message."""
    return ApiRequest(
        HttpMethod.GET,
        f"{_messages_path(thread_id)}/{message_id}/files/{file_id}",
        assistants_beta=True,
    )


def list_message_files(thread_id: str, message_id: str) -> ApiRequest:
    """Describe the call that lists the files attached to a message."""
    return ApiRequest(
        HttpMethod.GET,
        f"{_messages_path(thread_id)}/{message_id}/files",
        assistants_beta=True,
    )


def delete_message(thread_id: str, message_id: str) -> ApiRequest:
    """Describe the call that deletes a message."""
    return ApiRequest(
        HttpMethod.DELETE,
        f"{_messages_path(thread_id)}/{message_id}",
        assistants_beta=True,
    )