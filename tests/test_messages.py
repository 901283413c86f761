import json

from llmapi.messages import (
    ImageURL,
    Message,
    MessageContent,
    MessageDeletionStatus,
    MessageFile,
    MessageFilesList,
    MessageRequest,
    MessagesList,
    MessageText,
    create_message,
    delete_message,
    list_message_files,
    list_messages,
    modify_message,
    retrieve_message,
    retrieve_message_file,
)
from llmapi.request import HttpMethod
from llmapi.thread import ThreadAttachment

THREAD_ID = "thread_abc123"
MESSAGE_ID = "msg_abc123"
FILE_ID = "file_abc123"


def _message_json(metadata=None):
    return json.loads(
        json.dumps(
            {
                "id": MESSAGE_ID,
                "object": "thread.message",
                "created_at": 1234567890,
                "thread_id": THREAD_ID,
                "role": "user",
                "content": [
                    {
                        "type": "text",
                        "text": {"value": "How does AI work?", "annotations": None},
                    }
                ],
                "file_ids": None,
                "assistant_id": "",
                "run_id": "",
                "metadata": metadata,
            }
        )
    )


def test_create_message():
    req = create_message(
        THREAD_ID, MessageRequest(role="user", content="How does AI work?")
    )
    assert req.method == HttpMethod.POST
    assert req.url_suffix() == "/threads/thread_abc123/messages"
    assert req.assistants_beta is True
    assert req.body == {"role": "user", "content": "How does AI work?"}
    msg = Message.from_dict(_message_json())
    assert msg.id == MESSAGE_ID
    assert msg.content[0].text.value == "How does AI work?"
    assert msg.assistant_id == ""
    assert msg.run_id == ""


def test_list_messages_without_options():
    req = list_messages(THREAD_ID)
    assert req.method == HttpMethod.GET
    assert req.url_suffix() == "/threads/thread_abc123/messages"
    listing = MessagesList.from_dict(
        {
            "object": "list",
            "data": [_message_json()],
            "first_id": MESSAGE_ID,
            "last_id": MESSAGE_ID,
            "has_more": False,
        }
    )
    assert len(listing.messages) == 1
    assert listing.first_id == MESSAGE_ID
    assert listing.has_more is False


def test_list_messages_with_pagination():
    req = list_messages(THREAD_ID, 1, "desc", "obj_foo", "obj_bar", "run_abc123")
    assert req.url_suffix() == (
        "/threads/thread_abc123/messages"
        "?after=obj_foo&before=obj_bar&limit=1&order=desc&run_id=run_abc123"
    )


def test_retrieve_message():
    req = retrieve_message(THREAD_ID, MESSAGE_ID)
    assert req.method == HttpMethod.GET
    assert req.path == "/threads/thread_abc123/messages/msg_abc123"


def test_modify_message():
    req = modify_message(THREAD_ID, MESSAGE_ID, {"foo": "bar"})
    assert req.method == HttpMethod.POST
    assert req.path == "/threads/thread_abc123/messages/msg_abc123"
    assert req.body == {"metadata": {"foo": "bar"}}
    msg = Message.from_dict(_message_json(metadata=req.body["metadata"]))
    assert msg.metadata["foo"] == "bar"


def test_delete_message():
    req = delete_message(THREAD_ID, MESSAGE_ID)
    assert req.method == HttpMethod.DELETE
    assert req.path == "/threads/thread_abc123/messages/msg_abc123"
    status = MessageDeletionStatus.from_dict(
        {"id": MESSAGE_ID, "object": "thread.message.deleted", "deleted": True}
    )
    assert status.id == MESSAGE_ID
    assert status.deleted is True
    other = delete_message(THREAD_ID, "not_exist_id")
    assert other.path == "/threads/thread_abc123/messages/not_exist_id"


def test_retrieve_message_file():
    req = retrieve_message_file(THREAD_ID, MESSAGE_ID, FILE_ID)
    assert req.path == "/threads/thread_abc123/messages/msg_abc123/files/file_abc123"
    file = MessageFile.from_dict(
        {
            "id": FILE_ID,
            "object": "thread.message.file",
            "created_at": 1699061776,
            "message_id": MESSAGE_ID,
        }
    )
    assert file == MessageFile(FILE_ID, "thread.message.file", 1699061776, MESSAGE_ID)


def test_list_message_files():
    req = list_message_files(THREAD_ID, MESSAGE_ID)
    assert req.method == HttpMethod.GET
    assert req.path == "/threads/thread_abc123/messages/msg_abc123/files"
    files = MessageFilesList.from_dict(
        {
            "data": [
                {
                    "id": FILE_ID,
                    "object": "thread.message.file",
                    "created_at": 0,
                    "message_id": MESSAGE_ID,
                }
            ]
        }
    )
    assert len(files.message_files) == 1
    assert files.message_files[0].id == FILE_ID


def test_message_round_trip():
    data = _message_json(metadata={"k": "v"})
    assert Message.from_dict(data).to_dict() == data


def test_message_without_optional_ids_omits_them():
    data = Message(id="m").to_dict()
    assert "assistant_id" not in data
    assert "run_id" not in data
    assert data["file_ids"] is None


def test_message_content_image_url_round_trip():
    content = MessageContent(type="image_url", image_url=ImageURL("https://example.com/a.png", "low"))
    data = content.to_dict()
    assert data == {
        "type": "image_url",
        "image_url": {"url": "https://example.com/a.png", "detail": "low"},
    }
    assert MessageContent.from_dict(data) == content


def test_message_content_text_annotations():
    content = MessageContent.from_dict(
        {"type": "text", "text": {"value": "x", "annotations": [{"a": 1}]}}
    )
    assert content.text == MessageText("x", [{"a": 1}])


def test_message_request_with_attachments():
    request = MessageRequest(
        role="user",
        content="see file",
        metadata={"k": "v"},
        attachments=[ThreadAttachment("file_1", ["code_interpreter"])],
    )
    assert request.to_dict() == {
        "role": "user",
        "content": "see file",
        "metadata": {"k": "v"},
        "attachments": [{"file_id": "file_1", "tools": [{"type": "code_interpreter"}]}],
    }