"""Tests for method builders and the payloads they produce."""

import io
import json
import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from pydantic import ValidationError

from telebind.exceptions import PayloadError
from telebind.input_file import InputFile
from telebind.methods import (
    AnswerCallbackQuery,
    EditMessageText,
    GetMe,
    GetUpdates,
    SendChatAction,
    SendDocument,
    SendMediaGroup,
    SendMessage,
    SendPhoto,
    SendPoll,
    SendSticker,
    SetChatPhoto,
    SetMyCommands,
    SetWebhook,
)
from telebind.models import (
    BotCommand,
    ChatAction,
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    InputMediaPhoto,
    InputMediaVideo,
    MessageEntity,
    ParseMode,
)
from telebind.payload import Payload, PayloadKind


# ── Payload ──────────────────────────────────────────────────────────────────


class TestPayload:
    """Validate URL building and request kwargs."""

    def test_build_url(self) -> None:
        payload = Payload.empty("getMe")
        assert payload.build_url("https://api.telegram.org", "123:abc") == "https://api.telegram.org/bot123:abc/getMe"

    def test_empty_is_get(self) -> None:
        payload = Payload.empty("getMe")
        assert payload.http_method == "GET"
        assert payload.into_request_kwargs() == {}

    def test_json_dict(self) -> None:
        kwargs = Payload.json("sendMessage", {"chat_id": 1}).into_request_kwargs()
        assert json.loads(kwargs["data"]) == {"chat_id": 1}
        assert kwargs["headers"]["Content-Type"] == "application/json"

    def test_json_unserializable(self) -> None:
        with pytest.raises(PayloadError):
            Payload.json("sendMessage", {"bad": object()}).into_request_kwargs()

    def test_form_error_becomes_payload_error(self) -> None:
        method = SendPhoto(1, InputFile.reader(io.BytesIO(b""), name="a", mime_type="bogus"))
        with pytest.raises(PayloadError) as exc_info:
            method.into_payload().into_request_kwargs()
        assert "could not build an HTTP request" in str(exc_info.value)


# ── JSON methods ─────────────────────────────────────────────────────────────


class TestJsonMethods:
    """Validate JSON-encoded methods."""

    def test_get_me_is_empty(self) -> None:
        payload = GetMe().into_payload()
        assert payload.kind is PayloadKind.EMPTY
        assert payload.path == "getMe"

    def test_send_message_omits_none(self) -> None:
        payload = SendMessage(chat_id=1, text="hi").into_payload()
        assert payload.kind is PayloadKind.JSON
        assert json.loads(payload.json_body()) == {"chat_id": 1, "text": "hi"}

    def test_send_message_reply_markup(self) -> None:
        markup = InlineKeyboardMarkup(inline_keyboard=[[InlineKeyboardButton(text="Go", callback_data="go")]])
        body = json.loads(SendMessage(chat_id="@channel", text="hi", reply_markup=markup).into_payload().json_body())
        assert body["chat_id"] == "@channel"
        assert body["reply_markup"] == {"inline_keyboard": [[{"text": "Go", "callback_data": "go"}]]}

    def test_send_message_parse_mode_value(self) -> None:
        body = json.loads(SendMessage(chat_id=1, text="*hi*", parse_mode=ParseMode.MARKDOWN_V2).into_payload().json_body())
        assert body["parse_mode"] == "MarkdownV2"

    def test_send_message_empty_text_raises(self) -> None:
        with pytest.raises(ValidationError):
            SendMessage(chat_id=1, text="")

    def test_parse_mode_with_entities_raises(self) -> None:
        with pytest.raises(ValidationError):
            SendMessage(
                chat_id=1,
                text="hi",
                parse_mode=ParseMode.HTML,
                entities=[MessageEntity(type="bold", offset=0, length=2)],
            )

    def test_edit_message_text_needs_target(self) -> None:
        with pytest.raises(ValidationError):
            EditMessageText(text="x", chat_id=1)
        assert EditMessageText(text="x", inline_message_id="abc").inline_message_id == "abc"

    def test_get_updates_limit(self) -> None:
        with pytest.raises(ValidationError):
            GetUpdates(limit=101)

    def test_send_poll_option_count(self) -> None:
        with pytest.raises(ValidationError):
            SendPoll(chat_id=1, question="?", options=[{"text": "only"}])
        poll = SendPoll(chat_id=1, question="?", options=[{"text": "a"}, {"text": "b"}])
        assert json.loads(poll.into_payload().json_body())["options"] == [{"text": "a"}, {"text": "b"}]

    def test_chat_action(self) -> None:
        body = json.loads(SendChatAction(chat_id=1, action=ChatAction.TYPING).into_payload().json_body())
        assert body == {"chat_id": 1, "action": "typing"}

    def test_set_my_commands(self) -> None:
        method = SetMyCommands(commands=[BotCommand(command="start", description="Start the bot")])
        body = json.loads(method.into_payload().json_body())
        assert body == {"commands": [{"command": "start", "description": "Start the bot"}]}

    def test_answer_callback_query_text_limit(self) -> None:
        with pytest.raises(ValidationError):
            AnswerCallbackQuery(callback_query_id="1", text="x" * 201)


# ── Form methods ─────────────────────────────────────────────────────────────


class TestFormMethods:
    """Validate multipart methods and their fluent setters."""

    def test_send_photo_by_id(self) -> None:
        method = SendPhoto(1, InputFile.file_id("AgAC")).with_caption("cap").with_has_spoiler(True)
        payload = method.into_payload()
        assert payload.kind is PayloadKind.FORM
        assert payload.path == "sendPhoto"
        body = payload.form.into_multipart()
        assert body.get_part("chat_id").data == "1"
        assert body.get_part("photo").data == "AgAC"
        assert body.get_part("caption").data == "cap"
        assert body.get_part("has_spoiler").data == "true"

    def test_send_document_from_stream(self) -> None:
        method = SendDocument(1, io.BytesIO(b"pdf"))
        files = method.into_payload().into_request_kwargs()["files"]
        assert ("document", (None, b"pdf")) in files

    def test_parse_mode_replaces_entities(self) -> None:
        method = SendPhoto(1, InputFile.file_id("x"))
        method.with_caption_entities([MessageEntity(type="bold", offset=0, length=1)])
        method.with_parse_mode(ParseMode.HTML)
        assert not method.form.has_field("caption_entities")
        assert method.form.get_field("parse_mode").get_text() == "HTML"

    def test_entities_replace_parse_mode(self) -> None:
        method = SendPhoto(1, InputFile.file_id("x"))
        method.with_parse_mode(ParseMode.HTML)
        method.with_caption_entities([MessageEntity(type="bold", offset=0, length=1)])
        assert not method.form.has_field("parse_mode")
        entities = json.loads(method.form.get_field("caption_entities").get_text())
        assert entities == [{"type": "bold", "offset": 0, "length": 1}]

    def test_caption_too_long(self) -> None:
        with pytest.raises(ValueError):
            SendPhoto(1, InputFile.file_id("x")).with_caption("c" * 1025)

    def test_reply_markup_serialized(self) -> None:
        markup = InlineKeyboardMarkup(inline_keyboard=[[InlineKeyboardButton(text="Go", url="https://example.com")]])
        method = SendSticker(1, InputFile.file_id("s")).with_reply_markup(markup)
        assert json.loads(method.form.get_field("reply_markup").get_text()) == {
            "inline_keyboard": [[{"text": "Go", "url": "https://example.com"}]]
        }

    def test_set_webhook(self) -> None:
        method = (
            SetWebhook("https://example.com/hook")
            .with_allowed_updates(["message"])
            .with_drop_pending_updates(True)
        )
        body = method.into_payload().form.into_multipart()
        assert body.get_part("url").data == "https://example.com/hook"
        assert body.get_part("allowed_updates").data == '["message"]'
        assert body.get_part("drop_pending_updates").data == "true"

    def test_set_webhook_max_connections(self) -> None:
        with pytest.raises(ValueError):
            SetWebhook("https://example.com").with_max_connections(0)

    def test_set_chat_photo(self) -> None:
        payload = SetChatPhoto(-100, io.BytesIO(b"img")).into_payload()
        assert payload.path == "setChatPhoto"
        assert payload.form.has_field("photo")


# ── Media groups ─────────────────────────────────────────────────────────────


class TestSendMediaGroup:
    """Validate attach:// references and item limits."""

    def test_mixed_items(self) -> None:
        method = (
            SendMediaGroup(1)
            .add(InputMediaPhoto, InputFile.file_id("AgAC"), caption="first")
            .add(InputMediaVideo, InputFile.reader(io.BytesIO(b"vid"), name="v.mp4"), thumbnail=io.BytesIO(b"th"))
        )
        body = method.into_payload().form.into_multipart()
        media = json.loads(body.get_part("media").data)
        assert media == [
            {"type": "photo", "media": "AgAC", "caption": "first"},
            {"type": "video", "media": "attach://tgfile_1", "thumbnail": "attach://tgthumb_1"},
        ]
        assert body.get_part("tgfile_1").data == b"vid"
        assert body.get_part("tgthumb_1").data == b"th"
        assert body.get_part("tgfile_0") is None

    def test_photo_rejects_thumbnail(self) -> None:
        method = SendMediaGroup(1)
        with pytest.raises(ValueError, match="does not accept a thumbnail"):
            method.add(InputMediaPhoto, InputFile.reader(io.BytesIO(b"img"), name="p.jpg"), thumbnail=io.BytesIO(b"th"))
        assert not method.form.has_field("tgfile_0")
        assert not method.form.has_field("tgthumb_0")

    def test_too_few_items(self) -> None:
        method = SendMediaGroup(1).add(InputMediaPhoto, InputFile.file_id("a"))
        with pytest.raises(ValueError):
            method.into_payload()

    def test_too_many_items(self) -> None:
        method = SendMediaGroup(1)
        for i in range(11):
            method.add(InputMediaPhoto, InputFile.file_id(str(i)))
        with pytest.raises(ValueError):
            method.into_payload()
