"""Bot API method builders.

Each class describes one Bot API method: its path, the type of its result,
and how its parameters are sent. Methods without file parameters are
pydantic models serialized as JSON, with unset optional fields omitted.
Methods that may upload files wrap a :class:`~telebind.form.Form` and expose
fluent ``with_*`` setters.

Usage::

    from telebind.client import Client
    from telebind.methods import SendMessage, SendDocument
    from telebind.input_file import InputFile

    client = Client.from_env()
    client.execute(SendMessage(chat_id=42, text="hello"))
    client.execute(
        SendDocument(42, InputFile.path("report.pdf")).with_caption("Weekly report")
    )
"""

from __future__ import annotations

import json
from typing import Any, ClassVar, List, Optional, Sequence, Union

from pydantic import BaseModel, Field, model_validator

from telebind.form import Form
from telebind.input_file import InputFile, InputFileReader
from telebind.models import (
    BotCommand,
    ChatAction,
    Chat,
    File,
    InputMediaAnimation,
    InputMediaAudio,
    InputMediaDocument,
    InputMediaPhoto,
    InputMediaVideo,
    InputPollOption,
    Message,
    MessageEntity,
    MessageId,
    ParseMode,
    Poll,
    ReplyMarkup,
    Update,
    User,
    WebhookInfo,
    serialize_reply_markup,
)
from telebind.payload import Payload
from telebind.text import serialize_text_entities

ChatId = Union[int, str]

MEDIA_GROUP_MIN_ITEMS = 2
MEDIA_GROUP_MAX_ITEMS = 10


class Method:
    """Base for every Bot API method.

    ``response_model`` is the type the ``result`` of a successful response
    is validated against.
    """

    api_method: ClassVar[str]
    response_model: ClassVar[Any] = bool

    def into_payload(self) -> Payload:
        raise NotImplementedError


class EmptyMethod(Method):
    """A method without parameters, sent as a plain GET."""

    def into_payload(self) -> Payload:
        return Payload.empty(self.api_method)


class JsonMethod(BaseModel, Method):
    """A method whose parameters are sent as a JSON document."""

    model_config = {"populate_by_name": True}

    def into_payload(self) -> Payload:
        return Payload.json(self.api_method, self)


class _NoParseModeWithEntities(JsonMethod):
    """Rejects ``parse_mode`` combined with an explicit entity list."""

    @model_validator(mode="after")
    def _check_parse_mode(self) -> "_NoParseModeWithEntities":
        entities = getattr(self, "entities", None) or getattr(self, "caption_entities", None)
        if entities and getattr(self, "parse_mode", None) is not None:
            raise ValueError("parse_mode can not be combined with explicit entities")
        return self


class FormMethod(Method):
    """A method whose parameters are sent as ``multipart/form-data``."""

    def __init__(self) -> None:
        self.form = Form()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.form!r})"

    def into_payload(self) -> Payload:
        return Payload.form_data(self.api_method, self.form)

    def _set(self, name: str, value: Any) -> Any:
        self.form.insert_field(name, value)
        return self


# ── Bot ──────────────────────────────────────────────────────────────────────


class GetMe(EmptyMethod):
    """Returns basic information about the bot in form of a User object."""

    api_method = "getMe"
    response_model = User


class LogOut(EmptyMethod):
    """Log out from the cloud Bot API server before launching the bot locally."""

    api_method = "logOut"


class Close(EmptyMethod):
    """Close the bot instance before moving it from one local server to another."""

    api_method = "close"


# ── Updates & webhooks ───────────────────────────────────────────────────────


class GetUpdates(JsonMethod):
    """Receive incoming updates using long polling."""

    api_method: ClassVar[str] = "getUpdates"
    response_model: ClassVar[Any] = List[Update]

    offset: Optional[int] = None
    limit: Optional[int] = Field(None, ge=1, le=100)
    timeout: Optional[int] = Field(None, ge=0)
    allowed_updates: Optional[List[str]] = None


class SetWebhook(FormMethod):
    """Specify a URL and receive incoming updates via an outgoing webhook.

    Sent as a form because the public key certificate may be uploaded.
    """

    api_method = "setWebhook"

    def __init__(self, url: str) -> None:
        super().__init__()
        self.form.insert_field("url", url)

    def with_certificate(self, certificate: InputFile) -> "SetWebhook":
        return self._set("certificate", InputFile.coerce(certificate))

    def with_ip_address(self, value: str) -> "SetWebhook":
        return self._set("ip_address", value)

    def with_max_connections(self, value: int) -> "SetWebhook":
        if not 1 <= value <= 100:
            raise ValueError("max_connections must be within 1-100")
        return self._set("max_connections", value)

    def with_allowed_updates(self, value: Sequence[str]) -> "SetWebhook":
        return self._set("allowed_updates", json.dumps(list(value)))

    def with_drop_pending_updates(self, value: bool) -> "SetWebhook":
        return self._set("drop_pending_updates", value)

    def with_secret_token(self, value: str) -> "SetWebhook":
        return self._set("secret_token", value)


class DeleteWebhook(JsonMethod):
    """Remove webhook integration to switch back to getUpdates."""

    api_method: ClassVar[str] = "deleteWebhook"

    drop_pending_updates: Optional[bool] = None


class GetWebhookInfo(EmptyMethod):
    """Get current webhook status."""

    api_method = "getWebhookInfo"
    response_model = WebhookInfo


# ── Messages ─────────────────────────────────────────────────────────────────


class SendMessage(_NoParseModeWithEntities):
    """Send a text message. On success, the sent Message is returned."""

    api_method: ClassVar[str] = "sendMessage"
    response_model: ClassVar[Any] = Message

    chat_id: ChatId
    text: str = Field(..., min_length=1, max_length=4096)
    message_thread_id: Optional[int] = None
    parse_mode: Optional[ParseMode] = None
    entities: Optional[List[MessageEntity]] = None
    disable_notification: Optional[bool] = None
    protect_content: Optional[bool] = None
    reply_to_message_id: Optional[int] = None
    allow_sending_without_reply: Optional[bool] = None
    reply_markup: Optional[ReplyMarkup] = None


class ForwardMessage(JsonMethod):
    """Forward a message of any kind."""

    api_method: ClassVar[str] = "forwardMessage"
    response_model: ClassVar[Any] = Message

    chat_id: ChatId
    from_chat_id: ChatId
    message_id: int
    message_thread_id: Optional[int] = None
    disable_notification: Optional[bool] = None
    protect_content: Optional[bool] = None


class CopyMessage(_NoParseModeWithEntities):
    """Copy a message without a link to the original."""

    api_method: ClassVar[str] = "copyMessage"
    response_model: ClassVar[Any] = MessageId

    chat_id: ChatId
    from_chat_id: ChatId
    message_id: int
    message_thread_id: Optional[int] = None
    caption: Optional[str] = None
    parse_mode: Optional[ParseMode] = None
    caption_entities: Optional[List[MessageEntity]] = None
    disable_notification: Optional[bool] = None
    protect_content: Optional[bool] = None
    reply_to_message_id: Optional[int] = None
    allow_sending_without_reply: Optional[bool] = None
    reply_markup: Optional[ReplyMarkup] = None


class EditMessageText(_NoParseModeWithEntities):
    """Edit text of a message.

    Either ``chat_id`` with ``message_id`` or ``inline_message_id`` must be
    given. Returns the edited Message, or True for inline messages.
    """

    api_method: ClassVar[str] = "editMessageText"
    response_model: ClassVar[Any] = Union[Message, bool]

    text: str = Field(..., min_length=1, max_length=4096)
    chat_id: Optional[ChatId] = None
    message_id: Optional[int] = None
    inline_message_id: Optional[str] = None
    parse_mode: Optional[ParseMode] = None
    entities: Optional[List[MessageEntity]] = None
    reply_markup: Optional[ReplyMarkup] = None

    @model_validator(mode="after")
    def _check_target(self) -> "EditMessageText":
        if self.inline_message_id is None and (self.chat_id is None or self.message_id is None):
            raise ValueError("either chat_id and message_id or inline_message_id is required")
        return self


class DeleteMessage(JsonMethod):
    """Delete a message, including service messages."""

    api_method: ClassVar[str] = "deleteMessage"

    chat_id: ChatId
    message_id: int


class SendLocation(JsonMethod):
    """Send a point on the map."""

    api_method: ClassVar[str] = "sendLocation"
    response_model: ClassVar[Any] = Message

    chat_id: ChatId
    latitude: float
    longitude: float
    horizontal_accuracy: Optional[float] = Field(None, ge=0, le=1500)
    live_period: Optional[int] = None
    heading: Optional[int] = Field(None, ge=1, le=360)
    proximity_alert_radius: Optional[int] = None
    disable_notification: Optional[bool] = None
    reply_to_message_id: Optional[int] = None
    reply_markup: Optional[ReplyMarkup] = None


class SendDice(JsonMethod):
    """Send an animated emoji that will display a random value."""

    api_method: ClassVar[str] = "sendDice"
    response_model: ClassVar[Any] = Message

    chat_id: ChatId
    emoji: Optional[str] = None
    disable_notification: Optional[bool] = None
    reply_to_message_id: Optional[int] = None
    reply_markup: Optional[ReplyMarkup] = None


class SendPoll(JsonMethod):
    """Send a native poll."""

    api_method: ClassVar[str] = "sendPoll"
    response_model: ClassVar[Any] = Message

    chat_id: ChatId
    question: str = Field(..., min_length=1, max_length=300)
    options: List[InputPollOption] = Field(..., min_length=2, max_length=10)
    is_anonymous: Optional[bool] = None
    type: Optional[str] = None
    allows_multiple_answers: Optional[bool] = None
    correct_option_id: Optional[int] = None
    explanation: Optional[str] = None
    open_period: Optional[int] = None
    close_date: Optional[int] = None
    is_closed: Optional[bool] = None
    disable_notification: Optional[bool] = None
    reply_to_message_id: Optional[int] = None
    reply_markup: Optional[ReplyMarkup] = None


class StopPoll(JsonMethod):
    """Stop a poll which was sent by the bot."""

    api_method: ClassVar[str] = "stopPoll"
    response_model: ClassVar[Any] = Poll

    chat_id: ChatId
    message_id: int
    reply_markup: Optional[ReplyMarkup] = None


class SendChatAction(JsonMethod):
    """Tell the user that something is happening on the bot's side."""

    api_method: ClassVar[str] = "sendChatAction"

    chat_id: ChatId
    action: ChatAction
    message_thread_id: Optional[int] = None


# ── Files with captions (multipart) ──────────────────────────────────────────


class _SendFileMethod(FormMethod):
    """Common options of the ``send*`` methods that upload a file."""

    response_model = Message
    file_field: ClassVar[str]

    def __init__(self, chat_id: ChatId, file: Any) -> None:
        super().__init__()
        self.form.insert_field("chat_id", chat_id)
        self.form.insert_field(self.file_field, InputFile.coerce(file))

    def with_message_thread_id(self, value: int) -> Any:
        return self._set("message_thread_id", value)

    def with_disable_notification(self, value: bool) -> Any:
        return self._set("disable_notification", value)

    def with_protect_content(self, value: bool) -> Any:
        return self._set("protect_content", value)

    def with_reply_to_message_id(self, value: int) -> Any:
        return self._set("reply_to_message_id", value)

    def with_allow_sending_without_reply(self, value: bool) -> Any:
        return self._set("allow_sending_without_reply", value)

    def with_reply_markup(self, value: ReplyMarkup) -> Any:
        return self._set("reply_markup", serialize_reply_markup(value))


class _CaptionedFileMethod(_SendFileMethod):
    def with_caption(self, value: str) -> Any:
        if len(value) > 1024:
            raise ValueError("caption must be at most 1024 characters")
        return self._set("caption", value)

    def with_parse_mode(self, value: ParseMode) -> Any:
        """Set the parse mode; drops previously set caption entities."""
        self.form.remove_field("caption_entities")
        return self._set("parse_mode", value)

    def with_caption_entities(self, value: Sequence[MessageEntity]) -> Any:
        """Set explicit caption entities; drops a previously set parse mode."""
        self.form.remove_field("parse_mode")
        return self._set("caption_entities", serialize_text_entities(value))

    def with_thumbnail(self, value: Any) -> Any:
        return self._set("thumbnail", InputFile.coerce(value))

    def with_has_spoiler(self, value: bool) -> Any:
        return self._set("has_spoiler", value)


class SendPhoto(_CaptionedFileMethod):
    """Send a photo."""

    api_method = "sendPhoto"
    file_field = "photo"


class SendDocument(_CaptionedFileMethod):
    """Send a general file. Bots can currently send files of up to 50 MB."""

    api_method = "sendDocument"
    file_field = "document"

    def with_disable_content_type_detection(self, value: bool) -> "SendDocument":
        return self._set("disable_content_type_detection", value)


class SendAudio(_CaptionedFileMethod):
    """Send an audio file to be displayed in the music player."""

    api_method = "sendAudio"
    file_field = "audio"

    def with_duration(self, value: int) -> "SendAudio":
        return self._set("duration", value)

    def with_performer(self, value: str) -> "SendAudio":
        return self._set("performer", value)

    def with_title(self, value: str) -> "SendAudio":
        return self._set("title", value)


class SendVideo(_CaptionedFileMethod):
    """Send an MPEG4 video."""

    api_method = "sendVideo"
    file_field = "video"

    def with_duration(self, value: int) -> "SendVideo":
        return self._set("duration", value)

    def with_width(self, value: int) -> "SendVideo":
        return self._set("width", value)

    def with_height(self, value: int) -> "SendVideo":
        return self._set("height", value)

    def with_supports_streaming(self, value: bool) -> "SendVideo":
        return self._set("supports_streaming", value)


class SendAnimation(_CaptionedFileMethod):
    """Send a GIF or H.264/MPEG-4 AVC video without sound."""

    api_method = "sendAnimation"
    file_field = "animation"

    def with_duration(self, value: int) -> "SendAnimation":
        return self._set("duration", value)

    def with_width(self, value: int) -> "SendAnimation":
        return self._set("width", value)

    def with_height(self, value: int) -> "SendAnimation":
        return self._set("height", value)


class SendVoice(_CaptionedFileMethod):
    """Send an OGG/OPUS voice message."""

    api_method = "sendVoice"
    file_field = "voice"

    def with_duration(self, value: int) -> "SendVoice":
        return self._set("duration", value)


class SendSticker(_SendFileMethod):
    """Send a static .WEBP, animated .TGS or video .WEBM sticker."""

    api_method = "sendSticker"
    file_field = "sticker"

    def with_emoji(self, value: str) -> "SendSticker":
        return self._set("emoji", value)


# ── Media groups ─────────────────────────────────────────────────────────────

MediaGroupItem = Union[InputMediaPhoto, InputMediaVideo, InputMediaAudio, InputMediaDocument, InputMediaAnimation]


class SendMediaGroup(FormMethod):
    """Send a group of photos, videos, documents or audios as an album.

    Items referenced by id or URL are put into the ``media`` JSON as is;
    streamed items are attached as separate parts and referenced with
    ``attach://<name>``.
    """

    api_method = "sendMediaGroup"
    response_model = List[Message]

    def __init__(self, chat_id: ChatId) -> None:
        super().__init__()
        self.form.insert_field("chat_id", chat_id)
        self._media: List[MediaGroupItem] = []

    def _attach(self, file: Any, tag: str) -> str:
        file = InputFile.coerce(file)
        if isinstance(file, InputFileReader):
            self.form.insert_field(tag, file)
            return f"attach://{tag}"
        return file.value  # type: ignore[attr-defined]

    def add(self, media_type: type, file: Any, thumbnail: Any = None, **options: Any) -> "SendMediaGroup":
        """Append an item of *media_type* (e.g. :class:`InputMediaPhoto`).

        *options* are the remaining fields of the media model (caption, …).

        Raises:
            ValueError: If a thumbnail is given for a media type without one.
        """
        if thumbnail is not None and "thumbnail" not in media_type.model_fields:
            raise ValueError(f"{media_type.__name__} does not accept a thumbnail")
        index = len(self._media)
        media = self._attach(file, f"tgfile_{index}")
        if thumbnail is not None:
            options["thumbnail"] = self._attach(thumbnail, f"tgthumb_{index}")
        self._media.append(media_type(media=media, **options))
        return self

    def with_disable_notification(self, value: bool) -> "SendMediaGroup":
        return self._set("disable_notification", value)

    def with_reply_to_message_id(self, value: int) -> "SendMediaGroup":
        return self._set("reply_to_message_id", value)

    def with_allow_sending_without_reply(self, value: bool) -> "SendMediaGroup":
        return self._set("allow_sending_without_reply", value)

    def into_payload(self) -> Payload:
        """Raises ``ValueError`` unless the group holds 2-10 items."""
        if not MEDIA_GROUP_MIN_ITEMS <= len(self._media) <= MEDIA_GROUP_MAX_ITEMS:
            raise ValueError(
                f"media group must contain {MEDIA_GROUP_MIN_ITEMS}-{MEDIA_GROUP_MAX_ITEMS} items, got {len(self._media)}"
            )
        items = [item.model_dump(mode="json", exclude_none=True) for item in self._media]
        self.form.insert_field("media", json.dumps(items, ensure_ascii=False))
        return super().into_payload()


# ── Files & chats ────────────────────────────────────────────────────────────


class GetFile(JsonMethod):
    """Get basic information about a file and prepare it for downloading."""

    api_method: ClassVar[str] = "getFile"
    response_model: ClassVar[Any] = File

    file_id: str


class GetChat(JsonMethod):
    """Get up to date information about a chat."""

    api_method: ClassVar[str] = "getChat"
    response_model: ClassVar[Any] = Chat

    chat_id: ChatId


class LeaveChat(JsonMethod):
    """Leave a group, supergroup or channel."""

    api_method: ClassVar[str] = "leaveChat"

    chat_id: ChatId


class BanChatMember(JsonMethod):
    """Ban a user in a group, a supergroup or a channel."""

    api_method: ClassVar[str] = "banChatMember"

    chat_id: ChatId
    user_id: int
    until_date: Optional[int] = None
    revoke_messages: Optional[bool] = None


class UnbanChatMember(JsonMethod):
    """Unban a previously banned user in a supergroup or channel."""

    api_method: ClassVar[str] = "unbanChatMember"

    chat_id: ChatId
    user_id: int
    only_if_banned: Optional[bool] = None


class SetChatPhoto(FormMethod):
    """Set a new profile photo for the chat. Photos can't be changed for private chats."""

    api_method = "setChatPhoto"

    def __init__(self, chat_id: ChatId, photo: Any) -> None:
        super().__init__()
        self.form.insert_field("chat_id", chat_id)
        self.form.insert_field("photo", InputFile.coerce(photo))


# ── Callbacks & commands ─────────────────────────────────────────────────────


class AnswerCallbackQuery(JsonMethod):
    """Send an answer to a callback query sent from an inline keyboard."""

    api_method: ClassVar[str] = "answerCallbackQuery"

    callback_query_id: str
    text: Optional[str] = Field(None, max_length=200)
    show_alert: Optional[bool] = None
    url: Optional[str] = None
    cache_time: Optional[int] = None


class SetMyCommands(JsonMethod):
    """Change the list of the bot's commands."""

    api_method: ClassVar[str] = "setMyCommands"

    commands: List[BotCommand] = Field(..., max_length=100)
    language_code: Optional[str] = None


class GetMyCommands(JsonMethod):
    """Get the current list of the bot's commands."""

    api_method: ClassVar[str] = "getMyCommands"
    response_model: ClassVar[Any] = List[BotCommand]

    language_code: Optional[str] = None


class DeleteMyCommands(JsonMethod):
    """Delete the list of the bot's commands, reverting to the default scope."""

    api_method: ClassVar[str] = "deleteMyCommands"

    language_code: Optional[str] = None
