"""Pydantic data models for the Telegram Bot API.

Every class corresponds to an object described in the Bot API reference.
Use these models for strict request/response validation in the client and
the method builders.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, List, Optional, Union

from pydantic import BaseModel, Field, model_validator

from telebind.exceptions import TextEntityError

if TYPE_CHECKING:
    from telebind.text import Text


class ParseMode(str, Enum):
    """Formatting options for message text and captions."""

    MARKDOWN = "Markdown"
    MARKDOWN_V2 = "MarkdownV2"
    HTML = "HTML"


class ChatAction(str, Enum):
    """Kinds of activity a bot can broadcast with ``sendChatAction``."""

    TYPING = "typing"
    UPLOAD_PHOTO = "upload_photo"
    RECORD_VIDEO = "record_video"
    UPLOAD_VIDEO = "upload_video"
    RECORD_VOICE = "record_voice"
    UPLOAD_VOICE = "upload_voice"
    UPLOAD_DOCUMENT = "upload_document"
    CHOOSE_STICKER = "choose_sticker"
    FIND_LOCATION = "find_location"
    RECORD_VIDEO_NOTE = "record_video_note"
    UPLOAD_VIDEO_NOTE = "upload_video_note"


class MessageEntityType(str, Enum):
    """Values of :attr:`MessageEntity.type`."""

    MENTION = "mention"
    HASHTAG = "hashtag"
    CASHTAG = "cashtag"
    BOT_COMMAND = "bot_command"
    URL = "url"
    EMAIL = "email"
    PHONE_NUMBER = "phone_number"
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    STRIKETHROUGH = "strikethrough"
    SPOILER = "spoiler"
    BLOCKQUOTE = "blockquote"
    EXPANDABLE_BLOCKQUOTE = "expandable_blockquote"
    CODE = "code"
    PRE = "pre"
    TEXT_LINK = "text_link"
    TEXT_MENTION = "text_mention"
    CUSTOM_EMOJI = "custom_emoji"


class Response(BaseModel):
    """The JSON envelope every Bot API call answers with."""

    ok: bool
    result: Any = None
    description: Optional[str] = None
    error_code: Optional[int] = None
    parameters: Optional["ResponseParameters"] = None

    model_config = {"populate_by_name": True}


class ResponseParameters(BaseModel):
    """Contains information about why a request was unsuccessful."""

    migrate_to_chat_id: Optional[int] = None
    retry_after: Optional[int] = None

    model_config = {"populate_by_name": True}


class Update(BaseModel):
    """This object represents an incoming update. At most **one** of the optional parameters can be present in any given update."""

    update_id: int
    message: Optional["Message"] = None
    edited_message: Optional["Message"] = None
    channel_post: Optional["Message"] = None
    edited_channel_post: Optional["Message"] = None
    callback_query: Optional["CallbackQuery"] = None
    poll: Optional["Poll"] = None

    model_config = {"populate_by_name": True}

    def get_message(self) -> Optional["Message"]:
        """Return whichever message-bearing field is set, if any."""
        return self.message or self.edited_message or self.channel_post or self.edited_channel_post


class WebhookInfo(BaseModel):
    """Contains information about the current status of a webhook."""

    url: str
    has_custom_certificate: bool
    pending_update_count: int
    ip_address: Optional[str] = None
    last_error_date: Optional[int] = None
    last_error_message: Optional[str] = None
    max_connections: Optional[int] = None
    allowed_updates: Optional[List[str]] = None

    model_config = {"populate_by_name": True}


class User(BaseModel):
    """This object represents a Telegram user or bot."""

    id: int
    is_bot: bool
    first_name: str
    last_name: Optional[str] = None
    username: Optional[str] = None
    language_code: Optional[str] = None
    is_premium: Optional[bool] = None
    can_join_groups: Optional[bool] = None
    can_read_all_group_messages: Optional[bool] = None
    supports_inline_queries: Optional[bool] = None

    model_config = {"populate_by_name": True}


class Chat(BaseModel):
    """This object represents a chat."""

    id: int
    type: str
    title: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_forum: Optional[bool] = None

    model_config = {"populate_by_name": True}


class MessageEntity(BaseModel):
    """This object represents one special entity in a text message. For example, hashtags, usernames, URLs, etc."""

    type: str
    offset: int
    length: int
    url: Optional[str] = None
    user: Optional["User"] = None
    language: Optional[str] = None
    custom_emoji_id: Optional[str] = None

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _check_required_payload(self) -> "MessageEntity":
        if self.type == MessageEntityType.TEXT_LINK and self.url is None:
            raise TextEntityError("URL is required for text_link entity")
        if self.type == MessageEntityType.TEXT_MENTION and self.user is None:
            raise TextEntityError("user is required for text_mention entity")
        return self

    # ── Typed constructors ──

    @classmethod
    def _of(cls, kind: MessageEntityType, offset: int, length: int, **payload: Any) -> "MessageEntity":
        return cls(type=kind.value, offset=offset, length=length, **payload)

    @classmethod
    def bold(cls, offset: int, length: int) -> "MessageEntity":
        return cls._of(MessageEntityType.BOLD, offset, length)

    @classmethod
    def italic(cls, offset: int, length: int) -> "MessageEntity":
        return cls._of(MessageEntityType.ITALIC, offset, length)

    @classmethod
    def underline(cls, offset: int, length: int) -> "MessageEntity":
        return cls._of(MessageEntityType.UNDERLINE, offset, length)

    @classmethod
    def strikethrough(cls, offset: int, length: int) -> "MessageEntity":
        return cls._of(MessageEntityType.STRIKETHROUGH, offset, length)

    @classmethod
    def code(cls, offset: int, length: int) -> "MessageEntity":
        return cls._of(MessageEntityType.CODE, offset, length)

    @classmethod
    def pre(cls, offset: int, length: int, language: Optional[str] = None) -> "MessageEntity":
        """A monowidth block, optionally tagged with the programming *language*."""
        return cls._of(MessageEntityType.PRE, offset, length, language=language)

    @classmethod
    def mention(cls, offset: int, length: int) -> "MessageEntity":
        return cls._of(MessageEntityType.MENTION, offset, length)

    @classmethod
    def hashtag(cls, offset: int, length: int) -> "MessageEntity":
        return cls._of(MessageEntityType.HASHTAG, offset, length)

    @classmethod
    def cashtag(cls, offset: int, length: int) -> "MessageEntity":
        return cls._of(MessageEntityType.CASHTAG, offset, length)

    @classmethod
    def bot_command(cls, offset: int, length: int) -> "MessageEntity":
        return cls._of(MessageEntityType.BOT_COMMAND, offset, length)

    @classmethod
    def email(cls, offset: int, length: int) -> "MessageEntity":
        return cls._of(MessageEntityType.EMAIL, offset, length)

    @classmethod
    def phone_number(cls, offset: int, length: int) -> "MessageEntity":
        return cls._of(MessageEntityType.PHONE_NUMBER, offset, length)

    @classmethod
    def text_link(cls, offset: int, length: int, url: str) -> "MessageEntity":
        """A clickable text URL."""
        return cls._of(MessageEntityType.TEXT_LINK, offset, length, url=url)

    @classmethod
    def text_mention(cls, offset: int, length: int, user: "User") -> "MessageEntity":
        """A mention of a *user* without a username."""
        return cls._of(MessageEntityType.TEXT_MENTION, offset, length, user=user)


class Message(BaseModel):
    """This object represents a message."""

    message_id: int
    date: int
    chat: "Chat"
    message_thread_id: Optional[int] = None
    from_field: Optional["User"] = Field(None, alias="from")
    sender_chat: Optional["Chat"] = None
    reply_to_message: Optional["Message"] = None
    via_bot: Optional["User"] = None
    edit_date: Optional[int] = None
    media_group_id: Optional[str] = None
    author_signature: Optional[str] = None
    text: Optional[str] = None
    entities: Optional[List["MessageEntity"]] = None
    animation: Optional["Animation"] = None
    audio: Optional["Audio"] = None
    document: Optional["Document"] = None
    photo: Optional[List["PhotoSize"]] = None
    sticker: Optional["Sticker"] = None
    video: Optional["Video"] = None
    video_note: Optional["VideoNote"] = None
    voice: Optional["Voice"] = None
    caption: Optional[str] = None
    caption_entities: Optional[List["MessageEntity"]] = None
    contact: Optional["Contact"] = None
    dice: Optional["Dice"] = None
    poll: Optional["Poll"] = None
    venue: Optional["Venue"] = None
    location: Optional["Location"] = None
    new_chat_members: Optional[List["User"]] = None
    left_chat_member: Optional["User"] = None
    new_chat_title: Optional[str] = None
    pinned_message: Optional["Message"] = None
    reply_markup: Optional["InlineKeyboardMarkup"] = None

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _check_entities(self) -> "Message":
        from telebind.text import validate_entities  # deferred to avoid circular imports

        if self.text is not None and self.entities:
            validate_entities(self.text, self.entities)
        if self.caption is not None and self.caption_entities:
            validate_entities(self.caption, self.caption_entities)
        return self

    @model_validator(mode="after")
    def _truncate_nested_replies(self) -> "Message":
        # A replied-to or pinned message never carries its own reply_to_message.
        # Copies keep caller-owned instances untouched.
        if self.reply_to_message is not None and self.reply_to_message.reply_to_message is not None:
            self.reply_to_message = self.reply_to_message.model_copy(update={"reply_to_message": None})
        if self.pinned_message is not None and self.pinned_message.reply_to_message is not None:
            self.pinned_message = self.pinned_message.model_copy(update={"reply_to_message": None})
        return self

    def get_text(self) -> Optional["Text"]:
        """Return the message text, or the media caption, with its entities."""
        from telebind.text import Text  # deferred to avoid circular imports

        if self.text is not None:
            return Text(self.text, self.entities)
        if self.caption is not None:
            return Text(self.caption, self.caption_entities)
        return None


class MessageId(BaseModel):
    """This object represents a unique message identifier."""

    message_id: int

    model_config = {"populate_by_name": True}


class PhotoSize(BaseModel):
    """This object represents one size of a photo or a file / sticker thumbnail."""

    file_id: str
    file_unique_id: str
    width: int
    height: int
    file_size: Optional[int] = None

    model_config = {"populate_by_name": True}


class Animation(BaseModel):
    """This object represents an animation file (GIF or H.264/MPEG-4 AVC video without sound)."""

    file_id: str
    file_unique_id: str
    width: int
    height: int
    duration: int
    thumbnail: Optional["PhotoSize"] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None

    model_config = {"populate_by_name": True}


class Audio(BaseModel):
    """This object represents an audio file to be treated as music by the Telegram clients."""

    file_id: str
    file_unique_id: str
    duration: int
    performer: Optional[str] = None
    title: Optional[str] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None
    thumbnail: Optional["PhotoSize"] = None

    model_config = {"populate_by_name": True}


class Document(BaseModel):
    """This object represents a general file (as opposed to photos, voice messages and audio files)."""

    file_id: str
    file_unique_id: str
    thumbnail: Optional["PhotoSize"] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None

    model_config = {"populate_by_name": True}


class Video(BaseModel):
    """This object represents a video file."""

    file_id: str
    file_unique_id: str
    width: int
    height: int
    duration: int
    thumbnail: Optional["PhotoSize"] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None

    model_config = {"populate_by_name": True}


class VideoNote(BaseModel):
    """This object represents a video message."""

    file_id: str
    file_unique_id: str
    length: int
    duration: int
    thumbnail: Optional["PhotoSize"] = None
    file_size: Optional[int] = None

    model_config = {"populate_by_name": True}


class Voice(BaseModel):
    """This object represents a voice note."""

    file_id: str
    file_unique_id: str
    duration: int
    mime_type: Optional[str] = None
    file_size: Optional[int] = None

    model_config = {"populate_by_name": True}


class Sticker(BaseModel):
    """This object represents a sticker."""

    file_id: str
    file_unique_id: str
    type: str
    width: int
    height: int
    is_animated: bool
    is_video: bool
    thumbnail: Optional["PhotoSize"] = None
    emoji: Optional[str] = None
    set_name: Optional[str] = None
    file_size: Optional[int] = None

    model_config = {"populate_by_name": True}


class Contact(BaseModel):
    """This object represents a phone contact."""

    phone_number: str
    first_name: str
    last_name: Optional[str] = None
    user_id: Optional[int] = None
    vcard: Optional[str] = None

    model_config = {"populate_by_name": True}


class Dice(BaseModel):
    """This object represents an animated emoji that displays a random value."""

    emoji: str
    value: int

    model_config = {"populate_by_name": True}


class PollOption(BaseModel):
    """This object contains information about one answer option in a poll."""

    text: str
    voter_count: int

    model_config = {"populate_by_name": True}


class Poll(BaseModel):
    """This object contains information about a poll."""

    id: str
    question: str
    options: List["PollOption"]
    total_voter_count: int
    is_closed: bool
    is_anonymous: bool
    type: str
    allows_multiple_answers: bool
    correct_option_id: Optional[int] = None
    explanation: Optional[str] = None
    explanation_entities: Optional[List["MessageEntity"]] = None
    open_period: Optional[int] = None
    close_date: Optional[int] = None

    model_config = {"populate_by_name": True}


class Location(BaseModel):
    """This object represents a point on the map."""

    longitude: float
    latitude: float
    horizontal_accuracy: Optional[float] = None
    live_period: Optional[int] = None
    heading: Optional[int] = None
    proximity_alert_radius: Optional[int] = None

    model_config = {"populate_by_name": True}


class Venue(BaseModel):
    """This object represents a venue."""

    location: "Location"
    title: str
    address: str
    foursquare_id: Optional[str] = None
    foursquare_type: Optional[str] = None
    google_place_id: Optional[str] = None
    google_place_type: Optional[str] = None

    model_config = {"populate_by_name": True}


class UserProfilePhotos(BaseModel):
    """This object represent a user's profile pictures."""

    total_count: int
    photos: List[List["PhotoSize"]]

    model_config = {"populate_by_name": True}


class File(BaseModel):
    """This object represents a file ready to be downloaded via ``Client.download_file``."""

    file_id: str
    file_unique_id: str
    file_size: Optional[int] = None
    file_path: Optional[str] = None

    model_config = {"populate_by_name": True}


class KeyboardButton(BaseModel):
    """This object represents one button of the reply keyboard."""

    text: str
    request_contact: Optional[bool] = None
    request_location: Optional[bool] = None

    model_config = {"populate_by_name": True}


class ReplyKeyboardMarkup(BaseModel):
    """This object represents a custom keyboard with reply options."""

    keyboard: List[List["KeyboardButton"]]
    is_persistent: Optional[bool] = None
    resize_keyboard: Optional[bool] = None
    one_time_keyboard: Optional[bool] = None
    input_field_placeholder: Optional[str] = None
    selective: Optional[bool] = None

    model_config = {"populate_by_name": True}


class ReplyKeyboardRemove(BaseModel):
    """Upon receiving a message with this object, Telegram clients will remove the current custom keyboard."""

    remove_keyboard: bool = True
    selective: Optional[bool] = None

    model_config = {"populate_by_name": True}


class InlineKeyboardButton(BaseModel):
    """This object represents one button of an inline keyboard. You **must** use exactly one of the optional fields."""

    text: str
    url: Optional[str] = None
    callback_data: Optional[str] = None
    switch_inline_query: Optional[str] = None
    switch_inline_query_current_chat: Optional[str] = None
    pay: Optional[bool] = None

    model_config = {"populate_by_name": True}


class InlineKeyboardMarkup(BaseModel):
    """This object represents an inline keyboard that appears right next to the message it belongs to."""

    inline_keyboard: List[List["InlineKeyboardButton"]]

    model_config = {"populate_by_name": True}


class ForceReply(BaseModel):
    """Upon receiving a message with this object, Telegram clients will display a reply interface to the user."""

    force_reply: bool = True
    input_field_placeholder: Optional[str] = None
    selective: Optional[bool] = None

    model_config = {"populate_by_name": True}


ReplyMarkup = Union[InlineKeyboardMarkup, ReplyKeyboardMarkup, ReplyKeyboardRemove, ForceReply]


def serialize_reply_markup(markup: ReplyMarkup) -> str:
    """Serialize *markup* to the JSON string sent in multipart requests."""
    return markup.model_dump_json(exclude_none=True)


class CallbackQuery(BaseModel):
    """This object represents an incoming callback query from a callback button in an inline keyboard."""

    id: str
    from_field: "User" = Field(..., alias="from")
    message: Optional["Message"] = None
    inline_message_id: Optional[str] = None
    chat_instance: str
    data: Optional[str] = None
    game_short_name: Optional[str] = None

    model_config = {"populate_by_name": True}


class BotCommand(BaseModel):
    """This object represents a bot command."""

    command: str = Field(..., min_length=1, max_length=32)
    description: str = Field(..., min_length=3, max_length=256)

    model_config = {"populate_by_name": True}


class InputMediaPhoto(BaseModel):
    """Represents a photo to be sent."""

    type: str = "photo"
    media: str
    caption: Optional[str] = None
    parse_mode: Optional[ParseMode] = None
    caption_entities: Optional[List["MessageEntity"]] = None
    has_spoiler: Optional[bool] = None

    model_config = {"populate_by_name": True}


class InputMediaVideo(BaseModel):
    """Represents a video to be sent."""

    type: str = "video"
    media: str
    thumbnail: Optional[str] = None
    caption: Optional[str] = None
    parse_mode: Optional[ParseMode] = None
    caption_entities: Optional[List["MessageEntity"]] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None
    supports_streaming: Optional[bool] = None

    model_config = {"populate_by_name": True}


class InputMediaAnimation(BaseModel):
    """Represents an animation file (GIF or H.264/MPEG-4 AVC video without sound) to be sent."""

    type: str = "animation"
    media: str
    thumbnail: Optional[str] = None
    caption: Optional[str] = None
    parse_mode: Optional[ParseMode] = None
    caption_entities: Optional[List["MessageEntity"]] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None

    model_config = {"populate_by_name": True}


class InputMediaAudio(BaseModel):
    """Represents an audio file to be treated as music to be sent."""

    type: str = "audio"
    media: str
    thumbnail: Optional[str] = None
    caption: Optional[str] = None
    parse_mode: Optional[ParseMode] = None
    caption_entities: Optional[List["MessageEntity"]] = None
    duration: Optional[int] = None
    performer: Optional[str] = None
    title: Optional[str] = None

    model_config = {"populate_by_name": True}


class InputMediaDocument(BaseModel):
    """Represents a general file to be sent."""

    type: str = "document"
    media: str
    thumbnail: Optional[str] = None
    caption: Optional[str] = None
    parse_mode: Optional[ParseMode] = None
    caption_entities: Optional[List["MessageEntity"]] = None
    disable_content_type_detection: Optional[bool] = None

    model_config = {"populate_by_name": True}


InputMedia = Union[InputMediaPhoto, InputMediaVideo, InputMediaAnimation, InputMediaAudio, InputMediaDocument]


class InputPollOption(BaseModel):
    """This object contains information about one answer option in a poll to be sent."""

    text: str = Field(..., min_length=1, max_length=100)
    text_parse_mode: Optional[ParseMode] = None

    model_config = {"populate_by_name": True}
