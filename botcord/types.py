"""Core value types: results, gateway intents, permissions and API models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum, IntFlag
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ResultError(RuntimeError):
    """Raised when a Result is read on the wrong side."""


class Result(Generic[T]):
    """Either a successful value or an error message."""

    __slots__ = ("_ok", "_value", "_error")

    def __init__(self, ok: bool, value: Optional[T] = None, error: str = "") -> None:
        self._ok = ok
        self._value = value
        self._error = error

    @classmethod
    def success(cls, value: T = None) -> "Result[T]":
        return cls(True, value=value)

    @classmethod
    def failure(cls, error: str) -> "Result[T]":
        return cls(False, error=error)

    def is_success(self) -> bool:
        return self._ok

    def is_error(self) -> bool:
        return not self._ok

    def value(self) -> T:
        if not self._ok:
            raise ResultError("Attempted to get value from error result")
        return self._value  # type: ignore[return-value]

    def error(self) -> str:
        if self._ok:
            raise ResultError("Attempted to get error from success result")
        return self._error

    def value_or(self, default: T) -> T:
        return self._value if self._ok else default  # type: ignore[return-value]

    def map(self, func: Callable[[T], T]) -> "Result[T]":
        """Apply func to a success value; an exception becomes a failure."""
        if not self._ok:
            return self
        try:
            return Result.success(func(self._value))  # type: ignore[arg-type]
        except Exception as exc:
            return Result.failure(str(exc))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return (self._ok, self._value, self._error) == (other._ok, other._value, other._error)

    def __repr__(self) -> str:
        if self._ok:
            return f"Result.success({self._value!r})"
        return f"Result.failure({self._error!r})"


class GatewayIntent(IntFlag):
    GUILDS = 1 << 0
    GUILD_MEMBERS = 1 << 1
    GUILD_BANS = 1 << 2
    GUILD_EMOJIS_AND_STICKERS = 1 << 3
    GUILD_INTEGRATIONS = 1 << 4
    GUILD_WEBHOOKS = 1 << 5
    GUILD_INVITES = 1 << 6
    GUILD_VOICE_STATES = 1 << 7
    GUILD_PRESENCES = 1 << 8
    GUILD_MESSAGES = 1 << 9
    GUILD_MESSAGE_REACTIONS = 1 << 10
    GUILD_MESSAGE_TYPING = 1 << 11
    DIRECT_MESSAGES = 1 << 12
    DIRECT_MESSAGE_REACTIONS = 1 << 13
    DIRECT_MESSAGE_TYPING = 1 << 14
    MESSAGE_CONTENT = 1 << 15
    GUILD_SCHEDULED_EVENTS = 1 << 16
    AUTO_MODERATION_CONFIGURATION = 1 << 20
    AUTO_MODERATION_EXECUTION = 1 << 21


class Permission(IntFlag):
    CREATE_INSTANT_INVITE = 0x0000000001
    KICK_MEMBERS = 0x0000000002
    BAN_MEMBERS = 0x0000000004
    ADMINISTRATOR = 0x0000000008
    MANAGE_CHANNELS = 0x0000000010
    MANAGE_GUILD = 0x0000000020
    ADD_REACTIONS = 0x0000000040
    VIEW_AUDIT_LOG = 0x0000000080
    PRIORITY_SPEAKER = 0x0000000100
    STREAM = 0x0000000200
    VIEW_CHANNEL = 0x0000000400
    SEND_MESSAGES = 0x0000000800
    SEND_TTS_MESSAGES = 0x0000001000
    MANAGE_MESSAGES = 0x0000002000
    EMBED_LINKS = 0x0000004000
    ATTACH_FILES = 0x0000008000
    READ_MESSAGE_HISTORY = 0x0000010000
    MENTION_EVERYONE = 0x0000020000
    USE_EXTERNAL_EMOJIS = 0x0000040000
    VIEW_GUILD_INSIGHTS = 0x0000080000
    CONNECT = 0x0000100000
    SPEAK = 0x0000200000
    MUTE_MEMBERS = 0x0000400000
    DEAFEN_MEMBERS = 0x0000800000
    MOVE_MEMBERS = 0x0001000000
    USE_VAD = 0x0002000000
    CHANGE_NICKNAME = 0x0004000000
    MANAGE_NICKNAMES = 0x0008000000
    MANAGE_ROLES = 0x0010000000
    MANAGE_WEBHOOKS = 0x0020000000
    MANAGE_EMOJIS_AND_STICKERS = 0x0040000000
    USE_APPLICATION_COMMANDS = 0x0080000000
    REQUEST_TO_SPEAK = 0x0100000000
    MANAGE_EVENTS = 0x0200000000
    MANAGE_THREADS = 0x0400000000
    CREATE_PUBLIC_THREADS = 0x0800000000
    CREATE_PRIVATE_THREADS = 0x1000000000
    USE_EXTERNAL_STICKERS = 0x2000000000
    SEND_MESSAGES_IN_THREADS = 0x4000000000
    START_EMBEDDED_ACTIVITIES = 0x8000000000
    MODERATE_MEMBERS = 0x10000000000


class ChannelType(IntEnum):
    GUILD_TEXT = 0
    DM = 1
    GUILD_VOICE = 2
    GROUP_DM = 3
    GUILD_CATEGORY = 4
    GUILD_ANNOUNCEMENT = 5
    ANNOUNCEMENT_THREAD = 10
    PUBLIC_THREAD = 11
    PRIVATE_THREAD = 12
    GUILD_STAGE_VOICE = 13
    GUILD_DIRECTORY = 14
    GUILD_FORUM = 15


class MessageType(IntEnum):
    DEFAULT = 0
    RECIPIENT_ADD = 1
    RECIPIENT_REMOVE = 2
    CALL = 3
    CHANNEL_NAME_CHANGE = 4
    CHANNEL_ICON_CHANGE = 5
    CHANNEL_PINNED_MESSAGE = 6
    GUILD_MEMBER_JOIN = 7
    USER_PREMIUM_GUILD_SUBSCRIPTION = 8
    USER_PREMIUM_GUILD_SUBSCRIPTION_TIER_1 = 9
    USER_PREMIUM_GUILD_SUBSCRIPTION_TIER_2 = 10
    USER_PREMIUM_GUILD_SUBSCRIPTION_TIER_3 = 11
    CHANNEL_FOLLOW_ADD = 12
    GUILD_DISCOVERY_DISQUALIFIED = 14
    GUILD_DISCOVERY_REQUALIFIED = 15
    GUILD_DISCOVERY_GRACE_PERIOD_INITIAL_WARNING = 16
    GUILD_DISCOVERY_GRACE_PERIOD_FINAL_WARNING = 17
    THREAD_CREATED = 18
    REPLY = 19
    CHAT_INPUT_COMMAND = 20
    THREAD_STARTER_MESSAGE = 21
    GUILD_INVITE_REMINDER = 22
    CONTEXT_MENU_COMMAND = 23
    AUTO_MODERATION_ACTION = 24
    ROLE_SUBSCRIPTION_PURCHASE = 25
    INTERACTION_PREMIUM_UPSELL = 26
    STAGE_START = 27
    STAGE_END = 28
    STAGE_SPEAKER = 29
    STAGE_TOPIC = 30
    GUILD_APPLICATION_PREMIUM_SUBSCRIPTION = 31


@dataclass
class EmbedFooter:
    text: str = ""
    icon_url: Optional[str] = None
    proxy_icon_url: Optional[str] = None


@dataclass
class EmbedImage:
    url: Optional[str] = None
    proxy_url: Optional[str] = None
    height: Optional[int] = None
    width: Optional[int] = None


@dataclass
class EmbedThumbnail:
    url: Optional[str] = None
    proxy_url: Optional[str] = None
    height: Optional[int] = None
    width: Optional[int] = None


@dataclass
class EmbedVideo:
    url: Optional[str] = None
    height: Optional[int] = None
    width: Optional[int] = None


@dataclass
class EmbedProvider:
    name: Optional[str] = None
    url: Optional[str] = None


@dataclass
class EmbedAuthor:
    name: Optional[str] = None
    url: Optional[str] = None
    icon_url: Optional[str] = None
    proxy_icon_url: Optional[str] = None


@dataclass
class EmbedField:
    name: str = ""
    value: str = ""
    is_inline: bool = False


@dataclass
class User:
    id: str = ""
    username: str = ""
    discriminator: str = ""
    global_name: str = ""
    avatar: str = ""
    bot: bool = False
    system: bool = False
    mfa_enabled: bool = False
    locale: str = ""
    verified: bool = False
    email: str = ""
    flags: int = 0
    premium_type: int = 0
    public_flags: int = 0
    avatar_decoration: str = ""


@dataclass
class Guild:
    id: str = ""
    name: str = ""
    icon: str = ""
    icon_hash: str = ""
    splash: str = ""
    discovery_splash: str = ""
    owner: bool = False
    owner_id: str = ""
    permissions: int = 0
    region: str = ""
    afk_channel_id: str = ""
    afk_timeout: int = 0
    widget_enabled: bool = False
    widget_channel_id: str = ""
    verification_level: int = 0
    default_message_notifications: int = 0
    explicit_content_filter: int = 0
    roles: list[dict[str, Any]] = field(default_factory=list)
    emojis: list[dict[str, Any]] = field(default_factory=list)
    features: list[str] = field(default_factory=list)
    mfa_level: int = 0
    application_id: str = ""
    system_channel_flags: int = 0
    rules_channel_id: str = ""
    max_members: int = 0
    max_presences: int = 0
    vanity_url_code: str = ""
    description: str = ""
    banner: str = ""
    premium_tier: int = 0
    premium_subscription_count: int = 0
    preferred_locale: str = ""
    public_updates_channel_id: str = ""
    max_video_channel_users: int = 0
    approximate_member_count: int = 0
    approximate_presence_count: int = 0


@dataclass
class Channel:
    id: str = ""
    type: int = 0
    guild_id: str = ""
    position: int = 0
    permission_overwrites: list[dict[str, Any]] = field(default_factory=list)
    name: str = ""
    topic: str = ""
    nsfw: bool = False
    last_message_id: str = ""
    bitrate: int = 0
    user_limit: int = 0
    rate_limit_per_user: int = 0
    recipients: list[dict[str, Any]] = field(default_factory=list)
    icon: str = ""
    owner_id: str = ""
    application_id: str = ""
    parent_id: str = ""
    last_pin_timestamp: str = ""
    messages: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class Message:
    id: str = ""
    channel_id: str = ""
    guild_id: Optional[str] = None
    author: User = field(default_factory=User)
    member: Optional[str] = None
    content: str = ""
    timestamp: datetime = _EPOCH
    edited_timestamp: Optional[datetime] = None
    tts: bool = False
    mention_everyone: bool = False
    mentions: list[User] = field(default_factory=list)
    mention_roles: list[str] = field(default_factory=list)
    mention_channels: list[str] = field(default_factory=list)
    attachments: list[dict[str, Any]] = field(default_factory=list)
    embeds: list[dict[str, Any]] = field(default_factory=list)
    reactions: list[dict[str, Any]] = field(default_factory=list)
    nonce: str = ""
    pinned: bool = False
    webhook_id: Optional[int] = None
    type: MessageType = MessageType.DEFAULT
    components: Optional[list[dict[str, Any]]] = None
    message_reference: Optional[str] = None
    flags: Optional[int] = None
    interaction: Optional[Any] = None
    thread: Optional[str] = None
    application: Optional[Any] = None
    application_id: Optional[Any] = None
    activity: Optional[Any] = None
    sticker_items: Optional[Any] = None


@dataclass
class Role:
    id: str = ""
    name: str = ""
    color: int = 0
    hoist: bool = False
    icon: str = ""
    unicode_emoji: str = ""
    position: int = 0
    permissions: str = ""
    managed: bool = False
    mentionable: bool = False
    tags: list[str] = field(default_factory=list)


@dataclass
class Member:
    user: User = field(default_factory=User)
    nick: str = ""
    avatar: str = ""
    roles: list[str] = field(default_factory=list)
    joined_at: datetime = _EPOCH
    premium_since: Optional[datetime] = None
    deaf: bool = False
    mute: bool = False
    permissions: str = ""
    communication_disabled_until: Optional[datetime] = None


@dataclass
class Embed:
    title: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    timestamp: Optional[datetime] = None
    color: Optional[int] = None
    footer: Optional[EmbedFooter] = None
    image: Optional[EmbedImage] = None
    thumbnail: Optional[EmbedThumbnail] = None
    video: Optional[EmbedVideo] = None
    provider: Optional[EmbedProvider] = None
    author: Optional[EmbedAuthor] = None
    fields: list[EmbedField] = field(default_factory=list)