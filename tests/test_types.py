import pytest

from botcord.types import (
    Channel,
    ChannelType,
    Embed,
    EmbedField,
    GatewayIntent,
    Member,
    Message,
    MessageType,
    Permission,
    Result,
    ResultError,
    User,
)


def test_success_holds_value():
    result = Result.success(42)
    assert result.is_success()
    assert not result.is_error()
    assert result.value() == 42


def test_failure_holds_error():
    result = Result.failure("boom")
    assert result.is_error()
    assert not result.is_success()
    assert result.error() == "boom"


def test_value_on_failure_raises():
    with pytest.raises(ResultError, match="Attempted to get value from error result"):
        Result.failure("boom").value()


def test_error_on_success_raises():
    with pytest.raises(ResultError, match="Attempted to get error from success result"):
        Result.success(1).error()


def test_void_success_has_no_error():
    result = Result.success()
    assert result.is_success()
    with pytest.raises(ResultError):
        result.error()


def test_value_or():
    assert Result.success("a").value_or("b") == "a"
    assert Result.failure("x").value_or("b") == "b"


def test_map_applies_function():
    assert Result.success(3).map(lambda v: v * 2) == Result.success(6)


def test_map_turns_exception_into_failure():
    def explode(_):
        raise ValueError("bad input")

    mapped = Result.success(3).map(explode)
    assert mapped.is_error()
    assert mapped.error() == "bad input"


def test_map_on_failure_keeps_error():
    failed = Result.failure("nope")
    mapped = failed.map(lambda v: v + 1)
    assert mapped.error() == "nope"


def test_gateway_intents_combine():
    assert GatewayIntent(1 << 15) is GatewayIntent.MESSAGE_CONTENT
    combined = GatewayIntent(GatewayIntent.GUILDS | GatewayIntent.MESSAGE_CONTENT)
    assert GatewayIntent.MESSAGE_CONTENT in combined
    assert GatewayIntent.GUILD_MEMBERS not in combined
    assert int(combined) == (1 << 0) | (1 << 15)


def test_permission_values():
    assert Permission(0x0000000008) is Permission.ADMINISTRATOR
    assert Permission(0x10000000000) is Permission.MODERATE_MEMBERS
    perms = Permission(Permission.SEND_MESSAGES | Permission.VIEW_CHANNEL)
    assert Permission.SEND_MESSAGES in perms
    assert Permission.KICK_MEMBERS not in perms
    assert int(perms) == 0x0000000800 | 0x0000000400


def test_channel_type_lookup():
    assert ChannelType(15) is ChannelType.GUILD_FORUM
    assert ChannelType.GUILD_TEXT == 0


def test_message_type_lookup():
    assert MessageType(19) is MessageType.REPLY
    with pytest.raises(ValueError):
        MessageType(13)


def test_message_defaults():
    message = Message()
    assert message.type is MessageType.DEFAULT
    assert message.guild_id is None
    assert message.author == User()


def test_default_lists_are_independent():
    first, second = Embed(), Embed()
    first.fields.append(EmbedField(name="n", value="v"))
    assert second.fields == []
    assert len(first.fields) == 1


def test_member_and_channel_defaults():
    member = Member(nick="nick")
    assert member.roles == []
    assert member.user.bot is False
    assert Channel(name="general").recipients == []