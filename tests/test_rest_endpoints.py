import json

import pytest
import responses

from botcord import rest_endpoints
from botcord.http_client import HTTPClient, HTTPError
from botcord.rest_endpoints import APIEndpoints, default_client

BASE = "https://api.example.com"


@pytest.fixture
def rsps():
    with responses.RequestsMock() as mock:
        yield mock


@pytest.fixture
def api():
    client = HTTPClient("token", base_url=BASE)
    yield APIEndpoints(client)
    client.shutdown()


def test_get_user_returns_json(rsps, api):
    rsps.add(responses.GET, f"{BASE}/users/42", json={"id": "42"})
    assert api.get_user("42") == {"id": "42"}
    assert rsps.calls[0].request.headers["Authorization"] == "Bot token"


def test_get_current_user(rsps, api):
    rsps.add(responses.GET, f"{BASE}/users/@me", json={"id": "me"})
    assert api.get_current_user() == {"id": "me"}


def test_modify_current_user_sends_patch_body(rsps, api):
    rsps.add(responses.PATCH, f"{BASE}/users/@me", json={"username": "bob"})
    assert api.modify_current_user({"username": "bob"}) == {"username": "bob"}
    assert json.loads(rsps.calls[0].request.body) == {"username": "bob"}


def test_leave_guild_empty_body_gives_none(rsps, api):
    rsps.add(responses.DELETE, f"{BASE}/users/@me/guilds/7", body="", status=204)
    assert api.leave_guild("7") is None


def test_guild_members_without_after(rsps, api):
    rsps.add(responses.GET, f"{BASE}/guilds/1/members", json=[])
    assert api.get_guild_members("1") == []
    assert rsps.calls[0].request.url == f"{BASE}/guilds/1/members?limit=1"


def test_guild_members_with_after(rsps, api):
    rsps.add(responses.GET, f"{BASE}/guilds/1/members", json=[{"user": {"id": "9"}}])
    assert api.get_guild_members("1", 10, "5") == [{"user": {"id": "9"}}]
    assert rsps.calls[0].request.url == f"{BASE}/guilds/1/members?limit=10&after=5"


def test_channel_messages_default_limit(rsps, api):
    rsps.add(responses.GET, f"{BASE}/channels/3/messages", json=[{"id": "m"}])
    assert api.get_channel_messages("3") == [{"id": "m"}]
    assert rsps.calls[0].request.url == f"{BASE}/channels/3/messages?limit=50"


def test_channel_messages_all_filters(rsps, api):
    rsps.add(responses.GET, f"{BASE}/channels/3/messages", json=[{"id": "m"}])
    assert api.get_channel_messages("3", 5, "10", "20", "30") == [{"id": "m"}]
    assert (
        rsps.calls[0].request.url
        == f"{BASE}/channels/3/messages?limit=5&before=10&after=20&around=30"
    )


def test_send_message_posts_content(rsps, api):
    rsps.add(responses.POST, f"{BASE}/channels/3/messages", json={"id": "m1"})
    assert api.send_message("3", {"content": "hi"}) == {"id": "m1"}
    request = rsps.calls[0].request
    assert json.loads(request.body) == {"content": "hi"}
    assert request.headers["Content-Type"] == "application/json"


def test_add_reaction_puts_empty_object(rsps, api):
    url = f"{BASE}/channels/3/messages/4/reactions/x/@me"
    rsps.add(responses.PUT, url, body="", status=204)
    assert api.add_reaction("3", "4", "x") is None
    assert json.loads(rsps.calls[0].request.body) == {}


def test_remove_reaction_defaults_to_me(rsps, api):
    rsps.add(responses.DELETE, f"{BASE}/channels/3/messages/4/reactions/x/@me", json={"ok": 1})
    assert api.remove_reaction("3", "4", "x") == {"ok": 1}
    assert rsps.calls[0].request.url.endswith("/reactions/x/@me")


def test_remove_reaction_for_user(rsps, api):
    rsps.add(responses.DELETE, f"{BASE}/channels/3/messages/4/reactions/x/8", json={"ok": 2})
    assert api.remove_reaction("3", "4", "x", "8") == {"ok": 2}
    assert rsps.calls[0].request.url.endswith("/reactions/x/8")


def test_interaction_callback_path(rsps, api):
    rsps.add(responses.POST, f"{BASE}/interactions/11/tok/callback", body="", status=204)
    assert api.create_interaction_response("11", "tok", {"type": 4}) is None
    assert json.loads(rsps.calls[0].request.body) == {"type": 4}


def test_original_interaction_response_round_trip(rsps, api):
    url = f"{BASE}/webhooks/11/tok/messages/@original"
    rsps.add(responses.GET, url, json={"content": "a"})
    rsps.add(responses.PATCH, url, json={"content": "b"})
    rsps.add(responses.DELETE, url, body="")
    assert api.get_original_interaction_response("11", "tok") == {"content": "a"}
    assert api.edit_original_interaction_response("11", "tok", {"content": "b"}) == {
        "content": "b"
    }
    assert api.delete_original_interaction_response("11", "tok") is None


def test_followup_messages(rsps, api):
    url = f"{BASE}/webhooks/app/tok/messages/m"
    rsps.add(responses.PATCH, url, json={"id": "m"})
    rsps.add(responses.DELETE, url, body="")
    assert api.edit_followup_message("app", "tok", "m", {"content": "x"}) == {"id": "m"}
    assert api.delete_followup_message("app", "tok", "m") is None


def test_gateway_endpoints(rsps, api):
    rsps.add(responses.GET, f"{BASE}/gateway", json={"url": "wss://g"})
    rsps.add(responses.GET, f"{BASE}/gateway/bot", json={"shards": 1})
    assert api.get_gateway() == {"url": "wss://g"}
    assert api.get_gateway_bot() == {"shards": 1}


def test_role_management(rsps, api):
    rsps.add(responses.POST, f"{BASE}/guilds/1/roles", json={"id": "r"})
    rsps.add(responses.DELETE, f"{BASE}/guilds/1/roles/r", body="")
    rsps.add(responses.PUT, f"{BASE}/guilds/1/members/u/roles/r", body="")
    rsps.add(responses.DELETE, f"{BASE}/guilds/1/members/u/roles/r", body="")
    assert api.create_guild_role("1", {"name": "mod"}) == {"id": "r"}
    assert api.delete_guild_role("1", "r") is None
    assert api.add_guild_member_role("1", "u", "r") is None
    assert api.remove_guild_member_role("1", "u", "r") is None
    assert [call.request.method for call in rsps.calls] == ["POST", "DELETE", "PUT", "DELETE"]


def test_channel_crud(rsps, api):
    rsps.add(responses.POST, f"{BASE}/guilds/1/channels", json={"id": "c"})
    rsps.add(responses.GET, f"{BASE}/channels/c", json={"id": "c"})
    rsps.add(responses.PATCH, f"{BASE}/channels/c", json={"name": "n"})
    rsps.add(responses.DELETE, f"{BASE}/channels/c", json={"id": "c"})
    assert api.create_channel("1", {"name": "c"}) == {"id": "c"}
    assert api.get_channel("c") == {"id": "c"}
    assert api.modify_channel("c", {"name": "n"}) == {"name": "n"}
    assert api.delete_channel("c") == {"id": "c"}


def test_guild_lookups(rsps, api):
    rsps.add(responses.GET, f"{BASE}/guilds/1", json={"id": "1"})
    rsps.add(responses.GET, f"{BASE}/guilds/1/channels", json=[{"id": "c"}])
    rsps.add(responses.GET, f"{BASE}/guilds/1/members/u", json={"nick": "n"})
    rsps.add(responses.GET, f"{BASE}/users/@me/guilds", json=[{"id": "1"}])
    assert api.get_guild("1") == {"id": "1"}
    assert api.get_guild_channels("1") == [{"id": "c"}]
    assert api.get_guild_member("1", "u") == {"nick": "n"}
    assert api.get_current_user_guilds() == [{"id": "1"}]


def test_message_edit_and_delete(rsps, api):
    url = f"{BASE}/channels/3/messages/4"
    rsps.add(responses.GET, url, json={"id": "4"})
    rsps.add(responses.PATCH, url, json={"content": "new"})
    rsps.add(responses.DELETE, url, body="")
    assert api.get_channel_message("3", "4") == {"id": "4"}
    assert api.edit_message("3", "4", {"content": "new"}) == {"content": "new"}
    assert api.delete_message("3", "4") is None


def test_http_error_propagates(rsps, api):
    rsps.add(responses.GET, f"{BASE}/users/0", json={"message": "Unknown User"}, status=404)
    with pytest.raises(HTTPError) as info:
        api.get_user("0")
    assert info.value.status == 404
    assert str(info.value) == "HTTP error 404: Unknown User"


def test_default_client_requires_token(monkeypatch):
    monkeypatch.setattr(rest_endpoints, "_default_client", None)
    monkeypatch.delenv("DISCORD_BOT_TOKEN", raising=False)
    with pytest.raises(RuntimeError, match="DISCORD_BOT_TOKEN"):
        default_client()
    with pytest.raises(RuntimeError, match="DISCORD_BOT_TOKEN"):
        APIEndpoints().get_gateway()


def test_default_client_is_shared(monkeypatch):
    monkeypatch.setattr(rest_endpoints, "_default_client", None)
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "token")
    first = default_client()
    try:
        assert default_client() is first
        assert first.token == "token"
        assert APIEndpoints().client is first
    finally:
        first.shutdown()