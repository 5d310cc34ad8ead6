"""REST endpoint helpers built on top of HTTPClient."""

from __future__ import annotations

import os
import threading
from typing import Any, Optional

from .http_client import HTTPClient

TOKEN_ENV_VAR = "DISCORD_BOT_TOKEN"

_default_client: Optional[HTTPClient] = None
_default_lock = threading.Lock()


def default_client() -> HTTPClient:
    """Return the shared client, creating it from DISCORD_BOT_TOKEN on first use."""
    global _default_client
    with _default_lock:
        if _default_client is None:
            token = os.environ.get(TOKEN_ENV_VAR)
            if not token:
                raise RuntimeError(f"{TOKEN_ENV_VAR} environment variable not set")
            _default_client = HTTPClient(token)
        return _default_client


class APIEndpoints:
    """Blocking wrappers for the REST API; each call returns the decoded JSON body."""

    def __init__(self, client: Optional[HTTPClient] = None) -> None:
        self._client = client

    @property
    def client(self) -> HTTPClient:
        return self._client if self._client is not None else default_client()

    def _get(self, path: str) -> Any:
        return self.client.get(path).result()

    def _post(self, path: str, data: Any) -> Any:
        return self.client.post(path, data).result()

    def _put(self, path: str, data: Any) -> Any:
        return self.client.put(path, data).result()

    def _patch(self, path: str, data: Any) -> Any:
        return self.client.patch(path, data).result()

    def _delete(self, path: str) -> Any:
        return self.client.delete(path).result()

    # Users

    def get_user(self, user_id: str) -> Any:
        return self._get(f"/users/{user_id}")

    def get_current_user(self) -> Any:
        return self._get("/users/@me")

    def modify_current_user(self, data: Any) -> Any:
        return self._patch("/users/@me", data)

    def get_current_user_guilds(self) -> Any:
        return self._get("/users/@me/guilds")

    def leave_guild(self, guild_id: str) -> Any:
        return self._delete(f"/users/@me/guilds/{guild_id}")

    # Guilds

    def get_guild(self, guild_id: str) -> Any:
        return self._get(f"/guilds/{guild_id}")

    def get_guild_channels(self, guild_id: str) -> Any:
        return self._get(f"/guilds/{guild_id}/channels")

    def get_guild_members(self, guild_id: str, limit: int = 1, after: str = "") -> Any:
        path = f"/guilds/{guild_id}/members?limit={limit}"
        if after:
            path += f"&after={after}"
        return self._get(path)

    def get_guild_member(self, guild_id: str, user_id: str) -> Any:
        return self._get(f"/guilds/{guild_id}/members/{user_id}")

    # Channels

    def get_channel(self, channel_id: str) -> Any:
        return self._get(f"/channels/{channel_id}")

    def modify_channel(self, channel_id: str, data: Any) -> Any:
        return self._patch(f"/channels/{channel_id}", data)

    def delete_channel(self, channel_id: str) -> Any:
        return self._delete(f"/channels/{channel_id}")

    # Messages

    def get_channel_messages(
        self,
        channel_id: str,
        limit: int = 50,
        before: str = "",
        after: str = "",
        around: str = "",
    ) -> Any:
        path = f"/channels/{channel_id}/messages?limit={limit}"
        for name, value in (("before", before), ("after", after), ("around", around)):
            if value:
                path += f"&{name}={value}"
        return self._get(path)

    def get_channel_message(self, channel_id: str, message_id: str) -> Any:
        return self._get(f"/channels/{channel_id}/messages/{message_id}")

    def send_message(self, channel_id: str, data: Any) -> Any:
        return self._post(f"/channels/{channel_id}/messages", data)

    def edit_message(self, channel_id: str, message_id: str, data: Any) -> Any:
        return self._patch(f"/channels/{channel_id}/messages/{message_id}", data)

    def delete_message(self, channel_id: str, message_id: str) -> Any:
        return self._delete(f"/channels/{channel_id}/messages/{message_id}")

    # Interactions

    def create_interaction_response(
        self, interaction_id: str, interaction_token: str, data: Any
    ) -> Any:
        return self._post(f"/interactions/{interaction_id}/{interaction_token}/callback", data)

    def get_original_interaction_response(
        self, interaction_id: str, interaction_token: str
    ) -> Any:
        return self._get(f"/webhooks/{interaction_id}/{interaction_token}/messages/@original")

    def edit_original_interaction_response(
        self, interaction_id: str, interaction_token: str, data: Any
    ) -> Any:
        return self._patch(
            f"/webhooks/{interaction_id}/{interaction_token}/messages/@original", data
        )

    def delete_original_interaction_response(
        self, interaction_id: str, interaction_token: str
    ) -> Any:
        return self._delete(f"/webhooks/{interaction_id}/{interaction_token}/messages/@original")

    # Gateway

    def get_gateway(self) -> Any:
        return self._get("/gateway")

    def get_gateway_bot(self) -> Any:
        return self._get("/gateway/bot")

    # Reactions

    def add_reaction(self, channel_id: str, message_id: str, emoji: str) -> Any:
        return self._put(
            f"/channels/{channel_id}/messages/{message_id}/reactions/{emoji}/@me", {}
        )

    def remove_reaction(
        self, channel_id: str, message_id: str, emoji: str, user_id: str = ""
    ) -> Any:
        target = user_id if user_id else "@me"
        return self._delete(
            f"/channels/{channel_id}/messages/{message_id}/reactions/{emoji}/{target}"
        )

    # Follow-up messages

    def edit_followup_message(
        self, application_id: str, interaction_token: str, message_id: str, message: Any
    ) -> Any:
        return self._patch(
            f"/webhooks/{application_id}/{interaction_token}/messages/{message_id}", message
        )

    def delete_followup_message(
        self, application_id: str, interaction_token: str, message_id: str
    ) -> Any:
        return self._delete(
            f"/webhooks/{application_id}/{interaction_token}/messages/{message_id}"
        )

    # Roles

    def create_guild_role(self, guild_id: str, role_data: Any) -> Any:
        return self._post(f"/guilds/{guild_id}/roles", role_data)

    def delete_guild_role(self, guild_id: str, role_id: str) -> Any:
        return self._delete(f"/guilds/{guild_id}/roles/{role_id}")

    def add_guild_member_role(self, guild_id: str, user_id: str, role_id: str) -> Any:
        return self._put(f"/guilds/{guild_id}/members/{user_id}/roles/{role_id}", {})

    def remove_guild_member_role(self, guild_id: str, user_id: str, role_id: str) -> Any:
        return self._delete(f"/guilds/{guild_id}/members/{user_id}/roles/{role_id}")

    # Channel creation

    def create_channel(self, guild_id: str, data: Any) -> Any:
        return self._post(f"/guilds/{guild_id}/channels", data)