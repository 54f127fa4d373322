"""The current user's account information."""

from __future__ import annotations

from dataclasses import dataclass, field

from .request import Core


@dataclass
class User:
    """A user of the API."""

    user_id: str = ""
    user_name: str = ""
    nick_name: str = ""
    avatar_url: str = ""
    log_id: str = field(default="", compare=False)


class Users:
    """The /v1/users endpoints."""

    def __init__(self, core: Core) -> None:
        self._core = core

    def me(self) -> User:
        """Return the user that the credentials belong to."""
        payload, response = self._core.request("GET", "/v1/users/me")
        data = payload.get("data") or {}
        return User(
            user_id=str(data.get("user_id") or ""),
            user_name=str(data.get("user_name") or ""),
            nick_name=str(data.get("nick_name") or ""),
            avatar_url=str(data.get("avatar_url") or ""),
            log_id=response.log_id(),
        )