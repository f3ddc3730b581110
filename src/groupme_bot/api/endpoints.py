"""Declarative table of GroupMe REST operations.

Each ``Endpoint`` describes one remote call: HTTP verb, path template,
argument names, and how the body and query string are shaped from those
arguments. Accessed on a client instance, an endpoint becomes an awaitable
method that routes through ``request``.
"""

from __future__ import annotations

import copy
import functools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from groupme_bot.api.client import GroupMeClient

BodyBuilder = Callable[[dict[str, Any]], Any]
QueryBuilder = Callable[[dict[str, Any]], dict[str, Any]]


class BotOptions(BaseModel):
    """Optional settings for a new bot. Unknown keys are forwarded as-is."""

    model_config = ConfigDict(extra="allow")

    avatar_url: Optional[str] = None
    callback_url: Optional[str] = None  # public HTTPS endpoint receiving group messages
    dm_notification: Optional[bool] = None
    active: Optional[bool] = None  # must be true for callback deliveries


@dataclass(frozen=True)
class Endpoint:
    method: str
    path: str
    args: tuple[str, ...] = ()
    body: Optional[BodyBuilder] = None
    query: Optional[QueryBuilder] = None
    defaults: Mapping[str, Any] = field(default_factory=dict)

    def bind(self, *args: Any, **kwargs: Any) -> dict[str, Any]:
        """Map call arguments onto argument names, filling defaults (copied per call)."""
        if len(args) > len(self.args):
            raise TypeError(f"{self.path} takes {len(self.args)} arguments but {len(args)} were given")

        values = dict(zip(self.args, args))
        for name, value in kwargs.items():
            if name not in self.args:
                raise TypeError(f"{self.path} got an unexpected argument '{name}'")
            if name in values:
                raise TypeError(f"{self.path} got multiple values for argument '{name}'")
            values[name] = value

        for name in self.args:
            if name in values:
                continue
            if name not in self.defaults:
                raise TypeError(f"{self.path} missing required argument '{name}'")
            values[name] = copy.deepcopy(self.defaults[name])
        return values

    def build(self, *args: Any, **kwargs: Any) -> tuple[str, str, Any, Optional[dict[str, Any]]]:
        """Return the (method, path, body, query) tuple for ``request``."""
        values = self.bind(*args, **kwargs)
        path = self.path.format(**values)
        body = self.body(values) if self.body else None
        query = self.query(values) if self.query else None
        return self.method, path, body, query

    async def call(self, client: GroupMeClient, *args: Any, **kwargs: Any) -> Any:
        return await client.request(*self.build(*args, **kwargs))

    def __get__(self, instance: Any, owner: Any = None) -> Any:
        if instance is None:
            return self
        return functools.partial(self.call, instance)


def _bot_body(v: dict[str, Any]) -> dict[str, Any]:
    options = v["options"]
    if not isinstance(options, BotOptions):
        options = BotOptions.model_validate(options or {})
    return {"bot": {"name": v["name"], "group_id": v["group_id"], **options.model_dump(exclude_none=True)}}


class GroupMeEndpoints:
    """Every remote operation, bound over ``self.request``."""

    # Users
    get_me = Endpoint("GET", "/users/me")
    update_me = Endpoint("POST", "/users/update", ("data",), body=lambda v: v["data"])

    # Groups
    get_groups = Endpoint(
        "GET", "/groups", ("params",),
        query=lambda v: v["params"],
        defaults={"params": {"page": 1, "per_page": 10, "omit": "memberships"}},
    )
    get_former_groups = Endpoint("GET", "/groups/former")
    get_group = Endpoint("GET", "/groups/{group_id}", ("group_id",))
    create_group = Endpoint("POST", "/groups", ("data",), body=lambda v: v["data"])
    update_group = Endpoint("POST", "/groups/{group_id}/update", ("group_id", "data"), body=lambda v: v["data"])
    destroy_group = Endpoint("POST", "/groups/{group_id}/destroy", ("group_id",))
    join_group = Endpoint("POST", "/groups/{group_id}/join/{share_token}", ("group_id", "share_token"))
    rejoin_group = Endpoint("POST", "/groups/join", ("group_id",), body=lambda v: {"group_id": v["group_id"]})

    # Members
    add_members = Endpoint(
        "POST", "/groups/{group_id}/members/add", ("group_id", "members"),
        body=lambda v: {"members": v["members"]},
    )
    remove_member = Endpoint(
        "POST", "/groups/{group_id}/members/{membership_id}/remove", ("group_id", "membership_id"),
    )
    update_member = Endpoint(
        "POST", "/groups/{group_id}/memberships/update", ("group_id", "nickname"),
        body=lambda v: {"membership": {"nickname": v["nickname"]}},
    )

    # Messages
    get_messages = Endpoint(
        "GET", "/groups/{group_id}/messages", ("group_id", "params"),
        query=lambda v: v["params"],
        defaults={"params": {"limit": 20}},
    )
    create_message = Endpoint(
        "POST", "/groups/{group_id}/messages", ("group_id", "message"),
        body=lambda v: {"message": v["message"]},
    )

    # Direct messages
    get_direct_messages = Endpoint(
        "GET", "/direct_messages", ("other_user_id", "params"),
        query=lambda v: {"other_user_id": v["other_user_id"], **v["params"]},
        defaults={"params": {}},
    )
    create_direct_message = Endpoint(
        "POST", "/direct_messages", ("message",),
        body=lambda v: {"direct_message": v["message"]},
    )

    # Likes
    like_message = Endpoint("POST", "/messages/{group_id}/{message_id}/like", ("group_id", "message_id"))
    unlike_message = Endpoint("POST", "/messages/{group_id}/{message_id}/unlike", ("group_id", "message_id"))

    # Bots
    get_bots = Endpoint("GET", "/bots")
    create_bot = Endpoint(
        "POST", "/bots", ("name", "group_id", "options"),
        body=_bot_body,
        defaults={"options": None},
    )
    post_bot = Endpoint(
        "POST", "/bots/post", ("bot_id", "text", "attachments"),
        body=lambda v: {"bot_id": v["bot_id"], "text": v["text"], "attachments": v["attachments"]},
        defaults={"attachments": []},
    )
    destroy_bot = Endpoint("POST", "/bots/destroy", ("bot_id",), body=lambda v: {"bot_id": v["bot_id"]})

    # Blocks
    get_blocks = Endpoint("GET", "/blocks", ("params",), query=lambda v: v["params"], defaults={"params": {}})
    create_block = Endpoint("POST", "/blocks", ("user_id",), body=lambda v: {"user": v["user_id"]})
    # The target user goes in the query string; the API takes no body on DELETE
    destroy_block = Endpoint("DELETE", "/blocks", ("user_id",), query=lambda v: {"user": v["user_id"]})
