"""Worked example: posting a chat message through fallible lookups.

Demonstrates:
- either_bind with an early exit when authentication fails
- maybe_bind with an early exit when a user or channel is missing
- maybe_map substituting a default without leaving the block
- either_map on an already-computed membership check
- the same program as an async block
"""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from fallthrough.runtime.observability import get_logger

from .block import Exit, async_block, block
from .effect import AsyncEffect, Effect, effect
from .fallible import either_bind, either_map, maybe_bind, maybe_map
from .maybe import Maybe
from .result import Failure, Result, Success

_log = get_logger("fallthrough.examples")

UNAUTHORIZED = "unauthorized"
NOT_DELIVERED = "not delivered"


# ═════════════════════════════════════════════════════════════════════════════
# Domain
# ═════════════════════════════════════════════════════════════════════════════


class Token(BaseModel):
    """Opaque session token issued to one user."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    value: str = Field(min_length=1)
    user_id: int


class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str = Field(min_length=1)
    nickname: str | None = None


class Channel(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    members: frozenset[int] = frozenset()


@dataclass
class Directory:
    """In-memory backing store. Every lookup is an Effect, so nothing is read until run."""

    tokens: dict[str, Token] = field(default_factory=dict)
    users: dict[int, User] = field(default_factory=dict)
    channels: dict[str, Channel] = field(default_factory=dict)
    delivered: list[str] = field(default_factory=list)
    lookups: int = 0

    @classmethod
    def sample(cls) -> Directory:
        alice = User(id=1, name="alice", nickname="al")
        bob = User(id=2, name="bob")
        return cls(
            tokens={"t-alice": Token(value="t-alice", user_id=1), "t-bob": Token(value="t-bob", user_id=2),
                    "t-ghost": Token(value="t-ghost", user_id=99)},
            users={alice.id: alice, bob.id: bob},
            channels={"general": Channel(name="general", members=frozenset({1, 2})),
                      "staff": Channel(name="staff", members=frozenset({1}))},
        )

    @effect
    def authenticate(self, raw: str) -> Result[Token, str]:
        self.lookups += 1
        if not raw.strip():
            return Failure("empty token")
        token = self.tokens.get(raw)
        return Success(token) if token is not None else Failure(f"unknown token {raw!r}")

    @effect
    def find_user(self, token: Token) -> Maybe[User]:
        self.lookups += 1
        return Maybe.from_optional(self.users.get(token.user_id))

    @effect
    def find_channel(self, name: str) -> Maybe[Channel]:
        self.lookups += 1
        return Maybe.from_optional(self.channels.get(name))

    @effect
    def deliver(self, channel: Channel, sender: str, text: str) -> str:
        line = f"#{channel.name} <{sender}> {text}"
        self.delivered.append(line)
        return f"delivered to #{channel.name}"


@effect
def log_and_default(reason: str, default: str) -> str:
    """Log why a request stopped and hand back the reply to use instead."""
    _log.warning("request stopped", reason=reason)
    return default


def check_membership(user: User, channel: Channel) -> Result[Channel, str]:
    if user.id in channel.members:
        return Success(channel)
    return Failure(f"{user.name} is not a member of #{channel.name}")


# ═════════════════════════════════════════════════════════════════════════════
# Synchronous program
# ═════════════════════════════════════════════════════════════════════════════


@block
def post_message(
    exit: Exit[str],
    directory: Directory,
    raw_token: str,
    channel_name: str,
    text: str,
) -> Generator[Effect[Any], Any, str]:
    """Authenticate, resolve user and channel, then deliver. Any miss stops with a reply."""
    token = yield either_bind(
        directory.authenticate(raw_token),
        exit.adapt(log_and_default("authentication failed", UNAUTHORIZED)),
    )
    user = yield maybe_bind(
        directory.find_user(token),
        exit.adapt(log_and_default("token has no user", UNAUTHORIZED)),
    )
    channel = yield maybe_bind(
        directory.find_channel(channel_name),
        exit.adapt(log_and_default("no such channel", NOT_DELIVERED)),
    )
    # Non-members are turned away; the handler sees the reason but the reply stays fixed.
    channel = yield either_map(
        check_membership(user, channel),
        lambda reason: exit.terminate(NOT_DELIVERED),
    )
    sender = yield maybe_map(Maybe.from_optional(user.nickname), Effect.pure(user.name))
    receipt = yield directory.deliver(channel, sender, text)
    return receipt


# ═════════════════════════════════════════════════════════════════════════════
# Asynchronous program
# ═════════════════════════════════════════════════════════════════════════════


@async_block
async def post_message_async(
    exit: Exit[str],
    directory: Directory,
    raw_token: str,
    channel_name: str,
    text: str,
) -> str:
    """Same flow as post_message, awaited step by step."""
    lift = AsyncEffect.from_effect
    token = await either_bind(
        lift(directory.authenticate(raw_token)),
        exit.adapt(lift(log_and_default("authentication failed", UNAUTHORIZED))),
    )
    user = await maybe_bind(
        lift(directory.find_user(token)),
        exit.adapt(lift(log_and_default("token has no user", UNAUTHORIZED))),
    )
    channel = await maybe_bind(
        lift(directory.find_channel(channel_name)),
        exit.adapt(lift(log_and_default("no such channel", NOT_DELIVERED))),
    )
    channel = await either_map(
        check_membership(user, channel),
        lambda reason: exit.terminate(NOT_DELIVERED),
        context=AsyncEffect,
    )
    sender = await maybe_map(Maybe.from_optional(user.nickname), AsyncEffect.pure(user.name))
    return await lift(directory.deliver(channel, sender, text))
