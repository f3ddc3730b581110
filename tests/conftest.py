"""Shared fixtures: a client wired to an in-process httpx mock transport."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from groupme_bot.api.client import GroupMeClient
from groupme_bot.config import ClientConfig
from tests.helpers import TOKEN, RecordingTransport


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(access_token=TOKEN)


@pytest.fixture
def make_client(config: ClientConfig):
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> tuple[GroupMeClient, RecordingTransport]:
        transport = RecordingTransport(handler)
        client = GroupMeClient(config, transport=transport)
        return client, transport

    return _make
