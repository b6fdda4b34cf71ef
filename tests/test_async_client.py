"""AsyncOsuClient のテスト。"""

from __future__ import annotations

import asyncio
import base64
import json
import lzma

import httpx
import pytest

from osuapi import AsyncOsuClient, OsuUnauthorizedError


def test_async_user_and_replay() -> None:
    content = base64.b64encode(
        lzma.compress(b"5|10.0|20.0|1,5|11.0|21.0|0", format=lzma.FORMAT_ALONE)
    ).decode("ascii")

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/get_user"):
            payload: object = [{"user_id": "2", "username": "peppy", "events": []}]
        else:
            payload = {"content": content, "encoding": "base64"}
        return httpx.Response(
            status_code=200,
            content=json.dumps(payload).encode("utf-8"),
            request=request,
        )

    async def run() -> None:
        transport = httpx.MockTransport(handler)
        http_client = httpx.AsyncClient(
            transport=transport,
            base_url="https://example.invalid/api",
        )
        async with AsyncOsuClient(
            "secret-key",
            http_client=http_client,
            base_url="https://example.invalid/api",
        ) as client:
            user = await client.users.get("peppy")
            assert user is not None
            assert user.user_id == "2"

            frame = await client.replays.get(beatmap_id=1, user="peppy", mode=0)
            assert [event.key_state for event in frame.events] == [1, 0]
        await http_client.aclose()

    asyncio.run(run())


def test_async_unauthorized() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code=401,
            json={"error": "Please provide a valid API key."},
            request=request,
        )

    async def run() -> None:
        transport = httpx.MockTransport(handler)
        http_client = httpx.AsyncClient(transport=transport, base_url="https://example.invalid/api")
        async with AsyncOsuClient("bad", http_client=http_client) as client:
            with pytest.raises(OsuUnauthorizedError):
                await client.scores.get(1)
        await http_client.aclose()

    asyncio.run(run())
