"""公開クライアント実装。"""

from __future__ import annotations

from typing import Any

import httpx

from osuapi.config import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, ClientConfig
from osuapi.services.beatmaps import AsyncBeatmapService, BeatmapService
from osuapi.services.matches import AsyncMatchService, MatchService
from osuapi.services.replays import AsyncReplayService, ReplayService
from osuapi.services.scores import AsyncScoreService, ScoreService
from osuapi.services.users import AsyncUserService, UserService
from osuapi.validation import validate_api_key


def _build_config(
    *,
    api_key: str,
    base_url: str,
    timeout: float,
    user_agent: str,
    capture_full_response: bool,
) -> ClientConfig:
    if timeout <= 0:
        raise ValueError("timeout は0より大きい値を指定してください。")
    return ClientConfig(
        api_key=validate_api_key(api_key),
        base_url=base_url,
        timeout=timeout,
        user_agent=user_agent,
        capture_full_response=capture_full_response,
    )


def _client_kwargs(
    *,
    base_url: str,
    timeout: float,
    http2: bool,
    proxy: str | None,
    limits: httpx.Limits | None,
) -> dict[str, Any]:
    client_kwargs: dict[str, Any] = {
        "base_url": base_url,
        "timeout": timeout,
        "http2": http2,
    }
    if proxy is not None:
        client_kwargs["proxy"] = proxy
    if limits is not None:
        client_kwargs["limits"] = limits
    return client_kwargs


class OsuClient:
    """osu! API v1 の同期クライアント。

    Attributes:
        beatmaps: 譜面API（`get_beatmaps`）。
        users: ユーザーAPI（`get_user` / `get_user_best` / `get_user_recent`）。
        scores: スコアAPI（`get_scores`）。
        matches: マルチプレイAPI（`get_match`）。
        replays: リプレイAPI（`get_replay`）。
    """

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = 30.0,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        capture_full_response: bool = False,
        http_client: httpx.Client | None = None,
        http2: bool = False,
        proxy: str | None = None,
        limits: httpx.Limits | None = None,
    ) -> None:
        """クライアントを初期化する。

        Args:
            api_key: APIキー。
            timeout: HTTPタイムアウト秒。
            base_url: APIベースURL。
            user_agent: User-Agent。
            capture_full_response: 例外に完全レスポンスを保持するか。
            http_client: 外部httpx.Client。
            http2: HTTP/2有効化。
            proxy: プロキシ。
            limits: httpx接続制御。

        Raises:
            OsuValidationError: APIキーが空の場合。
        """

        self._config = _build_config(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            user_agent=user_agent,
            capture_full_response=capture_full_response,
        )

        self._owns_client = http_client is None
        if http_client is None:
            self._http_client = httpx.Client(
                **_client_kwargs(
                    base_url=base_url,
                    timeout=timeout,
                    http2=http2,
                    proxy=proxy,
                    limits=limits,
                )
            )
        else:
            self._http_client = http_client

        self.beatmaps = BeatmapService(client=self._http_client, config=self._config)
        self.users = UserService(client=self._http_client, config=self._config)
        self.scores = ScoreService(client=self._http_client, config=self._config)
        self.matches = MatchService(client=self._http_client, config=self._config)
        self.replays = ReplayService(client=self._http_client, config=self._config)

    def close(self) -> None:
        """内部Clientをクローズする。"""

        if self._owns_client:
            self._http_client.close()

    def __enter__(self) -> "OsuClient":
        """コンテキスト開始。"""

        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        """コンテキスト終了。"""

        self.close()


class AsyncOsuClient:
    """osu! API v1 の非同期クライアント。"""

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = 30.0,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        capture_full_response: bool = False,
        http_client: httpx.AsyncClient | None = None,
        http2: bool = False,
        proxy: str | None = None,
        limits: httpx.Limits | None = None,
    ) -> None:
        """非同期クライアントを初期化する。"""

        self._config = _build_config(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            user_agent=user_agent,
            capture_full_response=capture_full_response,
        )

        self._owns_client = http_client is None
        if http_client is None:
            self._http_client = httpx.AsyncClient(
                **_client_kwargs(
                    base_url=base_url,
                    timeout=timeout,
                    http2=http2,
                    proxy=proxy,
                    limits=limits,
                )
            )
        else:
            self._http_client = http_client

        self.beatmaps = AsyncBeatmapService(client=self._http_client, config=self._config)
        self.users = AsyncUserService(client=self._http_client, config=self._config)
        self.scores = AsyncScoreService(client=self._http_client, config=self._config)
        self.matches = AsyncMatchService(client=self._http_client, config=self._config)
        self.replays = AsyncReplayService(client=self._http_client, config=self._config)

    async def aclose(self) -> None:
        """内部Clientをクローズする。"""

        if self._owns_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "AsyncOsuClient":
        """非同期コンテキスト開始。"""

        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        """非同期コンテキスト終了。"""

        await self.aclose()
