"""ユーザーAPIサービス。"""

from __future__ import annotations

from typing import Any

from osuapi.enums import Mode, UsernameType
from osuapi.models import RecordFrame
from osuapi.normalize import normalize_best_score, normalize_recent_score, normalize_user, rows_of
from osuapi.services._transport import AsyncServiceBase, SyncServiceBase
from osuapi.types import BestScore, ParsedResponse, RecentScore, ResponseMeta, User
from osuapi.validation import (
    EVENT_DAYS_MAX,
    USER_BEST_LIMIT_MAX,
    USER_RECENT_LIMIT_MAX,
    clamp,
    normalize_mode,
)
from osuapi.validation import normalize_user as normalize_user_param

USER_ENDPOINT = "/get_user"
USER_BEST_ENDPOINT = "/get_user_best"
USER_RECENT_ENDPOINT = "/get_user_recent"


def _user_options(
    user: str | int,
    *,
    user_type: UsernameType | str | None,
    mode: Mode | int | str | None,
    limit: int | None = None,
    limit_max: int | None = None,
) -> dict[str, Any]:
    u, kind = normalize_user_param(user, user_type=user_type)
    mode_norm = normalize_mode(mode)
    options: dict[str, Any] = {
        "u": u,
        "type": kind.value,
        "m": int(mode_norm) if mode_norm is not None else None,
    }
    if limit is not None and limit_max is not None:
        options["limit"] = clamp(limit, lower=1, upper=limit_max)
    return options


def build_user_options(
    user: str | int,
    *,
    user_type: UsernameType | str | None = None,
    mode: Mode | int | str | None = None,
    event_days: int | None = None,
) -> dict[str, Any]:
    """`get_user` のクエリを構築する。

    Args:
        user: ユーザーIDまたはユーザー名。
        user_type: 指定方法。未指定時は型から推定する。
        mode: ゲームモード。
        event_days: 何日前までのイベントを返すか。1〜31へ丸める。

    Returns:
        クエリパラメータ。
    """

    options = _user_options(user, user_type=user_type, mode=mode)
    options["event_days"] = (
        clamp(event_days, lower=1, upper=EVENT_DAYS_MAX) if event_days is not None else None
    )
    return options


def build_user_best_options(
    user: str | int,
    *,
    user_type: UsernameType | str | None = None,
    mode: Mode | int | str | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """`get_user_best` のクエリを構築する。`limit` は1〜100へ丸める。"""

    return _user_options(
        user, user_type=user_type, mode=mode, limit=limit, limit_max=USER_BEST_LIMIT_MAX
    )


def build_user_recent_options(
    user: str | int,
    *,
    user_type: UsernameType | str | None = None,
    mode: Mode | int | str | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """`get_user_recent` のクエリを構築する。`limit` は1〜50へ丸める。"""

    return _user_options(
        user, user_type=user_type, mode=mode, limit=limit, limit_max=USER_RECENT_LIMIT_MAX
    )


def _single_user(parsed: ParsedResponse) -> User | None:
    """一致がちょうど1件のときのみユーザーを返す。"""

    rows = rows_of(parsed.payload)
    if len(rows) != 1:
        return None
    return normalize_user(rows[0])


def _best_frame(parsed: ParsedResponse, meta: ResponseMeta) -> RecordFrame[BestScore]:
    return RecordFrame([normalize_best_score(row) for row in rows_of(parsed.payload)], meta)


def _recent_frame(parsed: ParsedResponse, meta: ResponseMeta) -> RecordFrame[RecentScore]:
    return RecordFrame([normalize_recent_score(row) for row in rows_of(parsed.payload)], meta)


class UserService(SyncServiceBase):
    """同期ユーザー取得サービス。"""

    def get(
        self,
        user: str | int,
        *,
        user_type: UsernameType | str | None = None,
        mode: Mode | int | str | None = None,
        event_days: int | None = None,
    ) -> User | None:
        """ユーザー情報を取得する。

        Returns:
            該当ユーザー。該当なし（または複数一致）の場合はNone。
        """

        options = build_user_options(user, user_type=user_type, mode=mode, event_days=event_days)
        parsed, _ = self._get(USER_ENDPOINT, options)
        return _single_user(parsed)

    def best(
        self,
        user: str | int,
        *,
        user_type: UsernameType | str | None = None,
        mode: Mode | int | str | None = None,
        limit: int | None = None,
    ) -> RecordFrame[BestScore]:
        """ユーザーのベストスコアを取得する。"""

        options = build_user_best_options(user, user_type=user_type, mode=mode, limit=limit)
        parsed, meta = self._get(USER_BEST_ENDPOINT, options)
        return _best_frame(parsed, meta)

    def recent(
        self,
        user: str | int,
        *,
        user_type: UsernameType | str | None = None,
        mode: Mode | int | str | None = None,
        limit: int | None = None,
    ) -> RecordFrame[RecentScore]:
        """ユーザーの直近24時間のプレイを取得する。"""

        options = build_user_recent_options(user, user_type=user_type, mode=mode, limit=limit)
        parsed, meta = self._get(USER_RECENT_ENDPOINT, options)
        return _recent_frame(parsed, meta)


class AsyncUserService(AsyncServiceBase):
    """非同期ユーザー取得サービス。"""

    async def get(
        self,
        user: str | int,
        *,
        user_type: UsernameType | str | None = None,
        mode: Mode | int | str | None = None,
        event_days: int | None = None,
    ) -> User | None:
        """ユーザー情報を取得する。"""

        options = build_user_options(user, user_type=user_type, mode=mode, event_days=event_days)
        parsed, _ = await self._get(USER_ENDPOINT, options)
        return _single_user(parsed)

    async def best(
        self,
        user: str | int,
        *,
        user_type: UsernameType | str | None = None,
        mode: Mode | int | str | None = None,
        limit: int | None = None,
    ) -> RecordFrame[BestScore]:
        """ユーザーのベストスコアを取得する。"""

        options = build_user_best_options(user, user_type=user_type, mode=mode, limit=limit)
        parsed, meta = await self._get(USER_BEST_ENDPOINT, options)
        return _best_frame(parsed, meta)

    async def recent(
        self,
        user: str | int,
        *,
        user_type: UsernameType | str | None = None,
        mode: Mode | int | str | None = None,
        limit: int | None = None,
    ) -> RecordFrame[RecentScore]:
        """ユーザーの直近24時間のプレイを取得する。"""

        options = build_user_recent_options(user, user_type=user_type, mode=mode, limit=limit)
        parsed, meta = await self._get(USER_RECENT_ENDPOINT, options)
        return _recent_frame(parsed, meta)
