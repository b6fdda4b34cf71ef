"""スコアAPIサービス。"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from osuapi.enums import Mod, Mode, UsernameType
from osuapi.models import RecordFrame
from osuapi.normalize import normalize_score, rows_of
from osuapi.services._transport import AsyncServiceBase, SyncServiceBase
from osuapi.types import ParsedResponse, ResponseMeta, Score
from osuapi.validation import (
    SCORES_LIMIT_MAX,
    clamp,
    normalize_identifier,
    normalize_mode,
    normalize_mods,
    normalize_user,
)

ENDPOINT = "/get_scores"


def build_score_options(
    beatmap_id: str | int,
    *,
    user: str | int | None = None,
    user_type: UsernameType | str | None = None,
    mode: Mode | int | str | None = None,
    mods: Mod | int | Iterable[Mod | int] | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """`get_scores` のクエリを構築する。

    Args:
        beatmap_id: 譜面ID（必須）。
        user: 特定ユーザーのスコアに限定する。
        user_type: `user` の指定方法。
        mode: ゲームモード。
        mods: このMODの組み合わせのスコアに限定する。複数指定はビット和になる。
        limit: 最大件数。1〜100へ丸める。

    Returns:
        クエリパラメータ。
    """

    options: dict[str, Any] = {"b": normalize_identifier(beatmap_id, param_name="b")}
    if user is not None:
        u, kind = normalize_user(user, user_type=user_type)
        options["u"] = u
        options["type"] = kind.value
    mode_norm = normalize_mode(mode)
    options["m"] = int(mode_norm) if mode_norm is not None else None
    mods_norm = normalize_mods(mods)
    options["mods"] = int(mods_norm) if mods_norm is not None else None
    options["limit"] = clamp(limit, lower=1, upper=SCORES_LIMIT_MAX) if limit is not None else None
    return options


def _to_frame(parsed: ParsedResponse, meta: ResponseMeta) -> RecordFrame[Score]:
    return RecordFrame([normalize_score(row) for row in rows_of(parsed.payload)], meta)


class ScoreService(SyncServiceBase):
    """同期スコア取得サービス。"""

    def get(
        self,
        beatmap_id: str | int,
        *,
        user: str | int | None = None,
        user_type: UsernameType | str | None = None,
        mode: Mode | int | str | None = None,
        mods: Mod | int | Iterable[Mod | int] | None = None,
        limit: int | None = None,
    ) -> RecordFrame[Score]:
        """譜面のスコア一覧を取得する。"""

        options = build_score_options(
            beatmap_id, user=user, user_type=user_type, mode=mode, mods=mods, limit=limit
        )
        parsed, meta = self._get(ENDPOINT, options)
        return _to_frame(parsed, meta)


class AsyncScoreService(AsyncServiceBase):
    """非同期スコア取得サービス。"""

    async def get(
        self,
        beatmap_id: str | int,
        *,
        user: str | int | None = None,
        user_type: UsernameType | str | None = None,
        mode: Mode | int | str | None = None,
        mods: Mod | int | Iterable[Mod | int] | None = None,
        limit: int | None = None,
    ) -> RecordFrame[Score]:
        """譜面のスコア一覧を取得する。"""

        options = build_score_options(
            beatmap_id, user=user, user_type=user_type, mode=mode, mods=mods, limit=limit
        )
        parsed, meta = await self._get(ENDPOINT, options)
        return _to_frame(parsed, meta)
