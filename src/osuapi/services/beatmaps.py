"""譜面APIサービス。"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

from osuapi.enums import Mod, Mode, UsernameType
from osuapi.models import RecordFrame
from osuapi.normalize import normalize_beatmap, rows_of
from osuapi.services._transport import AsyncServiceBase, SyncServiceBase
from osuapi.types import Beatmap, ParsedResponse, ResponseMeta
from osuapi.validation import (
    BEATMAPS_LIMIT_MAX,
    clamp,
    format_since,
    normalize_identifier,
    normalize_mode,
    normalize_mods,
    normalize_user,
)

ENDPOINT = "/get_beatmaps"


def build_beatmap_options(
    *,
    since: date | datetime | str | None = None,
    beatmapset_id: str | int | None = None,
    beatmap_id: str | int | None = None,
    creator: str | int | None = None,
    creator_type: UsernameType | str | None = None,
    mode: Mode | int | str | None = None,
    include_converted: bool = False,
    beatmap_hash: str | None = None,
    limit: int | None = None,
    mods: Mod | int | Iterable[Mod | int] | None = None,
) -> dict[str, Any]:
    """`get_beatmaps` のクエリを構築する。

    Args:
        since: この日以降にランク・Lovedされた譜面に限定する。
        beatmapset_id: 譜面セットID（`s`）。
        beatmap_id: 譜面ID（`b`）。
        creator: 作譜者のIDまたは名前（`u`）。
        creator_type: `creator` の指定方法。
        mode: ゲームモード。
        include_converted: コンバート譜面を含めるか（osu!以外のモードで有効）。
        beatmap_hash: 譜面ファイルのMD5（`h`）。
        limit: 最大件数。1〜500へ丸める。
        mods: 難易度計算に用いるMOD。

    Returns:
        クエリパラメータ（未指定はNone）。
    """

    options: dict[str, Any] = {
        "since": format_since(since) if since is not None else None,
        "s": normalize_identifier(beatmapset_id, param_name="s") if beatmapset_id is not None else None,
        "b": normalize_identifier(beatmap_id, param_name="b") if beatmap_id is not None else None,
    }
    if creator is not None:
        u, kind = normalize_user(creator, user_type=creator_type)
        options["u"] = u
        options["type"] = kind.value
    mode_norm = normalize_mode(mode)
    options["m"] = int(mode_norm) if mode_norm is not None else None
    options["a"] = 1 if include_converted else None
    options["h"] = beatmap_hash.strip() if beatmap_hash else None
    options["limit"] = clamp(limit, lower=1, upper=BEATMAPS_LIMIT_MAX) if limit is not None else None
    mods_norm = normalize_mods(mods)
    options["mods"] = int(mods_norm) if mods_norm is not None else None
    return options


def _to_frame(parsed: ParsedResponse, meta: ResponseMeta) -> RecordFrame[Beatmap]:
    return RecordFrame([normalize_beatmap(row) for row in rows_of(parsed.payload)], meta)


class BeatmapService(SyncServiceBase):
    """同期譜面取得サービス。"""

    def get(
        self,
        *,
        since: date | datetime | str | None = None,
        beatmapset_id: str | int | None = None,
        beatmap_id: str | int | None = None,
        creator: str | int | None = None,
        creator_type: UsernameType | str | None = None,
        mode: Mode | int | str | None = None,
        include_converted: bool = False,
        beatmap_hash: str | None = None,
        limit: int | None = None,
        mods: Mod | int | Iterable[Mod | int] | None = None,
    ) -> RecordFrame[Beatmap]:
        """譜面一覧を取得する。引数は `build_beatmap_options` を参照。"""

        options = build_beatmap_options(
            since=since,
            beatmapset_id=beatmapset_id,
            beatmap_id=beatmap_id,
            creator=creator,
            creator_type=creator_type,
            mode=mode,
            include_converted=include_converted,
            beatmap_hash=beatmap_hash,
            limit=limit,
            mods=mods,
        )
        parsed, meta = self._get(ENDPOINT, options)
        return _to_frame(parsed, meta)


class AsyncBeatmapService(AsyncServiceBase):
    """非同期譜面取得サービス。"""

    async def get(
        self,
        *,
        since: date | datetime | str | None = None,
        beatmapset_id: str | int | None = None,
        beatmap_id: str | int | None = None,
        creator: str | int | None = None,
        creator_type: UsernameType | str | None = None,
        mode: Mode | int | str | None = None,
        include_converted: bool = False,
        beatmap_hash: str | None = None,
        limit: int | None = None,
        mods: Mod | int | Iterable[Mod | int] | None = None,
    ) -> RecordFrame[Beatmap]:
        """譜面一覧を取得する。"""

        options = build_beatmap_options(
            since=since,
            beatmapset_id=beatmapset_id,
            beatmap_id=beatmap_id,
            creator=creator,
            creator_type=creator_type,
            mode=mode,
            include_converted=include_converted,
            beatmap_hash=beatmap_hash,
            limit=limit,
            mods=mods,
        )
        parsed, meta = await self._get(ENDPOINT, options)
        return _to_frame(parsed, meta)
