"""リプレイAPIサービス。"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from osuapi.enums import Mod, Mode, UsernameType
from osuapi.errors import OsuValidationError
from osuapi.models import ReplayFrame
from osuapi.replay import decode_replay
from osuapi.services._transport import AsyncServiceBase, SyncServiceBase
from osuapi.types import ParsedResponse, ResponseMeta
from osuapi.validation import normalize_identifier, normalize_mode, normalize_mods, normalize_user

ENDPOINT = "/get_replay"


def build_replay_options(
    *,
    beatmap_id: str | int | None = None,
    user: str | int | None = None,
    user_type: UsernameType | str | None = None,
    mode: Mode | int | str | None = None,
    score_id: str | int | None = None,
    mods: Mod | int | Iterable[Mod | int] | None = None,
) -> dict[str, Any]:
    """`get_replay` のクエリを構築する。

    `score_id` か、`beatmap_id` と `user` の組のいずれかが必要。

    Raises:
        OsuValidationError: 対象リプレイを特定できない場合。
    """

    if score_id is None and (beatmap_id is None or user is None):
        raise OsuValidationError(
            "score_id または beatmap_id と user を指定してください。",
            validation_code="missing_replay_target",
        )
    options: dict[str, Any] = {
        "b": normalize_identifier(beatmap_id, param_name="b") if beatmap_id is not None else None,
    }
    if user is not None:
        u, kind = normalize_user(user, user_type=user_type)
        options["u"] = u
        options["type"] = kind.value
    mode_norm = normalize_mode(mode)
    options["m"] = int(mode_norm) if mode_norm is not None else None
    options["s"] = normalize_identifier(score_id, param_name="s") if score_id is not None else None
    mods_norm = normalize_mods(mods)
    options["mods"] = int(mods_norm) if mods_norm is not None else None
    return options


def _to_frame(parsed: ParsedResponse, meta: ResponseMeta) -> ReplayFrame:
    payload = parsed.payload if isinstance(parsed.payload, dict) else {}
    content = payload.get("content")
    if not content:
        meta.warnings.append("content が空のため、イベント列は空です。")
        return ReplayFrame([], meta)
    return ReplayFrame(decode_replay(str(content)), meta)


class ReplayService(SyncServiceBase):
    """同期リプレイ取得サービス。"""

    def get(
        self,
        *,
        beatmap_id: str | int | None = None,
        user: str | int | None = None,
        user_type: UsernameType | str | None = None,
        mode: Mode | int | str | None = None,
        score_id: str | int | None = None,
        mods: Mod | int | Iterable[Mod | int] | None = None,
    ) -> ReplayFrame:
        """リプレイを取得して復号する。

        Raises:
            OsuDecodeError: `content` がbase64として不正な場合。
            OsuDecompressError: `content` の展開に失敗した場合。
        """

        options = build_replay_options(
            beatmap_id=beatmap_id,
            user=user,
            user_type=user_type,
            mode=mode,
            score_id=score_id,
            mods=mods,
        )
        parsed, meta = self._get(ENDPOINT, options)
        return _to_frame(parsed, meta)


class AsyncReplayService(AsyncServiceBase):
    """非同期リプレイ取得サービス。"""

    async def get(
        self,
        *,
        beatmap_id: str | int | None = None,
        user: str | int | None = None,
        user_type: UsernameType | str | None = None,
        mode: Mode | int | str | None = None,
        score_id: str | int | None = None,
        mods: Mod | int | Iterable[Mod | int] | None = None,
    ) -> ReplayFrame:
        """リプレイを取得して復号する。"""

        options = build_replay_options(
            beatmap_id=beatmap_id,
            user=user,
            user_type=user_type,
            mode=mode,
            score_id=score_id,
            mods=mods,
        )
        parsed, meta = await self._get(ENDPOINT, options)
        return _to_frame(parsed, meta)
