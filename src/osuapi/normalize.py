"""レスポンス正規化処理。

osu! API v1 は数値も文字列で返すため、ここで型付きレコードへ変換する。
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, TypeVar

from osuapi.enums import Approved, Genre, Language, Mod, Mode, ScoringType, TeamType
from osuapi.types import (
    Beatmap,
    BestScore,
    Match,
    MatchGame,
    MatchInfo,
    MatchScore,
    RecentScore,
    Score,
    User,
    UserEvent,
)

_E = TypeVar("_E", bound=IntEnum)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _int_or_none(value: Any) -> int | None:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        try:
            return int(float(text))
        except ValueError:
            return None


def _float_or_none(value: Any) -> float | None:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _flag(value: Any) -> bool:
    return _int_or_none(value) == 1


def _datetime_or_none(value: Any) -> datetime | None:
    """日付補正済み文字列をaware datetimeへ変換する。

    オフセットを持たない値はUTCとみなす。
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _enum_or_int(enum_cls: type[_E], value: Any) -> _E | int | None:
    """既知コードは列挙型へ、未知コードは整数のまま返す。"""

    number = _int_or_none(value)
    if number is None:
        return None
    try:
        return enum_cls(number)
    except ValueError:
        return number


def _mods(value: Any) -> Mod:
    return Mod(_int_or_none(value) or 0)


def _extras(row: dict[str, Any], known: set[str]) -> dict[str, Any]:
    return {key: value for key, value in row.items() if key not in known}


_BEATMAP_KEYS = {
    "beatmap_id", "beatmapset_id", "approved", "approved_date", "last_update",
    "artist", "title", "version", "creator", "creator_id", "source", "tags",
    "file_md5", "mode", "genre_id", "language_id", "bpm", "difficultyrating",
    "diff_size", "diff_overall", "diff_approach", "diff_drain", "hit_length",
    "total_length", "favourite_count", "playcount", "passcount", "max_combo",
}


def normalize_beatmap(row: dict[str, Any]) -> Beatmap:
    """譜面行を変換する。"""

    return Beatmap(
        beatmap_id=_text(row.get("beatmap_id")),
        beatmapset_id=_text(row.get("beatmapset_id")),
        approved=_enum_or_int(Approved, row.get("approved")),
        approved_date=_datetime_or_none(row.get("approved_date")),
        last_update=_datetime_or_none(row.get("last_update")),
        artist=_text(row.get("artist")),
        title=_text(row.get("title")),
        version=_text(row.get("version")),
        creator=_text(row.get("creator")),
        creator_id=_text(row.get("creator_id")),
        source=_text(row.get("source")),
        tags=_text(row.get("tags")),
        file_md5=_text(row.get("file_md5")),
        mode=_enum_or_int(Mode, row.get("mode")),
        genre_id=_enum_or_int(Genre, row.get("genre_id")),
        language_id=_enum_or_int(Language, row.get("language_id")),
        bpm=_float_or_none(row.get("bpm")),
        difficultyrating=_float_or_none(row.get("difficultyrating")),
        diff_size=_float_or_none(row.get("diff_size")),
        diff_overall=_float_or_none(row.get("diff_overall")),
        diff_approach=_float_or_none(row.get("diff_approach")),
        diff_drain=_float_or_none(row.get("diff_drain")),
        hit_length=_int_or_none(row.get("hit_length")),
        total_length=_int_or_none(row.get("total_length")),
        favourite_count=_int_or_none(row.get("favourite_count")),
        playcount=_int_or_none(row.get("playcount")),
        passcount=_int_or_none(row.get("passcount")),
        max_combo=_int_or_none(row.get("max_combo")),
        extras=_extras(row, _BEATMAP_KEYS),
    )


_USER_EVENT_KEYS = {"display_html", "beatmap_id", "beatmapset_id", "date", "epicfactor"}


def normalize_user_event(row: dict[str, Any]) -> UserEvent:
    """ユーザーイベント行を変換する。"""

    return UserEvent(
        display_html=_text(row.get("display_html")),
        beatmap_id=_text(row.get("beatmap_id")),
        beatmapset_id=_text(row.get("beatmapset_id")),
        date=_datetime_or_none(row.get("date")),
        epicfactor=_int_or_none(row.get("epicfactor")),
        extras=_extras(row, _USER_EVENT_KEYS),
    )


_USER_KEYS = {
    "user_id", "username", "join_date", "count300", "count100", "count50",
    "playcount", "ranked_score", "total_score", "pp_rank", "level", "pp_raw",
    "accuracy", "count_rank_ss", "count_rank_ssh", "count_rank_s",
    "count_rank_sh", "count_rank_a", "country", "total_seconds_played",
    "pp_country_rank", "events",
}


def normalize_user(row: dict[str, Any]) -> User:
    """ユーザー行を変換する。"""

    events_raw = row.get("events")
    events = [
        normalize_user_event(item)
        for item in (events_raw if isinstance(events_raw, list) else [])
        if isinstance(item, dict)
    ]
    return User(
        user_id=_text(row.get("user_id")),
        username=_text(row.get("username")),
        join_date=_datetime_or_none(row.get("join_date")),
        count300=_int_or_none(row.get("count300")),
        count100=_int_or_none(row.get("count100")),
        count50=_int_or_none(row.get("count50")),
        playcount=_int_or_none(row.get("playcount")),
        ranked_score=_int_or_none(row.get("ranked_score")),
        total_score=_int_or_none(row.get("total_score")),
        pp_rank=_int_or_none(row.get("pp_rank")),
        level=_float_or_none(row.get("level")),
        pp_raw=_float_or_none(row.get("pp_raw")),
        accuracy=_float_or_none(row.get("accuracy")),
        count_rank_ss=_int_or_none(row.get("count_rank_ss")),
        count_rank_ssh=_int_or_none(row.get("count_rank_ssh")),
        count_rank_s=_int_or_none(row.get("count_rank_s")),
        count_rank_sh=_int_or_none(row.get("count_rank_sh")),
        count_rank_a=_int_or_none(row.get("count_rank_a")),
        country=_text(row.get("country")),
        total_seconds_played=_int_or_none(row.get("total_seconds_played")),
        pp_country_rank=_int_or_none(row.get("pp_country_rank")),
        events=events,
        extras=_extras(row, _USER_KEYS),
    )


_HIT_KEYS = {
    "score", "user_id", "count300", "count100", "count50", "countmiss",
    "countkatu", "countgeki", "maxcombo", "perfect", "enabled_mods", "date", "rank",
}
_SCORE_KEYS = _HIT_KEYS | {"score_id", "username", "pp", "replay_available"}
_BEST_SCORE_KEYS = _HIT_KEYS | {"beatmap_id", "score_id", "pp", "replay_available"}
_RECENT_SCORE_KEYS = _HIT_KEYS | {"beatmap_id"}


def normalize_score(row: dict[str, Any]) -> Score:
    """`get_scores` の行を変換する。"""

    return Score(
        score_id=_text(row.get("score_id")),
        score=_int_or_none(row.get("score")),
        username=_text(row.get("username")),
        user_id=_text(row.get("user_id")),
        count300=_int_or_none(row.get("count300")),
        count100=_int_or_none(row.get("count100")),
        count50=_int_or_none(row.get("count50")),
        countmiss=_int_or_none(row.get("countmiss")),
        countkatu=_int_or_none(row.get("countkatu")),
        countgeki=_int_or_none(row.get("countgeki")),
        maxcombo=_int_or_none(row.get("maxcombo")),
        perfect=_flag(row.get("perfect")),
        enabled_mods=_mods(row.get("enabled_mods")),
        date=_datetime_or_none(row.get("date")),
        rank=_text(row.get("rank")),
        pp=_float_or_none(row.get("pp")),
        replay_available=_flag(row.get("replay_available")),
        extras=_extras(row, _SCORE_KEYS),
    )


def normalize_best_score(row: dict[str, Any]) -> BestScore:
    """`get_user_best` の行を変換する。"""

    return BestScore(
        beatmap_id=_text(row.get("beatmap_id")),
        score_id=_text(row.get("score_id")),
        score=_int_or_none(row.get("score")),
        user_id=_text(row.get("user_id")),
        count300=_int_or_none(row.get("count300")),
        count100=_int_or_none(row.get("count100")),
        count50=_int_or_none(row.get("count50")),
        countmiss=_int_or_none(row.get("countmiss")),
        countkatu=_int_or_none(row.get("countkatu")),
        countgeki=_int_or_none(row.get("countgeki")),
        maxcombo=_int_or_none(row.get("maxcombo")),
        perfect=_flag(row.get("perfect")),
        enabled_mods=_mods(row.get("enabled_mods")),
        date=_datetime_or_none(row.get("date")),
        rank=_text(row.get("rank")),
        pp=_float_or_none(row.get("pp")),
        replay_available=_flag(row.get("replay_available")),
        extras=_extras(row, _BEST_SCORE_KEYS),
    )


def normalize_recent_score(row: dict[str, Any]) -> RecentScore:
    """`get_user_recent` の行を変換する。"""

    return RecentScore(
        beatmap_id=_text(row.get("beatmap_id")),
        score=_int_or_none(row.get("score")),
        user_id=_text(row.get("user_id")),
        count300=_int_or_none(row.get("count300")),
        count100=_int_or_none(row.get("count100")),
        count50=_int_or_none(row.get("count50")),
        countmiss=_int_or_none(row.get("countmiss")),
        countkatu=_int_or_none(row.get("countkatu")),
        countgeki=_int_or_none(row.get("countgeki")),
        maxcombo=_int_or_none(row.get("maxcombo")),
        perfect=_flag(row.get("perfect")),
        enabled_mods=_mods(row.get("enabled_mods")),
        date=_datetime_or_none(row.get("date")),
        rank=_text(row.get("rank")),
        extras=_extras(row, _RECENT_SCORE_KEYS),
    )


_MATCH_INFO_KEYS = {"match_id", "name", "start_time", "end_time"}
_MATCH_SCORE_KEYS = {
    "slot", "team", "user_id", "score", "maxcombo", "rank", "count50",
    "count100", "count300", "countmiss", "countgeki", "countkatu", "perfect",
    "pass", "enabled_mods",
}
_MATCH_GAME_KEYS = {
    "game_id", "start_time", "end_time", "beatmap_id", "play_mode",
    "match_type", "scoring_type", "team_type", "mods", "scores",
}


def normalize_match_score(row: dict[str, Any]) -> MatchScore:
    """マルチプレイ個人スコア行を変換する。"""

    enabled_mods = row.get("enabled_mods")
    return MatchScore(
        slot=_int_or_none(row.get("slot")),
        team=_int_or_none(row.get("team")),
        user_id=_text(row.get("user_id")),
        score=_int_or_none(row.get("score")),
        maxcombo=_int_or_none(row.get("maxcombo")),
        rank=_text(row.get("rank")),
        count50=_int_or_none(row.get("count50")),
        count100=_int_or_none(row.get("count100")),
        count300=_int_or_none(row.get("count300")),
        countmiss=_int_or_none(row.get("countmiss")),
        countgeki=_int_or_none(row.get("countgeki")),
        countkatu=_int_or_none(row.get("countkatu")),
        perfect=_flag(row.get("perfect")),
        passed=_flag(row.get("pass")),
        enabled_mods=_mods(enabled_mods) if enabled_mods is not None else None,
        extras=_extras(row, _MATCH_SCORE_KEYS),
    )


def normalize_match(payload: dict[str, Any]) -> Match:
    """`get_match` の本文を変換する。

    存在しない試合IDに対してサービスは ``{"match": 0, "games": []}`` を返す。
    この場合は例外にせず、`match_id == ""` の空の `MatchInfo` と空の `games` を返す。
    """

    info_raw = payload.get("match")
    info_row = info_raw if isinstance(info_raw, dict) else {}
    info = MatchInfo(
        match_id=_text(info_row.get("match_id")),
        name=_text(info_row.get("name")),
        start_time=_datetime_or_none(info_row.get("start_time")),
        end_time=_datetime_or_none(info_row.get("end_time")),
        extras=_extras(info_row, _MATCH_INFO_KEYS),
    )

    games: list[MatchGame] = []
    games_raw = payload.get("games")
    for game in games_raw if isinstance(games_raw, list) else []:
        if not isinstance(game, dict):
            continue
        scores_raw = game.get("scores")
        scores = [
            normalize_match_score(item)
            for item in (scores_raw if isinstance(scores_raw, list) else [])
            if isinstance(item, dict)
        ]
        games.append(
            MatchGame(
                game_id=_text(game.get("game_id")),
                start_time=_datetime_or_none(game.get("start_time")),
                end_time=_datetime_or_none(game.get("end_time")),
                beatmap_id=_text(game.get("beatmap_id")),
                play_mode=_enum_or_int(Mode, game.get("play_mode")),
                match_type=_int_or_none(game.get("match_type")),
                scoring_type=_enum_or_int(ScoringType, game.get("scoring_type")),
                team_type=_enum_or_int(TeamType, game.get("team_type")),
                mods=_mods(game.get("mods")),
                scores=scores,
                extras=_extras(game, _MATCH_GAME_KEYS),
            )
        )
    return Match(match=info, games=games)


def rows_of(payload: Any) -> list[dict[str, Any]]:
    """配列本文からdict行のみを取り出す。"""

    if not isinstance(payload, list):
        return []
    return [row for row in payload if isinstance(row, dict)]
