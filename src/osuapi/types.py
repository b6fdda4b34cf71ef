"""公開型と内部共通データ構造。"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from osuapi.enums import Approved, Genre, Key, Language, Mod, Mode, ScoringType, TeamType


@dataclass(slots=True, frozen=True)
class ReplayEvent:
    """リプレイの1フレーム（入力サンプル）。

    Attributes:
        time_delta: 直前フレームからの経過時間。
        cursor_x: カーソルx座標（0〜512）。
        cursor_y: カーソルy座標（0〜384）。
        key_state: 押下キー・ボタンのビット集合。
    """

    time_delta: timedelta
    cursor_x: float
    cursor_y: float
    key_state: int

    @property
    def keys(self) -> Key:
        """`key_state` を `Key` として返す。"""

        return Key(self.key_state)


ReplaySequence = list[ReplayEvent]


@dataclass(slots=True)
class Beatmap:
    """譜面情報。"""

    beatmap_id: str
    beatmapset_id: str
    approved: Approved | int | None
    approved_date: datetime | None
    last_update: datetime | None
    artist: str
    title: str
    version: str
    creator: str
    creator_id: str
    source: str
    tags: str
    file_md5: str
    mode: Mode | int | None
    genre_id: Genre | int | None
    language_id: Language | int | None
    bpm: float | None
    difficultyrating: float | None
    diff_size: float | None
    diff_overall: float | None
    diff_approach: float | None
    diff_drain: float | None
    hit_length: int | None
    total_length: int | None
    favourite_count: int | None
    playcount: int | None
    passcount: int | None
    max_combo: int | None
    extras: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class UserEvent:
    """ユーザーの最近のイベント。"""

    display_html: str
    beatmap_id: str
    beatmapset_id: str
    date: datetime | None
    epicfactor: int | None
    extras: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class User:
    """ユーザー情報。"""

    user_id: str
    username: str
    join_date: datetime | None
    count300: int | None
    count100: int | None
    count50: int | None
    playcount: int | None
    ranked_score: int | None
    total_score: int | None
    pp_rank: int | None
    level: float | None
    pp_raw: float | None
    accuracy: float | None
    count_rank_ss: int | None
    count_rank_ssh: int | None
    count_rank_s: int | None
    count_rank_sh: int | None
    count_rank_a: int | None
    country: str
    total_seconds_played: int | None
    pp_country_rank: int | None
    events: list[UserEvent] = field(default_factory=list)
    extras: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class Score:
    """譜面ごとのスコア（`get_scores`）。"""

    score_id: str
    score: int | None
    username: str
    user_id: str
    count300: int | None
    count100: int | None
    count50: int | None
    countmiss: int | None
    countkatu: int | None
    countgeki: int | None
    maxcombo: int | None
    perfect: bool
    enabled_mods: Mod
    date: datetime | None
    rank: str
    pp: float | None
    replay_available: bool
    extras: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class BestScore:
    """ユーザーのベストスコア（`get_user_best`）。"""

    beatmap_id: str
    score_id: str
    score: int | None
    user_id: str
    count300: int | None
    count100: int | None
    count50: int | None
    countmiss: int | None
    countkatu: int | None
    countgeki: int | None
    maxcombo: int | None
    perfect: bool
    enabled_mods: Mod
    date: datetime | None
    rank: str
    pp: float | None
    replay_available: bool
    extras: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class RecentScore:
    """ユーザーの最近のプレイ（`get_user_recent`）。"""

    beatmap_id: str
    score: int | None
    user_id: str
    count300: int | None
    count100: int | None
    count50: int | None
    countmiss: int | None
    countkatu: int | None
    countgeki: int | None
    maxcombo: int | None
    perfect: bool
    enabled_mods: Mod
    date: datetime | None
    rank: str
    extras: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class MatchInfo:
    """マルチプレイ部屋の情報。

    Attributes:
        end_time: 進行中の部屋ではNone。
    """

    match_id: str
    name: str
    start_time: datetime | None
    end_time: datetime | None
    extras: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class MatchScore:
    """マルチプレイ1ゲーム内の個人スコア。"""

    slot: int | None
    team: int | None
    user_id: str
    score: int | None
    maxcombo: int | None
    rank: str
    count50: int | None
    count100: int | None
    count300: int | None
    countmiss: int | None
    countgeki: int | None
    countkatu: int | None
    perfect: bool
    passed: bool
    enabled_mods: Mod | None
    extras: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class MatchGame:
    """マルチプレイでプレイされた1譜面分のゲーム。"""

    game_id: str
    start_time: datetime | None
    end_time: datetime | None
    beatmap_id: str
    play_mode: Mode | int | None
    match_type: int | None
    scoring_type: ScoringType | int | None
    team_type: TeamType | int | None
    mods: Mod
    scores: list[MatchScore] = field(default_factory=list)
    extras: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class Match:
    """マルチプレイ試合。"""

    match: MatchInfo
    games: list[MatchGame] = field(default_factory=list)


@dataclass(slots=True)
class ResponseMeta:
    """レスポンス共通メタ情報。

    Attributes:
        endpoint: エンドポイント名。
        request_url: 実行URL（APIキーはマスク済み）。
        http_status: HTTPステータス。
        schema_version: スキーマバージョン。
        parser_version: パーサバージョン。
        normalizer_version: 正規化器バージョン。
        warnings: 警告一覧。
    """

    endpoint: str
    request_url: str
    http_status: int
    schema_version: str
    parser_version: str
    normalizer_version: str
    warnings: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ParsedResponse:
    """パーサ出力。

    Attributes:
        http_status: HTTPステータス。
        payload: JSON本文（日付補正済み）。
        error: 本文の `error` メンバ。正常時はNone。
        raw_response_excerpt: 本文抜粋。
    """

    http_status: int
    payload: Any
    error: str | None
    raw_response_excerpt: str
