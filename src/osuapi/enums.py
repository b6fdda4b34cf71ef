"""列挙型定義。"""

from __future__ import annotations

from enum import IntEnum, IntFlag, StrEnum

from osuapi.errors import OsuValidationError


class Mod(IntFlag):
    """譜面に適用されるMODのビット集合。

    `enabled_mods` 等の整数値をそのまま `Mod(value)` で受け取れる。
    未知ビットは保持される。
    """

    NONE = 0
    NO_FAIL = 1
    EASY = 1 << 1
    TOUCH_DEVICE = 1 << 2
    HIDDEN = 1 << 3
    HARD_ROCK = 1 << 4
    SUDDEN_DEATH = 1 << 5
    DOUBLE_TIME = 1 << 6
    RELAX = 1 << 7
    HALF_TIME = 1 << 8
    NIGHTCORE = 1 << 9
    FLASHLIGHT = 1 << 10
    AUTOPLAY = 1 << 11
    SPUN_OUT = 1 << 12
    RELAX2 = 1 << 13
    PERFECT = 1 << 14
    KEY4 = 1 << 15
    KEY5 = 1 << 16
    KEY6 = 1 << 17
    KEY7 = 1 << 18
    KEY8 = 1 << 19
    FADE_IN = 1 << 20
    RANDOM = 1 << 21
    CINEMA = 1 << 22
    TARGET = 1 << 23
    KEY9 = 1 << 24
    KEY_COOP = 1 << 25
    KEY1 = 1 << 26
    KEY3 = 1 << 27
    KEY2 = 1 << 28
    SCORE_V2 = 1 << 29
    MIRROR = 1 << 30
    # 合成値
    KEY_MOD = KEY1 | KEY2 | KEY3 | KEY4 | KEY5 | KEY6 | KEY7 | KEY8 | KEY9 | KEY_COOP
    FREE_MOD_ALLOWED = (
        NO_FAIL
        | EASY
        | HIDDEN
        | HARD_ROCK
        | SUDDEN_DEATH
        | FLASHLIGHT
        | FADE_IN
        | RELAX
        | RELAX2
        | SPUN_OUT
        | KEY_MOD
    )
    SCORE_INCREASE_MODS = HIDDEN | HARD_ROCK | DOUBLE_TIME | FLASHLIGHT | FADE_IN


_MOD_LABELS = {
    Mod.NONE: "None",
    Mod.NO_FAIL: "NoFail",
    Mod.EASY: "Easy",
    Mod.TOUCH_DEVICE: "TouchDevice",
    Mod.HIDDEN: "Hidden",
    Mod.HARD_ROCK: "HardRock",
    Mod.SUDDEN_DEATH: "SuddenDeath",
    Mod.DOUBLE_TIME: "DoubleTime",
    Mod.RELAX: "Relax",
    Mod.HALF_TIME: "HalfTime",
    Mod.NIGHTCORE: "Nightcore",
    Mod.FLASHLIGHT: "Flashlight",
    Mod.AUTOPLAY: "Autoplay",
    Mod.SPUN_OUT: "SpunOut",
    Mod.RELAX2: "Relax2",
    Mod.PERFECT: "Perfect",
    Mod.KEY4: "Key4",
    Mod.KEY5: "Key5",
    Mod.KEY6: "Key6",
    Mod.KEY7: "Key7",
    Mod.KEY8: "Key8",
    Mod.FADE_IN: "FadeIn",
    Mod.RANDOM: "Random",
    Mod.CINEMA: "Cinema",
    Mod.TARGET: "Target",
    Mod.KEY9: "Key9",
    Mod.KEY_COOP: "KeyCoop",
    Mod.KEY1: "Key1",
    Mod.KEY3: "Key3",
    Mod.KEY2: "Key2",
    Mod.SCORE_V2: "ScoreV2",
    Mod.MIRROR: "Mirror",
}


def mod_label(mod: Mod | int) -> str:
    """単一MODの表示名を返す。

    Args:
        mod: 単一ビットのMOD。

    Returns:
        表示名。既知の単一MODでなければ ``"Invalid Mod"``。
    """

    return _MOD_LABELS.get(Mod(int(mod)), "Invalid Mod")


def split_mods(mods: Mod | int) -> list[Mod]:
    """MOD集合を下位ビットから順に単一MODへ分解する。

    Raises:
        OsuValidationError: 負の値の場合。
    """

    value = int(mods)
    if value < 0:
        raise OsuValidationError("mods は0以上を指定してください。", validation_code="invalid_mods")
    result: list[Mod] = []
    bit = 0
    while value:
        if value & 1:
            result.append(Mod(1 << bit))
        bit += 1
        value >>= 1
    return result


def format_mods(mods: Mod | int) -> str:
    """MOD集合を ``[NoFail, Hidden]`` 形式の文字列にする。"""

    return "[" + ", ".join(mod_label(mod) for mod in split_mods(mods)) + "]"


class Key(IntFlag):
    """リプレイフレームの押下キー。

    Attributes:
        M1: 左クリック。
        M2: 右クリック。
        K1: キーボード1（M1と同時に立つ）。
        K2: キーボード2（M2と同時に立つ）。
        SMOKE: スモーク。
    """

    NONE = 0
    M1 = 1
    M2 = 1 << 1
    K1 = 1 << 2
    K2 = 1 << 3
    SMOKE = 1 << 4


class Mode(IntEnum):
    """ゲームモード。"""

    OSU = 0
    TAIKO = 1
    CTB = 2
    MANIA = 3


class Approved(IntEnum):
    """譜面のランク状態（`approved`）。"""

    LOVED = 4
    QUALIFIED = 3
    APPROVED = 2
    RANKED = 1
    PENDING = 0
    WIP = -1
    GRAVEYARD = -2


class UsernameType(StrEnum):
    """ユーザー指定方法（`type` パラメータ）。

    Attributes:
        ID: ユーザーID（数値）で指定。
        NAME: ユーザー名で指定。
    """

    ID = "int"
    NAME = "string"


class Language(IntEnum):
    """譜面の言語。"""

    ANY = 0
    OTHER = 1
    ENGLISH = 2
    JAPANESE = 3
    CHINESE = 4
    INSTRUMENTAL = 5
    KOREAN = 6
    FRENCH = 7
    GERMAN = 8
    SWEDISH = 9
    SPANISH = 10
    ITALIAN = 11
    RUSSIAN = 12
    POLISH = 13


class Genre(IntEnum):
    """譜面のジャンル。"""

    ANY = 0
    UNSPECIFIED = 1
    VIDEO_GAME = 2
    ANIME = 3
    ROCK = 4
    POP = 5
    OTHER = 6
    NOVELTY = 7
    HIP_HOP = 9
    ELECTRONIC = 10
    METAL = 11
    CLASSICAL = 12
    FOLK = 13
    JAZZ = 14


class ScoringType(IntEnum):
    """マルチプレイのスコア判定方式。"""

    SCORE = 0
    ACCURACY = 1
    COMBO = 2
    SCORE_V2 = 3


class TeamType(IntEnum):
    """マルチプレイのチーム形式。"""

    HEAD_TO_HEAD = 0
    TAG_COOP = 1
    TEAM_VS = 2
    TAG_TEAM_VS = 3
