"""列挙型のテスト。"""

from __future__ import annotations

import pytest

from osuapi.enums import Mod, format_mods, mod_label, split_mods
from osuapi.errors import OsuValidationError


def test_split_mods_in_bit_order() -> None:
    assert split_mods(Mod.HARD_ROCK | Mod.HIDDEN | Mod.NO_FAIL) == [
        Mod.NO_FAIL,
        Mod.HIDDEN,
        Mod.HARD_ROCK,
    ]
    assert split_mods(0) == []


def test_format_mods() -> None:
    assert format_mods(Mod.HIDDEN | Mod.HARD_ROCK) == "[Hidden, HardRock]"
    assert format_mods(Mod.NONE) == "[]"
    assert format_mods(576) == "[DoubleTime, Nightcore]"


def test_mod_label_for_combined_value_is_invalid() -> None:
    assert mod_label(Mod.KEY4) == "Key4"
    assert mod_label(Mod.HIDDEN | Mod.EASY) == "Invalid Mod"


def test_composite_mods() -> None:
    assert Mod.KEY1 in Mod.KEY_MOD
    assert Mod.KEY_COOP in Mod.KEY_MOD
    assert Mod.DOUBLE_TIME not in Mod.FREE_MOD_ALLOWED
    assert Mod.FADE_IN in Mod.SCORE_INCREASE_MODS
    assert Mod(1 << 16).name == "KEY5"


def test_split_mods_rejects_negative_values() -> None:
    with pytest.raises(OsuValidationError):
        split_mods(-1)
    with pytest.raises(OsuValidationError):
        format_mods(-72)
