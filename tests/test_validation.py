"""validation モジュールのテスト。"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from osuapi.enums import Mod, Mode, UsernameType
from osuapi.errors import OsuValidationError
from osuapi.validation import (
    clamp,
    format_since,
    normalize_mode,
    normalize_mods,
    normalize_user,
    validate_api_key,
)


def test_clamp_limits_to_range() -> None:
    assert clamp(0, lower=1, upper=500) == 1
    assert clamp(-10, lower=1, upper=500) == 1
    assert clamp(9999, lower=1, upper=500) == 500
    assert clamp(42, lower=1, upper=500) == 42


def test_normalize_mode_accepts_names_and_numbers() -> None:
    assert normalize_mode("taiko") is Mode.TAIKO
    assert normalize_mode("3") is Mode.MANIA
    assert normalize_mode(2) is Mode.CTB
    assert normalize_mode(None) is None


def test_normalize_mode_rejects_unknown() -> None:
    with pytest.raises(OsuValidationError):
        normalize_mode(7)


def test_normalize_mods_folds_iterables() -> None:
    assert normalize_mods([Mod.HIDDEN, Mod.HARD_ROCK]) == 24
    assert normalize_mods(Mod.DOUBLE_TIME) == Mod.DOUBLE_TIME
    assert normalize_mods([]) == Mod.NONE
    assert normalize_mods(None) is None
    with pytest.raises(OsuValidationError):
        normalize_mods([Mod.HIDDEN, -8])


def test_normalize_user_infers_type() -> None:
    assert normalize_user(124493) == ("124493", UsernameType.ID)
    assert normalize_user(" peppy ") == ("peppy", UsernameType.NAME)
    assert normalize_user("2", user_type="INT") == ("2", UsernameType.ID)


def test_normalize_user_rejects_blank_and_bad_type() -> None:
    with pytest.raises(OsuValidationError):
        normalize_user("  ")
    with pytest.raises(OsuValidationError):
        normalize_user("peppy", user_type="email")


def test_format_since() -> None:
    assert format_since(date(2019, 3, 1)) == "2019-03-01"
    assert format_since(datetime(2019, 3, 1, 12, 30)) == "2019-03-01"
    assert format_since("2019-03-01 10:00:00") == "2019-03-01"
    with pytest.raises(OsuValidationError):
        format_since("yesterday")


def test_validate_api_key() -> None:
    assert validate_api_key(" abc ") == "abc"
    with pytest.raises(OsuValidationError) as exc_info:
        validate_api_key("")
    assert exc_info.value.validation_code == "missing_api_key"
