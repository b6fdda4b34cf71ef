"""入力正規化と送信前バリデーション。"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime

from osuapi.enums import Mod, Mode, UsernameType
from osuapi.errors import OsuValidationError

BEATMAPS_LIMIT_MAX = 500
EVENT_DAYS_MAX = 31
SCORES_LIMIT_MAX = 100
USER_BEST_LIMIT_MAX = 100
USER_RECENT_LIMIT_MAX = 50


def clamp(value: int, *, lower: int, upper: int) -> int:
    """値を範囲内へ丸める。

    範囲外の指定は拒否せずに境界値へ寄せる。
    """

    return max(lower, min(upper, int(value)))


def validate_api_key(value: str | None) -> str:
    """APIキーを検証する。

    Raises:
        OsuValidationError: 未指定または空文字の場合。
    """

    key = (value or "").strip()
    if not key:
        raise OsuValidationError("APIキーが指定されていません。", validation_code="missing_api_key")
    return key


def normalize_mode(value: Mode | int | str | None) -> Mode | None:
    """ゲームモード入力を正規化する。

    Args:
        value: `Mode`、モード番号、またはモード名（``"taiko"`` 等）。

    Returns:
        正規化済みモード。未指定時はNone。

    Raises:
        OsuValidationError: 値が不正な場合。
    """

    if value is None:
        return None
    if isinstance(value, Mode):
        return value
    try:
        if isinstance(value, int):
            return Mode(value)
        text = str(value).strip()
        if text.isdigit():
            return Mode(int(text))
        return Mode[text.upper()]
    except (KeyError, ValueError) as exc:
        raise OsuValidationError("mode が不正です。", validation_code="invalid_mode") from exc


def normalize_mods(value: Mod | int | Iterable[Mod | int] | None) -> Mod | None:
    """MOD指定をビット和へ畳み込む。

    Raises:
        OsuValidationError: 負の値を含む場合。
    """

    if value is None:
        return None
    items = [value] if isinstance(value, int) else list(value)
    folded = Mod.NONE
    for mod in items:
        if int(mod) < 0:
            raise OsuValidationError("mods は0以上を指定してください。", validation_code="invalid_mods")
        folded |= Mod(int(mod))
    return folded


def normalize_user(
    value: str | int,
    *,
    user_type: UsernameType | str | None = None,
    param_name: str = "u",
) -> tuple[str, UsernameType]:
    """ユーザー指定を `u` と `type` の組へ正規化する。

    `user_type` 未指定時は、整数ならID、文字列ならユーザー名として扱う。

    Args:
        value: ユーザーIDまたはユーザー名。
        user_type: 指定方法。
        param_name: エラーメッセージ用のパラメータ名。

    Returns:
        (識別子文字列, 指定方法)。

    Raises:
        OsuValidationError: 空文字または指定方法が不正な場合。
    """

    text = str(value).strip()
    if not text:
        raise OsuValidationError(
            f"{param_name} が指定されていません。", validation_code="missing_user"
        )
    if user_type is None:
        kind = UsernameType.ID if isinstance(value, int) else UsernameType.NAME
    elif isinstance(user_type, UsernameType):
        kind = user_type
    else:
        try:
            kind = UsernameType(str(user_type).strip().lower())
        except ValueError as exc:
            raise OsuValidationError(
                "type が不正です。", validation_code="invalid_user_type"
            ) from exc
    return text, kind


def normalize_identifier(value: str | int, *, param_name: str) -> str:
    """譜面ID・試合ID等の必須識別子を正規化する。"""

    text = str(value).strip()
    if not text:
        raise OsuValidationError(
            f"{param_name} が指定されていません。",
            validation_code=f"missing_{param_name}",
        )
    return text


def format_since(value: date | datetime | str) -> str:
    """`since` パラメータを ``YYYY-MM-DD`` 形式へ変換する。"""

    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    text = value.strip()
    try:
        return date.fromisoformat(text[:10]).strftime("%Y-%m-%d")
    except ValueError as exc:
        raise OsuValidationError("since が不正です。", validation_code="invalid_since") from exc
