"""リプレイデータのデコーダ。

`get_replay` の `content` は、フレーム列テキストを LZMA（alone形式）で圧縮し
base64化したものである。フレームは ``,`` 区切り、各フレームは
``w|x|y|z``（経過ミリ秒|x座標|y座標|押下キー）で表される。
"""

from __future__ import annotations

import base64
import binascii
import logging
import lzma
from datetime import timedelta

from osuapi.errors import OsuDecodeError, OsuDecompressError
from osuapi.types import ReplayEvent, ReplaySequence

logger = logging.getLogger(__name__)

_ESCAPE_TABLE = str.maketrans("", "", '"\\')
_FRAME_SEPARATOR = ","
_FIELD_SEPARATOR = "|"
_FIELD_SEPARATOR_COUNT = 3


def _unescape(raw: bytes | str) -> str:
    """外側の引用符とバックスラッシュを除去する。"""

    text = raw.decode("ascii", errors="replace") if isinstance(raw, bytes) else raw
    return text.translate(_ESCAPE_TABLE).strip()


def _b64decode(text: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise OsuDecodeError(f"リプレイデータがbase64として不正です: {exc}") from exc


def _decompress(data: bytes) -> str:
    try:
        decompressed = lzma.decompress(data, format=lzma.FORMAT_ALONE)
    except (lzma.LZMAError, EOFError) as exc:
        raise OsuDecompressError(f"リプレイデータの展開に失敗しました: {exc}") from exc
    return decompressed.decode("utf-8", errors="replace")


def _parse_frame(frame: str) -> ReplayEvent | None:
    """1フレームを解析する。

    Returns:
        解析結果。区切り数不正・数値不正・範囲外・負の経過時間のときはNone。
    """

    if frame.count(_FIELD_SEPARATOR) != _FIELD_SEPARATOR_COUNT:
        return None
    w, x, y, z = frame.split(_FIELD_SEPARATOR)
    try:
        delta_ms = int(w)
        if delta_ms < 0:
            return None
        return ReplayEvent(
            time_delta=timedelta(milliseconds=delta_ms),
            cursor_x=float(x),
            cursor_y=float(y),
            key_state=int(z),
        )
    except (ValueError, OverflowError):
        return None


def parse_frames(text: str) -> ReplaySequence:
    """展開済みフレーム列テキストをイベント列へ変換する。

    区切り数が不正なフレームと、経過時間が負のセンチネルフレームは
    例外を送出せずに読み飛ばす。

    Args:
        text: ``,`` 区切りのフレーム列。

    Returns:
        出現順のイベント列。
    """

    frames = text.split(_FRAME_SEPARATOR)
    events: ReplaySequence = []
    for frame in frames:
        event = _parse_frame(frame)
        if event is not None:
            events.append(event)
    skipped = len(frames) - len(events)
    if skipped:
        logger.debug(
            "リプレイフレームを読み飛ばしました: skipped=%d, total=%d", skipped, len(frames)
        )
    return events


def decode_replay(raw: bytes | str) -> ReplaySequence:
    """リプレイデータを復号してイベント列を返す。

    Args:
        raw: `content` の値。JSON埋め込み由来の引用符やエスケープを含んでよい。

    Returns:
        出現順のイベント列。

    Raises:
        OsuDecodeError: base64として不正な場合。
        OsuDecompressError: LZMAストリームが破損・途中切れの場合。
    """

    compressed = _b64decode(_unescape(raw))
    return parse_frames(_decompress(compressed))
