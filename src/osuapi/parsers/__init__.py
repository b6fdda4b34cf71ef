"""レスポンスパーサ公開API。"""

from __future__ import annotations

from osuapi.parsers.json_parser import parse_json_response, patch_date_format
from osuapi.types import ParsedResponse


def parse_response(payload: bytes, *, http_status: int = 200) -> ParsedResponse:
    """レスポンスバイト列を解析する。

    Args:
        payload: レスポンスバイト列。
        http_status: HTTPステータス。

    Returns:
        解析結果。
    """

    text = payload.decode("utf-8", errors="replace").strip()
    return parse_json_response(text, http_status=http_status)


__all__ = ["parse_json_response", "parse_response", "patch_date_format"]
