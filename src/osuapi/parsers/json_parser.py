"""JSONレスポンスパーサ。"""

from __future__ import annotations

import json
import re
from typing import Any

from osuapi.types import ParsedResponse

# "approved_date": "2013-06-22 09:45:01" -> "approved_date": "2013-06-22T09:45:01+00:00"
_DATE_FIELD_PATTERN = re.compile(
    r'("(?:[a-z_]*date|last_update|start_time|end_time)"\s*:\s*"\d{4}-\d{2}-\d{2})'
    r' (\d{2}:\d{2}:\d{2})"'
)


def patch_date_format(text: str) -> str:
    """`YYYY-MM-DD HH:MM:SS` 形式の日付値をUTCオフセット付きISO-8601へ置換する。

    Args:
        text: JSON本文。

    Returns:
        置換後の本文。
    """

    return _DATE_FIELD_PATTERN.sub(r'\1T\2+00:00"', text)


def _extract_error(payload: Any) -> str | None:
    if isinstance(payload, dict) and "error" in payload:
        return str(payload["error"])
    return None


def parse_json_response(text: str, *, http_status: int = 200) -> ParsedResponse:
    """JSON本文を解析して共通形式へ変換する。

    Args:
        text: レスポンステキスト。
        http_status: HTTPステータス。

    Returns:
        解析結果。

    Raises:
        json.JSONDecodeError: 本文がJSONでない場合。
    """

    payload = json.loads(patch_date_format(text))
    return ParsedResponse(
        http_status=http_status,
        payload=payload,
        error=_extract_error(payload),
        raw_response_excerpt=text[:2048],
    )
