"""HTTP実行補助。"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

_API_KEY_PATTERN = re.compile(r"([?&]k=)[^&#]*")
REDACTED = "***"


def build_request_headers(user_agent: str) -> Mapping[str, str]:
    """標準ヘッダを構築する。"""

    return {
        "Accept": "application/json",
        "Accept-Encoding": "gzip",
        "User-Agent": user_agent,
    }


def redact_url(url: str) -> str:
    """URL中のAPIキー（`k`）をマスクする。

    Args:
        url: リクエストURL。

    Returns:
        キー部分を伏せたURL。
    """

    return _API_KEY_PATTERN.sub(lambda m: m.group(1) + REDACTED, url)
