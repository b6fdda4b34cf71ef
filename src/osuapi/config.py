"""設定値定義。"""

from __future__ import annotations

from dataclasses import dataclass

PARSER_VERSION = "1.0"
NORMALIZER_VERSION = "1.0"
SCHEMA_VERSION = "1.0"

DEFAULT_BASE_URL = "https://osu.ppy.sh/api"
DEFAULT_USER_AGENT = "osuapi/0.1.0"
API_KEY_ENV = "OSU_API_KEY"


@dataclass(slots=True)
class ClientConfig:
    """クライアント共通設定。

    Attributes:
        api_key: APIキー（`k` パラメータ）。
        base_url: APIベースURL。
        timeout: タイムアウト秒。
        user_agent: User-Agent。
        capture_full_response: 完全文字列の例外保持。
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    capture_full_response: bool = False
